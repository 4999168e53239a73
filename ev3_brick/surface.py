#!/usr/bin/env python3
"""
Pixel surfaces over a raw byte buffer.

A surface addresses pixels inside ``bounds`` = (x0, y0, x1, y1), x1 and y1
exclusive, at ``(y - y0) * stride + (x - x0) * BYTES_PER_PIXEL`` in its
buffer. The buffer may be a bytearray or a writable mmap; surfaces never copy
it, so every write lands directly in the backing memory.
"""
from typing import Any, Tuple, Union

from PIL import Image

from .errors import BufferTooSmall

Bounds = Tuple[int, int, int, int]
RGBA = Tuple[int, int, int, int]
Buffer = Union[bytearray, memoryview, Any]


def check_bounds(bounds: Bounds) -> Bounds:
    if len(bounds) != 4:
        raise ValueError(f"bounds must be (x0, y0, x1, y1), not {bounds!r}")
    x0, y0, x1, y1 = (int(v) for v in bounds)
    if x1 < x0 or y1 < y0:
        raise ValueError(f"bounds {bounds!r} have negative size")
    return x0, y0, x1, y1


def to_rgba(colour: Any) -> RGBA:
    """
    Normalise a colour to an 8-bit (r, g, b, a) tuple.

    Accepts (r, g, b), (r, g, b, a), a grey level int or anything with an
    ``rgba`` attribute such as a monochrome Pixel.
    """
    if hasattr(colour, "rgba"):
        return colour.rgba
    if isinstance(colour, int):
        return (colour, colour, colour, 255)
    if len(colour) == 3:
        r, g, b = colour
        return (r, g, b, 255)
    if len(colour) == 4:
        return tuple(colour)  # type: ignore
    raise ValueError(f"colour must be an int, (r, g, b) or (r, g, b, a), not {colour!r}")


class Surface:
    """Base class: geometry, bounds checks and Pillow interchange."""
    BYTES_PER_PIXEL: float = 4

    def __init__(self, pix: Buffer, bounds: Bounds, stride: int = 0) -> None:
        """
        :param pix: Backing buffer, shared not copied.
        :param bounds: (x0, y0, x1, y1) box.
        :param stride: Bytes per row, 0 to compute the tightest stride.
        :raises BufferTooSmall: If pix is shorter than stride * height.
        """
        self.bounds: Bounds = check_bounds(bounds)
        w, h = self.size
        min_stride = self.min_stride(w)
        if stride == 0:
            stride = min_stride
        if len(pix) < stride * h:
            raise BufferTooSmall(stride * h, len(pix))
        if stride < min_stride:
            raise ValueError(f"stride {stride} is too small for width {w}, need at least {min_stride}")
        self.pix: Buffer = pix
        self.stride: int = stride

    @classmethod
    def min_stride(cls, width: int) -> int:
        return int(cls.BYTES_PER_PIXEL * width)

    @property
    def size(self) -> Tuple[int, int]:
        x0, y0, x1, y1 = self.bounds
        return x1 - x0, y1 - y0

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    def contains(self, x: int, y: int) -> bool:
        x0, y0, x1, y1 = self.bounds
        return x0 <= x < x1 and y0 <= y < y1

    def pix_offset(self, x: int, y: int) -> int:
        """Offset of the first byte of pixel (x, y) in pix."""
        x0, y0, _, _ = self.bounds
        return (y - y0) * self.stride + int((x - x0) * self.BYTES_PER_PIXEL)

    def get_pixel(self, x: int, y: int) -> Any:
        raise NotImplementedError

    def set_pixel(self, x: int, y: int, colour: Any) -> None:
        raise NotImplementedError

    def convert(self, colour: Any) -> Any:
        """Convert any colour to this surface's colour model."""
        return to_rgba(colour)

    def fill(self, colour: Any) -> None:
        x0, y0, x1, y1 = self.bounds
        c = self.convert(colour)
        for y in range(y0, y1):
            for x in range(x0, x1):
                self.set_pixel(x, y, c)

    def draw(self, image: Image.Image, origin: Tuple[int, int] = (0, 0)) -> None:
        """
        Copy a Pillow image onto the surface, clipped to the bounds.

        :param image: Source image in any mode.
        :param origin: Surface coordinate of the image's top left pixel.
        """
        src = image.convert("RGBA")
        data = src.load()
        ox, oy = origin
        sw, sh = src.size
        for j in range(sh):
            for i in range(sw):
                x, y = ox + i, oy + j
                if self.contains(x, y):
                    self.set_pixel(x, y, data[i, j])

    def _raw(self) -> bytes:
        return bytes(self.pix[:self.stride * self.height])

    def to_image(self) -> Image.Image:
        """Copy the surface into a new Pillow image."""
        raise NotImplementedError


class RGBASurface(Surface):
    """4 bytes per pixel in R, G, B, A order."""

    def get_pixel(self, x: int, y: int) -> RGBA:
        if not self.contains(x, y):
            return (0, 0, 0, 0)
        i = self.pix_offset(x, y)
        return tuple(self.pix[i:i + 4])  # type: ignore

    def set_pixel(self, x: int, y: int, colour: Any) -> None:
        if not self.contains(x, y):
            return
        i = self.pix_offset(x, y)
        self.pix[i:i + 4] = bytes(to_rgba(colour))

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", self.size, self._raw(), "raw", "RGBA", self.stride)


class XRGBSurface(Surface):
    """
    4 bytes per pixel, 32 bit little-endian XRGB: B, G, R, unused.

    This is the layout the EV3 LCD frame buffer uses on ev3dev stretch.
    """

    def get_pixel(self, x: int, y: int) -> RGBA:
        if not self.contains(x, y):
            return (0, 0, 0, 0)
        i = self.pix_offset(x, y)
        b, g, r = self.pix[i:i + 3]
        return (r, g, b, 255)

    def set_pixel(self, x: int, y: int, colour: Any) -> None:
        if not self.contains(x, y):
            return
        r, g, b, a = to_rgba(colour)
        if a != 255:
            r, g, b = r * a // 255, g * a // 255, b * a // 255
        i = self.pix_offset(x, y)
        self.pix[i:i + 4] = bytes((b, g, r, 0xff))

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGB", self.size, self._raw(), "raw", "BGRX", self.stride)


def new_rgba_with(pix: Buffer, bounds: Bounds, stride: int = 0) -> RGBASurface:
    """
    RGBA surface backed by pix.

    If stride is zero a working stride is computed. If pix is shorter than
    stride * height, BufferTooSmall is raised.
    """
    return RGBASurface(pix, bounds, stride)


def new_xrgb_with(pix: Buffer, bounds: Bounds, stride: int = 0) -> XRGBSurface:
    """XRGB surface backed by pix, see new_rgba_with."""
    return XRGBSurface(pix, bounds, stride)


def new_rgba(bounds: Bounds) -> RGBASurface:
    """RGBA surface with its own zeroed buffer."""
    x0, y0, x1, y1 = check_bounds(bounds)
    return RGBASurface(bytearray(4 * (x1 - x0) * (y1 - y0)), bounds)
