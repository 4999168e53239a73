#!/usr/bin/env python3
"""
Two-valued colour model and packed 1 bit per pixel surface for the EV3 LCD.
"""
import enum
from typing import Any, Tuple

from PIL import Image

from .surface import Bounds, Buffer, RGBA, Surface, check_bounds, to_rgba


class Pixel(enum.IntEnum):
    """A monochrome pixel. A set bit in the buffer is black."""
    WHITE = 0
    BLACK = 1

    @property
    def rgba(self) -> RGBA:
        if self is Pixel.BLACK:
            return (0, 0, 0, 255)
        return (255, 255, 255, 255)

    def __str__(self) -> str:
        return self.name.lower()


BLACK = Pixel.BLACK
WHITE = Pixel.WHITE


def to_monochrome(r: int, g: int, b: int, a: int = 255) -> Pixel:
    """
    Threshold an 8-bit RGBA colour to black or white.

    Channels are premultiplied by alpha and widened to 16 bits; luma uses
    the Rec. 601 weights, so green dominates. Luma at or above half scale is
    white.
    """
    r16, g16, b16 = (c * 0x101 * a // 255 for c in (r, g, b))
    y = (299 * r16 + 587 * g16 + 114 * b16 + 500) // 1000
    if y >= 0x8000:
        return Pixel.WHITE
    return Pixel.BLACK


def monochrome_model(colour: Any) -> Pixel:
    """Convert any colour accepted by surfaces to a Pixel."""
    if isinstance(colour, Pixel):
        return colour
    return to_monochrome(*to_rgba(colour))


class Monochrome(Surface):
    """
    Packed 1 bit per pixel surface, most significant bit first.

    Row y starts at (y - y0) * stride; pixel x lives in byte (x - x0) // 8
    under mask 0x80 >> ((x - x0) % 8).
    """
    BYTES_PER_PIXEL: float = 1 / 8

    @classmethod
    def min_stride(cls, width: int) -> int:
        return (width + 7) // 8

    def _locate(self, x: int, y: int) -> Tuple[int, int]:
        x0, y0, _, _ = self.bounds
        dx = x - x0
        return (y - y0) * self.stride + dx // 8, 0x80 >> (dx % 8)

    def pix_offset(self, x: int, y: int) -> int:
        return self._locate(x, y)[0]

    def convert(self, colour: Any) -> Pixel:
        return monochrome_model(colour)

    def get_pixel(self, x: int, y: int) -> Pixel:
        if not self.contains(x, y):
            return Pixel.WHITE
        i, mask = self._locate(x, y)
        return Pixel.BLACK if self.pix[i] & mask else Pixel.WHITE

    def set_pixel(self, x: int, y: int, colour: Any) -> None:
        if not self.contains(x, y):
            return
        i, mask = self._locate(x, y)
        if monochrome_model(colour) is Pixel.BLACK:
            self.pix[i] = self.pix[i] | mask
        else:
            self.pix[i] = self.pix[i] & ~mask & 0xff

    def fill(self, colour: Any) -> None:
        x0, _, x1, _ = self.bounds
        if x0 != 0 or x1 % 8:
            super().fill(colour)
            return
        byte = 0xff if self.convert(colour) is Pixel.BLACK else 0x00
        row = bytes([byte]) * ((x1 - x0) // 8)
        for j in range(self.height):
            start = j * self.stride
            self.pix[start:start + len(row)] = row

    def to_image(self) -> Image.Image:
        """Copy into a Pillow mode "1" image, where black is 0."""
        return Image.frombytes("1", self.size, self._raw(), "raw", "1;I", self.stride)


def new_monochrome_with(pix: Buffer, bounds: Bounds, stride: int = 0) -> Monochrome:
    """
    Monochrome surface backed by pix.

    If stride is zero a working stride is computed. If pix is shorter than
    stride * height, BufferTooSmall is raised.
    """
    return Monochrome(pix, bounds, stride)


def new_monochrome(bounds: Bounds, stride: int = 0) -> Monochrome:
    """Monochrome surface with its own white buffer."""
    x0, y0, x1, y1 = check_bounds(bounds)
    if stride == 0:
        stride = Monochrome.min_stride(x1 - x0)
    return Monochrome(bytearray(stride * (y1 - y0)), bounds, stride)
