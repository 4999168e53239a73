#!/usr/bin/env python3
"""
Frame buffer device mapped as a drawable surface.

    with FrameBuffer("/dev/fb0", new_xrgb_with, 178, 128, 712) as fb:
        fb.set_pixel(10, 10, BLACK)

Drawing is not atomic beyond a single pixel; callers that need a group of
pixels to change together must serialise their own draws.
"""
import fcntl
import mmap
import os
import stat
import struct
from typing import Any, Callable, Optional, Tuple

from PIL import Image

from .basic import BasicClass
from .errors import BufferTooSmall, IOFailure
from .surface import Bounds, Buffer, Surface

PixelFactory = Callable[[Buffer, Bounds, int], Surface]

# linux/fb.h
FBIOGET_FSCREENINFO: int = 0x4602
# struct fb_fix_screeninfo up to line_length: id, smem_start, smem_len, type,
# type_aux, visual, xpanstep, ypanstep, ywrapstep, line_length
FIX_SCREENINFO: struct.Struct = struct.Struct("16sL4I3HI")


def line_length(fd: int) -> int:
    """
    Bytes per row reported by the frame buffer driver.

    :param fd: Open frame buffer device.
    :raises OSError: If fd is not a frame buffer device.
    """
    info = bytearray(128)
    fcntl.ioctl(fd, FBIOGET_FSCREENINFO, info)
    return FIX_SCREENINFO.unpack_from(info)[-1]


def default_stride(pixel_factory: PixelFactory, width: int) -> int:
    """Tightest stride the pixel format allows for width."""
    return pixel_factory(bytearray(), (0, 0, width, 0), 0).stride


class FrameBuffer(BasicClass):
    """A memory mapped device file with a pixel surface on top."""

    def __init__(
        self,
        path: str,
        pixel_factory: PixelFactory,
        width: int,
        height: int,
        stride: int = 0,
        *args: Any,
        **kwargs: Any
    ) -> None:
        """
        Open and map the device. The mapping is made once and shared by all
        drawing calls until close().

        :param path: Device or regular file, e.g. ``/dev/fb0``.
        :param pixel_factory: Builds the surface, e.g. new_xrgb_with.
        :param width: Visible width in pixels.
        :param height: Visible height in pixels.
        :param stride: Bytes per row, 0 for the line length the driver
            reports, falling back to the tightest stride of the pixel format.
            A regular file with stride 0 is mapped whole.
        :raises IOFailure: If the device cannot be opened or mapped.
        :raises BufferTooSmall: If the file is shorter than stride * height.
        """
        super().__init__(*args, **kwargs)
        if width < 0 or height < 0 or stride < 0:
            raise ValueError(f"invalid frame buffer geometry {width}x{height} stride {stride}")
        self.path: str = path
        self._fd: Optional[int] = None
        self._mmap: Optional[mmap.mmap] = None

        try:
            self._fd = os.open(path, os.O_RDWR)
            st = os.fstat(self._fd)
        except OSError as e:
            self._close_fd()
            raise IOFailure(f"failed to open frame buffer {path}: {e}", path) from e

        length = stride * height
        if stat.S_ISREG(st.st_mode):
            if length == 0:
                length = st.st_size
            elif st.st_size < length:
                self._close_fd()
                raise BufferTooSmall(length, st.st_size)
        elif stride == 0:
            try:
                stride = line_length(self._fd)
            except OSError as e:
                self.logger.debug(f"{path} reports no line length: {e}")
            stride = stride or default_stride(pixel_factory, width)
            length = stride * height

        buf: Buffer = bytearray()
        if length > 0:
            try:
                self._mmap = mmap.mmap(self._fd, length, mmap.MAP_SHARED,
                                       mmap.PROT_READ | mmap.PROT_WRITE)
            except (OSError, ValueError) as e:
                self._close_fd()
                raise IOFailure(f"failed to map frame buffer {path}: {e}", path) from e
            buf = self._mmap

        try:
            self.surface: Surface = pixel_factory(buf, (0, 0, width, height), stride)
        except Exception:
            self.close()
            raise
        self.logger.debug(f"Mapped {path}: {width}x{height}, stride {self.surface.stride}, {length} bytes")

    def _close_fd(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def close(self) -> None:
        """Unmap and close the device. Further drawing raises ValueError."""
        if self._mmap is not None:
            self._mmap.close()
            self._mmap = None
        self._close_fd()

    def __enter__(self) -> "FrameBuffer":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._fd is None

    @property
    def bounds(self) -> Bounds:
        return self.surface.bounds

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    @property
    def stride(self) -> int:
        return self.surface.stride

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError(f"frame buffer {self.path} is closed")

    def get_pixel(self, x: int, y: int) -> Any:
        self._check_open()
        return self.surface.get_pixel(x, y)

    def set_pixel(self, x: int, y: int, colour: Any) -> None:
        self._check_open()
        self.surface.set_pixel(x, y, colour)

    def fill(self, colour: Any) -> None:
        self._check_open()
        self.surface.fill(colour)

    def clear(self, colour: Any = (255, 255, 255)) -> None:
        """Fill the screen, white by default."""
        self.fill(colour)

    def draw(self, image: Image.Image, origin: Tuple[int, int] = (0, 0)) -> None:
        """Copy a Pillow image onto the screen, see Surface.draw."""
        self._check_open()
        self.surface.draw(image, origin)

    def snapshot(self) -> Image.Image:
        """Copy the current screen contents into a Pillow image."""
        self._check_open()
        return self.surface.to_image()
