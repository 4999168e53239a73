#!/usr/bin/env python3
"""
The EV3 LCD screen.
"""
from typing import Any, Dict, Optional

from .config import Settings, load_settings
from .framebuffer import FrameBuffer, PixelFactory
from .monochrome import new_monochrome_with
from .surface import new_rgba_with, new_xrgb_with

LCD_WIDTH: int = 178
"""Width of the LCD screen in pixels."""
LCD_HEIGHT: int = 128
"""Height of the LCD screen in pixels."""
LCD_STRIDE: int = 712
"""Width of the LCD screen memory in bytes."""

PIXEL_FORMATS: Dict[str, PixelFactory] = {
    "xrgb": new_xrgb_with,
    "rgba": new_rgba_with,
    "mono": new_monochrome_with,
}


def open_lcd(settings: Optional[Settings] = None, **kwargs: Any) -> FrameBuffer:
    """
    Map the LCD frame buffer.

    Geometry, device path and pixel format come from settings, loaded from
    the configuration file when None.

    :raises ValueError: On an unknown pixel format.
    :raises IOFailure: If the device cannot be mapped.
    """
    settings = settings or load_settings()
    if settings.lcd_format not in PIXEL_FORMATS:
        raise ValueError(f'LCD format must be one of {list(PIXEL_FORMATS)}, not "{settings.lcd_format}"')
    return FrameBuffer(
        settings.framebuffer,
        PIXEL_FORMATS[settings.lcd_format],
        settings.lcd_width,
        settings.lcd_height,
        settings.lcd_stride,
        **kwargs
    )
