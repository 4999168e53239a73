import os

import pytest
from PIL import Image

from ev3_brick.config import Settings
from ev3_brick.errors import BufferTooSmall, IOFailure
from ev3_brick import framebuffer
from ev3_brick.framebuffer import FBIOGET_FSCREENINFO, FIX_SCREENINFO, FrameBuffer
from ev3_brick.lcd import LCD_HEIGHT, LCD_STRIDE, LCD_WIDTH, open_lcd
from ev3_brick.monochrome import BLACK, WHITE, new_monochrome_with
from ev3_brick.surface import new_rgba_with, new_xrgb_with


@pytest.fixture
def fb_file(tmp_path):
    def make(length):
        path = tmp_path / "fb0"
        path.write_bytes(bytes(length))
        return str(path)
    return make


def test_lcd_constants():
    assert (LCD_WIDTH, LCD_HEIGHT, LCD_STRIDE) == (178, 128, 712)


def test_draw_lands_in_file(fb_file):
    path = fb_file(LCD_STRIDE * LCD_HEIGHT)
    with FrameBuffer(path, new_xrgb_with, LCD_WIDTH, LCD_HEIGHT, LCD_STRIDE) as fb:
        assert fb.bounds == (0, 0, 178, 128)
        assert fb.stride == 712
        fb.set_pixel(1, 2, (0x11, 0x22, 0x33))
        assert fb.get_pixel(1, 2) == (0x11, 0x22, 0x33, 0xff)
    with open(path, "rb") as f:
        data = f.read()
    offset = 2 * 712 + 4
    assert data[offset:offset + 4] == bytes([0x33, 0x22, 0x11, 0xff])


def test_stride_padding(fb_file):
    path = fb_file(24 * 4)
    with FrameBuffer(path, new_monochrome_with, 178, 4, 24) as fb:
        fb.set_pixel(177, 3, BLACK)
        assert fb.get_pixel(177, 3) is BLACK
    with open(path, "rb") as f:
        data = f.read()
    # pixel 177 is bit 1 of byte 22 in the last row
    assert data[3 * 24 + 22] == 0x40


def test_default_stride_on_regular_file(fb_file):
    path = fb_file(4 * 5 * 3)
    with FrameBuffer(path, new_rgba_with, 5, 3) as fb:
        assert fb.stride == 20


@pytest.mark.parametrize("width,height,stride", [
    (178, 128, 712),
    (10, 10, 40),
    (1, 1, 4),
])
def test_short_file_is_buffer_too_small(fb_file, width, height, stride):
    path = fb_file(stride * height - 1)
    with pytest.raises(BufferTooSmall):
        FrameBuffer(path, new_rgba_with, width, height, stride)


def test_short_file_default_stride(fb_file):
    path = fb_file(10)
    with pytest.raises(BufferTooSmall):
        FrameBuffer(path, new_rgba_with, 5, 3)


def test_empty_file_default_stride(fb_file):
    path = fb_file(0)
    with pytest.raises(BufferTooSmall):
        FrameBuffer(path, new_monochrome_with, 8, 1)


needs_dev_zero = pytest.mark.skipif(not os.path.exists("/dev/zero"), reason="needs /dev/zero")


@needs_dev_zero
def test_device_without_line_length_uses_default_stride():
    with FrameBuffer("/dev/zero", new_rgba_with, 2, 2) as fb:
        assert fb.stride == 8
        fb.set_pixel(1, 1, (1, 2, 3, 4))
        assert fb.get_pixel(1, 1) == (1, 2, 3, 4)


@needs_dev_zero
def test_device_line_length(monkeypatch):
    def fake_ioctl(fd, request, buf):
        assert request == FBIOGET_FSCREENINFO
        FIX_SCREENINFO.pack_into(buf, 0, b"st7586", 0, 24 * 128, 0, 0, 0, 0, 0, 0, 24)
        return 0

    monkeypatch.setattr(framebuffer.fcntl, "ioctl", fake_ioctl)
    with FrameBuffer("/dev/zero", new_monochrome_with, 178, 128) as fb:
        assert fb.stride == 24
        fb.set_pixel(177, 127, BLACK)
        assert fb.get_pixel(177, 127) is BLACK


def test_missing_device(tmp_path):
    with pytest.raises(IOFailure) as excinfo:
        FrameBuffer(str(tmp_path / "nope"), new_rgba_with, 1, 1, 4)
    assert "nope" in str(excinfo.value)


def test_closed_frame_buffer(fb_file):
    fb = FrameBuffer(fb_file(16), new_rgba_with, 2, 2, 8)
    fb.close()
    assert fb.closed
    with pytest.raises(ValueError):
        fb.set_pixel(0, 0, BLACK)
    fb.close()


def test_draw_clear_snapshot(fb_file):
    with FrameBuffer(fb_file(2 * 4), new_monochrome_with, 16, 4, 2) as fb:
        img = Image.new("L", (16, 4), 0)
        fb.draw(img)
        assert fb.get_pixel(15, 3) is BLACK
        snap = fb.snapshot()
        assert snap.size == (16, 4)
        assert snap.getpixel((0, 0)) == 0
        fb.clear()
        assert fb.get_pixel(15, 3) is WHITE
        assert fb.snapshot().getpixel((0, 0)) == 255
        fb.clear(BLACK)
        assert fb.get_pixel(3, 2) is BLACK


def test_open_lcd_from_settings(fb_file):
    path = fb_file(LCD_STRIDE * LCD_HEIGHT)
    settings = Settings(framebuffer=path)
    with open_lcd(settings) as lcd:
        assert lcd.width == LCD_WIDTH
        assert lcd.height == LCD_HEIGHT
        lcd.set_pixel(0, 0, BLACK)
        assert lcd.get_pixel(0, 0) == (0, 0, 0, 255)


def test_open_lcd_unknown_format(fb_file):
    settings = Settings(framebuffer=fb_file(16), lcd_format="rgb565")
    with pytest.raises(ValueError):
        open_lcd(settings)
