import pytest
from PIL import Image

from ev3_brick.errors import BufferTooSmall
from ev3_brick.monochrome import (
    BLACK, WHITE, Monochrome, Pixel, monochrome_model, new_monochrome,
    new_monochrome_with, to_monochrome,
)
from ev3_brick.surface import new_rgba, new_rgba_with, new_xrgb_with

PIXEL_TESTS = [
    ((0xff, 0x00, 0x00), BLACK),
    ((0x80, 0x00, 0x00), BLACK),
    ((0x00, 0xff, 0x00), WHITE),
    ((0x00, 0x80, 0x00), BLACK),
    ((0x00, 0x00, 0xff), BLACK),
    ((0x00, 0x00, 0x80), BLACK),
    ((0x00, 0x00, 0x00), BLACK),
    ((0x05, 0x0a, 0x0b), BLACK),
    ((0x0e, 0x21, 0x26), BLACK),
    ((0x5a, 0xda, 0xff), WHITE),
]


@pytest.mark.parametrize("rgb,mono", PIXEL_TESTS)
def test_monochrome_model(rgb, mono):
    assert to_monochrome(*rgb, 0xff) is mono
    assert monochrome_model(rgb) is mono


def test_monochrome_is_deterministic():
    assert {to_monochrome(0x5a, 0xda, 0xff) for _ in range(10)} == {WHITE}


def test_white_and_transparent():
    assert to_monochrome(0xff, 0xff, 0xff) is WHITE
    assert to_monochrome(0xff, 0xff, 0xff, 0) is BLACK
    assert monochrome_model(BLACK) is BLACK


def test_pixel_str():
    assert str(BLACK) == "black"
    assert str(WHITE) == "white"
    assert BLACK.rgba == (0, 0, 0, 255)


def test_set_and_get_packed_bits():
    mono = new_monochrome((0, 0, 10, 2))
    assert mono.stride == 2
    mono.set_pixel(0, 0, BLACK)
    mono.set_pixel(9, 1, (0, 0, 0))
    assert mono.pix == bytearray([0x80, 0x00, 0x00, 0x40])
    assert mono.get_pixel(0, 0) is BLACK
    assert mono.get_pixel(1, 0) is WHITE
    assert mono.get_pixel(9, 1) is BLACK
    mono.set_pixel(0, 0, (255, 255, 255))
    assert mono.pix[0] == 0


def test_out_of_bounds_is_ignored():
    mono = new_monochrome((0, 0, 8, 1))
    mono.set_pixel(8, 0, BLACK)
    mono.set_pixel(-1, 0, BLACK)
    assert mono.pix == bytearray(1)
    assert mono.get_pixel(100, 100) is WHITE


def test_offset_bounds():
    mono = new_monochrome((4, 2, 12, 4))
    mono.set_pixel(4, 2, BLACK)
    assert mono.pix[0] == 0x80
    assert mono.get_pixel(4, 2) is BLACK


@pytest.mark.parametrize("factory,width,height,stride,length", [
    (new_monochrome_with, 178, 128, 0, 23 * 128 - 1),
    (new_monochrome_with, 178, 128, 24, 24 * 128 - 1),
    (new_rgba_with, 178, 128, 712, 712 * 128 - 1),
    (new_rgba_with, 10, 10, 0, 399),
    (new_xrgb_with, 1, 1, 0, 0),
    (new_rgba_with, 10, 2, 4, 0),
    (new_monochrome_with, 64, 4, 2, 7),
])
def test_buffer_too_small(factory, width, height, stride, length):
    with pytest.raises(BufferTooSmall) as excinfo:
        factory(bytearray(length), (0, 0, width, height), stride)
    assert excinfo.value.have == length


def test_default_strides():
    assert new_monochrome_with(bytearray(23 * 128), (0, 0, 178, 128), 0).stride == 23
    assert new_rgba_with(bytearray(4 * 178 * 128), (0, 0, 178, 128), 0).stride == 712


def test_stride_narrower_than_width():
    with pytest.raises(ValueError):
        new_rgba_with(bytearray(1000), (0, 0, 10, 2), 20)


def test_fill_and_to_image():
    mono = new_monochrome((0, 0, 16, 3))
    mono.fill(BLACK)
    assert mono.pix == bytearray([0xff] * 6)
    img = mono.to_image()
    assert img.mode == "1"
    assert img.size == (16, 3)
    assert img.getpixel((5, 1)) == 0
    mono.fill(WHITE)
    assert mono.to_image().getpixel((5, 1)) == 255


def test_fill_unaligned_width():
    mono = new_monochrome((0, 0, 5, 1))
    mono.fill(BLACK)
    assert mono.pix == bytearray([0xf8])


def test_draw_pillow_image():
    src = Image.new("RGB", (4, 2), (0, 0xff, 0))
    src.putpixel((1, 0), (0xff, 0, 0))
    mono = new_monochrome((0, 0, 8, 2))
    mono.draw(src, origin=(2, 0))
    assert mono.get_pixel(2, 0) is WHITE
    assert mono.get_pixel(3, 0) is BLACK
    assert mono.get_pixel(0, 0) is WHITE
    assert mono.pix[0] == 0x10


def test_rgba_surface():
    surface = new_rgba((0, 0, 3, 2))
    surface.set_pixel(2, 1, (1, 2, 3))
    assert surface.get_pixel(2, 1) == (1, 2, 3, 255)
    assert surface.pix[surface.pix_offset(2, 1):][:4] == bytearray([1, 2, 3, 255])
    surface.set_pixel(0, 0, BLACK)
    img = surface.to_image()
    assert img.getpixel((0, 0)) == (0, 0, 0, 255)
    assert img.getpixel((2, 1)) == (1, 2, 3, 255)


def test_xrgb_surface_byte_order():
    buf = bytearray(16 * 2)
    surface = new_xrgb_with(buf, (0, 0, 2, 2), 16)
    surface.set_pixel(1, 1, (10, 20, 30))
    assert buf[16 + 4:16 + 8] == bytearray([30, 20, 10, 0xff])
    assert surface.get_pixel(1, 1) == (10, 20, 30, 255)
    assert surface.to_image().getpixel((1, 1)) == (10, 20, 30)


def test_shared_buffer_is_not_copied():
    buf = bytearray(2)
    mono = Monochrome(buf, (0, 0, 8, 2))
    mono.set_pixel(7, 1, BLACK)
    assert buf == bytearray([0, 1])
    assert isinstance(mono.get_pixel(7, 1), Pixel)
