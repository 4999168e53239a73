from pathlib import Path

import pytest

from ev3_brick.errors import IOFailure
from ev3_brick.led import GREEN_LEFT, GREEN_RIGHT, LED, RED_LEFT, RED_RIGHT, led_name
from ev3_brick.sysfs import LED_PATH, class_path


@pytest.fixture
def green_left(sysfs_root):
    directory = Path(class_path(LED_PATH, sysfs_root)) / GREEN_LEFT
    directory.mkdir(parents=True)
    (directory / "brightness").write_text("0\n")
    (directory / "max_brightness").write_text("255\n")
    (directory / "trigger").write_text("none mmc0 [timer] heartbeat default-on\n")
    (directory / "delay_on").write_text("500\n")
    (directory / "delay_off").write_text("500\n")
    return LED.ev3("green", "left", sysfs_root=sysfs_root)


def test_names():
    assert GREEN_LEFT == "led0:green:brick-status"
    assert GREEN_RIGHT == "led1:green:brick-status"
    assert RED_LEFT == "led0:red:brick-status"
    assert RED_RIGHT == "led1:red:brick-status"


def test_invalid_side():
    with pytest.raises(ValueError):
        led_name("green", "middle")


def test_brightness(green_left):
    assert green_left.name == GREEN_LEFT
    assert green_left.brightness() == 0
    green_left.brightness(128)
    assert green_left.brightness() == 128
    green_left.on()
    assert green_left.brightness() == 255
    green_left.off()
    assert green_left.brightness() == 0
    with pytest.raises(ValueError):
        green_left.brightness(-1)


def test_brightness_percent(green_left):
    green_left.brightness_percent(50)
    assert green_left.brightness() == 128
    assert green_left.brightness_percent() == pytest.approx(128 / 255 * 100)
    green_left.brightness_percent(150)
    assert green_left.brightness() == 255


def test_brightness_percent_without_range(green_left, sysfs_root):
    directory = Path(class_path(LED_PATH, sysfs_root)) / GREEN_LEFT
    (directory / "max_brightness").write_text("0\n")
    assert green_left.brightness_percent() == 0
    green_left.brightness_percent(80)
    assert green_left.brightness() == 0


def test_trigger(green_left):
    assert green_left.trigger() == "timer"
    assert green_left.triggers() == ["none", "mmc0", "timer", "heartbeat", "default-on"]
    assert green_left.delay_on() == 500
    green_left.delay_off(250)
    assert green_left.delay_off() == 250


def test_missing_led(sysfs_root):
    led = LED(RED_RIGHT, sysfs_root=sysfs_root)
    with pytest.raises(IOFailure):
        led.brightness()
