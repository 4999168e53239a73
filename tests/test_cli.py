import os

import pytest

from ev3_brick.cli import main
from ev3_brick.lcd import LCD_HEIGHT, LCD_STRIDE
from ev3_brick.sysfs import DC_MOTOR_PATH, LED_PATH, SENSOR_PATH, TACHO_MOTOR_PATH, class_path
from ev3_brick.version import __version__


@pytest.fixture
def brick(sysfs_root, make_device):
    make_device(TACHO_MOTOR_PATH, "motor0", address="outA", driver_name="lego-ev3-l-motor")
    make_device(TACHO_MOTOR_PATH, "motor3", address="outB", driver_name="lego-ev3-m-motor")
    make_device(SENSOR_PATH, "sensor1", address="in2", driver_name="lego-ev3-touch")
    make_device(LED_PATH, "led0:green:brick-status", brightness=0, max_brightness=255)
    return sysfs_root


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_find(brick, capsys):
    assert main(["--sysfs-root", brick, "find", "tacho-motor", "lego-ev3-m-motor"]) == 0
    assert capsys.readouterr().out == "3\n"


def test_find_on_port(brick, capsys):
    assert main(["--sysfs-root", brick, "find", "tacho-motor", "lego-ev3-l-motor", "--port", "outA"]) == 0
    assert capsys.readouterr().out == "0\n"


def test_find_mismatch(brick, capsys):
    assert main(["--sysfs-root", brick, "find", "lego-sensor", "lego-ev3-color", "--port", "in2"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert "mismatched driver names" in captured.err


def test_find_not_found(brick, capsys):
    assert main(["--sysfs-root", brick, "find", "tacho-motor", "lego-ev3-m-motor", "--port", "outD"]) == 1
    assert "could not find device" in capsys.readouterr().err


def test_list(brick, capsys):
    assert main(["--sysfs-root", brick, "list", "tacho-motor"]) == 0
    out = capsys.readouterr().out
    assert "  motor0\toutA\tlego-ev3-l-motor\n" in out
    assert "  motor3\toutB\tlego-ev3-m-motor\n" in out


def test_list_all(brick, capsys):
    os.makedirs(class_path(DC_MOTOR_PATH, brick))
    assert main(["--sysfs-root", brick, "list"]) == 0
    captured = capsys.readouterr()
    assert "  sensor1\tin2\tlego-ev3-touch\n" in captured.out
    assert "  (none)\n" in captured.out


def test_led(brick, capsys):
    assert main(["--sysfs-root", brick, "led", "led0:green:brick-status", "200"]) == 0
    assert main(["--sysfs-root", brick, "led", "led0:green:brick-status"]) == 0
    assert capsys.readouterr().out == "200\n"


def test_led_missing(brick, capsys):
    assert main(["--sysfs-root", brick, "led", "led9:blue:brick-status"]) == 1
    assert capsys.readouterr().err


def test_lcd_clear(tmp_path, capsys):
    fb = tmp_path / "fb0"
    fb.write_bytes(bytes(LCD_STRIDE * LCD_HEIGHT))
    conf = tmp_path / "ev3.conf"
    conf.write_text(f"[lcd]\ndevice = {fb}\n")
    assert main(["--config", str(conf), "lcd", "clear"]) == 0
    assert fb.read_bytes()[:4] == b"\xff\xff\xff\xff"


def test_verbose_logs_resolution(brick, caplog):
    assert main(["-v", "--sysfs-root", brick, "find", "tacho-motor", "lego-ev3-m-motor"]) == 0
    assert any(r.name == "ev3_brick.resolver" and "motor3" in r.getMessage() for r in caplog.records)


def test_quiet_by_default(brick, caplog):
    assert main(["--sysfs-root", brick, "find", "tacho-motor", "lego-ev3-m-motor"]) == 0
    assert not [r for r in caplog.records if r.name.startswith("ev3_brick")]
