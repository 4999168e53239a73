#!/usr/bin/env python3
"""
Sysfs layout and file access used by every ev3dev device class.

ev3dev exports each device as ``<class root>/<prefix><id>/`` holding one small
text file per attribute. Values are the file content with a single trailing
newline removed.
"""
import os
from typing import List, Union

# Device class roots
LED_PATH: str = "/sys/class/leds"
LEGO_PORT_PATH: str = "/sys/class/lego-port"
SENSOR_PATH: str = "/sys/class/lego-sensor"
TACHO_MOTOR_PATH: str = "/sys/class/tacho-motor"
SERVO_MOTOR_PATH: str = "/sys/class/servo-motor"
DC_MOTOR_PATH: str = "/sys/class/dc-motor"

# Directory name prefixes
MOTOR_PREFIX: str = "motor"
PORT_PREFIX: str = "port"
SENSOR_PREFIX: str = "sensor"

# Attribute file names
ADDRESS: str = "address"
BIN_DATA: str = "bin_data"
BIN_DATA_FORMAT: str = "bin_data_format"
BRIGHTNESS: str = "brightness"
COMMAND: str = "command"
COMMANDS: str = "commands"
COUNT_PER_M: str = "count_per_m"
COUNT_PER_ROT: str = "count_per_rot"
DECIMALS: str = "decimals"
DELAY_OFF: str = "delay_off"
DELAY_ON: str = "delay_on"
DRIVER_NAME: str = "driver_name"
DUTY_CYCLE: str = "duty_cycle"
DUTY_CYCLE_SP: str = "duty_cycle_sp"
FULL_TRAVEL_COUNT: str = "full_travel_count"
HOLD_PID: str = "hold_pid"
MAX_BRIGHTNESS: str = "max_brightness"
MAX_PULSE_SP: str = "max_pulse_sp"
MID_PULSE_SP: str = "mid_pulse_sp"
MIN_PULSE_SP: str = "min_pulse_sp"
MAX_SPEED: str = "max_speed"
MODE: str = "mode"
MODES: str = "modes"
NUM_VALUES: str = "num_values"
POLARITY: str = "polarity"
POLL_MS: str = "poll_ms"
POSITION: str = "position"
POSITION_SP: str = "position_sp"
RAMP_DOWN_SP: str = "ramp_down_sp"
RAMP_UP_SP: str = "ramp_up_sp"
RATE_SP: str = "rate_sp"
SET_DEVICE: str = "set_device"
SPEED: str = "speed"
SPEED_PID: str = "speed_pid"
SPEED_SP: str = "speed_sp"
STATE: str = "state"
STATUS: str = "status"
STOP_ACTION: str = "stop_action"
STOP_ACTIONS: str = "stop_actions"
TEXT_VALUES: str = "text_values"
TIME_SP: str = "time_sp"
TRIGGER: str = "trigger"
UNITS: str = "units"
VALUE: str = "value"


def chomp(text: str) -> str:
    """Strip exactly one trailing newline."""
    if text.endswith("\n"):
        return text[:-1]
    return text


def attribute_path(root: str, prefix: str, id: int, attribute: str) -> str:
    """
    Build the path of one attribute file.

    :param root: Device class root, e.g. ``/sys/class/tacho-motor``.
    :param prefix: Directory prefix, e.g. ``motor``.
    :param id: Device id.
    :param attribute: Attribute file name, may contain a sub directory.
    :return: ``<root>/<prefix><id>/<attribute>``
    """
    return f"{root}/{prefix}{id}/{attribute}"


def class_path(path: str, sysfs_root: str = "") -> str:
    """
    Relocate a device class root under an alternative sysfs mount.

    :param path: One of the ``*_PATH`` constants.
    :param sysfs_root: Prefix to prepend, empty for the live system.
    """
    if not sysfs_root:
        return path
    return os.path.join(sysfs_root, path.lstrip("/"))


class SysFS:
    """
    Plain file access to a sysfs tree.

    The resolver and the device wrappers only ever talk to the filesystem
    through ``listdir``, ``read`` and ``write``, so tests and tools can hand
    them another object with the same three methods.
    """

    def listdir(self, path: str) -> List[str]:
        return os.listdir(path)

    def read(self, path: str) -> str:
        with open(path, "r") as f:
            return chomp(f.read())

    def read_bytes(self, path: str, length: int) -> bytes:
        with open(path, "rb") as f:
            return f.read(length)

    def write(self, path: str, value: Union[str, int]) -> None:
        with open(path, "w") as f:
            f.write(str(value))


# shared default, stateless
local_fs = SysFS()
