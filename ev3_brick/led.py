#!/usr/bin/env python3
"""
LED class devices, ``/sys/class/leds/<name>``.

LEDs are addressed by name rather than discovered, so LED does not derive
from Device.
"""
from typing import Any, List, Optional, Union

from .basic import BasicClass
from .errors import IOFailure
from .sysfs import (
    BRIGHTNESS, DELAY_OFF, DELAY_ON, LED_PATH, MAX_BRIGHTNESS, TRIGGER,
    SysFS, class_path, local_fs,
)
from .utils import mapping

SIDES = {"left": 0, "right": 1}


def led_name(colour: str, side: str) -> str:
    """
    Name of an EV3 brick status LED.

    :param colour: ``green`` or ``red``.
    :param side: ``left`` or ``right``.
    :raises ValueError: On an invalid side.
    """
    if side not in SIDES:
        raise ValueError(f'LED side must be "left" or "right", not "{side}"')
    return f"led{SIDES[side]}:{colour}:brick-status"


class LED(BasicClass):
    """One LED under /sys/class/leds."""

    def __init__(
        self,
        name: str,
        sysfs_root: str = "",
        fs: Optional[SysFS] = None,
        *args: Any,
        **kwargs: Any
    ) -> None:
        """
        :param name: LED directory name, e.g. ``led0:green:brick-status``.
        :param sysfs_root: Alternative sysfs mount, empty for /sys.
        :param fs: Filesystem access object.
        """
        super().__init__(*args, **kwargs)
        self.name: str = name
        self.sysfs_root: str = sysfs_root
        self.fs: SysFS = fs or local_fs

    @classmethod
    def ev3(cls, colour: str, side: str, **kwargs: Any) -> "LED":
        """The green or red brick status LED on the given side."""
        return cls(led_name(colour, side), **kwargs)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"LED({self.name!r})"

    @property
    def path(self) -> str:
        return f"{class_path(LED_PATH, self.sysfs_root)}/{self.name}"

    def _read(self, attr: str) -> str:
        path = f"{self.path}/{attr}"
        try:
            return self.fs.read(path)
        except OSError as e:
            raise IOFailure(f"failed to read LED {attr} {path}: {e}", path) from e

    def _read_int(self, attr: str) -> int:
        value = self._read(attr)
        try:
            return int(value)
        except ValueError as e:
            raise IOFailure(f"failed to parse LED {attr} {value!r}: {e}", f"{self.path}/{attr}") from e

    def _write(self, attr: str, value: Union[str, int]) -> None:
        path = f"{self.path}/{attr}"
        self.logger.debug(f"{self} {attr} <- {value!r}")
        try:
            self.fs.write(path, value)
        except OSError as e:
            raise IOFailure(f"failed to set LED {attr} {path}: {e}", path) from e

    def max_brightness(self) -> int:
        return self._read_int(MAX_BRIGHTNESS)

    def brightness(self, value: Optional[int] = None) -> Optional[int]:
        """
        Get or set brightness.

        :param value: 0 to max_brightness().
        """
        if value is None:
            return self._read_int(BRIGHTNESS)
        if not isinstance(value, int) or value < 0:
            raise ValueError(f"brightness must be a non-negative int, not {value!r}")
        self._write(BRIGHTNESS, value)
        return None

    def brightness_percent(self, percent: Optional[float] = None) -> Optional[float]:
        """
        Get or set brightness as a percentage of max_brightness().

        :param percent: 0 to 100.
        :return: The percentage when reading, 0 for an LED with no brightness range.
        """
        top = self.max_brightness()
        if percent is None:
            if top == 0:
                return 0.0
            return mapping(self._read_int(BRIGHTNESS), 0, top, 0, 100)
        clamped = max(0.0, min(100.0, float(percent)))
        self.brightness(round(mapping(clamped, 0, 100, 0, top)))
        return None

    def on(self) -> None:
        self.brightness(self.max_brightness())

    def off(self) -> None:
        self.brightness(0)

    def triggers(self) -> List[str]:
        """Available triggers, without the brackets marking the active one."""
        return [t.strip("[]") for t in self._read(TRIGGER).split()]

    def trigger(self, trigger: Optional[str] = None) -> Optional[str]:
        """
        Get or set the trigger.

        :param trigger: One of triggers(), e.g. ``timer`` or ``none``.
        :return: The active trigger when reading.
        """
        if trigger is not None:
            self._write(TRIGGER, trigger)
            return None
        for t in self._read(TRIGGER).split():
            if t.startswith("[") and t.endswith("]"):
                return t[1:-1]
        return ""

    def delay_on(self, ms: Optional[int] = None) -> Optional[int]:
        """Get or set the on time of the timer trigger in milliseconds."""
        if ms is None:
            return self._read_int(DELAY_ON)
        self._write(DELAY_ON, ms)
        return None

    def delay_off(self, ms: Optional[int] = None) -> Optional[int]:
        """Get or set the off time of the timer trigger in milliseconds."""
        if ms is None:
            return self._read_int(DELAY_OFF)
        self._write(DELAY_OFF, ms)
        return None


GREEN_LEFT: str = led_name("green", "left")
GREEN_RIGHT: str = led_name("green", "right")
RED_LEFT: str = led_name("red", "left")
RED_RIGHT: str = led_name("red", "right")
