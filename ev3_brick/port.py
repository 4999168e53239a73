#!/usr/bin/env python3
"""
LEGO port wrapper, ``/sys/class/lego-port/portN``.

Ports let you override sensor auto-detection, e.g. switch an input port to
``other-i2c`` for a third party I2C sensor or load a driver by hand.
"""
from typing import List, Optional

from .device import Device
from .errors import DeviceNotFound
from .sysfs import LEGO_PORT_PATH, MODE, MODES, PORT_PREFIX, SET_DEVICE, STATUS


class LegoPort(Device):
    """One physical input or output port."""
    ROOT: str = LEGO_PORT_PATH
    PREFIX: str = PORT_PREFIX
    TYPE: str = "port"

    @classmethod
    def for_address(cls, address: str, **kwargs) -> "LegoPort":
        """
        Bind to the port with the given address, whatever its driver.

        :param address: Port address such as ``in1`` or ``outA``.
        :raises DeviceNotFound: If no port has that address.
        """
        for desc in cls.list(kwargs.get("sysfs_root", ""), kwargs.get("fs")):
            if desc.address == address:
                return cls(desc.id, **kwargs)
        raise DeviceNotFound("", address)

    def mode(self, mode: Optional[str] = None) -> Optional[str]:
        """
        Get or set the port mode.

        :param mode: One of modes(), e.g. ``ev3-analog`` or ``other-i2c``.
        """
        return self._get_or_set(MODE, mode)

    def modes(self) -> List[str]:
        return self.get_list(MODES)

    def set_device(self, driver: str) -> None:
        """
        Load a device driver on the port, for ports in a mode that allows it.

        :param driver: Driver name such as ``lego-ev3-touch``.
        """
        self.set_attr(SET_DEVICE, driver)

    def status(self) -> str:
        """Connection status, usually the mode or ``no-device``."""
        return self.get_attr(STATUS)
