#!/usr/bin/env python3
"""
Exceptions raised by ev3_brick.

Everything derives from Ev3Error so callers can catch the whole family, and
each kind also derives from the builtin it refines.
"""
from typing import Optional


class Ev3Error(Exception):
    """Base class for ev3_brick errors."""


class DeviceNotFound(Ev3Error, LookupError):
    """No device under a class root matched the requested driver and port."""

    def __init__(self, driver: str, port: str = "") -> None:
        self.driver: str = driver
        self.port: str = port
        if port and not driver:
            msg = f"could not find device on port {port}"
        elif port:
            msg = f"could not find device for driver {driver!r} on port {port}"
        else:
            msg = f"could not find device for driver {driver!r}"
        super().__init__(msg)


class DriverMismatch(Ev3Error):
    """
    A device was found at the requested port but runs a different driver.

    This is a partial success: ``id`` holds the id of the device that sits on
    the port, so callers that only care about the port may keep using it.
    """

    def __init__(self, want: str, have: str, id: int = -1) -> None:
        self.want: str = want
        self.have: str = have
        self.id: int = id
        super().__init__(f"mismatched driver names: want {want!r} but have {have!r}")


class MalformedExport(Ev3Error, ValueError):
    """A device directory name did not end in an integer id."""

    def __init__(self, name: str, prefix: str) -> None:
        self.name: str = name
        self.prefix: str = prefix
        super().__init__(f"could not parse id from device name {name!r} (prefix {prefix!r})")


class IOFailure(Ev3Error, OSError):
    """Reading or writing a device file failed."""

    def __init__(self, msg: str, path: Optional[str] = None) -> None:
        self.path: Optional[str] = path
        super().__init__(msg)

    def __str__(self) -> str:
        return self.args[0]


class BufferTooSmall(Ev3Error, ValueError):
    """A pixel buffer is shorter than stride * height."""

    def __init__(self, need: int, have: int) -> None:
        self.need: int = need
        self.have: int = have
        super().__init__(f"bad pixel buffer length: need {need} bytes but have {have}")
