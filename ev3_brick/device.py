#!/usr/bin/env python3
"""
Device base class shared by the motor, sensor and port wrappers.
"""
from typing import Any, Callable, List, Optional, Union

from .basic import BasicClass
from .errors import DriverMismatch, IOFailure
from .resolver import DeviceDescriptor, descriptors, resolve
from .sysfs import ADDRESS, DRIVER_NAME, SysFS, attribute_path, class_path, local_fs


class Device(BasicClass):
    """
    One exported ev3dev device, ``<ROOT>/<PREFIX><id>``.

    Attributes are read fresh on every access. Subclasses set ROOT and PREFIX
    and add typed accessors in get-or-set style: call with no argument to
    read, with a value to write.
    """
    ROOT: str = ""
    PREFIX: str = ""
    TYPE: str = "device"

    def __init__(
        self,
        id: int,
        sysfs_root: str = "",
        fs: Optional[SysFS] = None,
        *args: Any,
        **kwargs: Any
    ) -> None:
        """
        :param id: Device id, the integer suffix of its directory.
        :param sysfs_root: Alternative sysfs mount, empty for /sys.
        :param fs: Filesystem access object.
        """
        super().__init__(*args, **kwargs)
        if not isinstance(id, int) or isinstance(id, bool) or id < 0:
            raise ValueError(f"Device id must be a non-negative int, not {id!r}")
        self.id: int = id
        self.sysfs_root: str = sysfs_root
        self.fs: SysFS = fs or local_fs

    @classmethod
    def class_root(cls, sysfs_root: str = "") -> str:
        return class_path(cls.ROOT, sysfs_root)

    @classmethod
    def from_port(
        cls,
        port: str,
        driver: str,
        sysfs_root: str = "",
        fs: Optional[SysFS] = None,
        strict: bool = True,
        **kwargs: Any
    ):
        """
        Bind to the device on ``port`` running ``driver``.

        :param port: Port address, or ``""`` for the first device running driver.
        :param driver: Driver name.
        :param strict: When False a driver mismatch is logged and the device
            on the port is returned anyway.
        :raises DeviceNotFound: If nothing matches.
        :raises DriverMismatch: On a driver mismatch when strict.
        """
        try:
            id = resolve(cls.class_root(sysfs_root), cls.PREFIX, port, driver, fs)
        except DriverMismatch as e:
            if strict:
                raise
            device = cls(e.id, sysfs_root=sysfs_root, fs=fs, **kwargs)
            device.logger.warning(f"{device}: {e}")
            return device
        return cls(id, sysfs_root=sysfs_root, fs=fs, **kwargs)

    @classmethod
    def list(cls, sysfs_root: str = "", fs: Optional[SysFS] = None) -> List[DeviceDescriptor]:
        """Descriptors of every device of this class."""
        return list(descriptors(cls.class_root(sysfs_root), cls.PREFIX, fs))

    def __str__(self) -> str:
        return f"{self.PREFIX}{self.id}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.id})"

    @property
    def path(self) -> str:
        """Directory of this device."""
        return f"{self.class_root(self.sysfs_root)}/{self}"

    def attr_path(self, name: str) -> str:
        return attribute_path(self.class_root(self.sysfs_root), self.PREFIX, self.id, name)

    def get_attr(self, name: str) -> str:
        """
        Read one attribute.

        :param name: Attribute file name.
        :return: File content without its trailing newline.
        :raises IOFailure: If the file cannot be read.
        """
        path = self.attr_path(name)
        try:
            value = self.fs.read(path)
        except OSError as e:
            raise IOFailure(f"failed to read {self.TYPE} {name} attribute {path}: {e}", path) from e
        self.logger.debug(f"{self} {name} -> {value!r}")
        return value

    def set_attr(self, name: str, value: Union[str, int]) -> None:
        """
        Write one attribute.

        :param name: Attribute file name.
        :param value: Value, written as its str().
        :raises IOFailure: If the kernel rejects the write.
        """
        path = self.attr_path(name)
        self.logger.debug(f"{self} {name} <- {value!r}")
        try:
            self.fs.write(path, value)
        except OSError as e:
            raise IOFailure(f"failed to set {self.TYPE} {name} attribute {path}: {e}", path) from e

    def get_int(self, name: str) -> int:
        value = self.get_attr(name)
        try:
            return int(value)
        except ValueError as e:
            raise IOFailure(f"failed to parse {self.TYPE} {name} attribute {value!r}: {e}",
                            self.attr_path(name)) from e

    def get_list(self, name: str) -> List[str]:
        return self.get_attr(name).split()

    def _get_or_set(
        self,
        name: str,
        value: Any = None,
        cast: Callable[[str], Any] = str,
        check: Optional[Callable[[Any], None]] = None
    ) -> Any:
        if value is None:
            if cast is int:
                return self.get_int(name)
            return cast(self.get_attr(name))
        if check is not None:
            check(value)
        self.set_attr(name, value)
        return None

    @property
    def address(self) -> str:
        """Port address of the device."""
        return self.get_attr(ADDRESS)

    @property
    def driver_name(self) -> str:
        """Driver backing the device."""
        return self.get_attr(DRIVER_NAME)


def address_of(device: Device) -> str:
    """Return the port address of device."""
    return device.address


def driver_for(device: Device) -> str:
    """Return the driver name of device."""
    return device.driver_name
