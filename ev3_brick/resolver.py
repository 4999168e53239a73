#!/usr/bin/env python3
"""
Device discovery: map a (port, driver) pair to the id of a sysfs device.
"""
import logging
from typing import Iterator, List, NamedTuple, Optional

from .errors import DeviceNotFound, DriverMismatch, IOFailure, MalformedExport
from .sysfs import ADDRESS, DRIVER_NAME, SysFS, attribute_path, local_fs

logger = logging.getLogger(__name__)


class DeviceDescriptor(NamedTuple):
    """Identification attributes of one exported device."""
    id: int
    address: str
    driver_name: str


def _read(fs: SysFS, root: str, prefix: str, id: int, attribute: str) -> str:
    path = attribute_path(root, prefix, id, attribute)
    try:
        return fs.read(path)
    except OSError as e:
        what = attribute.replace("_", " ")
        raise IOFailure(f"could not read {what} {path}: {e}", path) from e


def _listed_ids(root: str, prefix: str, fs: SysFS) -> Iterator[int]:
    # names are parsed only as the scan reaches them
    try:
        names = fs.listdir(root)
    except OSError as e:
        raise IOFailure(f"could not get devices for {root}: {e}", root) from e

    for name in names:
        if not name.startswith(prefix):
            continue
        suffix = name[len(prefix):]
        if not (suffix.isascii() and suffix.isdigit()):
            raise MalformedExport(name, prefix)
        yield int(suffix)


def device_ids(root: str, prefix: str, fs: Optional[SysFS] = None) -> List[int]:
    """
    List the ids of all ``<prefix><id>`` directories under root.

    :param root: Device class root.
    :param prefix: Directory prefix.
    :param fs: Filesystem access object, the live sysfs when None.
    :return: Ids in ascending order.
    :raises IOFailure: If the root cannot be listed.
    :raises MalformedExport: If a matching name has no integer suffix.
    """
    return sorted(_listed_ids(root, prefix, fs or local_fs))


def resolve(root: str, prefix: str, port: str, driver: str, fs: Optional[SysFS] = None) -> int:
    """
    Find the id of the device with the given port address and driver.

    Candidates are visited in directory listing order. With an empty port
    the first device running ``driver`` is returned.
    With a port, the device sitting on that port is returned; when its
    driver differs a DriverMismatch is raised that still carries its id.

    :param root: Device class root, e.g. ``/sys/class/tacho-motor``.
    :param prefix: Directory prefix, e.g. ``motor``.
    :param port: Port address such as ``outA``, or ``""`` for any port.
    :param driver: Driver name such as ``lego-ev3-l-motor``.
    :param fs: Filesystem access object, the live sysfs when None.
    :return: Device id.
    :raises DeviceNotFound: If no device matches.
    :raises DriverMismatch: If the device on ``port`` runs another driver.
    :raises IOFailure: If any attribute file cannot be read.
    :raises MalformedExport: If a device directory name reached before the
        match is not parseable.
    """
    fs = fs or local_fs
    for id in _listed_ids(root, prefix, fs):
        if port == "":
            if _read(fs, root, prefix, id, DRIVER_NAME) != driver:
                continue
            logger.debug(f"Resolved {driver} to {prefix}{id}")
            return id

        if _read(fs, root, prefix, id, ADDRESS) != port:
            continue
        have = _read(fs, root, prefix, id, DRIVER_NAME)
        if have != driver:
            logger.debug(f"{prefix}{id} on {port} runs {have}, not {driver}")
            raise DriverMismatch(want=driver, have=have, id=id)
        logger.debug(f"Resolved {driver} on {port} to {prefix}{id}")
        return id

    raise DeviceNotFound(driver, port)


def descriptors(root: str, prefix: str, fs: Optional[SysFS] = None) -> Iterator[DeviceDescriptor]:
    """
    Yield the descriptor of every device under root, read fresh.

    :raises IOFailure: If the root or an attribute file cannot be read.
    """
    fs = fs or local_fs
    for id in device_ids(root, prefix, fs):
        yield DeviceDescriptor(
            id,
            _read(fs, root, prefix, id, ADDRESS),
            _read(fs, root, prefix, id, DRIVER_NAME),
        )
