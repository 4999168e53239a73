#!/usr/bin/env python3
"""
LEGO sensor wrapper, ``/sys/class/lego-sensor/sensorN``.
"""
import struct
from typing import Dict, List, Optional, Tuple, Union

from .device import Device
from .errors import IOFailure
from .sysfs import (
    BIN_DATA, BIN_DATA_FORMAT, COMMAND, COMMANDS, DECIMALS, MODE, MODES,
    NUM_VALUES, POLL_MS, SENSOR_PATH, SENSOR_PREFIX, TEXT_VALUES, UNITS, VALUE,
)

# bin_data_format -> (bytes per value, struct format)
BIN_DATA_FORMATS: Dict[str, Tuple[int, str]] = {
    'u8': (1, '<B'),
    's8': (1, '<b'),
    'u16': (2, '<H'),
    's16': (2, '<h'),
    's16_be': (2, '>h'),
    's32': (4, '<i'),
    'float': (4, '<f'),
}


class Sensor(Device):
    """Sensor attached to an input port."""
    ROOT: str = SENSOR_PATH
    PREFIX: str = SENSOR_PREFIX
    TYPE: str = "sensor"

    def commands(self) -> List[str]:
        """Commands supported by the sensor, often empty."""
        return self.get_list(COMMANDS)

    def command(self, command: str) -> None:
        self.set_attr(COMMAND, command)

    def mode(self, mode: Optional[str] = None) -> Optional[str]:
        """
        Get or set the sensor mode.

        :param mode: One of modes(), e.g. ``COL-REFLECT``.
        """
        return self._get_or_set(MODE, mode)

    def modes(self) -> List[str]:
        return self.get_list(MODES)

    def decimals(self) -> int:
        """Number of decimal places in the value attributes for the current mode."""
        return self.get_int(DECIMALS)

    def num_values(self) -> int:
        """Number of valid value<N> attributes for the current mode."""
        return self.get_int(NUM_VALUES)

    def units(self) -> str:
        return self.get_attr(UNITS)

    def poll_ms(self, ms: Optional[int] = None) -> Optional[int]:
        """Get or set the polling period in milliseconds, 0 disables polling."""
        return self._get_or_set(POLL_MS, ms, int)

    def text_values(self) -> bool:
        """Whether the current mode reports text rather than numbers."""
        return self.get_attr(TEXT_VALUES) == "1"

    def raw_value(self, n: int = 0) -> int:
        """
        Read value<n> without decimal scaling.

        :param n: Value index, 0 to num_values() - 1.
        """
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"value index must be a non-negative int, not {n!r}")
        return self.get_int(f"{VALUE}{n}")

    def value(self, n: int = 0) -> Union[int, float]:
        """
        Read value<n> scaled by decimals().

        :param n: Value index, 0 to num_values() - 1.
        """
        raw = self.raw_value(n)
        decimals = self.decimals()
        if decimals == 0:
            return raw
        return raw / 10 ** decimals

    def values(self) -> List[Union[int, float]]:
        """All valid values for the current mode, scaled by decimals()."""
        decimals = self.decimals()
        raw = [self.raw_value(n) for n in range(self.num_values())]
        if decimals == 0:
            return raw
        return [v / 10 ** decimals for v in raw]

    def bin_data_format(self) -> str:
        return self.get_attr(BIN_DATA_FORMAT)

    def bin_data(self) -> Tuple[Union[int, float], ...]:
        """
        Read and decode the raw value buffer.

        :return: num_values() values decoded with bin_data_format().
        :raises ValueError: On an unknown data format.
        """
        fmt = self.bin_data_format()
        if fmt not in BIN_DATA_FORMATS:
            raise ValueError(f"unknown bin_data_format {fmt!r}")
        size, code = BIN_DATA_FORMATS[fmt]
        count = self.num_values()
        data = self.read_bytes(BIN_DATA, size * count)
        return tuple(v for (v,) in struct.iter_unpack(code, data))

    def read_bytes(self, name: str, length: int) -> bytes:
        """Read the first length bytes of a binary attribute."""
        path = self.attr_path(name)
        try:
            data = self.fs.read_bytes(path, length)
        except OSError as e:
            raise IOFailure(f"failed to read {self.TYPE} {name} attribute {path}: {e}", path) from e
        if len(data) < length:
            raise IOFailure(f"short read of {self.TYPE} {name}: want {length} bytes, got {len(data)}", path)
        return data
