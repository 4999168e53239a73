#!/usr/bin/env python3
"""
NXT-style I2C sensors on EV3 input ports.

Put the port in ``other-i2c`` mode first (see LegoPort.mode), then the
sensor is reachable through the ``/dev/i2c-in<N>`` adapter of that port.
"""
import functools
from typing import Any, Callable, List, Union

from smbus2 import SMBus

from .basic import BasicClass
from .errors import IOFailure

# NXT I2C sensor identification registers, 8 ASCII bytes each
REG_VERSION: int = 0x00
REG_VENDOR: int = 0x08
REG_PRODUCT: int = 0x10


def bus_path(port: Union[int, str]) -> str:
    """
    I2C adapter device for an input port.

    :param port: ``in1`` to ``in4`` or 1 to 4.
    """
    if isinstance(port, str):
        if not port.startswith("in") or not port[2:].isdigit():
            raise ValueError(f'I2C port should be between [in1, in4], not "{port}"')
        port = int(port[2:])
    if not 1 <= port <= 4:
        raise ValueError(f'I2C port should be between [in1, in4], not "in{port}"')
    return f"/dev/i2c-in{port}"


def _io(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self: "I2CSensor", *args: Any, **kwargs: Any) -> Any:
        try:
            return func(self, *args, **kwargs)
        except OSError as e:
            raise IOFailure(f"I2C {func.__name__} on {self.bus} at 0x{self.address:02X} failed: {e}",
                            self.bus) from e
    return wrapper


class I2CSensor(BasicClass):
    """Register access to one I2C device behind an input port."""
    ADDR: int = 0x01

    def __init__(
        self,
        port: Union[int, str],
        address: int = ADDR,
        *args: Any,
        **kwargs: Any
    ) -> None:
        """
        :param port: Input port, ``in1`` to ``in4`` or 1 to 4.
        :param address: 7-bit I2C address, 0x01 for LEGO NXT sensors.
        :raises IOFailure: If the adapter cannot be opened.
        """
        super().__init__(*args, **kwargs)
        if not 0 <= address <= 0x7f:
            raise ValueError(f"I2C address must be 7-bit, not 0x{address:02X}")
        self.bus: str = bus_path(port)
        self.address: int = address
        try:
            self._smbus: SMBus = SMBus(self.bus)
        except OSError as e:
            raise IOFailure(f"failed to open I2C adapter {self.bus}: {e}", self.bus) from e
        self.logger.debug(f"I2C device 0x{address:02X} on {self.bus}")

    def close(self) -> None:
        self._smbus.close()

    def __enter__(self) -> "I2CSensor":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @_io
    def read_byte(self) -> int:
        result: int = self._smbus.read_byte(self.address)
        self.logger.debug(f"read_byte: [0x{result:02X}]")
        return result

    @_io
    def write_byte(self, data: int) -> None:
        self.logger.debug(f"write_byte: [0x{data:02X}]")
        self._smbus.write_byte(self.address, data)

    @_io
    def read_byte_data(self, reg: int) -> int:
        result: int = self._smbus.read_byte_data(self.address, reg)
        self.logger.debug(f"read_byte_data: [0x{reg:02X}] [0x{result:02X}]")
        return result

    @_io
    def write_byte_data(self, reg: int, data: int) -> None:
        self.logger.debug(f"write_byte_data: [0x{reg:02X}] [0x{data:02X}]")
        self._smbus.write_byte_data(self.address, reg, data)

    @_io
    def read_word_data(self, reg: int) -> int:
        result: int = self._smbus.read_word_data(self.address, reg)
        self.logger.debug(f"read_word_data: [0x{reg:02X}] [0x{result:04X}]")
        return result

    @_io
    def write_word_data(self, reg: int, data: int) -> None:
        self.logger.debug(f"write_word_data: [0x{reg:02X}] [0x{data:04X}]")
        self._smbus.write_word_data(self.address, reg, data)

    @_io
    def mem_read(self, length: int, memaddr: int) -> List[int]:
        """
        Read a block of registers.

        :param length: Number of bytes, at most 32.
        :param memaddr: First register.
        """
        result: List[int] = self._smbus.read_i2c_block_data(self.address, memaddr, length)
        self.logger.debug(f"mem_read: [0x{memaddr:02X}] {[f'0x{i:02X}' for i in result]}")
        return result

    @_io
    def mem_write(self, data: Union[int, List[int], bytes, bytearray], memaddr: int) -> None:
        """
        Write a block of registers.

        :param data: One byte or a sequence of bytes.
        :param memaddr: First register.
        """
        values = [data] if isinstance(data, int) else list(data)
        self.logger.debug(f"mem_write: [0x{memaddr:02X}] {[f'0x{i:02X}' for i in values]}")
        self._smbus.write_i2c_block_data(self.address, memaddr, values)

    def _read_string(self, reg: int) -> str:
        raw = bytes(self.mem_read(8, reg))
        return raw.split(b"\x00", 1)[0].decode("ascii", errors="replace").strip()

    def version(self) -> str:
        return self._read_string(REG_VERSION)

    def vendor(self) -> str:
        return self._read_string(REG_VENDOR)

    def product(self) -> str:
        return self._read_string(REG_PRODUCT)
