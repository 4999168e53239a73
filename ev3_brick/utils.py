#!/usr/bin/env python3
"""
Utility functions for ev3_brick: coloured console output and value mapping.
"""
import sys
from typing import Union, Any

# ANSI color definitions
RED: str = '0;31'
YELLOW: str = '0;33'
WHITE: str = '0;37'


def print_color(
    msg: str,
    end: str = '\n',
    file: Any = None,
    flush: bool = False,
    color: str = ''
) -> None:
    """
    Print a message with ANSI color.

    :param msg: Message text.
    :param end: End-of-line string.
    :param file: Output file-like object, stdout when None.
    :param flush: Whether to flush after print.
    :param color: ANSI color code string.
    """
    print(f'\033[{color}m{msg}\033[0m', end=end, file=file or sys.stdout, flush=flush)


def info(msg: str, end: str = '\n', file: Any = None, flush: bool = False) -> None:
    """Print informational message in white."""
    print_color(msg, end=end, file=file, flush=flush, color=WHITE)


def warn(msg: str, end: str = '\n', file: Any = None, flush: bool = False) -> None:
    """Print warning message in yellow."""
    print_color(msg, end=end, file=file, flush=flush, color=YELLOW)


def error(msg: str, end: str = '\n', file: Any = None, flush: bool = False) -> None:
    """Print error message in red."""
    print_color(msg, end=end, file=file, flush=flush, color=RED)


def mapping(
    x: Union[int, float],
    in_min: Union[int, float],
    in_max: Union[int, float],
    out_min: Union[int, float],
    out_max: Union[int, float]
) -> float:
    """
    Map a value from one range to another.

    :param x: Input value.
    :param in_min: Lower bound of input range.
    :param in_max: Upper bound of input range.
    :param out_min: Lower bound of output range.
    :param out_max: Upper bound of output range.
    :return: Mapped output value (float).
    """
    return (x - in_min) * (out_max - out_min) / (in_max - in_min) + out_min
