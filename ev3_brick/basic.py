#!/usr/bin/env python3
"""
BasicClass and the ``ev3_brick`` logger hierarchy.

Every class logs to ``ev3_brick.<ClassName>`` and modules log to
``ev3_brick.<module>``. A single stream handler sits on the ``ev3_brick``
package logger, so set_debug_level() turns on debug output for the whole
library at once while ``debug_level`` on one object narrows or widens just
that class.
"""
import logging
from typing import Union, Optional, Dict, List

PACKAGE_LOGGER: str = "ev3_brick"
LOG_FORMAT: str = "%(asctime)s\t[%(levelname)s]\t%(name)s\t%(message)s"

DEBUG_LEVELS: Dict[str, int] = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}
DEBUG_NAMES: List[str] = ['critical', 'error', 'warning', 'info', 'debug']


def level_name(debug: Union[str, int]) -> str:
    """
    Normalise a debug level given as a name or as an index into DEBUG_NAMES.

    :raises ValueError: If the provided value is invalid.
    """
    if isinstance(debug, bool):
        raise ValueError("Debug value must be an integer or string.")
    if isinstance(debug, int):
        if 0 <= debug < len(DEBUG_NAMES):
            return DEBUG_NAMES[debug]
        raise ValueError(f"Integer debug value must be between 0 and {len(DEBUG_NAMES)-1}.")
    if isinstance(debug, str):
        if debug in DEBUG_LEVELS:
            return debug
        valid = ', '.join(DEBUG_NAMES)
        raise ValueError(f"String debug value must be one of: {valid}")
    raise ValueError("Debug value must be an integer or string.")


def package_logger() -> logging.Logger:
    """The ``ev3_brick`` logger, with its stream handler attached on first use."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def set_debug_level(debug: Union[str, int]) -> str:
    """
    Set the level of every ev3_brick logger that has no level of its own.

    :param debug: Level name or index.
    :return: The level name.
    """
    name = level_name(debug)
    package_logger().setLevel(DEBUG_LEVELS[name])
    return name


class BasicClass:
    """
    Base for stateful ev3_brick objects.

    Instances share their class logger. Without an explicit ``debug_level``
    the logger follows the package level set by set_debug_level().
    """
    DEBUG_LEVELS: Dict[str, int] = DEBUG_LEVELS
    DEBUG_NAMES: List[str] = DEBUG_NAMES

    def __init__(
        self,
        debug_level: Optional[Union[str, int]] = None,
        logger: Optional[logging.Logger] = None
    ) -> None:
        """
        :param debug_level: Debug level name or index, None to follow the package level.
        :param logger: Optional external logger instance.
        """
        package_logger()
        self.logger: logging.Logger = logger or logging.getLogger(
            f"{PACKAGE_LOGGER}.{self.__class__.__name__}")
        if debug_level is not None:
            self.debug_level = debug_level

    @property
    def debug_level(self) -> str:
        """Name of the level this object's logger actually uses."""
        return logging.getLevelName(self.logger.getEffectiveLevel()).lower()

    @debug_level.setter
    def debug_level(self, debug: Union[str, int]) -> None:
        name = level_name(debug)
        self.logger.setLevel(DEBUG_LEVELS[name])
        self.logger.debug(f"Set logging level to [{name}]")
