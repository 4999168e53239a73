import logging

import pytest

from ev3_brick.basic import BasicClass, level_name, package_logger, set_debug_level


class Widget(BasicClass):
    pass


class Gadget(BasicClass):
    pass


@pytest.fixture(autouse=True)
def reset_class_loggers():
    yield
    for name in ("Widget", "Gadget"):
        logging.getLogger(f"ev3_brick.{name}").setLevel(logging.NOTSET)


@pytest.mark.parametrize("debug,name", [
    (0, "critical"),
    (4, "debug"),
    ("info", "info"),
])
def test_level_name(debug, name):
    assert level_name(debug) == name


@pytest.mark.parametrize("debug", [True, 5, -1, "loud", 1.5])
def test_bad_level(debug):
    with pytest.raises(ValueError):
        level_name(debug)


def test_class_logger_is_child_of_package():
    widget = Widget()
    assert widget.logger.name == "ev3_brick.Widget"
    assert widget.logger.parent is package_logger()
    assert len(package_logger().handlers) == 1
    Gadget()
    assert len(package_logger().handlers) == 1


def test_package_level_reaches_every_class(caplog):
    widget, gadget = Widget(), Gadget()
    assert set_debug_level("debug") == "debug"
    assert widget.debug_level == "debug"
    assert gadget.debug_level == "debug"
    widget.logger.debug("hello")
    assert ("ev3_brick.Widget", logging.DEBUG, "hello") in caplog.record_tuples


def test_instance_level_overrides_package(caplog):
    set_debug_level("debug")
    widget = Widget(debug_level="error")
    assert widget.debug_level == "error"
    assert Gadget().debug_level == "debug"
    widget.logger.info("quiet")
    assert "quiet" not in caplog.text
