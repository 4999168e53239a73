import logging
from pathlib import Path
from typing import Dict, Union

import pytest

from ev3_brick.sysfs import class_path


def add_device(root: str, cls_path: str, name: str, attrs: Dict[str, Union[str, int]]) -> Path:
    """Create <root><cls_path>/<name>/ with one newline-terminated file per attribute."""
    directory = Path(class_path(cls_path, root)) / name
    directory.mkdir(parents=True, exist_ok=True)
    for attr, value in attrs.items():
        path = directory / attr
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{value}\n")
    return directory


@pytest.fixture(autouse=True)
def no_system_config(tmp_path, monkeypatch):
    monkeypatch.setenv("EV3_BRICK_CONFIG", str(tmp_path / "missing.conf"))


@pytest.fixture(autouse=True)
def reset_package_level():
    yield
    logging.getLogger("ev3_brick").setLevel(logging.NOTSET)


@pytest.fixture
def sysfs_root(tmp_path):
    root = tmp_path / "fake"
    root.mkdir()
    return str(root)


@pytest.fixture
def make_device(sysfs_root):
    def make(cls_path: str, name: str, **attrs: Union[str, int]) -> Path:
        return add_device(sysfs_root, cls_path, name, attrs)
    return make
