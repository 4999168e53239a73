#!/usr/bin/env python3
"""
INI-style configuration file and the library settings read from it.

    # /etc/ev3-brick/ev3-brick.conf
    [sysfs]
    root = /tmp/fake-sys

    [lcd]
    device = /dev/fb0
    width = 178
"""
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_CONFIG_PATH: str = "/etc/ev3-brick/ev3-brick.conf"
CONFIG_ENV: str = "EV3_BRICK_CONFIG"


class Config:
    """
    A file-based configuration database.

    Holds ``[section]`` headed ``key = value`` pairs. Lines before the first
    section belong to the "" section. Writing keeps comments, blank lines and
    the original order, and appends new options and sections.
    """

    def __init__(self, path: str, create: bool = False, description: Optional[str] = None) -> None:
        """
        :param path: The file path for the configuration file.
        :param create: Create the file (and its directory) when missing.
        :param description: Header comment written into a newly created file.
        :raises ValueError: If no path is provided.
        """
        if not path:
            raise ValueError("Config: Missing file path parameter.")
        self.path: str = path
        if create and not os.path.exists(path):
            self._create(path, description)
        self._dict: Dict[str, Dict[str, str]] = {}
        if os.path.isfile(path):
            self.read()

    def __getitem__(self, key: str) -> Dict[str, str]:
        return self._dict[key]

    def __setitem__(self, key: str, value: Dict[str, str]) -> None:
        self._dict[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._dict

    @staticmethod
    def _create(path: str, description: Optional[str]) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, mode=0o755, exist_ok=True)
        with open(path, 'w') as f:
            if description is not None:
                lines = description.strip().split('\n')
                f.write("\n".join(f"# {line.strip()}" for line in lines) + "\n\n")

    @staticmethod
    def _read(path: str) -> Dict[str, Dict[str, str]]:
        config_dict: Dict[str, Dict[str, str]] = {"": {}}
        current_section = ""
        with open(path, 'r') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                if line.startswith('[') and line.endswith(']'):
                    current_section = line[1:-1].strip()
                    config_dict.setdefault(current_section, {})
                elif '=' in line:
                    option, value = line.split('=', 1)
                    config_dict[current_section][option.strip()] = value.strip()
        return config_dict

    @staticmethod
    def _write(path: str, config_dict: Dict[str, Dict[str, str]]) -> None:
        pending = {sec: dict(opts) for sec, opts in config_dict.items()}
        out: List[str] = []

        def flush(section: str) -> None:
            for opt, val in pending.pop(section, {}).items():
                out.append(f"{opt} = {val}\n")

        lines: List[str] = []
        if os.path.isfile(path):
            with open(path, 'r') as f:
                lines = f.readlines()

        current_section = ""
        for line in lines:
            stripped = line.strip()
            if stripped.startswith('[') and stripped.endswith(']'):
                flush(current_section)
                current_section = stripped[1:-1].strip()
                out.append(line)
            elif stripped and not stripped.startswith('#') and '=' in stripped:
                option = stripped.split('=', 1)[0].strip()
                opts = pending.get(current_section, {})
                if option in opts:
                    out.append(f"{option} = {opts.pop(option)}\n")
                else:
                    out.append(line)
            else:
                out.append(line if line.endswith('\n') else line + '\n')
        flush(current_section)

        for sec in list(pending):
            if not pending[sec]:
                continue
            if out and out[-1].strip():
                out.append("\n")
            if sec:
                out.append(f"[{sec}]\n")
            flush(sec)

        with open(path, 'w') as f:
            f.writelines(out)

    def read(self) -> Dict[str, Dict[str, str]]:
        """Reload the file into the internal dictionary and return it."""
        self._dict = self._read(self.path)
        return self._dict

    def write(self) -> None:
        """Write the internal dictionary back to the file."""
        self._write(self.path, self._dict)

    def get(self, section: str, option: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration option value.

        :param section: The section name.
        :param option: The option name.
        :param default: Returned when the option does not exist.
        """
        return self._dict.get(section, {}).get(option, default)

    def set(self, section: str, option: str, value: str) -> None:
        """Set a configuration option value; call write() to persist."""
        self._dict.setdefault(section, {})[option] = str(value)


@dataclass
class Settings:
    """Paths and geometry used when no explicit value is passed."""
    sysfs_root: str = ""
    framebuffer: str = "/dev/fb0"
    lcd_width: int = 178
    lcd_height: int = 128
    lcd_stride: int = 712
    lcd_format: str = "xrgb"
    speaker: str = "/dev/input/by-path/platform-snd-legoev3-event"
    debug_level: str = "warning"


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Read settings from path, $EV3_BRICK_CONFIG or the system config file.

    A missing file yields the defaults.

    :raises ValueError: If a numeric option is not an integer.
    """
    path = path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH
    settings = Settings()
    if not os.path.isfile(path):
        return settings

    config = Config(path)
    settings.sysfs_root = config.get("sysfs", "root", settings.sysfs_root)
    settings.framebuffer = config.get("lcd", "device", settings.framebuffer)
    settings.lcd_format = config.get("lcd", "format", settings.lcd_format)
    for name in ("width", "height", "stride"):
        value = config.get("lcd", name)
        if value is not None:
            try:
                setattr(settings, f"lcd_{name}", int(value))
            except ValueError:
                raise ValueError(f"{path}: [lcd] {name} must be an integer, not {value!r}") from None
    settings.speaker = config.get("speaker", "device", settings.speaker)
    settings.debug_level = config.get("logging", "level", settings.debug_level)
    return settings
