"""Configuration file parser for proton-call.

The config is a flat TOML file with three directories::

    data = "/home/user/Documents/Proton/env/"
    steam = "/home/user/.steam/steam/"
    common = "/home/user/.steam/steam/steamapps/common/"
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

from ..errors import ConfigError

CONFIG_FILE_NAME = "proton.conf"

REQUIRED_KEYS = ("data", "steam", "common")


@dataclass(frozen=True)
class ProtonConfig:
    """Directories proton-call works with.

    Attributes:
        data: Proton's private state directory (STEAM_COMPAT_DATA_PATH)
        steam: Steam installation, the one containing ``steamapps``
        common: Directory holding installed Proton versions
    """

    data: Path
    steam: Path
    common: Path


def find_config_file(env: Optional[Mapping[str, str]] = None) -> Path:
    """Location of the config file.

    ``$XDG_CONFIG_HOME/proton.conf`` when XDG_CONFIG_HOME is set, otherwise
    ``$HOME/.config/proton.conf``. The file is not required to exist.
    """
    env = os.environ if env is None else env

    xdg_config = env.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / CONFIG_FILE_NAME

    home = env.get("HOME")
    base = Path(home) if home else Path.home()
    return base / ".config" / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> ProtonConfig:
    """Load configuration from ``path`` or the default location.

    Args:
        path: Config file to read, defaults to ``find_config_file()``

    Returns:
        ProtonConfig with ``~`` expanded and every directory made absolute

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML or lacks
            one of the required keys
    """
    config_file = Path(path) if path is not None else find_config_file()

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"failed to open config '{config_file}': {e.strerror or e}") from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"failed to parse config '{config_file}': {e}") from e

    values = {}
    for key in REQUIRED_KEYS:
        value = data.get(key)
        if value is None:
            raise ConfigError(f"config '{config_file}' is missing '{key}'")
        if not isinstance(value, str) or not value:
            raise ConfigError(f"config '{config_file}': '{key}' must be a non-empty string")
        values[key] = Path(value).expanduser().absolute()

    return ProtonConfig(**values)
