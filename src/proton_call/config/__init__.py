"""Configuration management for proton-call."""

from .parser import (
    CONFIG_FILE_NAME,
    ProtonConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ProtonConfig",
    "find_config_file",
    "load_config",
]
