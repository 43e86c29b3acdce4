"""Run any Windows program through Valve's Proton."""

__version__ = "0.1.0"

from .config import ProtonConfig, load_config
from .errors import (
    ChildExitError,
    ConfigError,
    ProtonCallError,
    ProtonIOError,
    UsageError,
    VersionNotFoundError,
)
from .index import Index
from .proton import ExitStatus, Proton, RuntimeOption, check_exit, parse_runtime_options
from .request import LaunchRequest, build_proton, custom_mode, normal_mode
from .resolver import resolve_path
from .runtime import RuntimeVersion, parse_runtime_version, runtime_index
from .version import (
    DEFAULT_VERSION,
    CustomVersion,
    DefaultVersion,
    ReleaseVersion,
    Version,
    parse_version,
    version_from_custom_path,
    version_from_directory_name,
)

__all__ = [
    "__version__",
    # Versions
    "DEFAULT_VERSION",
    "CustomVersion",
    "DefaultVersion",
    "ReleaseVersion",
    "Version",
    "parse_version",
    "version_from_custom_path",
    "version_from_directory_name",
    # Index
    "Index",
    "resolve_path",
    # Runtime
    "RuntimeVersion",
    "parse_runtime_version",
    "runtime_index",
    # Launch
    "ExitStatus",
    "LaunchRequest",
    "Proton",
    "RuntimeOption",
    "build_proton",
    "check_exit",
    "custom_mode",
    "normal_mode",
    "parse_runtime_options",
    # Config
    "ProtonConfig",
    "load_config",
    # Errors
    "ChildExitError",
    "ConfigError",
    "ProtonCallError",
    "ProtonIOError",
    "UsageError",
    "VersionNotFoundError",
]
