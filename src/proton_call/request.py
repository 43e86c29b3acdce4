"""Turn a parsed command line request into a Proton launch."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .config import ProtonConfig
from .errors import UsageError
from .index import Index
from .proton import Proton, RuntimeOption
from .resolver import resolve_path
from .runtime import RuntimeVersion
from .version import DEFAULT_VERSION, DefaultVersion, Version, version_from_custom_path


@dataclass
class LaunchRequest:
    """A launch as the user asked for it."""

    program: Path
    version: Version = DEFAULT_VERSION
    custom: Optional[Path] = None
    data: Optional[Path] = None
    options: List[RuntimeOption] = field(default_factory=list)
    runtime: Optional[Union[RuntimeVersion, DefaultVersion]] = None
    args: List[str] = field(default_factory=list)


def normal_mode(config: ProtonConfig, request: LaunchRequest) -> Proton:
    """Launch an indexed Proton version from ``common``."""
    index = Index(config.common)
    index.build()
    path = resolve_path(index, request.version)
    return _proton(config, request, request.version, path)


def custom_mode(config: ProtonConfig, request: LaunchRequest) -> Proton:
    """Launch the Proton installed at ``request.custom``, bypassing the index."""
    if request.custom is None:
        raise UsageError("custom mode requires a path to a Proton directory")
    custom = Path(request.custom)
    return _proton(config, request, version_from_custom_path(custom), custom.absolute())


def build_proton(config: ProtonConfig, request: LaunchRequest) -> Proton:
    if request.custom is not None:
        return custom_mode(config, request)
    return normal_mode(config, request)


def _proton(config: ProtonConfig, request: LaunchRequest, version: Version, path: Path) -> Proton:
    return Proton(
        version=version,
        path=path,
        program=request.program,
        args=list(request.args),
        options=list(request.options),
        data=request.data if request.data is not None else config.data,
        steam=config.steam,
        runtime=request.runtime,
        common=config.common,
    )
