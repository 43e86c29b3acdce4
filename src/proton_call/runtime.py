"""Steam Linux Runtime versions, the container layer Proton can run inside."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import UsageError
from .index import Index
from .version import DEFAULT_VERSION, DefaultVersion


@dataclass(frozen=True, order=True)
class RuntimeVersion:
    """A Steam Linux Runtime generation."""

    generation: int
    name: str = field(compare=False)
    directory: str = field(compare=False)

    def __str__(self) -> str:
        return f"{self.generation}.0 ({self.name})"


RUNTIME_VERSIONS: Dict[int, RuntimeVersion] = {
    1: RuntimeVersion(1, "scout", "SteamLinuxRuntime"),
    2: RuntimeVersion(2, "soldier", "SteamLinuxRuntime_soldier"),
    3: RuntimeVersion(3, "sniper", "SteamLinuxRuntime_sniper"),
}

RUNTIME_LABEL = "Steam Linux Runtime"


def parse_runtime_version(text: str) -> Union[RuntimeVersion, DefaultVersion]:
    """Parse a runtime request.

    Accepts the generation number (``2``, ``2.0``, ``v2``), the codename
    (``soldier``) or ``latest`` for the newest installed runtime.

    Raises:
        UsageError: If the text names no known runtime
    """
    token = text.lower()
    if token == "latest":
        return DEFAULT_VERSION
    for runtime in RUNTIME_VERSIONS.values():
        number = str(runtime.generation)
        if token in (number, f"{number}.0", f"v{number}", runtime.name):
            return runtime
    known = ", ".join(r.name for r in RUNTIME_VERSIONS.values())
    raise UsageError(f"invalid runtime version: '{text}' (known: {known}, latest)")


def runtime_from_directory_name(name: str) -> Optional[RuntimeVersion]:
    for runtime in RUNTIME_VERSIONS.values():
        if name == runtime.directory:
            return runtime
    return None


def runtime_index(common: Union[str, Path]) -> Index:
    """Index of runtimes installed next to Proton in ``common``."""
    return Index(common, parse_name=runtime_from_directory_name, label=RUNTIME_LABEL)
