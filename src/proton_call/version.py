"""Proton version identifiers.

A version is one of three variants:

- ``ReleaseVersion``: a numbered release such as ``6.3`` or ``5.0.10``
- ``CustomVersion``: a one-off installation at a user-given directory
- ``DefaultVersion``: "whatever is newest", resolved by the index

Release versions order by their component tuple. Values of different
variants are never equal and have no relative order, so anything that
resolves versions has to look at the variant explicitly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import UsageError

_VERSION_RE = re.compile(r"(?:0|[1-9][0-9]*)(?:\.(?:0|[1-9][0-9]*))+")

# Steam installs official releases as "Proton 6.3"
DIRECTORY_PREFIX = "Proton "


@dataclass(frozen=True, order=True)
class ReleaseVersion:
    """A numbered Proton release, at least ``major.minor``."""

    components: Tuple[int, ...]

    @property
    def major(self) -> int:
        return self.components[0]

    @property
    def minor(self) -> int:
        return self.components[1]

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)


@dataclass(frozen=True)
class CustomVersion:
    """An unindexed installation picked by path."""

    label: str

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class DefaultVersion:
    """Sentinel for "use the newest installed version"."""

    def __str__(self) -> str:
        return "latest"


DEFAULT_VERSION = DefaultVersion()

Version = Union[ReleaseVersion, CustomVersion, DefaultVersion]


def _match(text: str) -> Optional[ReleaseVersion]:
    if not _VERSION_RE.fullmatch(text):
        return None
    return ReleaseVersion(tuple(int(part) for part in text.split(".")))


def parse_version(text: str) -> ReleaseVersion:
    """Parse ``major.minor[.patch...]`` text.

    Surrounding whitespace is not trimmed and makes the text invalid.

    Raises:
        UsageError: If the text is not a version
    """
    version = _match(text)
    if version is None:
        raise UsageError(f"invalid Proton version: '{text}'")
    return version


def version_from_directory_name(name: str) -> Optional[ReleaseVersion]:
    """Version of an installation directory, or None for foreign directories."""
    if name.startswith(DIRECTORY_PREFIX):
        name = name[len(DIRECTORY_PREFIX):]
    return _match(name)


def version_from_custom_path(path: Union[str, Path]) -> CustomVersion:
    """Build the version of a custom installation from its directory."""
    label = Path(path).name or str(path)
    return CustomVersion(label)
