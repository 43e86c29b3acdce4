"""Resolve a requested version to an installation directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .errors import VersionNotFoundError
from .index import Index

logger = logging.getLogger(__name__)


def resolve_path(index: Index, version: Any) -> Path:
    """Look up ``version``, rebuilding the index once on a miss.

    Lookups that still miss after the rebuild are not retried.

    Args:
        index: Index to search
        version: Requested version or ``DEFAULT_VERSION``

    Returns:
        Absolute installation path

    Raises:
        VersionNotFoundError: If the version is missing after the rebuild
        ProtonIOError: If the index root cannot be read
    """
    path = index.get(version)
    if path is not None:
        return path

    logger.info("%s %s not found, reindexing...", index.label, version)
    index.build()

    path = index.get(version)
    if path is None:
        raise VersionNotFoundError(f"{index.label} {version} does not exist")
    return path
