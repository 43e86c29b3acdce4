"""Index of installed versions under a single root directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .errors import ProtonIOError, UsageError
from .version import CustomVersion, DefaultVersion, version_from_directory_name

logger = logging.getLogger(__name__)


class Index:
    """Catalog of installed versions and their directories.

    Creating an index does no I/O. ``build()`` scans the root and replaces
    the whole catalog; lookups never touch the disk.

    Keys are whatever ``parse_name`` returns for a directory name. They must
    be ordered among themselves, the largest one is what
    ``get(DEFAULT_VERSION)`` answers.
    """

    def __init__(
        self,
        root: Union[str, Path],
        parse_name: Callable[[str], Optional[Any]] = version_from_directory_name,
        label: str = "Proton",
    ):
        """Initialize index.

        Args:
            root: Directory whose immediate children are installations
            parse_name: Maps a directory name to a key, None to skip it
            label: Human readable name of what is indexed
        """
        if isinstance(root, str) and not root:
            raise UsageError(f"{label} index root must not be empty")
        self.root = Path(root)
        self.label = label
        self._parse_name = parse_name
        self._paths: Dict[Any, Path] = {}
        self._keys: List[Any] = []

    def build(self) -> None:
        """Scan the root directory and replace the catalog.

        Raises:
            ProtonIOError: If the root directory cannot be listed
        """
        paths: Dict[Any, Path] = {}
        try:
            with os.scandir(self.root) as entries:
                for entry in entries:
                    key = self._parse_name(entry.name)
                    if key is None:
                        continue
                    try:
                        if not entry.is_dir():
                            continue
                    except OSError as e:
                        logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
                        continue
                    paths[key] = Path(entry.path).absolute()
        except OSError as e:
            raise ProtonIOError(
                f"failed to index {self.label} directory '{self.root}': {e.strerror or e}"
            ) from e

        self._paths = paths
        self._keys = sorted(paths)
        logger.debug("Indexed %d %s versions in %s", len(paths), self.label, self.root)

    def get(self, version: Any) -> Optional[Path]:
        """Installation path for a version.

        ``DEFAULT_VERSION`` answers the newest installed version. Custom
        versions are never indexed and always miss.
        """
        if isinstance(version, DefaultVersion):
            return self._paths[self._keys[-1]] if self._keys else None
        if isinstance(version, CustomVersion):
            return None
        return self._paths.get(version)

    def newest(self) -> Optional[Any]:
        return self._keys[-1] if self._keys else None

    def entries(self) -> List[Tuple[Any, Path]]:
        """All indexed (version, path) pairs in ascending version order."""
        return [(key, self._paths[key]) for key in self._keys]

    def __contains__(self, version: Any) -> bool:
        return self.get(version) is not None

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Tuple[Any, Path]]:
        return iter(self.entries())

    def __str__(self) -> str:
        lines = [
            f"Indexed directory: {self.root}",
            "",
            f"Indexed {len(self)} {self.label} versions:",
        ]
        lines.extend(f"{self.label} {key} `{path}`" for key, path in self.entries())
        return "\n".join(lines)
