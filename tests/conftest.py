"""Pytest configuration and shared fixtures."""

import stat
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from proton_call.config import ProtonConfig

# Stand-in for Proton's entry point: records its arguments and environment
# into the data directory and exits with $FAKE_PROTON_EXIT.
FAKE_PROTON = """\
#!/bin/sh
printf '%s\\n' "$@" > "$STEAM_COMPAT_DATA_PATH/argv.txt"
env > "$STEAM_COMPAT_DATA_PATH/env.txt"
exit "${FAKE_PROTON_EXIT:-0}"
"""


def install_proton(directory: Path, script: str = FAKE_PROTON) -> Path:
    """Create a Proton installation with an executable entry point."""
    directory.mkdir(parents=True, exist_ok=True)
    entry_point = directory / "proton"
    entry_point.write_text(script)
    entry_point.chmod(entry_point.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return directory


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create an empty temporary directory."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def common_dir(temp_dir: Path) -> Path:
    """Create a Steam ``common`` directory.

    Creates:
        common/
            5.13/proton
            6.3/proton
            experimental/
            6.3.1          (a file, not an installation)
    """
    common = temp_dir / "common"
    common.mkdir()
    install_proton(common / "5.13")
    install_proton(common / "6.3")
    (common / "experimental").mkdir()
    (common / "6.3.1").write_text("not a directory")
    return common


@pytest.fixture
def config(temp_dir: Path, common_dir: Path) -> ProtonConfig:
    """Configuration pointing at the temporary directories."""
    steam = temp_dir / "steam"
    steam.mkdir()
    return ProtonConfig(data=temp_dir / "data", steam=steam, common=common_dir)


@pytest.fixture
def proton_installer():
    """Factory installing fake Proton versions: ``proton_installer(path, script=...)``."""
    return install_proton
