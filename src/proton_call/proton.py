"""Run a Windows program through Proton."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .errors import ChildExitError, ProtonIOError, UsageError
from .resolver import resolve_path
from .runtime import RuntimeVersion, runtime_index
from .version import DefaultVersion, Version

logger = logging.getLogger(__name__)

ENTRY_POINT = "proton"
RUN_VERB = "run"


class RuntimeOption(Enum):
    """Toggles passed to Proton through its environment."""

    LOG = "log"
    WINED3D = "wined3d"
    NOD3D11 = "nod3d11"
    NOD3D10 = "nod3d10"
    NOESYNC = "noesync"
    NOFSYNC = "nofsync"
    ENABLENVAPI = "enablenvapi"

    @property
    def variables(self) -> Dict[str, str]:
        return {OPTION_VARIABLES[self]: "1"}


OPTION_VARIABLES: Dict[RuntimeOption, str] = {
    RuntimeOption.LOG: "PROTON_LOG",
    RuntimeOption.WINED3D: "PROTON_USE_WINED3D",
    RuntimeOption.NOD3D11: "PROTON_NO_D3D11",
    RuntimeOption.NOD3D10: "PROTON_NO_D3D10",
    RuntimeOption.NOESYNC: "PROTON_NO_ESYNC",
    RuntimeOption.NOFSYNC: "PROTON_NO_FSYNC",
    RuntimeOption.ENABLENVAPI: "PROTON_ENABLE_NVAPI",
}


def parse_runtime_options(tokens: Iterable[str]) -> List[RuntimeOption]:
    """Parse option tokens, each possibly a comma separated list.

    Order of first appearance is kept, repeats are dropped.

    Raises:
        UsageError: On any unknown option
    """
    options: List[RuntimeOption] = []
    for token in tokens:
        for name in token.split(","):
            name = name.strip()
            if not name:
                continue
            try:
                option = RuntimeOption(name.lower())
            except ValueError:
                known = ", ".join(o.value for o in RuntimeOption)
                raise UsageError(f"unknown runtime option: '{name}' (known: {known})") from None
            if option not in options:
                options.append(option)
    return options


@dataclass(frozen=True)
class ExitStatus:
    """How the child terminated.

    ``code`` is None when the child was killed by a signal.
    """

    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def code(self) -> Optional[int]:
        return self.returncode if self.returncode >= 0 else None


def check_exit(status: ExitStatus) -> None:
    """Raise ``ChildExitError`` unless the child succeeded."""
    if not status.success:
        raise ChildExitError(status.code)


@dataclass
class Proton:
    """Everything needed for one launch of a program under Proton.

    Attributes:
        version: Chosen Proton version
        path: Proton installation directory
        program: Windows program to run
        args: Arguments for the program, passed through verbatim
        options: Runtime options exported as environment variables
        data: Proton's private state directory (compatdata)
        steam: Steam installation directory
        runtime: Requested Steam Linux Runtime, if any
        common: Directory searched for the runtime
    """

    version: Version
    path: Path
    program: Path
    args: List[str] = field(default_factory=list)
    options: List[RuntimeOption] = field(default_factory=list)
    data: Path = field(default_factory=Path)
    steam: Path = field(default_factory=Path)
    runtime: Optional[Union[RuntimeVersion, DefaultVersion]] = None
    common: Optional[Path] = None

    def entry_point(self) -> Path:
        return Path(self.path) / ENTRY_POINT

    def environment(self) -> Dict[str, str]:
        """Variables set for the child on top of the inherited environment.

        Raises:
            VersionNotFoundError: If the requested runtime is not installed
            ProtonIOError: If the runtime directory cannot be indexed
        """
        env = {
            "STEAM_COMPAT_DATA_PATH": str(self.data),
            "STEAM_COMPAT_CLIENT_INSTALL_PATH": str(self.steam),
        }
        for option in self.options:
            env.update(option.variables)

        if self.runtime is not None:
            runtime_path = self._runtime_path()
            env["STEAM_COMPAT_TOOL_PATHS"] = os.pathsep.join(
                [str(self.path), str(runtime_path)]
            )
        return env

    def argv(self) -> List[str]:
        return [str(self.entry_point()), RUN_VERB, str(self.program), *self.args]

    def run(self) -> ExitStatus:
        """Launch the program and block until it exits.

        A non-zero exit of the program is returned, not raised.

        Raises:
            ProtonIOError: If the data directory cannot be created or Proton
                cannot be started
        """
        env_overrides = self.environment()
        argv = self.argv()

        try:
            Path(self.data).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProtonIOError(
                f"failed to create data directory '{self.data}': {e.strerror or e}"
            ) from e

        entry_point = self.entry_point()
        if not entry_point.is_file() or not os.access(entry_point, os.X_OK):
            raise ProtonIOError(f"Proton executable '{entry_point}' is missing or not executable")

        env = os.environ.copy()
        env.update(env_overrides)

        logger.debug("Running %s", argv)
        logger.debug("Environment overrides: %s", env_overrides)

        try:
            child = subprocess.Popen(argv, env=env)
        except OSError as e:
            raise ProtonIOError(f"failed to start '{entry_point}': {e.strerror or e}") from e

        return ExitStatus(child.wait())

    def _runtime_path(self) -> Path:
        if self.common is None:
            raise UsageError("a runtime was requested without a common directory")
        index = runtime_index(self.common)
        index.build()
        return resolve_path(index, self.runtime)
