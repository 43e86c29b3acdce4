"""Command line entry point for proton-call.

Examples:
    proton-call -r foo.exe
    proton-call -p 5.13 -r foo.exe --goes --to program
    proton-call -c '/path/to/Proton version' -r foo.exe
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from . import __version__
from .config import load_config
from .errors import ProtonCallError, UsageError
from .index import Index
from .proton import check_exit, parse_runtime_options, RuntimeOption
from .request import LaunchRequest, build_proton
from .runtime import parse_runtime_version
from .version import DEFAULT_VERSION, parse_version

log = logging.getLogger(__name__)

PROG = "proton-call"

EPILOG = """\
Config:
    The config file should be located at '$XDG_CONFIG_HOME/proton.conf' or
    '$HOME/.config/proton.conf'. It requires three values.
    data: any directory to contain Proton's runtime files.
    steam: the directory where Steam is installed (the one containing steamapps).
    common: the directory where Proton versions are stored, usually
            Steam's steamapps/common directory.
    Example:
        data = "/home/avery/Documents/Proton/env/"
        steam = "/home/avery/.steam/steam/"
        common = "/home/avery/.steam/steam/steamapps/common/"

Everything after EXE is passed to the program unchanged.
"""

RUN_FLAGS = ("-r", "--run")

# -r grouped behind boolean short flags, optionally with EXE attached: -lr, -lVrfoo.exe
_GROUPED_RUN_RE = re.compile(r"-[lviV]*r(.*)")


def setup_logging(verbose: bool = False) -> None:
    """One-time setup of logging for all modules."""
    fmt = "%(levelname)s: %(message)s"
    log_level = logging.DEBUG if verbose else logging.INFO

    env_log_level = os.environ.get("LOG_LEVEL")
    if env_log_level is not None and not verbose:
        log_level = env_log_level.upper()

    try:
        logging.basicConfig(format=fmt, level=log_level)
    except ValueError:
        logging.basicConfig(format=fmt, level=logging.INFO)
        log.warning("Invalid LOG_LEVEL %s, defaulting to INFO", env_log_level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage="%(prog)s [OPTIONS]... -r EXE [EXTRA]...",
        description="Run any Windows program through Valve's Proton.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-r", "--run", metavar="EXE", type=Path, help="Run EXE in Proton")
    parser.add_argument("-p", "--proton", metavar="VERSION", help="Use Proton VERSION from `common`")
    parser.add_argument(
        "-c", "--custom", metavar="PATH", type=Path,
        help="Path to a directory containing Proton to use",
    )
    parser.add_argument("-R", "--runtime", metavar="VERSION", help="Use Steam Linux Runtime VERSION")
    parser.add_argument(
        "-d", "--data", metavar="PATH", type=Path,
        help="Use custom data path, ignoring the one in the config",
    )
    parser.add_argument("-l", "--log", action="store_true", help="Pass PROTON_LOG variable to Proton")
    parser.add_argument(
        "-o", "--options", metavar="OPTIONS", action="append", default=[],
        help="Pass options to Proton: " + ", ".join(o.value for o in RuntimeOption),
    )
    parser.add_argument(
        "-i", "--index", action="store_true", help="View an index of installed Proton versions"
    )
    parser.add_argument("-v", "--version", action="store_true", help="View version information")
    parser.add_argument("-V", "--verbose", action="store_true", help="Log debug output")
    return parser


def split_program_args(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split the command line at the program to run.

    Returns the arguments for proton-call and the arguments following EXE,
    which belong to the program. Long options must be spelled out in full,
    ``--ru`` is not taken as ``--run``.
    """
    for i, arg in enumerate(argv):
        if arg == "--":
            return list(argv[:i]), list(argv[i + 1:])
        if arg.startswith("--run="):
            return list(argv[: i + 1]), list(argv[i + 1:])
        if arg in RUN_FLAGS:
            return list(argv[: i + 2]), list(argv[i + 2:])
        grouped = _GROUPED_RUN_RE.fullmatch(arg)
        if grouped:
            end = i + 1 if grouped.group(1) else i + 2
            return list(argv[:end]), list(argv[end:])
    return list(argv), []


def version_text() -> str:
    return f"Proton Caller ({PROG}) {__version__}"


def parse_request(args: argparse.Namespace, extra: List[str]) -> LaunchRequest:
    """Validate parsed arguments before anything touches the disk.

    Raises:
        UsageError: On a bad version, runtime or option
    """
    if args.run is None:
        raise UsageError("no program to run, use -r EXE (see --help)")

    options = parse_runtime_options(args.options)
    if args.log and RuntimeOption.LOG not in options:
        options.insert(0, RuntimeOption.LOG)

    return LaunchRequest(
        program=args.run,
        version=parse_version(args.proton) if args.proton is not None else DEFAULT_VERSION,
        custom=args.custom,
        data=args.data,
        options=options,
        runtime=parse_runtime_version(args.runtime) if args.runtime is not None else None,
        args=extra,
    )


def proton_caller(argv: Sequence[str]) -> None:
    own_args, extra = split_program_args(argv)
    args = build_parser().parse_args(own_args)
    setup_logging(args.verbose)

    if args.version:
        print(version_text())
        return

    if args.index:
        config = load_config()
        index = Index(config.common)
        index.build()
        print(index)
        return

    request = parse_request(args, extra)
    config = load_config()
    proton = build_proton(config, request)
    check_exit(proton.run())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run proton-call, returning the process exit code."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        proton_caller(argv)
    except ProtonCallError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return e.exit_code
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
