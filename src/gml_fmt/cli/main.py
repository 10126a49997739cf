from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from gml_fmt.cli.format_mode import PrintFlags, run_format
from gml_fmt.errors.base import GmlFmtError
from gml_fmt.errors.guidance import build_guidance_message
from gml_fmt.errors.render import format_error
from gml_fmt.version import get_version

LOG_FORMAT = "%(levelname)s: %(message)s"


@dataclass(frozen=True)
class _FormatParams:
    path: str
    single_file: bool
    flags: PrintFlags
    check_only: bool
    verbose: bool


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    try:
        if "--help" in args or "-h" in args:
            _print_usage()
            return 0
        if "--version" in args or "-v" in args:
            print(f"gml_fmt {get_version()}")
            return 0
        params = _parse_args(args)
        _configure_logging(params.verbose)
        return run_format(
            params.path,
            single_file=params.single_file,
            flags=params.flags,
            check_only=params.check_only,
            config_root=Path.cwd(),
        )
    except GmlFmtError as err:
        print(format_error(err), file=sys.stderr)
        return 1


def _parse_args(args: list[str]) -> _FormatParams:
    path: str | None = None
    single_file = False
    overwrite = True
    logs = False
    log_ast = False
    check_only = False
    verbose = False
    for arg in args:
        if arg in {"-f", "--file"}:
            single_file = True
        elif arg in {"-l", "--log"}:
            logs = True
        elif arg in {"-s", "--ast"}:
            log_ast = True
        elif arg in {"-n", "--no-overwrite"}:
            overwrite = False
        elif arg in {"-c", "--check"}:
            check_only = True
        elif arg == "--verbose":
            verbose = True
        elif arg.startswith("-"):
            raise GmlFmtError(
                build_guidance_message(
                    what=f"Unknown flag '{arg}'.",
                    why="gml_fmt only accepts the flags listed in its usage.",
                    fix="Run gml_fmt --help to see the supported flags.",
                    example="gml_fmt -f scripts/player.gml --check",
                )
            )
        elif path is None:
            path = arg
        else:
            raise GmlFmtError(
                build_guidance_message(
                    what="Too many paths were given.",
                    why="gml_fmt formats one file or one directory per run.",
                    fix="Pass a single path.",
                    example="gml_fmt scripts/",
                )
            )
    flags = PrintFlags.NONE
    if overwrite and not check_only:
        flags |= PrintFlags.OVERWRITE
    if logs:
        flags |= PrintFlags.LOGS
    if log_ast:
        flags |= PrintFlags.LOG_AST
    return _FormatParams(
        path=path if path is not None else ".",
        single_file=single_file,
        flags=flags,
        check_only=check_only,
        verbose=verbose,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _print_usage() -> None:
    usage = """Usage:
  gml_fmt [PATH] [flags]

  PATH                     # directory to walk for .gml files (default: current directory)
  -f, --file               # PATH is a single file
  -l, --log                # print input and output of every file to stderr
  -s, --ast                # print the parsed tree of every file to stderr
  -n, --no-overwrite       # do not write formatted output back
  -c, --check              # report files that need formatting, write nothing
  --verbose                # debug logging
  -v, --version            # print the version
  -h, --help               # show this help

Configuration is read from gml_fmt.toml, .gml_fmt.toml or .gml_fmt in the current directory:
  use_spaces = true
  space_size = 4
  newlines_at_end = 1
"""
    print(usage.strip())


__all__ = ["main"]
