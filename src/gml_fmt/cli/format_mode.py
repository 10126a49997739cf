from __future__ import annotations

import logging
import sys
from enum import IntFlag
from pathlib import Path

from gml_fmt.cli.file_discovery import collect_targets
from gml_fmt.config.loader import resolve_lang_config
from gml_fmt.config.model import LangConfig
from gml_fmt.errors.base import GmlFmtError
from gml_fmt.errors.render import format_error
from gml_fmt.format.formatter import format_source, is_ignored

logger = logging.getLogger(__name__)


class PrintFlags(IntFlag):
    NONE = 0
    OVERWRITE = 1
    LOGS = 2
    LOG_AST = 4


def run_format(
    path: str | Path,
    *,
    single_file: bool = False,
    flags: PrintFlags = PrintFlags.OVERWRITE,
    check_only: bool = False,
    config_root: Path | None = None,
) -> int:
    lang_config, config_source = resolve_lang_config(config_root)
    targets = collect_targets(Path(path), single_file)
    logger.debug(
        "Formatting %d file(s) with %s from %s", len(targets), lang_config, config_source.path or config_source.kind
    )

    failures = 0
    needs_formatting = 0
    for target in targets:
        outcome = _format_file(target, lang_config, flags, check_only)
        if outcome == "failed":
            failures += 1
        elif outcome == "needs":
            needs_formatting += 1

    if check_only:
        if needs_formatting == 0 and failures == 0:
            print("OK")
        return 1 if needs_formatting or failures else 0
    print("Format complete.")
    return 1 if failures else 0


def _format_file(target: Path, lang_config: LangConfig, flags: PrintFlags, check_only: bool) -> str:
    try:
        source = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        logger.error("Could not read %s: %s", target, err)
        print(f"Could not read file {target.as_posix()}: {err}", file=sys.stderr)
        return "failed"

    if is_ignored(source):
        logger.info("Skipping %s (ignore pragma)", target)
        return "skipped"

    if flags & PrintFlags.LOGS:
        print("=========INPUT=========", file=sys.stderr)
        print(source, file=sys.stderr)

    ast_log: list[str] | None = [] if flags & PrintFlags.LOG_AST else None
    try:
        output = format_source(source, lang_config, ast_log)
    except GmlFmtError as err:
        err.details.setdefault("file", target.as_posix())
        logger.error("Could not parse %s", target)
        print(f"Could not parse file {target.as_posix()}", file=sys.stderr)
        print(format_error(err, source), file=sys.stderr)
        return "failed"

    if flags & PrintFlags.LOGS:
        print("=========OUTPUT=========", file=sys.stderr)
        print(output, file=sys.stderr)
    if ast_log:
        print("==========AST===========", file=sys.stderr)
        print(ast_log[0], file=sys.stderr)

    if output == source:
        logger.debug("Already formatted: %s", target)
        return "unchanged"
    if check_only:
        print(f"Needs formatting: {target.as_posix()}")
        return "needs"
    if flags & PrintFlags.OVERWRITE:
        try:
            target.write_text(output, encoding="utf-8")
        except OSError as err:
            logger.error("Could not write %s: %s", target, err)
            print(f"Could not write file {target.as_posix()}: {err}", file=sys.stderr)
            return "failed"
        logger.info("Formatted %s", target)
    return "formatted"


__all__ = ["PrintFlags", "run_format"]
