from __future__ import annotations

from typing import List, Optional

from gml_fmt.ast.dump import dump_ast
from gml_fmt.config.model import LangConfig
from gml_fmt.format.printer import Printer
from gml_fmt.parser.core import parse

IGNORE_PRAGMA = "// @gml_fmt ignore"


def format_source(source: str, lang_config: Optional[LangConfig] = None, ast_log: Optional[List[str]] = None) -> str:
    """Format GML source text.

    When `ast_log` is a list, a JSON dump of the parsed tree is appended to it.
    Raises GmlFmtError when the source cannot be parsed.
    """
    statements = parse(source)
    if ast_log is not None:
        ast_log.append(dump_ast(statements))
    return Printer(lang_config).autoformat(statements).get_output()


def format_snippet(source: str, lang_config: Optional[LangConfig] = None) -> str:
    return format_source(source, lang_config)


def is_ignored(source: str) -> bool:
    return IGNORE_PRAGMA in source


__all__ = ["IGNORE_PRAGMA", "format_snippet", "format_source", "is_ignored"]
