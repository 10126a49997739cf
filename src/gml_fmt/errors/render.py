from __future__ import annotations

from typing import Optional

from gml_fmt.errors.base import GmlFmtError


def format_error(err: GmlFmtError, source: Optional[str] = None) -> str:
    base = str(err)
    if not source or err.line is None:
        return base

    lines = source.splitlines()
    line_index = err.line - 1
    if line_index < 0 or line_index >= len(lines):
        return base

    line_text = lines[line_index]
    column = err.column if err.column is not None else 1
    caret_pos = max(1, min(column, len(line_text) + 1))
    caret_line = " " * (caret_pos - 1) + "^"
    file_path = err.details.get("file")
    prefix = f"File: {file_path}\n" if file_path else ""
    return f"{prefix}{base}\n{line_text}\n{caret_line}"


__all__ = ["format_error"]
