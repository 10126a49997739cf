from __future__ import annotations

from typing import Optional


class GmlFmtError(Exception):
    """Error raised by gml_fmt with an optional 1-based source position."""

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


__all__ = ["GmlFmtError"]
