from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gml_fmt.lexer.token_types import NEWLINE, TOKEN_TEXT


@dataclass(frozen=True)
class Token:
    """A scanned token; line and column are 0-indexed.

    `value` holds the source slice for lexeme-carrying kinds, the indent hint
    for NEWLINE tokens, and None for fixed-text kinds.
    """

    type: str
    value: Optional[object]
    line: int
    column: int

    @property
    def lexeme(self) -> str:
        if isinstance(self.value, str):
            return self.value
        return TOKEN_TEXT.get(self.type, "")

    @property
    def indent_hint(self) -> int:
        if self.type == NEWLINE and isinstance(self.value, int):
            return self.value
        return 0

    def describe(self) -> str:
        text = "\\n" if self.type == NEWLINE else self.lexeme
        return f"'{text}' ({self.type}) at {self.line + 1}:{self.column + 1}"

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Token({self.type}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["Token"]
