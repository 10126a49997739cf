from __future__ import annotations

from typing import NoReturn

from gml_fmt.errors.base import GmlFmtError
from gml_fmt.errors.guidance import build_guidance_message
from gml_fmt.lexer.tokens import Token


def raise_parse_error(token: Token, what: str, *, fix: str | None = None, example: str | None = None) -> NoReturn:
    raise GmlFmtError(
        build_guidance_message(
            what=f"{what} at line {token.line + 1}, column {token.column + 1}.",
            why="The formatter only rewrites code it can parse into statements.",
            fix=fix or "Check the code around this token for a typo or a missing delimiter.",
            example=example,
        ),
        line=token.line + 1,
        column=token.column + 1,
        details={"token": token.type},
    )


def raise_unexpected_end() -> NoReturn:
    raise GmlFmtError(
        build_guidance_message(
            what="Unexpected end of input.",
            why="The source ended while a statement or expression was still open.",
            fix="Finish the statement or close the open bracket.",
        )
    )


__all__ = ["raise_parse_error", "raise_unexpected_end"]
