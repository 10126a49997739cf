from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Optional


class IndentationMove(Enum):
    RIGHT = "right"
    STAY = "stay"
    LEFT = "left"


class LeadingNewlines(Enum):
    ALL = "all"
    ONE = "one"
    NONE = "none"


class BlockInstruction(IntFlag):
    NONE = 0
    NO_NEWLINE_AFTER_BLOCK = 1
    MUST_INDENT = 2


@dataclass(frozen=True)
class GroupInstruction:
    """Overrides for how a grouping prints the trivia after its `)`."""

    force_indentation: Optional[IndentationMove] = None
    force_leading_newlines: Optional[LeadingNewlines] = None
    force_respect: Optional[bool] = None

    @property
    def indentation_move(self) -> IndentationMove:
        return self.force_indentation or IndentationMove.STAY

    @property
    def leading_newlines(self) -> LeadingNewlines:
        return self.force_leading_newlines or LeadingNewlines.ALL

    @property
    def respect_user_newline(self) -> bool:
        return bool(self.force_respect)


@dataclass(frozen=True)
class TriviaInstruction:
    """How one trivia list is rendered.

    `respect_user_newline` lets newline-only lists print and lets indent hints
    snap to a saved frame; `trailing_comment` marks a printed comment as
    ending the statement so no synthetic semicolon follows it.
    """

    indentation_move: IndentationMove = IndentationMove.STAY
    leading_newlines: LeadingNewlines = LeadingNewlines.ONE
    respect_user_newline: bool = False
    trailing_comment: bool = False

    @classmethod
    def respecting_user(cls, indentation_move: IndentationMove, leading_newlines: LeadingNewlines) -> "TriviaInstruction":
        return cls(indentation_move, leading_newlines, respect_user_newline=True)


__all__ = [
    "BlockInstruction",
    "GroupInstruction",
    "IndentationMove",
    "LeadingNewlines",
    "TriviaInstruction",
]
