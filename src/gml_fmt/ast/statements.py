from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from gml_fmt.ast.expressions import Expr, Trivia
from gml_fmt.lexer.tokens import Token


@dataclass
class DelimitedLine:
    expr: object
    trailing: Trivia


@dataclass
class DelimitedLines:
    lines: List[DelimitedLine]
    has_end_delimiter: bool


@dataclass
class VariableDecl:
    var_expr: Expr
    say_var: Optional[Token] = None
    say_var_comments: Trivia = None


@dataclass
class Stmt:
    has_semicolon: bool = field(default=False, kw_only=True)


@dataclass
class VariableDeclList(Stmt):
    keyword: Token
    after_keyword: Trivia
    declarations: DelimitedLines


@dataclass
class EnumDeclaration(Stmt):
    after_keyword: Trivia
    name: Expr
    after_lbrace: Trivia
    members: DelimitedLines


@dataclass
class ExpressionStatement(Stmt):
    expr: Expr


@dataclass
class Block(Stmt):
    after_lbrace: Trivia
    statements: List[Stmt]


@dataclass
class If(Stmt):
    after_keyword: Trivia
    condition: Expr
    then_branch: Stmt
    between: Trivia
    after_else: Trivia
    else_branch: Optional[Stmt]


@dataclass
class WhileWithRepeat(Stmt):
    keyword: Token
    after_keyword: Trivia
    condition: Expr
    body: Stmt


@dataclass
class DoUntil(Stmt):
    after_keyword: Trivia
    body: Stmt
    between: Trivia
    condition: Expr


@dataclass
class For(Stmt):
    after_keyword: Trivia
    after_lparen: Trivia
    initializer: Optional[Stmt]
    after_initializer: Trivia
    condition: Optional[Expr]
    after_condition: Trivia
    increment: Optional[Expr]
    after_increment: Trivia
    after_rparen: Trivia
    body: Stmt


@dataclass
class Case:
    constant: Optional[Expr]
    after_keyword: Trivia
    after_colon: Trivia
    statements: List[Stmt]

    @property
    def is_default(self) -> bool:
        return self.constant is None


@dataclass
class Switch(Stmt):
    after_keyword: Trivia
    condition: Expr
    after_lbrace: Trivia
    cases: List[Case]


@dataclass
class Return(Stmt):
    expr: Optional[Expr]


@dataclass
class Break(Stmt):
    pass


@dataclass
class Exit(Stmt):
    pass


@dataclass
class Comment(Stmt):
    token: Token


@dataclass
class MultilineComment(Stmt):
    token: Token


@dataclass
class RegionBegin(Stmt):
    token: Token


@dataclass
class RegionEnd(Stmt):
    token: Token


@dataclass
class Macro(Stmt):
    token: Token


@dataclass
class Define(Stmt):
    after_keyword: Trivia
    script_name: Expr
    body: List[Stmt]


# Statements that are themselves trivia and never take a synthetic semicolon.
TRIVIA_STATEMENTS = (Comment, MultilineComment, RegionBegin, RegionEnd, Macro)


__all__ = [
    "Block",
    "Break",
    "Case",
    "Comment",
    "Define",
    "DelimitedLine",
    "DelimitedLines",
    "DoUntil",
    "EnumDeclaration",
    "Exit",
    "ExpressionStatement",
    "For",
    "If",
    "Macro",
    "MultilineComment",
    "RegionBegin",
    "RegionEnd",
    "Return",
    "Stmt",
    "Switch",
    "TRIVIA_STATEMENTS",
    "VariableDecl",
    "VariableDeclList",
    "WhileWithRepeat",
]
