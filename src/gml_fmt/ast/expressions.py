from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from gml_fmt.lexer import token_types as tt
from gml_fmt.lexer.tokens import Token

if TYPE_CHECKING:  # pragma: no cover
    from gml_fmt.ast.statements import DelimitedLines

# Comments, newlines and directives attached to one slot of the tree.
# None stands for an empty slot.
Trivia = Optional[List[Token]]


@dataclass
class Expr:
    trailing: Trivia = field(default=None, kw_only=True)


@dataclass
class Call(Expr):
    callee: Expr
    after_lparen: Trivia
    arguments: "DelimitedLines"


@dataclass
class Function(Expr):
    after_keyword: Trivia
    call: Expr
    after_rparen: Trivia
    is_constructor: bool


@dataclass
class StructOperator(Expr):
    operator: Token
    after_operator: Trivia
    operand: Expr


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    after_operator: Trivia
    right: Expr


@dataclass
class Grouping(Expr):
    after_lparen: Trivia
    expressions: List[Expr]
    after_rparen: Trivia


@dataclass
class ArrayLiteral(Expr):
    after_lbracket: Trivia
    elements: "DelimitedLines"


@dataclass
class Literal(Expr):
    token: Token
    comments: Trivia


@dataclass
class NumberStartDot(Expr):
    token: Token
    comments: Trivia


@dataclass
class NumberEndDot(Expr):
    token: Token
    comments: Trivia


@dataclass
class Unary(Expr):
    operator: Token
    after_operator: Trivia
    operand: Expr


@dataclass
class Postfix(Expr):
    operand: Expr
    operator: Token
    after_operator: Trivia


@dataclass
class Assign(Expr):
    target: Expr
    operator: Token
    after_operator: Trivia
    value: Expr


@dataclass
class Identifier(Expr):
    name: Token
    comments: Trivia


@dataclass
class DotAccess(Expr):
    owner: Expr
    after_dot: Trivia
    member: Expr


@dataclass
class DataStructureAccess(Expr):
    collection: Expr
    accessor: Token
    indices: List[Tuple[Trivia, Expr]]


@dataclass
class Ternary(Expr):
    condition: Expr
    after_hook: Trivia
    then_branch: Expr
    after_colon: Trivia
    else_branch: Expr


@dataclass
class Newline(Expr):
    pass


@dataclass
class Comment(Expr):
    token: Token


@dataclass
class MultilineComment(Expr):
    token: Token


@dataclass
class UnidentifiedAsLiteral(Expr):
    token: Token


def is_lambda_call(expr: Expr) -> bool:
    """True for `function(...)` calls, whose body block follows as a separate statement."""
    return (
        isinstance(expr, Call)
        and isinstance(expr.callee, UnidentifiedAsLiteral)
        and expr.callee.token.type == tt.FUNCTION
    )


__all__ = [
    "ArrayLiteral",
    "Assign",
    "Binary",
    "Call",
    "Comment",
    "DataStructureAccess",
    "DotAccess",
    "Expr",
    "Function",
    "Grouping",
    "Identifier",
    "Literal",
    "MultilineComment",
    "Newline",
    "NumberEndDot",
    "NumberStartDot",
    "Postfix",
    "StructOperator",
    "Ternary",
    "Trivia",
    "Unary",
    "UnidentifiedAsLiteral",
    "is_lambda_call",
]
