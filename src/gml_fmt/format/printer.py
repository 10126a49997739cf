from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from gml_fmt.ast import expressions as ex
from gml_fmt.ast import statements as st
from gml_fmt.ast.expressions import Trivia
from gml_fmt.config.model import LangConfig
from gml_fmt.format.instructions import (
    BlockInstruction,
    GroupInstruction,
    IndentationMove,
    LeadingNewlines,
    TriviaInstruction,
)
from gml_fmt.lexer import token_types as tt
from gml_fmt.lexer.tokens import Token

logger = logging.getLogger(__name__)

SPACE = " "
TAB = "\t"
NEWLINE = "\n"
LPAREN = "("
RPAREN = ")"
LBRACE = "{"
RBRACE = "}"
COMMA = ","
SEMICOLON = ";"

RIGHT = IndentationMove.RIGHT
STAY = IndentationMove.STAY
LEFT = IndentationMove.LEFT

_WHITESPACE = (SPACE, TAB, NEWLINE)
_TRAILING_TRIVIA = TriviaInstruction(STAY, LeadingNewlines.ALL, respect_user_newline=True, trailing_comment=True)


class Printer:
    """Renders a statement list into a buffer of string fragments.

    Layout decisions are made by looking back at the fragments already
    emitted and by small stacks that a parent node pushes for a child to
    consume exactly once.
    """

    def __init__(self, lang_config: Optional[LangConfig] = None) -> None:
        self.lang_config = lang_config or LangConfig()
        self.output: List[str] = []
        self.indentation = 0
        self.do_not_print_single_newline_statement = False
        self.block_instructions: List[BlockInstruction] = []
        self.group_instructions: List[GroupInstruction] = []
        self.user_indentation: List[int] = []
        self.do_dot_indent = True
        self.for_loop_depth = 0
        self.semicolon_exemptions = 0

    def autoformat(self, statements: Sequence[st.Stmt]) -> "Printer":
        for stmt in statements:
            self.print_statement(stmt)

        # Trailing whitespace is replaced by exactly the configured newlines,
        # even when nothing else was printed.
        while self.output and self.output[-1] in _WHITESPACE:
            self.output.pop()
        for _ in range(self.lang_config.newlines_at_end):
            self.print(NEWLINE)
        return self

    def get_output(self) -> str:
        return "".join(self.output)

    # statements

    def print_statement(self, stmt: st.Stmt) -> None:
        if isinstance(stmt, st.VariableDeclList):
            self._print_var_decl_list(stmt)
        elif isinstance(stmt, st.EnumDeclaration):
            self._print_enum(stmt)
        elif isinstance(stmt, st.ExpressionStatement):
            self.print_expr(stmt.expr)
            self.print_semicolon(stmt.has_semicolon)
        elif isinstance(stmt, st.Block):
            self._print_block(stmt)
        elif isinstance(stmt, st.If):
            self._print_if(stmt)
        elif isinstance(stmt, st.WhileWithRepeat):
            self.print_token(stmt.keyword, True)
            self.print_trivia(stmt.after_keyword, TriviaInstruction(STAY, LeadingNewlines.ONE))
            self.print_expr(stmt.condition)
            self.print_statement(stmt.body)
            self.print_semicolon(stmt.has_semicolon)
        elif isinstance(stmt, st.DoUntil):
            self._print_do_until(stmt)
        elif isinstance(stmt, st.For):
            self._print_for(stmt)
        elif isinstance(stmt, st.Return):
            self.print("return")
            if stmt.expr is not None:
                self.print(SPACE)
                self.print_expr(stmt.expr)
            self.print_semicolon_and_newline(stmt.has_semicolon, STAY)
        elif isinstance(stmt, st.Break):
            self.print("break")
            self.print_semicolon_and_newline(stmt.has_semicolon, STAY)
        elif isinstance(stmt, st.Exit):
            self.print("exit")
            self.print_semicolon_and_newline(stmt.has_semicolon, STAY)
        elif isinstance(stmt, st.Switch):
            self._print_switch(stmt)
        elif isinstance(stmt, (st.Comment, st.MultilineComment)):
            if self.do_not_print_single_newline_statement:
                # the line was already ended; the comment belongs at its end
                self.backspace_whitespace()
                self.ensure_space()
                self.print_token(stmt.token)
                self.print_newline(STAY)
            else:
                self.print_token(stmt.token, True)
        elif isinstance(stmt, (st.RegionBegin, st.RegionEnd, st.Macro)):
            self.print_token(stmt.token)
            self.backspace()
        elif isinstance(stmt, st.Define):
            self.print("#define", True)
            self.print_trivia(stmt.after_keyword, TriviaInstruction(STAY, LeadingNewlines.ONE))
            self.print_expr(stmt.script_name)
            self.backspace()
            self.print_newline(STAY)
            for body_stmt in stmt.body:
                self.print_statement(body_stmt)
        else:  # pragma: no cover - every parser statement is handled above
            raise TypeError(f"Cannot print statement {type(stmt).__name__}")

        self._terminate_statement(stmt)

    def _terminate_statement(self, stmt: st.Stmt) -> None:
        exempt = self.semicolon_exemptions > 0
        if exempt:
            self.semicolon_exemptions -= 1
        if stmt.has_semicolon or exempt or isinstance(stmt, st.TRIVIA_STATEMENTS):
            return

        # Every unterminated statement ends with a newline; most also get a `;`.
        newlines = self.backspace_whitespace()
        if self.last_entry() is None:
            return
        end = self._code_end()
        last_code = self.output[end - 1] if end else None
        if last_code == SEMICOLON:
            newlines = max(newlines, 1)
        elif last_code != RBRACE:
            self._place_semicolon(end)
            newlines = max(newlines, 1)
        for _ in range(newlines):
            self.print_newline(STAY)

    def _print_var_decl_list(self, stmt: st.VariableDeclList) -> None:
        self.print_token(stmt.keyword, True)
        already_indented = self.print_trivia(stmt.after_keyword, TriviaInstruction(RIGHT, LeadingNewlines.ONE))

        indented_vars = already_indented
        interrupt_line_end = False
        lines = stmt.declarations.lines
        for index, line in enumerate(lines):
            decl = line.expr
            if decl.say_var is not None:
                self.print_token(decl.say_var, True)
                moved = self.print_trivia(
                    decl.say_var_comments, TriviaInstruction(STAY if indented_vars else RIGHT, LeadingNewlines.ONE)
                )
                if moved:
                    indented_vars = True

            self.allow_user_indentation()
            self.print_expr(decl.var_expr)
            self.backspace()
            self.rewind_user_indentation()

            if index < len(lines) - 1 or stmt.declarations.has_end_delimiter:
                self.print(COMMA, True)
            else:
                interrupt_line_end = self.semicolon_exemptions > 0
                if not interrupt_line_end:
                    self._place_semicolon(self._code_end())

            if line.trailing is not None:
                self.allow_user_indentation()
                did_newlines = self.print_trivia(
                    line.trailing,
                    TriviaInstruction.respecting_user(STAY if indented_vars else RIGHT, LeadingNewlines.ALL),
                )
                # The saved frame stays pushed once the list broke onto new lines.
                if did_newlines:
                    indented_vars = True
                else:
                    self.rewind_user_indentation()

        if not lines and stmt.has_semicolon:
            self.print_semicolon(True)

        if indented_vars:
            if not self.on_whitespace_line():
                self.print_newline(LEFT)
            else:
                self.backspace_till_newline()
                self.print_indentation(LEFT)

        if not interrupt_line_end and not self.on_whitespace_line() and self.for_loop_depth == 0:
            self.print_newline(STAY)
            self.do_not_print_single_newline_statement = True

    def _print_enum(self, stmt: st.EnumDeclaration) -> None:
        self.print("enum", True)
        self.print_trivia(stmt.after_keyword, TriviaInstruction(STAY, LeadingNewlines.ONE))
        self.print_expr(stmt.name)
        self.print(LBRACE, True)

        moved = self.print_trivia(stmt.after_lbrace, TriviaInstruction(RIGHT, LeadingNewlines.ONE))
        if not moved:
            self.print_newline(RIGHT)
        self.backspace()
        self.print_delimited_lines(stmt.members, COMMA, True, True)

        self.set_indentation(LEFT)
        self.backspace_till_newline()
        self.print(RBRACE)
        self.print_semicolon(stmt.has_semicolon)

    def _print_block(self, stmt: st.Block) -> None:
        if not self.on_whitespace_line():
            self.ensure_space()

        instruction = self.block_instructions.pop() if self.block_instructions else BlockInstruction.NONE
        self.print(LBRACE)

        statements = stmt.statements
        must_indent = (
            bool(instruction & BlockInstruction.MUST_INDENT)
            or len(statements) > 1
            or (len(statements) == 1 and not isinstance(statements[0], st.ExpressionStatement))
        )
        moved = self.print_trivia(stmt.after_lbrace, TriviaInstruction(RIGHT, LeadingNewlines.ONE))
        if must_indent and not moved:
            self.print_newline(RIGHT)
        did_newline = moved or must_indent
        if not did_newline:
            self.ensure_space()

        # a lone statement needs neither semicolon nor newline
        if len(statements) == 1:
            self.semicolon_exemptions += 1

        for inner in statements:
            self.print_statement(inner)
            if did_newline and inner.has_semicolon and not self.on_whitespace_line():
                self.print_newline(STAY)
                self.do_not_print_single_newline_statement = True

        if did_newline:
            self.backspace_whitespace()
            self.print_newline(LEFT)
        else:
            self.backspace()
            if self.last_entry() != LBRACE:
                self.ensure_space()

        self.print(RBRACE)
        self.print_semicolon(stmt.has_semicolon)

        if not instruction & BlockInstruction.NO_NEWLINE_AFTER_BLOCK:
            self.ensure_newline(STAY)
        self.do_not_print_single_newline_statement = True

    def _print_if(self, stmt: st.If) -> None:
        self.print("if", True)
        self.print_trivia(stmt.after_keyword, TriviaInstruction(STAY, LeadingNewlines.ONE))

        has_block = isinstance(stmt.then_branch, st.Block)
        if has_block:
            self.block_instructions.append(BlockInstruction.NO_NEWLINE_AFTER_BLOCK)

        current_indentation = self.indentation
        if not has_block and isinstance(stmt.condition, ex.Grouping):
            self.group_instructions.append(GroupInstruction(force_indentation=RIGHT, force_respect=True))
        self.print_expr(stmt.condition)
        forcible_indent = self.indentation != current_indentation and not has_block
        self.print_statement(stmt.then_branch)

        move = LEFT if forcible_indent else STAY
        moved = self.print_trivia(
            stmt.between, TriviaInstruction(move, LeadingNewlines.ALL, respect_user_newline=True, trailing_comment=True)
        )
        if not moved:
            self.print_newline(move)

        if stmt.else_branch is not None:
            if not forcible_indent:
                self.backspace_whitespace()
            self.ensure_space()
            self.print("else", True)
            if isinstance(stmt.else_branch, (st.Block, st.If)):
                self.print_trivia(stmt.after_else, TriviaInstruction(STAY, LeadingNewlines.ONE))
                self.print_statement(stmt.else_branch)
            else:
                # an unbraced body on its own line is indented under the `else`
                else_indented = self.print_trivia(
                    stmt.after_else, TriviaInstruction.respecting_user(RIGHT, LeadingNewlines.ONE)
                )
                self.print_statement(stmt.else_branch)
                if else_indented:
                    self.set_indentation(LEFT)
                self.do_not_print_single_newline_statement = True
        self.print_semicolon(stmt.has_semicolon)

    def _print_do_until(self, stmt: st.DoUntil) -> None:
        self.print("do", True)
        self.print_trivia(stmt.after_keyword, TriviaInstruction(STAY, LeadingNewlines.ONE))

        self.block_instructions.append(BlockInstruction.NO_NEWLINE_AFTER_BLOCK | BlockInstruction.MUST_INDENT)
        self.print_statement(stmt.body)
        self.print_trivia(stmt.between, TriviaInstruction(STAY, LeadingNewlines.NONE))

        self.backspace_whitespace()
        if self.last_entry() == RBRACE:
            self.ensure_space()
        else:
            self.print_newline(STAY)
        self.print("until", True)
        self.print_expr(stmt.condition)
        self.backspace()
        self.print_semicolon_and_newline(stmt.has_semicolon, STAY)

    def _print_for(self, stmt: st.For) -> None:
        one = LeadingNewlines.ONE
        self.print("for", True)
        self.print_trivia(stmt.after_keyword, TriviaInstruction(STAY, one))
        self.print(LPAREN)
        self.for_loop_depth += 1

        moved = self.print_trivia(stmt.after_lparen, TriviaInstruction.respecting_user(RIGHT, one))

        if stmt.initializer is not None:
            self.print_statement(stmt.initializer)
            self.ensure_space()
        else:
            self.print(SEMICOLON, True)
        self.print_trivia(stmt.after_initializer, TriviaInstruction(STAY, one))

        if stmt.condition is not None:
            self.print_expr(stmt.condition)
        self.backspace()
        self.print(SEMICOLON, True)
        self.print_trivia(stmt.after_condition, TriviaInstruction(STAY, one))

        if stmt.increment is not None:
            self.print_expr(stmt.increment)
        else:
            self.backspace()

        if not self.print_trivia(stmt.after_increment, TriviaInstruction(STAY, one)):
            self.backspace()

        if moved:
            self.print_newline(LEFT)
        self.print(RPAREN, True)
        self.for_loop_depth -= 1

        self.print_trivia(stmt.after_rparen, TriviaInstruction(STAY, one))
        self.print_statement(stmt.body)
        self.print_semicolon(stmt.has_semicolon)

    def _print_switch(self, stmt: st.Switch) -> None:
        one = LeadingNewlines.ONE
        self.print("switch", True)
        self.print_trivia(stmt.after_keyword, TriviaInstruction(STAY, one))
        self.print_expr(stmt.condition)

        self.ensure_space()
        self.print(LBRACE, True)
        if not self.print_trivia(stmt.after_lbrace, TriviaInstruction(RIGHT, one)):
            self.print_newline(RIGHT)

        for case in stmt.cases:
            if case.constant is not None:
                self.print("case", True)
                self.print_trivia(case.after_keyword, TriviaInstruction(STAY, one))
                self.print_expr(case.constant)
            else:
                self.print("default", True)
            self.backspace()
            self.print(":", True)

            saved_indentation = self.indentation
            if not self.print_trivia(case.after_colon, TriviaInstruction(RIGHT, one)):
                self.print_newline(RIGHT)
            for case_stmt in case.statements:
                self.print_statement(case_stmt)

            self.backspace_till_newline()
            self.print_indentation_raw(saved_indentation)

        self.backspace_whitespace()
        self.print_newline(LEFT)
        self.print(RBRACE)
        self.print_semicolon(stmt.has_semicolon)

    # expressions

    def print_expr(self, expr: ex.Expr) -> None:
        all_newlines = LeadingNewlines.ALL
        if isinstance(expr, ex.Call):
            self._print_call(expr)
        elif isinstance(expr, ex.Function):
            self.print("function", True)
            self.print_trivia(expr.after_keyword, TriviaInstruction(STAY, LeadingNewlines.ONE))
            self.print_expr(expr.call)
            if not expr.is_constructor:
                self.backspace_whitespace()
            self.print_trivia(expr.after_rparen, TriviaInstruction(STAY, LeadingNewlines.ONE))
            if expr.is_constructor:
                self.print("constructor", True)
            self.semicolon_exemptions += 1
        elif isinstance(expr, ex.StructOperator):
            self.print_token(expr.operator, True)
            self.print_trivia(expr.after_operator, TriviaInstruction(STAY, LeadingNewlines.ONE))
            self.print_expr(expr.operand)
            self.backspace_whitespace()
        elif isinstance(expr, ex.Binary):
            self.print_expr(expr.left)
            self.ensure_space()
            self.print_token(expr.operator, True)
            self.allow_user_indentation()
            self.print_trivia(expr.after_operator, TriviaInstruction.respecting_user(STAY, all_newlines))
            self.print_expr(expr.right)
            self.rewind_user_indentation()
        elif isinstance(expr, ex.Grouping):
            self._print_grouping(expr)
        elif isinstance(expr, ex.ArrayLiteral):
            self.print("[")
            moved = self.print_trivia(expr.after_lbracket, TriviaInstruction.respecting_user(RIGHT, LeadingNewlines.ONE))
            self.print_delimited_lines(expr.elements, COMMA, False, False)
            if moved:
                self.print_newline(LEFT)
            self.print("]")
        elif isinstance(expr, (ex.Literal, ex.Identifier)):
            self.print_token(expr.token if isinstance(expr, ex.Literal) else expr.name, True)
            self.print_trivia(expr.comments, TriviaInstruction(STAY, all_newlines))
        elif isinstance(expr, ex.NumberStartDot):
            self.print("0")
            self.print_token(expr.token, True)
            self.print_trivia(expr.comments, TriviaInstruction(STAY, all_newlines))
        elif isinstance(expr, ex.NumberEndDot):
            self.print_token(expr.token)
            self.print("0", True)
            self.print_trivia(expr.comments, TriviaInstruction(STAY, all_newlines))
        elif isinstance(expr, ex.Unary):
            self.print_token(expr.operator, expr.operator.type == tt.NOT_ALIAS)
            self.print_trivia(expr.after_operator, TriviaInstruction(STAY, all_newlines))
            self.print_expr(expr.operand)
        elif isinstance(expr, ex.Postfix):
            self.print_expr(expr.operand)
            self.backspace()
            self.print_token(expr.operator, True)
            self.print_trivia(expr.after_operator, TriviaInstruction(STAY, all_newlines))
        elif isinstance(expr, ex.Assign):
            self.print_expr(expr.target)
            self.print_token(expr.operator, True)
            self.print_trivia(expr.after_operator, TriviaInstruction(STAY, all_newlines))
            self.print_expr(expr.value)
        elif isinstance(expr, ex.DotAccess):
            self._print_dot_access(expr)
        elif isinstance(expr, ex.DataStructureAccess):
            self._print_data_structure_access(expr)
        elif isinstance(expr, ex.Ternary):
            self.print_expr(expr.condition)
            self.print("?", True)
            self.allow_user_indentation()
            self.print_trivia(expr.after_hook, TriviaInstruction(RIGHT, all_newlines))
            self.print_expr(expr.then_branch)
            self.print(":", True)
            moved = self.print_trivia(expr.after_colon, TriviaInstruction(RIGHT, LeadingNewlines.ONE))
            self.print_expr(expr.else_branch)
            self.rewind_user_indentation()
            if moved:
                self.set_indentation(LEFT)
        elif isinstance(expr, ex.Newline):
            self.semicolon_exemptions += 1
            if not self.do_not_print_single_newline_statement:
                self.print_newline(STAY)
        elif isinstance(expr, (ex.Comment, ex.MultilineComment)):
            self.semicolon_exemptions += 1
            self.print_token(expr.token)
        elif isinstance(expr, ex.UnidentifiedAsLiteral):
            self.print_token(expr.token, True)
            if expr.token.type == tt.CONSTRUCTOR:
                self.semicolon_exemptions += 1
        else:  # pragma: no cover - every parser expression is handled above
            raise TypeError(f"Cannot print expression {type(expr).__name__}")

        self.print_trivia(expr.trailing, _TRAILING_TRIVIA)
        self.do_not_print_single_newline_statement = False

    def _print_call(self, expr: ex.Call) -> None:
        # `function(...)` assigned to a variable ends without a semicolon
        if ex.is_lambda_call(expr):
            self.semicolon_exemptions += 1

        self.print_expr(expr.callee)
        self.backspace()
        self.print(LPAREN)
        moved = self.print_trivia(expr.after_lparen, TriviaInstruction.respecting_user(RIGHT, LeadingNewlines.ONE))

        # A lambda argument leaves the `)` to be printed after its body block.
        passes_lambda = False
        for line in expr.arguments.lines:
            if isinstance(line.expr, ex.Call) and isinstance(line.expr.callee, ex.UnidentifiedAsLiteral):
                passes_lambda = ex.is_lambda_call(line.expr)

        self.print_delimited_lines(expr.arguments, COMMA, False, False)
        self.backspace_whitespace()
        if moved:
            self.print_newline(LEFT)

        if not passes_lambda:
            self.print(RPAREN, True)
        else:
            self.block_instructions.append(BlockInstruction.NO_NEWLINE_AFTER_BLOCK)

    def _print_grouping(self, expr: ex.Grouping) -> None:
        self.print(LPAREN)
        moved = self.print_trivia(expr.after_lparen, TriviaInstruction.respecting_user(RIGHT, LeadingNewlines.ONE))
        for inner in expr.expressions:
            self.print_expr(inner)
        self.backspace()

        if moved:
            if self.on_whitespace_line():
                self.backspace_till_newline()
                self.print_indentation(LEFT)
            else:
                self.print_newline(LEFT)
        self.print(RPAREN, True)

        group = self.group_instructions.pop() if self.group_instructions else GroupInstruction()
        self.print_trivia(
            expr.after_rparen,
            TriviaInstruction(group.indentation_move, group.leading_newlines, group.respect_user_newline),
        )

    def _print_dot_access(self, expr: ex.DotAccess) -> None:
        self.print_expr(expr.owner)
        self.backspace()
        self.print(".")
        self.allow_user_indentation()

        # only the outermost access of a chain indents its continuation lines
        can_unlock = False
        if self.do_dot_indent:
            can_unlock = True
            self.do_dot_indent = False
            move = RIGHT
        else:
            move = STAY
        self.print_trivia(expr.after_dot, TriviaInstruction.respecting_user(move, LeadingNewlines.ONE))
        self.print_expr(expr.member)
        self.rewind_user_indentation()
        if can_unlock and not self.do_dot_indent:
            self.do_dot_indent = True

    def _print_data_structure_access(self, expr: ex.DataStructureAccess) -> None:
        self.print_expr(expr.collection)
        self.backspace()
        self.print_token(expr.accessor, expr.accessor.type != tt.LBRACKET)

        for index, (comments, index_expr) in enumerate(expr.indices):
            self.allow_user_indentation()
            self.print_trivia(comments, TriviaInstruction(STAY, LeadingNewlines.ALL))
            self.print_expr(index_expr)
            self.rewind_user_indentation()
            self.backspace()
            if index < len(expr.indices) - 1:
                self.print(COMMA, True)

        self.backspace()
        self.print("]", True)

    def print_delimited_lines(
        self,
        delimited_lines: st.DelimitedLines,
        delimiter: str,
        force_newline_between: bool,
        force_newline_at_end: bool,
    ) -> None:
        lines = delimited_lines.lines
        for index, line in enumerate(lines):
            self.print_expr(line.expr)
            self.backspace()

            at_end = index == len(lines) - 1
            if not at_end or delimited_lines.has_end_delimiter:
                self.print(delimiter, True)

            if line.trailing is not None:
                did_newlines = self.print_trivia(line.trailing, TriviaInstruction.respecting_user(STAY, LeadingNewlines.ALL))
                if not did_newlines and force_newline_between:
                    self.print_newline(STAY)
            elif at_end:
                if force_newline_at_end:
                    self.print_newline(STAY)
            elif force_newline_between:
                self.print_newline(STAY)

    # trivia

    def print_trivia(self, trivia: Trivia, instruction: TriviaInstruction) -> bool:
        """Print a trivia list; returns True when a newline was emitted."""
        if not trivia:
            return False
        if not instruction.respect_user_newline and all(token.type == tt.NEWLINE for token in trivia):
            return False

        did_move = False
        ignore_newline = instruction.leading_newlines is not LeadingNewlines.ALL
        index = 0
        while index < len(trivia):
            token = trivia[index]
            index += 1

            if token.type == tt.NEWLINE:
                if ignore_newline:
                    while index < len(trivia) and trivia[index].type == tt.NEWLINE:
                        index += 1
                    ignore_newline = False
                    if instruction.leading_newlines is LeadingNewlines.NONE:
                        continue

                if did_move:
                    self.print_newline(STAY)
                    continue
                did_move = True

                user_indent = token.indent_hint
                if (
                    self.user_indentation
                    and instruction.respect_user_newline
                    and user_indent >= self.check_indentation(instruction.indentation_move)
                ):
                    # snap to the author's indentation
                    if self.prev_line_was_whitespace():
                        self.backspace_till_newline()
                    else:
                        self.backspace()
                        self.print(NEWLINE)
                    self.print_indentation_raw(user_indent)
                else:
                    self.print_newline(instruction.indentation_move)
            elif token.type in (tt.COMMENT, tt.MULTILINE_COMMENT):
                if instruction.trailing_comment:
                    self.semicolon_exemptions += 1
                self.ensure_space()
                self.print_token(token)
                ignore_newline = False
            elif token.type in (tt.REGION_BEGIN, tt.REGION_END, tt.THEN):
                if instruction.trailing_comment:
                    self.semicolon_exemptions += 1
                self.ensure_space()
                self.print_token(token, True)
                ignore_newline = False
            else:
                logger.warning("Printing %s inside a comment and newline section", token.describe())
                if instruction.trailing_comment:
                    self.semicolon_exemptions += 1
                self.print_token(token, True)
        return did_move

    # buffer primitives

    def print(self, text: str, space_after: bool = False) -> None:
        self.output.append(text)
        if space_after:
            self.output.append(SPACE)

    def print_token(self, token: Token, space_after: bool = False) -> None:
        self.print(token.lexeme, space_after)

    def print_semicolon(self, do_it: bool) -> None:
        if do_it:
            self.backspace()
            self.print(SEMICOLON, True)

    def _code_end(self) -> int:
        """Index just past the last fragment that is neither whitespace nor a line comment."""
        pos = len(self.output)
        while pos > 0 and (self.output[pos - 1] in _WHITESPACE or self.output[pos - 1].startswith("//")):
            pos -= 1
        return pos

    def _place_semicolon(self, end: int) -> None:
        # a line comment runs to the end of its line, so the `;` goes in front of it
        if end == len(self.output):
            self.print_semicolon(True)
        else:
            self.output.insert(end, SEMICOLON)

    def print_semicolon_and_newline(self, do_it: bool, move: IndentationMove) -> bool:
        self.print_semicolon(True)
        if do_it:
            return False
        self.print_newline(move)
        return True

    def last_entry(self) -> Optional[str]:
        return self.output[-1] if self.output else None

    def on_whitespace_line(self) -> bool:
        pos = len(self.output)
        if pos == 0:
            return True
        pos -= 1
        while pos != 0:
            entry = self.output[pos]
            if entry == SPACE or entry == TAB:
                pos -= 1
            elif entry == NEWLINE:
                return True
            else:
                break
        return False

    def prev_line_was_whitespace(self) -> bool:
        pos = len(self.output)
        if pos < 2:
            return False
        pos -= 1
        ignore_newline = True
        while pos != 0:
            entry = self.output[pos]
            if entry == SPACE or entry == TAB:
                pos -= 1
            elif entry == NEWLINE:
                if not ignore_newline:
                    return True
                pos -= 1
                ignore_newline = False
            else:
                break
        return False

    def backspace_till_newline(self) -> None:
        pos = len(self.output)
        if pos == 0:
            return
        pos -= 1
        while pos != 0:
            if self.output[pos] == NEWLINE:
                break
            del self.output[pos]
            pos -= 1

    def backspace_whitespace(self) -> int:
        pos = len(self.output)
        if pos == 0:
            return 0
        newlines = 0
        pos -= 1
        while pos != 0:
            entry = self.output[pos]
            if entry not in _WHITESPACE:
                break
            if entry == NEWLINE:
                newlines += 1
            del self.output[pos]
            pos -= 1
        return newlines

    def backspace(self) -> None:
        if self.output and not self.on_whitespace_line() and self.output[-1] == SPACE:
            self.output.pop()

    def ensure_space(self) -> None:
        if self.last_entry() in _WHITESPACE:
            return
        self.print(SPACE)

    def ensure_newline(self, move: IndentationMove) -> None:
        if self.last_entry() == NEWLINE:
            return
        self.print_newline(move)

    def print_newline(self, move: IndentationMove) -> None:
        if not self.output or self.prev_line_was_whitespace():
            return
        self.backspace()
        self.print(NEWLINE)
        self.print_indentation(move)

    def print_indentation(self, move: IndentationMove) -> None:
        self.set_indentation(move)
        self._print_indentation_final()

    def print_indentation_raw(self, indentation: int) -> None:
        self.indentation = indentation
        self._print_indentation_final()

    def _print_indentation_final(self) -> None:
        if self.lang_config.use_spaces:
            unit = [SPACE] * self.lang_config.space_size
        else:
            unit = [TAB]
        for _ in range(self.indentation):
            self.output.extend(unit)

    def set_indentation(self, move: IndentationMove) -> None:
        self.indentation = self.check_indentation(move)

    def check_indentation(self, move: IndentationMove) -> int:
        if move is RIGHT:
            return self.indentation + 1
        if move is LEFT:
            return max(self.indentation - 1, 0)
        return self.indentation

    def allow_user_indentation(self) -> None:
        self.user_indentation.append(self.indentation)

    def rewind_user_indentation(self) -> None:
        if self.user_indentation:
            self.indentation = self.user_indentation.pop()


__all__ = ["Printer"]
