from __future__ import annotations

from typing import Iterator, List, Optional

from gml_fmt.ast import expressions as ex
from gml_fmt.ast import statements as st
from gml_fmt.ast.expressions import Trivia
from gml_fmt.lexer import token_types as tt
from gml_fmt.lexer.scanner import Scanner
from gml_fmt.lexer.tokens import Token
from gml_fmt.parser.errors import raise_parse_error, raise_unexpected_end

_EQUALITY_OPERATORS = frozenset({tt.EQUAL_EQUAL, tt.BANG_EQUAL, tt.LESS_GREATER})
_COMPARISON_OPERATORS = frozenset({tt.GREATER, tt.GREATER_EQUAL, tt.LESS, tt.LESS_EQUAL})
_BITWISE_OPERATORS = frozenset({tt.BIT_AND, tt.BIT_OR, tt.BIT_XOR})
_SHIFT_OPERATORS = frozenset({tt.BIT_LEFT, tt.BIT_RIGHT})
_ADDITIVE_OPERATORS = frozenset({tt.MINUS, tt.PLUS})
_MULTIPLICATIVE_OPERATORS = frozenset({tt.SLASH, tt.STAR, tt.MOD, tt.MOD_ALIAS, tt.DIV})
_UNARY_OPERATORS = frozenset({tt.BANG, tt.MINUS, tt.PLUS, tt.TILDE, tt.NOT_ALIAS, tt.INCREMENTER, tt.DECREMENTER})

_TRIVIA_STATEMENT_KINDS = {
    tt.COMMENT: st.Comment,
    tt.MULTILINE_COMMENT: st.MultilineComment,
    tt.REGION_BEGIN: st.RegionBegin,
    tt.REGION_END: st.RegionEnd,
    tt.MACRO: st.Macro,
}


class Parser:
    """Recursive-descent parser over a lazily scanned token stream.

    Trivia (newlines, comments, regions, `then`) is collected into explicit
    slots of the tree. `can_pair` turns off after a newline or comment was
    parsed as an expression so the next line is not glued onto it.
    """

    def __init__(self, source: str) -> None:
        self._tokens: Iterator[Token] = Scanner(source)
        self._lookahead: Optional[Token] = None
        self._exhausted = False
        self.allow_unidentified = False
        self.can_pair = True
        self.leftover_stmts: List[st.Stmt] = []
        self.check_leftovers = False

    def parse(self) -> List[st.Stmt]:
        statements: List[st.Stmt] = []
        while self._peek() is not None:
            self.can_pair = True
            statements.append(self._statement())
            if self.check_leftovers:
                statements.extend(self.leftover_stmts)
                self.leftover_stmts = []
                self.check_leftovers = False
        return statements

    # token stream

    def _peek(self) -> Optional[Token]:
        if self._lookahead is None and not self._exhausted:
            self._lookahead = next(self._tokens, None)
            self._exhausted = self._lookahead is None
        return self._lookahead

    def _peek_type(self) -> Optional[str]:
        token = self._peek()
        return token.type if token is not None else None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise_unexpected_end()
        self._lookahead = None
        return token

    def _check(self, *types: str) -> bool:
        if not self.can_pair:
            return False
        return self._peek_type() in types

    def _match(self, token_type: str) -> bool:
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _trivia(self) -> Trivia:
        collected: List[Token] = []
        while self._peek_type() in tt.TRIVIA_KINDS:
            collected.append(self._advance())
        return collected or None

    # statements

    def _statement(self) -> st.Stmt:
        kind = self._peek_type()
        trivia_stmt = _TRIVIA_STATEMENT_KINDS.get(kind)
        if trivia_stmt is not None:
            return trivia_stmt(self._advance())
        if kind == tt.DEFINE:
            self._advance()
            return self._define_statement()
        if kind in (tt.VAR, tt.GLOBALVAR):
            return self._series_var_declaration()
        if kind == tt.ENUM:
            self._advance()
            return self._enum_declaration()
        if kind == tt.IF:
            self._advance()
            return self._if_statement()
        if kind == tt.RETURN:
            self._advance()
            expr = None if self._check(tt.SEMICOLON) else self._expression()
            return st.Return(expr, has_semicolon=self._match(tt.SEMICOLON))
        if kind == tt.BREAK:
            self._advance()
            return st.Break(has_semicolon=self._match(tt.SEMICOLON))
        if kind == tt.EXIT:
            self._advance()
            return st.Exit(has_semicolon=self._match(tt.SEMICOLON))
        if kind == tt.DO:
            self._advance()
            return self._do_until_statement()
        if kind in (tt.WHILE, tt.WITH, tt.REPEAT):
            keyword = self._advance()
            after_keyword = self._trivia()
            condition = self._expression()
            body = self._statement()
            return st.WhileWithRepeat(
                keyword, after_keyword, condition, body, has_semicolon=self._match(tt.SEMICOLON)
            )
        if kind == tt.SWITCH:
            self._advance()
            return self._switch_statement()
        if kind == tt.FOR:
            self._advance()
            return self._for_statement()
        if kind == tt.LBRACE:
            self._advance()
            return self._block()
        return self._expression_statement()

    def _define_statement(self) -> st.Define:
        after_keyword = self._trivia()
        script_name = self._expression()
        body: List[st.Stmt] = []
        while self._peek_type() not in (None, tt.DEFINE):
            body.append(self._statement())
        return st.Define(after_keyword, script_name, body)

    def _series_var_declaration(self) -> st.VariableDeclList:
        keyword = self._advance()
        after_keyword = self._trivia()
        declarations = self._var_declaration()
        return st.VariableDeclList(keyword, after_keyword, declarations, has_semicolon=self._match(tt.SEMICOLON))

    def _var_declaration(self) -> st.DelimitedLines:
        lines: List[st.DelimitedLine] = []
        while True:
            if self._check(tt.SEMICOLON):
                end_delimiter = True
                break

            say_var = None
            say_var_comments = None
            has_var = self._check(tt.VAR, tt.GLOBALVAR)
            if has_var:
                say_var = self._advance()
                say_var_comments = self._trivia()
            else:
                next_type = self._peek_type()
                if next_type is None:
                    end_delimiter = True
                    break
                if next_type != tt.IDENT:
                    end_delimiter = False
                    break

            var_expr = self._expression()
            if not isinstance(var_expr, (ex.Identifier, ex.Assign)):
                # Not a declaration after all; emit it after the enclosing top-level statement.
                self.leftover_stmts.append(st.ExpressionStatement(var_expr, has_semicolon=self._match(tt.SEMICOLON)))
                self.check_leftovers = True
                end_delimiter = True
                break

            do_break = not self._match(tt.COMMA)
            trailing = self._trivia()
            lines.append(st.DelimitedLine(st.VariableDecl(var_expr, say_var, say_var_comments), trailing))
            if do_break:
                end_delimiter = False
                break
        return st.DelimitedLines(lines, end_delimiter)

    def _block(self) -> st.Block:
        after_lbrace = self._trivia()
        statements: List[st.Stmt] = []
        while self._peek() is not None:
            if self._match(tt.RBRACE):
                break
            statements.append(self._statement())
        return st.Block(after_lbrace, statements, has_semicolon=self._match(tt.SEMICOLON))

    def _if_statement(self) -> st.If:
        after_keyword = self._trivia()
        condition = self._expression()
        then_branch = self._statement()
        between = self._trivia()
        after_else = None
        else_branch = None
        if self._match(tt.ELSE):
            after_else = self._trivia()
            else_branch = self._statement()
        return st.If(
            after_keyword,
            condition,
            then_branch,
            between,
            after_else,
            else_branch,
            has_semicolon=self._match(tt.SEMICOLON),
        )

    def _do_until_statement(self) -> st.DoUntil:
        after_keyword = self._trivia()
        body = self._statement()
        between = self._trivia()
        self._match(tt.UNTIL)
        condition = self._expression()
        return st.DoUntil(after_keyword, body, between, condition, has_semicolon=self._match(tt.SEMICOLON))

    def _switch_statement(self) -> st.Switch:
        after_keyword = self._trivia()
        condition = self._expression()
        self._match(tt.LBRACE)
        after_lbrace = self._trivia()

        cases: List[st.Case] = []
        while True:
            token = self._peek()
            if token is None or token.type == tt.RBRACE:
                break
            if token.type == tt.CASE:
                self._advance()
                case_trivia = self._trivia()
                constant: Optional[ex.Expr] = self._expression()
            elif token.type == tt.DEFAULT:
                self._advance()
                case_trivia = self._trivia()
                constant = None
            else:
                raise_parse_error(
                    token,
                    f"Unknown token '{token.lexeme}' in switch statement",
                    fix="Start every branch of a switch with `case <value>:` or `default:`.",
                    example="switch (state) { case 0: run(); break; }",
                )
            self._match(tt.COLON)
            after_colon = self._trivia()
            statements: List[st.Stmt] = []
            while self._peek_type() not in (None, tt.CASE, tt.DEFAULT, tt.RBRACE):
                statements.append(self._statement())
            cases.append(st.Case(constant, case_trivia, after_colon, statements))

        self._match(tt.RBRACE)
        return st.Switch(after_keyword, condition, after_lbrace, cases, has_semicolon=self._match(tt.SEMICOLON))

    def _for_statement(self) -> st.For:
        after_keyword = self._trivia()
        self._match(tt.LPAREN)
        after_lparen = self._trivia()

        if self._match(tt.SEMICOLON):
            initializer: Optional[st.Stmt] = None
        elif self._check(tt.VAR):
            initializer = self._series_var_declaration()
        else:
            initializer = self._expression_statement()
        after_initializer = self._trivia()

        condition = None if self._match(tt.SEMICOLON) else self._expression()
        self._match(tt.SEMICOLON)
        after_condition = self._trivia()

        increment = None if self._check(tt.RPAREN) else self._expression()
        self._match(tt.SEMICOLON)
        after_increment = self._trivia()

        self._match(tt.RPAREN)
        after_rparen = self._trivia()
        body = self._statement()
        return st.For(
            after_keyword,
            after_lparen,
            initializer,
            after_initializer,
            condition,
            after_condition,
            increment,
            after_increment,
            after_rparen,
            body,
            has_semicolon=self._match(tt.SEMICOLON),
        )

    def _enum_declaration(self) -> st.EnumDeclaration:
        after_keyword = self._trivia()
        name = self._expression()
        self._match(tt.LBRACE)
        after_lbrace = self._trivia()
        members = self._finish_call(tt.RBRACE, tt.COMMA)
        return st.EnumDeclaration(after_keyword, name, after_lbrace, members, has_semicolon=self._match(tt.SEMICOLON))

    def _expression_statement(self) -> st.ExpressionStatement:
        expr = self._expression()
        return st.ExpressionStatement(expr, has_semicolon=self._match(tt.SEMICOLON))

    # expressions

    def _expression(self) -> ex.Expr:
        self.allow_unidentified = True
        expr = self._assignment()
        self.can_pair = True
        self.allow_unidentified = False
        return expr

    def _assignment(self) -> ex.Expr:
        expr = self._ternary()

        if isinstance(expr, ex.UnidentifiedAsLiteral):
            literal = expr.token
            if literal.type == tt.FUNCTION:
                expr = self._function_declaration()
            elif literal.type in (tt.NEW, tt.DELETE):
                after_operator = self._trivia()
                operand = self._expression()
                expr = ex.StructOperator(literal, after_operator, operand, trailing=self._trivia())

        if self.can_pair and self._peek_type() in tt.ASSIGNMENT_OPERATORS:
            operator = self._advance()
            after_operator = self._trivia()
            value = self._assignment()
            expr = ex.Assign(expr, operator, after_operator, value)
        return expr

    def _function_declaration(self) -> ex.Function:
        after_keyword = self._trivia()
        call = self._expression()
        after_rparen = self._trivia()
        is_constructor = self._match(tt.CONSTRUCTOR)
        return ex.Function(after_keyword, call, after_rparen, is_constructor, trailing=self._trivia())

    def _ternary(self) -> ex.Expr:
        expr = self._or()
        if self._match(tt.HOOK):
            after_hook = self._trivia()
            then_branch = self._ternary()
            self._match(tt.COLON)
            after_colon = self._trivia()
            else_branch = self._ternary()
            expr = ex.Ternary(expr, after_hook, then_branch, after_colon, else_branch)
        return expr

    def _or(self) -> ex.Expr:
        return self._right_associative(self._and, self._or, tt.LOGICAL_OR, tt.OR_ALIAS)

    def _and(self) -> ex.Expr:
        return self._right_associative(self._xor, self._and, tt.LOGICAL_AND, tt.AND_ALIAS)

    def _xor(self) -> ex.Expr:
        return self._right_associative(self._equality, self._xor, tt.LOGICAL_XOR, tt.XOR_ALIAS)

    def _right_associative(self, operand, same_level, *operators: str) -> ex.Expr:
        left = operand()
        if self._check(*operators):
            operator = self._advance()
            after_operator = self._trivia()
            right = same_level()
            left = ex.Binary(left, operator, after_operator, right)
        return left

    def _left_associative(self, operand, operators: frozenset) -> ex.Expr:
        expr = operand()
        if self.can_pair:
            while self._peek_type() in operators:
                operator = self._advance()
                after_operator = self._trivia()
                right = operand()
                expr = ex.Binary(expr, operator, after_operator, right)
        return expr

    def _equality(self) -> ex.Expr:
        return self._left_associative(self._comparison, _EQUALITY_OPERATORS)

    def _comparison(self) -> ex.Expr:
        return self._left_associative(self._bitwise, _COMPARISON_OPERATORS)

    def _bitwise(self) -> ex.Expr:
        return self._left_associative(self._bitshift, _BITWISE_OPERATORS)

    def _bitshift(self) -> ex.Expr:
        return self._left_associative(self._addition, _SHIFT_OPERATORS)

    def _addition(self) -> ex.Expr:
        return self._left_associative(self._multiplication, _ADDITIVE_OPERATORS)

    def _multiplication(self) -> ex.Expr:
        return self._left_associative(self._unary, _MULTIPLICATIVE_OPERATORS)

    def _unary(self) -> ex.Expr:
        if self.can_pair and self._peek_type() in _UNARY_OPERATORS:
            operator = self._advance()
            after_operator = self._trivia()
            return ex.Unary(operator, after_operator, self._unary())
        return self._postfix()

    def _postfix(self) -> ex.Expr:
        expr = self._call()
        if self._check(tt.INCREMENTER, tt.DECREMENTER):
            operator = self._advance()
            expr = ex.Postfix(expr, operator, self._trivia())
        return expr

    def _call(self) -> ex.Expr:
        expr = self._primary()

        if self._match(tt.LPAREN):
            after_lparen = self._trivia()
            arguments = self._finish_call(tt.RPAREN, tt.COMMA)
            expr = ex.Call(expr, after_lparen, arguments, trailing=self._trivia())

        while True:
            kind = self._peek_type()
            if kind == tt.DOT:
                self._advance()
                after_dot = self._trivia()
                member = self._call()
                expr = ex.DotAccess(expr, after_dot, member, trailing=self._trivia())
            elif kind in tt.ACCESSORS:
                accessor = self._advance()
                indices = []
                while self._peek_type() not in (None, tt.RBRACKET):
                    indices.append((self._trivia(), self._expression()))
                    if not self._match(tt.COMMA):
                        break
                self._match(tt.RBRACKET)
                expr = ex.DataStructureAccess(expr, accessor, indices, trailing=self._trivia())
            else:
                break
        return expr

    def _primary(self) -> ex.Expr:
        token = self._peek()
        if token is None:
            raise_unexpected_end()
        kind = token.type

        if kind in (tt.NUMBER, tt.STRING):
            self._advance()
            return ex.Literal(token, self._trivia())
        if kind == tt.NUMBER_START_DOT:
            self._advance()
            return ex.NumberStartDot(token, self._trivia())
        if kind == tt.NUMBER_END_DOT:
            self._advance()
            return ex.NumberEndDot(token, self._trivia())
        if kind == tt.IDENT:
            self._advance()
            return ex.Identifier(token, self._trivia())
        if kind == tt.LPAREN:
            self._advance()
            after_lparen = self._trivia()
            expressions = [self._expression()]
            while not self._match(tt.RPAREN):
                expressions.append(self._expression())
            return ex.Grouping(after_lparen, expressions, self._trivia())
        if kind == tt.LBRACKET:
            self._advance()
            after_lbracket = self._trivia()
            return ex.ArrayLiteral(after_lbracket, self._finish_call(tt.RBRACKET, tt.COMMA))
        if kind == tt.NEWLINE:
            self._advance()
            self.can_pair = False
            return ex.Newline()
        if kind == tt.COMMENT:
            self._advance()
            self.can_pair = False
            return ex.Comment(token)
        if kind == tt.MULTILINE_COMMENT:
            self._advance()
            self.can_pair = False
            return ex.MultilineComment(token)

        self._advance()
        if not self.allow_unidentified:
            raise_parse_error(token, f"Error parsing '{token.lexeme}'")
        return ex.UnidentifiedAsLiteral(token, trailing=self._trivia())

    def _finish_call(self, end: str, delimiter: str) -> st.DelimitedLines:
        lines: List[st.DelimitedLine] = []
        end_delimiter = True
        if not self._check(end):
            while True:
                if self._check(end):
                    end_delimiter = True
                    break
                expr = self._expression()
                do_break = not self._match(delimiter)
                lines.append(st.DelimitedLine(expr, self._trivia()))
                if do_break:
                    end_delimiter = False
                    break
        self._match(end)
        return st.DelimitedLines(lines, end_delimiter)


def parse(source: str) -> List[st.Stmt]:
    return Parser(source).parse()


__all__ = ["Parser", "parse"]
