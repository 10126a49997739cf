from __future__ import annotations

import json

import pytest

from gml_fmt.ast import expressions as ex
from gml_fmt.ast import statements as st
from gml_fmt.ast.dump import dump_ast
from gml_fmt.errors.base import GmlFmtError
from gml_fmt.lexer import token_types as tt
from gml_fmt.parser.core import parse


def test_assignment_statement_shape():
    (stmt,) = parse("x = 1;")
    assert isinstance(stmt, st.ExpressionStatement)
    assert stmt.has_semicolon is True
    assign = stmt.expr
    assert isinstance(assign, ex.Assign)
    assert assign.operator.type == tt.EQUAL
    assert isinstance(assign.target, ex.Identifier)
    assert assign.target.name.value == "x"
    assert isinstance(assign.value, ex.Literal)
    assert assign.value.token.value == "1"


def test_statement_without_semicolon_is_flagged():
    (stmt,) = parse("x = 1")
    assert stmt.has_semicolon is False


def test_binary_precedence():
    (stmt,) = parse("a + b * c;")
    expr = stmt.expr
    assert isinstance(expr, ex.Binary)
    assert expr.operator.type == tt.PLUS
    assert isinstance(expr.right, ex.Binary)
    assert expr.right.operator.type == tt.STAR


def test_logical_operators_are_right_associative():
    (stmt,) = parse("a || b || c;")
    expr = stmt.expr
    assert isinstance(expr.left, ex.Identifier)
    assert isinstance(expr.right, ex.Binary)


def test_var_declaration_list():
    (stmt,) = parse("var x = 2, y, var q;")
    assert isinstance(stmt, st.VariableDeclList)
    assert stmt.has_semicolon is True
    lines = stmt.declarations.lines
    assert len(lines) == 3
    assert isinstance(lines[0].expr.var_expr, ex.Assign)
    assert lines[1].expr.say_var is None
    assert lines[2].expr.say_var.type == tt.VAR


def test_named_function_and_body_are_separate_statements():
    function_stmt, body = parse("function foo(a) constructor {}")
    assert isinstance(function_stmt.expr, ex.Function)
    assert function_stmt.expr.is_constructor is True
    assert isinstance(function_stmt.expr.call, ex.Call)
    assert isinstance(body, st.Block)


def test_anonymous_function_parses_as_lambda_call():
    stmt, body = parse("f = function(a) { return a; }")
    value = stmt.expr.value
    assert ex.is_lambda_call(value)
    assert len(value.arguments.lines) == 1
    assert isinstance(body, st.Block)


def test_new_and_delete_are_struct_operators():
    (new_stmt,) = parse("s = new Thing(1);")
    assert isinstance(new_stmt.expr.value, ex.StructOperator)
    assert new_stmt.expr.value.operator.type == tt.NEW
    (delete_stmt,) = parse("delete s")
    assert isinstance(delete_stmt.expr, ex.StructOperator)


def test_if_else_chain():
    (stmt,) = parse("if (a) b(); else if (c) d(); else e();")
    assert isinstance(stmt, st.If)
    assert isinstance(stmt.else_branch, st.If)
    assert isinstance(stmt.else_branch.else_branch, st.ExpressionStatement)


def test_else_keeps_trivia_before_its_body():
    (stmt,) = parse("if (a)\n    b();\nelse // other\n    c();")
    assert [token.type for token in stmt.after_else] == [tt.COMMENT, tt.NEWLINE]
    assert isinstance(stmt.else_branch, st.ExpressionStatement)
    assert isinstance(stmt.else_branch.expr, ex.Call)
    (no_else,) = parse("if (a) b();")
    assert no_else.after_else is None and no_else.else_branch is None


def test_switch_cases():
    (stmt,) = parse("switch (x) { case 1: a(); break; default: b(); }")
    assert isinstance(stmt, st.Switch)
    first, second = stmt.cases
    assert not first.is_default
    assert [type(item) for item in first.statements] == [st.ExpressionStatement, st.Break]
    assert second.is_default


def test_for_loop_slots():
    (stmt,) = parse("for (var i = 0; i < 10; i++) {}")
    assert isinstance(stmt, st.For)
    assert isinstance(stmt.initializer, st.VariableDeclList)
    assert isinstance(stmt.condition, ex.Binary)
    assert isinstance(stmt.increment, ex.Postfix)
    assert isinstance(stmt.body, st.Block)


def test_accessors_and_dot_access():
    (stmt,) = parse("b[i].q[0] = 30;")
    target = stmt.expr.target
    assert isinstance(target, ex.DotAccess)
    assert isinstance(target.owner, ex.DataStructureAccess)
    assert isinstance(target.member, ex.DataStructureAccess)
    (grid,) = parse("g[# 1, 2];")
    assert grid.expr.accessor.type == tt.GRID_INDEXER
    assert len(grid.expr.indices) == 2


def test_comments_become_statements():
    statements = parse("// note\n/* block */")
    assert isinstance(statements[0], st.Comment)
    assert isinstance(statements[-1], st.MultilineComment)


def test_leftover_expression_is_flushed_after_top_level_statement():
    statements = parse("if (c) { var a, foo(); b = 1; }")
    assert [type(item) for item in statements] == [st.If, st.ExpressionStatement]
    block = statements[0].then_branch
    assert isinstance(block.statements[0], st.VariableDeclList)
    assert len(block.statements[0].declarations.lines) == 1
    leftover = statements[1]
    assert isinstance(leftover.expr, ex.Call)
    assert leftover.has_semicolon is True


def test_unknown_token_in_switch_is_an_error():
    with pytest.raises(GmlFmtError) as excinfo:
        parse("switch (x) { foo: }")
    err = excinfo.value
    assert "Unknown token 'foo' in switch statement" in err.message
    assert err.line == 1
    assert err.column == 14
    assert err.details["token"] == tt.IDENT


def test_unparseable_token_reports_position():
    with pytest.raises(GmlFmtError) as excinfo:
        parse("x = foo(1) + }")
    err = excinfo.value
    assert "Error parsing '}'" in err.message
    assert (err.line, err.column) == (1, 14)
    assert "Fix:" in err.message


def test_unexpected_end_of_input():
    with pytest.raises(GmlFmtError) as excinfo:
        parse("foo(")
    assert "Unexpected end of input." in str(excinfo.value)
    assert excinfo.value.line is None


def test_dump_ast_is_json():
    payload = json.loads(dump_ast(parse("x = 1;")))
    assert payload[0]["node"] == "ExpressionStatement"
    assert payload[0]["has_semicolon"] is True
    assert payload[0]["expr"]["node"] == "Assign"
    assert payload[0]["expr"]["operator"] == {"token": tt.EQUAL, "at": "0:2"}
