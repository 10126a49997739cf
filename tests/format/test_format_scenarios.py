from __future__ import annotations

import json

import pytest

from gml_fmt import LangConfig, format_snippet, format_source
from gml_fmt.format import is_ignored


def test_leading_and_trailing_decimal_dots_are_completed():
    assert format_source("var x = .3; var z = 3.;") == "var x = 0.3;\nvar z = 3.0;\n"


def test_else_if_chain_collapses_onto_closing_brace():
    source = "if (a) {\n    return x;\n}\nelse if (b) {\n   return z;\n}"
    assert format_source(source) == "if (a) {\n    return x;\n} else if (b) {\n    return z;\n}\n"


def test_constructor_keyword_is_spaced():
    source = "function fn_name(arg1,arg2)constructor{\nshow_debug_message(0);\n}"
    assert format_source(source) == "function fn_name(arg1, arg2) constructor {\n    show_debug_message(0);\n}\n"


def test_do_until_body_is_indented():
    source = "do {\n// x\nshow(x);\n} until (test);"
    assert format_source(source) == "do {\n    // x\n    show(x);\n} until (test);\n"


def test_newline_terminated_expressions_get_semicolons():
    source = "call(z)\ncall(q)\nx = 20\ny = 10\n"
    assert format_source(source) == "call(z);\ncall(q);\nx = 20;\ny = 10;\n"


def test_regions_survive_and_blank_lines_collapse():
    source = "#region Test Test  Test\n\n\n#endregion Okay\n"
    assert format_source(source) == "#region Test Test  Test\n\n#endregion Okay\n"


@pytest.mark.parametrize(
    "formatted",
    [
        "var x = 0.3;\nvar z = 3.0;\n",
        "call(z);\ncall(q);\nx = 20;\ny = 10;\n",
        "#region Test Test  Test\n\n#endregion Okay\n",
    ],
)
def test_formatting_is_idempotent(formatted):
    assert format_source(formatted) == formatted
    assert format_source(format_source(formatted)) == formatted


def test_trailing_newline_count_follows_config():
    assert format_source("x = 1;", LangConfig(newlines_at_end=2)) == "x = 1;\n\n"
    assert format_source("x = 1;", LangConfig(newlines_at_end=0)) == "x = 1;"
    assert format_source("x = 1;\n\n\n\n") == "x = 1;\n"


def test_empty_input_still_gets_configured_newlines():
    assert format_source("") == "\n"
    assert format_source("  \n\n\t") == "\n"
    assert format_source("", LangConfig(newlines_at_end=2)) == "\n\n"
    assert format_source("", LangConfig(newlines_at_end=0)) == ""


def test_empty_var_keeps_its_semicolon():
    assert format_source("var;") == "var;\n"
    assert format_source("var;\nx = 1;") == "var;\nx = 1;\n"


@pytest.mark.parametrize(
    "source, expected",
    [
        (
            "if (a) {\n    x = 1; // note\n    y = 2;\n}",
            "if (a) {\n    x = 1; // note\n    y = 2;\n}\n",
        ),
        ("var z = 3; // last\nw = 4;", "var z = 3; // last\nw = 4;\n"),
        ("if (a) b();\nelse c(); // fallback\nd();", None),
    ],
)
def test_same_line_comment_stays_after_its_statement(source, expected):
    output = format_source(source)
    if expected is not None:
        assert output == expected
    lines = output.splitlines()
    comment_line = next(line for line in lines if "//" in line)
    assert comment_line.rstrip().endswith(("// note", "// last", "// fallback"))
    assert comment_line.split("//")[0].strip().endswith(";")
    assert format_source(output) == output


def test_indentation_unit_follows_config():
    source = "if (a) {\nb();\n}\n"
    assert format_source(source, LangConfig(use_spaces=False)) == "if (a) {\n\tb();\n}\n"
    assert format_source(source, LangConfig(space_size=2)) == "if (a) {\n  b();\n}\n"


def test_comments_keep_their_order():
    output = format_source("x = 1; // keep\n/* block */\ny = 2;")
    assert "// keep" in output
    assert "/* block */" in output
    assert output.index("// keep") < output.index("/* block */") < output.index("y = 2")


def test_string_contents_are_untouched():
    output = format_source('msg = "a  ,  b";\nraw = @\'x  =  y\';')
    assert '"a  ,  b"' in output
    assert "@'x  =  y'" in output


def test_format_snippet_uses_default_config():
    assert format_snippet("x=1") == format_source("x=1") == "x = 1;\n"


def test_ast_log_receives_json_dump():
    log: list[str] = []
    format_source("x = 1;", ast_log=log)
    assert len(log) == 1
    payload = json.loads(log[0])
    assert payload[0]["node"] == "ExpressionStatement"


def test_ignore_pragma_detection():
    assert is_ignored("// @gml_fmt ignore\nx=1")
    assert not is_ignored("// gml_fmt\nx=1")
