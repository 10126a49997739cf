from __future__ import annotations

from gml_fmt.errors.base import GmlFmtError
from gml_fmt.errors.guidance import build_guidance_message
from gml_fmt.errors.render import format_error


def test_guidance_message_lines():
    message = build_guidance_message(what="Bad thing.", why="Because.", fix="Do this.", example="x = 1;")
    assert message.splitlines() == [
        "What happened: Bad thing.",
        "Why: Because.",
        "Fix: Do this.",
        "Example: x = 1;",
    ]
    assert build_guidance_message(what="Only this.") == "What happened: Only this."


def test_format_error_renders_caret():
    err = GmlFmtError("boom", line=2, column=5)
    rendered = format_error(err, "a = 1;\nb = c + }\n")
    assert rendered.splitlines() == ["boom", "b = c + }", "    ^"]


def test_format_error_includes_file():
    err = GmlFmtError("boom", line=1, column=1, details={"file": "scripts/a.gml"})
    rendered = format_error(err, "}")
    assert rendered.splitlines() == ["File: scripts/a.gml", "boom", "}", "^"]


def test_format_error_without_position_is_message():
    err = GmlFmtError("Unexpected end of input.")
    assert format_error(err, "foo(") == "Unexpected end of input."
    assert format_error(GmlFmtError("boom", line=9, column=1), "one line") == "boom"


def test_format_error_without_source_is_message():
    err = GmlFmtError("boom", line=1, column=1, details={"file": "scripts/a.gml"})
    assert format_error(err) == "boom"
