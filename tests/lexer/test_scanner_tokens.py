from __future__ import annotations

from gml_fmt.lexer import token_types as tt
from gml_fmt.lexer.scanner import Scanner, scan


def _kinds(source: str) -> list[str]:
    return [token.type for token in scan(source)]


def test_single_and_double_char_operators():
    assert _kinds("( ) { } , ; : ] ? ~") == [
        tt.LPAREN,
        tt.RPAREN,
        tt.LBRACE,
        tt.RBRACE,
        tt.COMMA,
        tt.SEMICOLON,
        tt.COLON,
        tt.RBRACKET,
        tt.HOOK,
        tt.TILDE,
    ]
    assert _kinds("+= -= *= /= %= ^= |= &=") == [
        tt.PLUS_EQUALS,
        tt.MINUS_EQUALS,
        tt.STAR_EQUALS,
        tt.SLASH_EQUALS,
        tt.MOD_EQUALS,
        tt.BIT_XOR_EQUALS,
        tt.BIT_OR_EQUALS,
        tt.BIT_AND_EQUALS,
    ]
    assert _kinds("++ -- == != <= >= <> << >> && || ^^") == [
        tt.INCREMENTER,
        tt.DECREMENTER,
        tt.EQUAL_EQUAL,
        tt.BANG_EQUAL,
        tt.LESS_EQUAL,
        tt.GREATER_EQUAL,
        tt.LESS_GREATER,
        tt.BIT_LEFT,
        tt.BIT_RIGHT,
        tt.LOGICAL_AND,
        tt.LOGICAL_OR,
        tt.LOGICAL_XOR,
    ]


def test_accessor_indexers():
    assert _kinds("[ [@ [? [| [#") == [
        tt.LBRACKET,
        tt.ARRAY_INDEXER,
        tt.MAP_INDEXER,
        tt.LIST_INDEXER,
        tt.GRID_INDEXER,
    ]


def test_keywords_and_identifiers():
    tokens = scan("var foo and or xor not mod div then globalvar")
    assert [token.type for token in tokens] == [
        tt.VAR,
        tt.IDENT,
        tt.AND_ALIAS,
        tt.OR_ALIAS,
        tt.XOR_ALIAS,
        tt.NOT_ALIAS,
        tt.MOD_ALIAS,
        tt.DIV,
        tt.THEN,
        tt.GLOBALVAR,
    ]
    assert tokens[1].value == "foo"
    assert tokens[0].lexeme == "var"


def test_token_positions_are_zero_indexed():
    tokens = scan("a = 1;\n  b")
    a, equal, one, semi, newline, b = tokens
    assert (a.line, a.column) == (0, 0)
    assert (equal.line, equal.column) == (0, 2)
    assert (one.line, one.column) == (0, 4)
    assert (semi.line, semi.column) == (0, 5)
    assert (newline.line, newline.column) == (0, 6)
    assert (b.line, b.column) == (1, 2)


def test_newline_indent_hint_counts_tabs_as_four():
    tokens = scan("a\n        b\n\tc\n  d")
    hints = [token.indent_hint for token in tokens if token.type == tt.NEWLINE]
    assert hints == [2, 1, 0]


def test_numbers():
    tokens = scan("12 3.75 .5 3. 0xFF $1a")
    assert [(token.type, token.value) for token in tokens] == [
        (tt.NUMBER, "12"),
        (tt.NUMBER, "3.75"),
        (tt.NUMBER_START_DOT, ".5"),
        (tt.NUMBER_END_DOT, "3."),
        (tt.NUMBER, "0xFF"),
        (tt.NUMBER, "$1a"),
    ]


def test_number_at_end_of_input_keeps_lexeme():
    assert scan("x = 42")[-1].value == "42"


def test_strings():
    tokens = scan('"a \\" b" \'c\' @"raw\nline"')
    assert tokens[0].type == tt.STRING
    assert tokens[0].value == '"a \\" b"'
    assert tokens[1].value == "'c'"
    assert tokens[2].value == '@"raw\nline"'
    assert tokens[2].line == 0


def test_multiline_string_advances_line():
    tokens = scan('@"one\ntwo" x')
    assert tokens[-1].value == "x"
    assert tokens[-1].line == 1


def test_comments():
    tokens = scan("// line\n/* block\n comment */ x")
    assert tokens[0].type == tt.COMMENT
    assert tokens[0].value == "// line"
    assert tokens[1].type == tt.NEWLINE
    assert tokens[2].type == tt.MULTILINE_COMMENT
    assert tokens[2].value == "/* block\n comment */"
    assert tokens[3].line == 2


def test_directives():
    tokens = scan("#region Setup stuff\n#endregion\n#macro FIVE 5\n#define thing")
    kinds = [token.type for token in tokens if token.type != tt.NEWLINE]
    assert kinds == [tt.REGION_BEGIN, tt.REGION_END, tt.MACRO, tt.DEFINE, tt.IDENT]
    assert tokens[0].value == "#region Setup stuff"
    assert tokens[4].value == "#macro FIVE 5"


def test_macro_continues_over_backslash_newline():
    tokens = scan("#macro TWO_LINES 1 + \\\n 2\nx")
    assert tokens[0].type == tt.MACRO
    assert tokens[0].value == "#macro TWO_LINES 1 + \\\n 2"
    assert tokens[-1].value == "x"
    assert tokens[-1].line == 2


def test_unknown_directive_rescans_word():
    tokens = scan("#foo")
    assert [token.type for token in tokens] == [tt.HASHTAG, tt.IDENT]
    assert tokens[1].value == "foo"


def test_unknown_characters_are_unidentified():
    tokens = scan("a ` b")
    assert tokens[1].type == tt.UNIDENTIFIED
    assert tokens[1].value == "`"


def test_carriage_returns_are_ignored():
    assert _kinds("a\r\nb") == [tt.IDENT, tt.NEWLINE, tt.IDENT]


def test_scanner_is_lazy_iterator():
    scanner = Scanner("a b")
    assert next(scanner).value == "a"
    assert scanner.next_token().value == "b"
    assert scanner.next_token() is None


def test_describe_uses_one_based_positions():
    token = scan("\n  foo")[1]
    assert token.describe() == "'foo' (IDENT) at 2:3"
