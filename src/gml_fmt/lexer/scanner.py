from __future__ import annotations

from typing import Iterator, List, Optional

from gml_fmt.lexer import token_types as tt
from gml_fmt.lexer.tokens import Token

# Leading whitespace width represented by one unit of a newline's indent hint.
INDENT_HINT_WIDTH = 4
TAB_WIDTH = 4

_SINGLE_CHAR_TOKENS = {
    "(": tt.LPAREN,
    ")": tt.RPAREN,
    "{": tt.LBRACE,
    "}": tt.RBRACE,
    ",": tt.COMMA,
    "~": tt.TILDE,
    ";": tt.SEMICOLON,
    ":": tt.COLON,
    "]": tt.RBRACKET,
    "?": tt.HOOK,
    "\\": tt.BACKSLASH,
}

# first char -> (kind alone, {second char: combined kind})
_OPERATOR_TOKENS = {
    "-": (tt.MINUS, {"=": tt.MINUS_EQUALS, "-": tt.DECREMENTER}),
    "+": (tt.PLUS, {"=": tt.PLUS_EQUALS, "+": tt.INCREMENTER}),
    "*": (tt.STAR, {"=": tt.STAR_EQUALS}),
    "%": (tt.MOD, {"=": tt.MOD_EQUALS}),
    "!": (tt.BANG, {"=": tt.BANG_EQUAL}),
    "=": (tt.EQUAL, {"=": tt.EQUAL_EQUAL}),
    "<": (tt.LESS, {"=": tt.LESS_EQUAL, ">": tt.LESS_GREATER, "<": tt.BIT_LEFT}),
    ">": (tt.GREATER, {"=": tt.GREATER_EQUAL, ">": tt.BIT_RIGHT}),
    "&": (tt.BIT_AND, {"&": tt.LOGICAL_AND, "=": tt.BIT_AND_EQUALS}),
    "|": (tt.BIT_OR, {"|": tt.LOGICAL_OR, "=": tt.BIT_OR_EQUALS}),
    "^": (tt.BIT_XOR, {"^": tt.LOGICAL_XOR, "=": tt.BIT_XOR_EQUALS}),
    "[": (tt.LBRACKET, {"@": tt.ARRAY_INDEXER, "?": tt.MAP_INDEXER, "|": tt.LIST_INDEXER, "#": tt.GRID_INDEXER}),
}

_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_IDENT_CHARS = _IDENT_START | _DIGITS


class Scanner:
    """Lazy GML tokenizer.

    Whitespace is elided except newlines, which become NEWLINE tokens carrying
    the indent hint of the following line. Input the scanner does not know is
    emitted as single-character UNIDENTIFIED tokens, so scanning never fails.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 0
        self.column = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Optional[Token]:
        src = self.source
        while self.pos < len(src):
            start = self.pos
            ch = src[start]
            self.pos += 1

            if ch == " " or ch == "\t":
                self.column += 1
                continue
            if ch == "\r":
                continue
            if ch == "\n":
                return self._newline()

            kind = _SINGLE_CHAR_TOKENS.get(ch)
            if kind is not None:
                return self._emit(kind, None, 1)

            operator = _OPERATOR_TOKENS.get(ch)
            if operator is not None:
                alone, combos = operator
                combined = combos.get(self._peek())
                if combined is not None:
                    self.pos += 1
                    return self._emit(combined, None, 2)
                return self._emit(alone, None, 1)

            if ch == "#":
                return self._directive(start)
            if ch == "@":
                quote = self._peek()
                if quote == '"' or quote == "'":
                    self.pos += 1
                    return self._raw_string(start, quote)
                return self._emit(tt.UNIDENTIFIED, ch, 1)
            if ch == '"':
                return self._string(start, '"', ('"', "\\"))
            if ch == "'":
                return self._string(start, "'", ("'",))
            if ch == ".":
                if self._peek() in _DIGITS:
                    self._consume_while(_DIGITS)
                    return self._slice(tt.NUMBER_START_DOT, start)
                return self._emit(tt.DOT, None, 1)
            if ch in _DIGITS:
                return self._number(start, ch)
            if ch == "$":
                self._consume_while(_HEX_DIGITS)
                return self._slice(tt.NUMBER, start)
            if ch == "/":
                return self._slash(start)
            if ch in _IDENT_START:
                self._consume_while(_IDENT_CHARS)
                word = src[start : self.pos]
                keyword = tt.KEYWORDS.get(word)
                if keyword is not None:
                    return self._emit(keyword, None, len(word))
                return self._emit(tt.IDENT, word, len(word))

            return self._emit(tt.UNIDENTIFIED, ch, 1)
        return None

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if index < len(self.source):
            return self.source[index]
        return ""

    def _consume_while(self, allowed: frozenset) -> None:
        src = self.source
        while self.pos < len(src) and src[self.pos] in allowed:
            self.pos += 1

    def _emit(self, kind: str, value: Optional[object], width: int) -> Token:
        token = Token(kind, value, self.line, self.column)
        self.column += width
        return token

    def _slice(self, kind: str, start: int) -> Token:
        return self._emit(kind, self.source[start : self.pos], self.pos - start)

    def _multiline(self, kind: str, start: int, start_line: int, start_column: int, last_break: Optional[int]) -> Token:
        token = Token(kind, self.source[start : self.pos], start_line, start_column)
        if last_break is None:
            self.column += self.pos - start
        else:
            self.column = self.pos - last_break
        return token

    def _newline(self) -> Token:
        token_line, token_column = self.line, self.column
        width = 0
        consumed = 0
        src = self.source
        while self.pos < len(src):
            ch = src[self.pos]
            if ch == " ":
                width += 1
            elif ch == "\t":
                width += TAB_WIDTH
            else:
                break
            consumed += 1
            self.pos += 1
        self.line += 1
        self.column = consumed
        return Token(tt.NEWLINE, width // INDENT_HINT_WIDTH, token_line, token_column)

    def _directive(self, start: int) -> Token:
        self._consume_while(_IDENT_CHARS)
        word = self.source[start : self.pos]
        if word == "#macro":
            return self._macro(start)
        if word == "#region" or word == "#endregion":
            self._consume_until_newline()
            kind = tt.REGION_BEGIN if word == "#region" else tt.REGION_END
            return self._slice(kind, start)
        if word == "#define":
            return self._emit(tt.DEFINE, None, len(word))
        # Unknown directive: emit the hash alone and rescan the word.
        self.pos = start + 1
        return self._emit(tt.HASHTAG, None, 1)

    def _macro(self, start: int) -> Token:
        start_line, start_column = self.line, self.column
        last_break = None
        src = self.source
        while self.pos < len(src):
            ch = src[self.pos]
            if ch == "\n":
                break
            self.pos += 1
            if ch == "\\" and self._peek() == "\n":
                self.pos += 1
                self.line += 1
                last_break = self.pos
        return self._multiline(tt.MACRO, start, start_line, start_column, last_break)

    def _consume_until_newline(self) -> None:
        src = self.source
        while self.pos < len(src) and src[self.pos] != "\n":
            self.pos += 1

    def _raw_string(self, start: int, quote: str) -> Token:
        start_line, start_column = self.line, self.column
        last_break = None
        src = self.source
        while self.pos < len(src):
            ch = src[self.pos]
            self.pos += 1
            if ch == quote:
                break
            if ch == "\n":
                self.line += 1
                last_break = self.pos
        return self._multiline(tt.STRING, start, start_line, start_column, last_break)

    def _string(self, start: int, quote: str, escapable: tuple) -> Token:
        src = self.source
        while self.pos < len(src):
            ch = src[self.pos]
            if ch == "\n":
                break
            self.pos += 1
            if ch == quote:
                break
            if ch == "\\" and self._peek() in escapable:
                self.pos += 1
        return self._slice(tt.STRING, start)

    def _number(self, start: int, first: str) -> Token:
        if first == "0" and self._peek() == "x":
            self.pos += 1
            self._consume_while(_HEX_DIGITS)
            return self._slice(tt.NUMBER, start)
        self._consume_while(_DIGITS)
        if self._peek() == ".":
            self.pos += 1
            if self._peek() in _DIGITS:
                self._consume_while(_DIGITS)
                return self._slice(tt.NUMBER, start)
            return self._slice(tt.NUMBER_END_DOT, start)
        return self._slice(tt.NUMBER, start)

    def _slash(self, start: int) -> Token:
        following = self._peek()
        if following == "/":
            self._consume_until_newline()
            return self._slice(tt.COMMENT, start)
        if following == "*":
            return self._block_comment(start)
        if following == "=":
            self.pos += 1
            return self._emit(tt.SLASH_EQUALS, None, 2)
        return self._emit(tt.SLASH, None, 1)

    def _block_comment(self, start: int) -> Token:
        start_line, start_column = self.line, self.column
        last_break = None
        src = self.source
        self.pos += 1
        while self.pos < len(src):
            ch = src[self.pos]
            self.pos += 1
            if ch == "*" and self._peek() == "/":
                self.pos += 1
                break
            if ch == "\n":
                self.line += 1
                last_break = self.pos
        return self._multiline(tt.MULTILINE_COMMENT, start, start_line, start_column, last_break)


def scan(source: str) -> List[Token]:
    return list(Scanner(source))


__all__ = ["INDENT_HINT_WIDTH", "Scanner", "scan"]
