from __future__ import annotations

LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"
COMMA = "COMMA"
DOT = "DOT"
COLON = "COLON"
SEMICOLON = "SEMICOLON"
SLASH = "SLASH"
BACKSLASH = "BACKSLASH"
STAR = "STAR"
MOD = "MOD"
HASHTAG = "HASHTAG"

PLUS_EQUALS = "PLUS_EQUALS"
MINUS_EQUALS = "MINUS_EQUALS"
STAR_EQUALS = "STAR_EQUALS"
SLASH_EQUALS = "SLASH_EQUALS"
BIT_XOR_EQUALS = "BIT_XOR_EQUALS"
BIT_OR_EQUALS = "BIT_OR_EQUALS"
BIT_AND_EQUALS = "BIT_AND_EQUALS"
MOD_EQUALS = "MOD_EQUALS"

LIST_INDEXER = "LIST_INDEXER"
MAP_INDEXER = "MAP_INDEXER"
GRID_INDEXER = "GRID_INDEXER"
ARRAY_INDEXER = "ARRAY_INDEXER"

MINUS = "MINUS"
PLUS = "PLUS"
INCREMENTER = "INCREMENTER"
DECREMENTER = "DECREMENTER"
BANG = "BANG"
HOOK = "HOOK"
TILDE = "TILDE"
LESS_GREATER = "LESS_GREATER"
LOGICAL_AND = "LOGICAL_AND"
LOGICAL_OR = "LOGICAL_OR"
LOGICAL_XOR = "LOGICAL_XOR"
BIT_AND = "BIT_AND"
BIT_OR = "BIT_OR"
BIT_XOR = "BIT_XOR"
BIT_LEFT = "BIT_LEFT"
BIT_RIGHT = "BIT_RIGHT"
BANG_EQUAL = "BANG_EQUAL"
EQUAL = "EQUAL"
EQUAL_EQUAL = "EQUAL_EQUAL"
GREATER = "GREATER"
GREATER_EQUAL = "GREATER_EQUAL"
LESS = "LESS"
LESS_EQUAL = "LESS_EQUAL"

MACRO = "MACRO"
REGION_BEGIN = "REGION_BEGIN"
REGION_END = "REGION_END"
DEFINE = "DEFINE"

VAR = "VAR"
GLOBALVAR = "GLOBALVAR"
IF = "IF"
ELSE = "ELSE"
FUNCTION = "FUNCTION"
CONSTRUCTOR = "CONSTRUCTOR"
NEW = "NEW"
DELETE = "DELETE"
RETURN = "RETURN"
FOR = "FOR"
REPEAT = "REPEAT"
WITH = "WITH"
WHILE = "WHILE"
DO = "DO"
UNTIL = "UNTIL"
SWITCH = "SWITCH"
CASE = "CASE"
DEFAULT = "DEFAULT"
BREAK = "BREAK"
EXIT = "EXIT"
ENUM = "ENUM"

AND_ALIAS = "AND_ALIAS"
OR_ALIAS = "OR_ALIAS"
XOR_ALIAS = "XOR_ALIAS"
NOT_ALIAS = "NOT_ALIAS"
MOD_ALIAS = "MOD_ALIAS"
DIV = "DIV"
THEN = "THEN"

NEWLINE = "NEWLINE"
IDENT = "IDENT"
STRING = "STRING"
NUMBER = "NUMBER"
NUMBER_START_DOT = "NUMBER_START_DOT"
NUMBER_END_DOT = "NUMBER_END_DOT"
COMMENT = "COMMENT"
MULTILINE_COMMENT = "MULTILINE_COMMENT"
UNIDENTIFIED = "UNIDENTIFIED"

KEYWORDS = {
    "var": VAR,
    "and": AND_ALIAS,
    "or": OR_ALIAS,
    "xor": XOR_ALIAS,
    "not": NOT_ALIAS,
    "if": IF,
    "else": ELSE,
    "function": FUNCTION,
    "constructor": CONSTRUCTOR,
    "new": NEW,
    "delete": DELETE,
    "return": RETURN,
    "for": FOR,
    "repeat": REPEAT,
    "while": WHILE,
    "do": DO,
    "until": UNTIL,
    "switch": SWITCH,
    "case": CASE,
    "default": DEFAULT,
    "mod": MOD_ALIAS,
    "div": DIV,
    "break": BREAK,
    "exit": EXIT,
    "enum": ENUM,
    "with": WITH,
    "then": THEN,
    "globalvar": GLOBALVAR,
}

# Canonical text for kinds whose lexeme never varies.
TOKEN_TEXT = {
    LPAREN: "(",
    RPAREN: ")",
    LBRACE: "{",
    RBRACE: "}",
    LBRACKET: "[",
    RBRACKET: "]",
    COMMA: ",",
    DOT: ".",
    COLON: ":",
    SEMICOLON: ";",
    SLASH: "/",
    BACKSLASH: "\\",
    STAR: "*",
    MOD: "%",
    HASHTAG: "#",
    PLUS_EQUALS: "+=",
    MINUS_EQUALS: "-=",
    STAR_EQUALS: "*=",
    SLASH_EQUALS: "/=",
    BIT_XOR_EQUALS: "^=",
    BIT_OR_EQUALS: "|=",
    BIT_AND_EQUALS: "&=",
    MOD_EQUALS: "%=",
    LIST_INDEXER: "[|",
    MAP_INDEXER: "[?",
    GRID_INDEXER: "[#",
    ARRAY_INDEXER: "[@",
    MINUS: "-",
    PLUS: "+",
    INCREMENTER: "++",
    DECREMENTER: "--",
    BANG: "!",
    HOOK: "?",
    TILDE: "~",
    LESS_GREATER: "<>",
    LOGICAL_AND: "&&",
    LOGICAL_OR: "||",
    LOGICAL_XOR: "^^",
    BIT_AND: "&",
    BIT_OR: "|",
    BIT_XOR: "^",
    BIT_LEFT: "<<",
    BIT_RIGHT: ">>",
    BANG_EQUAL: "!=",
    EQUAL: "=",
    EQUAL_EQUAL: "==",
    GREATER: ">",
    GREATER_EQUAL: ">=",
    LESS: "<",
    LESS_EQUAL: "<=",
    DEFINE: "#define",
    NEWLINE: "\n",
}
TOKEN_TEXT.update({kind: word for word, kind in KEYWORDS.items()})

# Kinds the scanner stores with their source slice as value.
LEXEME_KINDS = frozenset(
    {MACRO, REGION_BEGIN, REGION_END, IDENT, STRING, NUMBER, NUMBER_START_DOT, NUMBER_END_DOT, COMMENT, MULTILINE_COMMENT, UNIDENTIFIED}
)

TRIVIA_KINDS = frozenset({NEWLINE, COMMENT, MULTILINE_COMMENT, REGION_BEGIN, REGION_END, THEN})

ASSIGNMENT_OPERATORS = frozenset(
    {EQUAL, PLUS_EQUALS, MINUS_EQUALS, STAR_EQUALS, SLASH_EQUALS, BIT_XOR_EQUALS, BIT_OR_EQUALS, BIT_AND_EQUALS, MOD_EQUALS}
)

ACCESSORS = frozenset({LBRACKET, LIST_INDEXER, MAP_INDEXER, GRID_INDEXER, ARRAY_INDEXER})
