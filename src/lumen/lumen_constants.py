"""
Token kinds and static lookup tables shared by the Lumen lexer and parser.

Token kinds are plain upper-case strings. The tables below are the only
place where source spellings are tied to kinds:

    single_char_tokens      one-character punctuators and operators
    double_char_tokens      two-character operators (``!=``, ``==``, ``<=``, ``>=``)
    keywords                reserved words
    keyword_literals        reserved words that also carry a value
    synchronizing_keywords  declaration/statement starters used for parser recovery
"""

from lumen.lumen_values import FALSE, NIL, TRUE, Value

# Single-character tokens
LEFT_PAREN = "LEFT_PAREN"
RIGHT_PAREN = "RIGHT_PAREN"
LEFT_BRACE = "LEFT_BRACE"
RIGHT_BRACE = "RIGHT_BRACE"
COMMA = "COMMA"
DOT = "DOT"
MINUS = "MINUS"
PLUS = "PLUS"
SEMICOLON = "SEMICOLON"
SLASH = "SLASH"
STAR = "STAR"

# One or two character tokens
BANG = "BANG"
BANG_EQUAL = "BANG_EQUAL"
EQUAL = "EQUAL"
EQUAL_EQUAL = "EQUAL_EQUAL"
GREATER = "GREATER"
GREATER_EQUAL = "GREATER_EQUAL"
LESS = "LESS"
LESS_EQUAL = "LESS_EQUAL"

# Literals
IDENTIFIER = "IDENTIFIER"
STRING = "STRING"
NUMBER = "NUMBER"

# Keywords
AND = "AND"
CLASS = "CLASS"
ELSE = "ELSE"
FALSE_KW = "FALSE"
FOR = "FOR"
FUNC = "FUNC"
IF = "IF"
NIL_KW = "NIL"
OR = "OR"
PRINT = "PRINT"
RETURN = "RETURN"
SUPER = "SUPER"
THIS = "THIS"
TRUE_KW = "TRUE"
VAR = "VAR"
WHILE = "WHILE"

EOF = "EOF"

single_char_tokens: dict[str, str] = {
    "(": LEFT_PAREN,
    ")": RIGHT_PAREN,
    "{": LEFT_BRACE,
    "}": RIGHT_BRACE,
    ",": COMMA,
    ".": DOT,
    "-": MINUS,
    "+": PLUS,
    ";": SEMICOLON,
    "/": SLASH,
    "*": STAR,
    "!": BANG,
    "=": EQUAL,
    "<": LESS,
    ">": GREATER,
}

double_char_tokens: dict[str, str] = {
    "!=": BANG_EQUAL,
    "==": EQUAL_EQUAL,
    "<=": LESS_EQUAL,
    ">=": GREATER_EQUAL,
}

keywords: dict[str, str] = {
    "and": AND,
    "class": CLASS,
    "else": ELSE,
    "false": FALSE_KW,
    "for": FOR,
    "func": FUNC,
    "if": IF,
    "nil": NIL_KW,
    "or": OR,
    "print": PRINT,
    "return": RETURN,
    "super": SUPER,
    "this": THIS,
    "true": TRUE_KW,
    "var": VAR,
    "while": WHILE,
}

keyword_literals: dict[str, Value] = {
    "true": TRUE,
    "false": FALSE,
    "nil": NIL,
}

synchronizing_keywords: frozenset[str] = frozenset(
    {CLASS, FUNC, VAR, FOR, IF, WHILE, PRINT, RETURN}
)

literal_tokens: frozenset[str] = frozenset(
    {NUMBER, STRING, TRUE_KW, FALSE_KW, NIL_KW}
)

__all__ = [
    "double_char_tokens",
    "keyword_literals",
    "keywords",
    "literal_tokens",
    "single_char_tokens",
    "synchronizing_keywords",
]
