"""
Lexical analyzer for the Lumen programming language.

This module converts raw source text into a list of tokens:

Classes:
    CharacterStream: Cursor over the source with line tracking.
    Token: A single immutable token with kind, lexeme, literal and line.
    Lexer: Scans a whole source string into tokens, collecting errors.

Features:
    - Skips whitespace, ``//`` line comments and nestable ``/* */`` block comments
    - Maximal munch for the two-character operators ``!= == <= >=``
    - Recognizes:
        * Identifiers and keywords (``true``/``false``/``nil`` carry a value)
        * Numbers (``12``, ``3.5``; a trailing ``.`` is not part of the number)
        * Strings in double quotes, spanning lines, without escape processing
        * Operators and punctuation

Errors:
    Unexpected characters, unterminated strings and unterminated block
    comments are reported as they are found and scanning carries on, so a
    single pass surfaces every lexical mistake. The token list always ends
    with an EOF token.

Example:
    >>> [tok.type for tok in scan("print 1;")]
    ['PRINT', 'NUMBER', 'SEMICOLON', 'EOF']

Exports:
    - CharacterStream
    - Token
    - Lexer
    - scan
"""

import logging
from typing import Any

from lumen import lumen_constants as tk
from lumen.lumen_errors import DiagnosticBatch, ErrorReporter, ScanError
from lumen.lumen_values import Number, Text, Value

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    Reads characters from a source string while tracking the current line.

    Python strings index by code point, so multi-byte UTF-8 characters occupy a
    single position.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1):
        self.source = source
        self.position = position
        self.line = line

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset without advancing.

        Returns an empty string when the offset is out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def match(self, expected: str) -> bool:
        """Consumes the next character only if it equals ``expected``."""
        if self.peek() != expected or expected == "":
            return False
        self.next()
        return True

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Lumen language.

    Tokens are immutable once built.

    Attributes:
        type (str): The token kind (e.g. 'IDENTIFIER', 'NUMBER', 'EOF').
        lexeme (str): The exact source text of the token.
        literal (Value | None): Attached value for number, string, true, false and nil.
        line (int): The 1-based line of the token's first character.
    """

    __slots__ = ("type", "lexeme", "literal", "line")

    def __init__(
        self, type_: str, lexeme: str, literal: Value | None = None, line: int = 1
    ):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)

    @classmethod
    def eof(cls, line: int) -> "Token":
        return cls(tk.EOF, "", None, line)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __repr__(self) -> str:
        if self.literal is None:
            return f"Token({self.type}, {self.lexeme!r})"
        return f"Token({self.type}, {self.lexeme!r}, {self.literal})"

    def __str__(self) -> str:
        literal = "None" if self.literal is None else str(self.literal)
        return f"{self.type} {self.lexeme} {literal} {self.line}"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.lexeme == other.lexeme
            and self.literal == other.literal
            and self.line == other.line
        )

    def __hash__(self) -> int:
        return hash((self.type, self.lexeme, self.literal, self.line))


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Lexical analyzer for the Lumen language.

    A Lexer is built for one source string and scanned once. Every error found
    is passed to the reporter (when one is given) at the point of detection
    and kept in ``errors``.

    Attributes:
        stream (CharacterStream): The source being scanned.
        reporter (ErrorReporter | None): Diagnostic channel.
        tokens (list[Token]): Tokens produced so far.
        errors (list[ScanError]): Every lexical error, in source order.
    """

    def __init__(self, source: str, reporter: ErrorReporter | None = None) -> None:
        self.stream = CharacterStream(source)
        self.reporter = reporter
        self.tokens: list[Token] = []
        self.errors: list[ScanError] = []
        self._start = 0
        self._start_line = 1

    def scan_tokens(self) -> list[Token]:
        """Scans the whole source.

        Returns:
            list[Token]: All tokens, terminated by an EOF token, even when
            errors were found.
        """
        while not self.stream.end_of_file():
            self._start = self.stream.position
            self._start_line = self.stream.line
            self.scan_token()
        self.tokens.append(Token.eof(self.stream.line))
        logger.debug(
            "scanned %d tokens with %d errors", len(self.tokens), len(self.errors)
        )
        return self.tokens

    def scan_token(self) -> None:
        ch = self.stream.next()

        if ch in " \r\t\n":
            return

        # 1. Two-character operators, then single characters
        if ch + self.stream.peek() in tk.double_char_tokens:
            self.stream.next()
            self.add_token(tk.double_char_tokens[self.lexeme()])
            return

        if ch == "/":
            if self.stream.match("/"):
                self.skip_line_comment()
            elif self.stream.match("*"):
                self.skip_block_comment()
            else:
                self.add_token(tk.SLASH)
            return

        if ch in tk.single_char_tokens:
            self.add_token(tk.single_char_tokens[ch])
            return

        # 2. String
        if ch == '"':
            self.string()
            return

        # 3. Number
        if _is_digit(ch):
            self.number()
            return

        # 4. Identifier or keyword
        if _is_alpha(ch):
            self.identifier()
            return

        # 5. Unknown character
        self.error(self._start_line, f"Unexpected character '{ch}'.")

    def lexeme(self) -> str:
        return self.stream.source[self._start : self.stream.position]

    def add_token(self, type_: str, literal: Value | None = None) -> None:
        self.tokens.append(Token(type_, self.lexeme(), literal, self._start_line))

    def error(self, line: int, message: str) -> None:
        err = ScanError(line, message)
        self.errors.append(err)
        if self.reporter is not None:
            self.reporter.report(err)

    def skip_line_comment(self) -> None:
        while not self.stream.end_of_file() and self.stream.peek() != "\n":
            self.stream.next()

    def skip_block_comment(self) -> None:
        """Skips a block comment; nested ``/* */`` pairs must balance."""
        depth = 1
        while depth > 0:
            if self.stream.end_of_file():
                self.error(self.stream.line, "Unterminated block comment.")
                return
            ch = self.stream.next()
            if ch == "/" and self.stream.match("*"):
                depth += 1
            elif ch == "*" and self.stream.match("/"):
                depth -= 1

    def string(self) -> None:
        while not self.stream.end_of_file() and self.stream.peek() != '"':
            self.stream.next()

        if self.stream.end_of_file():
            self.error(self._start_line, "Unterminated string.")
            return

        self.stream.next()  # closing quote
        value = self.stream.source[self._start + 1 : self.stream.position - 1]
        self.add_token(tk.STRING, Text(value))

    def number(self) -> None:
        while _is_digit(self.stream.peek()):
            self.stream.next()

        # A '.' belongs to the number only when a digit follows it
        if self.stream.peek() == "." and _is_digit(self.stream.peek(1)):
            self.stream.next()
            while _is_digit(self.stream.peek()):
                self.stream.next()

        self.add_token(tk.NUMBER, Number(float(self.lexeme())))

    def identifier(self) -> None:
        while _is_alpha(self.stream.peek()) or _is_digit(self.stream.peek()):
            self.stream.next()

        text = self.lexeme()
        type_ = tk.keywords.get(text, tk.IDENTIFIER)
        self.add_token(type_, tk.keyword_literals.get(text))


def scan(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Scans ``source`` into tokens.

    Raises:
        DiagnosticBatch: If any lexical error was found. ``errors`` holds all
            of them; the batch itself reads as the last one.
    """
    lexer = Lexer(source, reporter)
    tokens = lexer.scan_tokens()
    if lexer.errors:
        raise DiagnosticBatch(list(lexer.errors))
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "scan"]
