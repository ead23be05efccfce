"""
Diagnostics shared by every stage of the Lumen interpreter.

Classes:
    LumenError: Base diagnostic with a line, an optional token and a message.
    ScanError: Lexical error (unexpected character, unterminated string/comment).
    ParseError: Grammar error (missing token, missing expression, nesting too deep).
    LumenRuntimeError: Evaluation error (illegal operands, undefined variable).
    DiagnosticBatch: Several errors collected in one pass, raised by the
        convenience entry points once a stage has finished.
    ErrorReporter: The diagnostic channel; writes human-readable lines and
        remembers what was reported.

Rendering:
    [line 3] Error at '+': Illegal expression
    [line 7] Error at end: Expected ';' after value.
    [line 1] Error: Unterminated string.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:  # pragma: no cover
    from lumen.lumen_lexer import Token

logger = logging.getLogger(__name__)


class LumenError(Exception):
    """Base class for every diagnostic raised by Lumen.

    Attributes:
        line (int): 1-based source line the error is attributed to.
        token (Token | None): Offending token, if the stage has one.
        message (str): Human-readable description.
    """

    def __init__(self, line: int, message: str, token: Token | None = None) -> None:
        self.line = line
        self.token = token
        self.message = message
        super().__init__(str(self))

    @classmethod
    def at(cls, token: Token, message: str) -> LumenError:
        """Builds an error bound to ``token`` and its line."""
        return cls(token.line, message, token)

    @property
    def location(self) -> str:
        if self.token is None:
            return ""
        if self.token.type == "EOF":
            return " at end"
        return f" at '{self.token.lexeme}'"

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.location}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(line={self.line}, message={self.message!r})"


class ScanError(LumenError):
    """Raised for malformed source text."""


class ParseError(LumenError):
    """Raised when the token stream does not match the grammar."""


class LumenRuntimeError(LumenError):
    """Raised when evaluation cannot produce a value."""


class DiagnosticBatch(LumenError):
    """All errors collected by one scan or parse pass.

    The batch presents itself as its most recent error (``line``, ``token``
    and ``message`` are copied from it); the complete, ordered list is kept in
    ``errors``.
    """

    def __init__(self, errors: list[LumenError]) -> None:
        if not errors:
            raise ValueError("DiagnosticBatch needs at least one error")
        self.errors = list(errors)
        last = self.errors[-1]
        super().__init__(last.line, last.message, last.token)

    def __str__(self) -> str:
        return "\n".join(str(err) for err in self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class ErrorReporter:
    """Writes diagnostics to a stream and keeps track of them.

    Static (scan/parse) and runtime failures are tracked separately so a driver
    can choose its exit status without re-reading the output.

    Attributes:
        stream (TextIO | None): Destination for rendered diagnostics. ``None``
            means ``sys.stderr`` at the time of reporting.
        diagnostics (list[LumenError]): Every error reported since the last reset.
        had_error (bool): A lexical or parse error was reported.
        had_runtime_error (bool): A runtime error was reported.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.diagnostics: list[LumenError] = []
        self.had_error = False
        self.had_runtime_error = False

    def report(self, error: LumenError) -> None:
        if isinstance(error, DiagnosticBatch):
            for inner in error.errors:
                self.report(inner)
            return
        logger.debug("reporting %r", error)
        self.diagnostics.append(error)
        if isinstance(error, LumenRuntimeError):
            self.had_runtime_error = True
        else:
            self.had_error = True
        stream = self.stream if self.stream is not None else sys.stderr
        print(str(error), file=stream)

    def reset(self) -> None:
        self.diagnostics.clear()
        self.had_error = False
        self.had_runtime_error = False


__all__ = [
    "DiagnosticBatch",
    "ErrorReporter",
    "LumenError",
    "LumenRuntimeError",
    "ParseError",
    "ScanError",
]
