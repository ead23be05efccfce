"""
Ties the Lumen stages together for one interactive or batch session.

A `Session` owns a single error reporter, environment and interpreter, so
variables defined by one `run` call are visible to the next. Each run scans
and parses the whole source first; evaluation only starts when both stages
were clean.

Example:
    >>> session = Session()
    >>> session.run("var x = 2;")
    <RunStatus.OK: 0>
    >>> session.run("print x * 3;")
    6
    <RunStatus.OK: 0>
"""

import enum
import logging
from typing import TextIO

from lumen.lumen_ast import Stmt
from lumen.lumen_config import Settings
from lumen.lumen_environment import Environment
from lumen.lumen_errors import ErrorReporter
from lumen.lumen_interpreter import Interpreter
from lumen.lumen_lexer import Lexer, Token
from lumen.lumen_parser import Parser

logger = logging.getLogger(__name__)


class RunStatus(enum.Enum):
    OK = 0
    STATIC_ERROR = 1
    RUNTIME_ERROR = 2


class Session:
    """One interpreter session.

    Attributes:
        settings (Settings): Limits in effect for this session.
        reporter (ErrorReporter): Diagnostic channel for every stage.
        environment (Environment): Bindings kept across runs.
        interpreter (Interpreter): Evaluator bound to `environment`.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.reporter = ErrorReporter(err)
        self.environment = Environment()
        self.interpreter = Interpreter(
            self.environment, self.reporter, out, self.settings.max_depth
        )

    def tokens(self, source: str) -> list[Token]:
        """Scans ``source``; lexical errors go to the reporter."""
        return Lexer(source, self.reporter).scan_tokens()

    def ast(self, source: str) -> list[Stmt] | None:
        """Scans and parses ``source``.

        Returns:
            list[Stmt] | None: The statements, or None if any scan or parse
            error was reported.
        """
        lexer = Lexer(source, self.reporter)
        tokens = lexer.scan_tokens()
        parser = Parser(tokens, self.reporter, self.settings.max_depth)
        statements = parser.parse()
        if lexer.errors or parser.errors:
            return None
        return statements

    def run(self, source: str) -> RunStatus:
        self.reporter.reset()
        self.interpreter.last_value = None
        statements = self.ast(source)
        if statements is None:
            logger.debug("static errors, skipping evaluation")
            return RunStatus.STATIC_ERROR
        if not self.interpreter.interpret(statements):
            return RunStatus.RUNTIME_ERROR
        return RunStatus.OK


__all__ = ["RunStatus", "Session"]
