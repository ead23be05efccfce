"""
Lumen Language Parser

Parses Lumen tokens into statements and expression trees.

This module implements a recursive-descent parser. Each binary precedence
level is a method that parses one operand at the next tighter level and then
loops, folding same-level operators to the left.

Grammar
-------
    program     -> declaration* EOF
    declaration -> varDecl | statement
    varDecl     -> "var" IDENTIFIER ( "=" expression )? ";"
    statement   -> printStmt | exprStmt
    printStmt   -> "print" expression ";"
    exprStmt    -> expression ";"
    expression  -> equality
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | IDENTIFIER | "(" expression ")"

Parser Behavior
---------------
- A `ParseError` inside a declaration is reported, recorded, and followed by
  synchronization: tokens are discarded up to the next `;` or the next
  declaration/statement keyword, and parsing resumes there. One pass can
  therefore report every independent mistake.
- Expression nesting is bounded by `max_depth`; deeper input produces a
  `ParseError` instead of exhausting the Python stack.

Entry Points
------------
- `Parser.parse()`: Parse a full program, collecting errors in `errors`.
- `Parser.parse_expression()`: Parse a single expression (fails fast).
- `parse()` / `parse_expression()`: Module helpers that raise on failure.
"""

from __future__ import annotations

import logging

from lumen import lumen_constants as tk
from lumen.lumen_ast import (
    Binary,
    Expr,
    Expression,
    Grouping,
    Literal,
    Print,
    Stmt,
    Unary,
    Var,
    Variable,
)
from lumen.lumen_config import DEFAULT_MAX_DEPTH
from lumen.lumen_errors import DiagnosticBatch, ErrorReporter, ParseError
from lumen.lumen_lexer import Token

logger = logging.getLogger(__name__)

TOO_DEEP = "Expression too deeply nested."


class Parser:
    """
    Lumen Parser Class

    Transforms a token list (terminated by EOF) into statements or a single
    expression.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream.
    position : int
        Index of the current (not yet consumed) token.
    reporter : ErrorReporter | None
        Channel errors are reported to as they are recovered from.
    errors : list[ParseError]
        Every error recovered from during `parse()`.
    max_depth : int
        Deepest expression nesting accepted.

    Raises
    ------
    ParseError
        From `parse_expression()` and the individual grammar methods.
    """

    def __init__(
        self,
        tokens: list[Token],
        reporter: ErrorReporter | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if not tokens or tokens[-1].type != tk.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = list(tokens) + [Token.eof(line)]
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.reporter = reporter
        self.errors: list[ParseError] = []
        self.max_depth = max_depth
        self._depth = 0

    # Token cursor

    def current(self) -> Token:
        return self.tokens[self.position]

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def is_at_end(self) -> bool:
        return self.current().type == tk.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.position += 1
        return self.previous()

    def check(self, type_: str) -> bool:
        if self.is_at_end():
            return False
        return self.current().type == type_

    def match(self, *types: str) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def consume(self, type_: str, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        raise self.error(self.current(), message)

    def error(self, token: Token, message: str) -> ParseError:
        return ParseError(token.line, message, token)

    # Programs and statements

    def parse(self) -> list[Stmt]:
        """Parse a full program and return its top-level statements.

        Declarations that fail are left out of the result; their errors are in
        `errors` and have been passed to the reporter.
        """
        statements: list[Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        logger.debug(
            "parsed %d statements with %d errors", len(statements), len(self.errors)
        )
        return statements

    def declaration(self) -> Stmt | None:
        try:
            if self.match(tk.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as e:
            self.recover(e)
            return None
        except RecursionError:
            self.recover(self.error(self.current(), TOO_DEEP))
            return None

    def recover(self, error: ParseError) -> None:
        self.errors.append(error)
        if self.reporter is not None:
            self.reporter.report(error)
        self._depth = 0
        self.synchronize()

    def synchronize(self) -> None:
        """Discards tokens until a likely statement boundary."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type == tk.SEMICOLON:
                return
            if self.current().type in tk.synchronizing_keywords:
                return
            self.advance()

    def var_declaration(self) -> Stmt:
        name = self.consume(tk.IDENTIFIER, "Expected variable name.")
        initializer = None
        if self.match(tk.EQUAL):
            initializer = self.expression()
        self.consume(tk.SEMICOLON, "Expected ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(tk.PRINT):
            return self.print_statement()
        return self.expression_statement()

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(tk.SEMICOLON, "Expected ';' after value.")
        return Print(value)

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(tk.SEMICOLON, "Expected ';' after expression.")
        return Expression(expr)

    # Expressions

    def parse_expression(self) -> Expr:
        """Parse exactly one expression followed by EOF.

        Raises:
            ParseError: On the first grammar error or trailing tokens.
        """
        try:
            expr = self.expression()
        except RecursionError:
            raise self.error(self.current(), TOO_DEEP) from None
        if not self.is_at_end():
            raise self.error(self.current(), "Expected end of expression.")
        return expr

    def expression(self) -> Expr:
        self._enter()
        try:
            return self.equality()
        finally:
            self._depth -= 1

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(tk.BANG_EQUAL, tk.EQUAL_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(tk.GREATER, tk.GREATER_EQUAL, tk.LESS, tk.LESS_EQUAL):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(tk.MINUS, tk.PLUS):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(tk.SLASH, tk.STAR):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(tk.BANG, tk.MINUS):
            operator = self.previous()
            self._enter()
            try:
                right = self.unary()
            finally:
                self._depth -= 1
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(*tk.literal_tokens):
            return Literal(self.previous().literal)

        if self.match(tk.IDENTIFIER):
            return Variable(self.previous())

        if self.match(tk.LEFT_PAREN):
            paren = self.previous()
            expr = self.expression()
            self.consume(tk.RIGHT_PAREN, "Expected ')' after expression.")
            return Grouping(expr, paren)

        raise self.error(self.current(), "Expected expression.")

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self.max_depth:
            self._depth -= 1
            raise self.error(self.current(), TOO_DEEP)


def parse(
    tokens: list[Token],
    reporter: ErrorReporter | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Stmt]:
    """Parses a program.

    Raises:
        DiagnosticBatch: If any declaration failed to parse.
    """
    parser = Parser(tokens, reporter, max_depth)
    statements = parser.parse()
    if parser.errors:
        raise DiagnosticBatch(list(parser.errors))
    return statements


def parse_expression(
    tokens: list[Token], max_depth: int = DEFAULT_MAX_DEPTH
) -> Expr:
    """Parses a single expression (expression-only mode).

    Raises:
        ParseError: On the first grammar error.
    """
    return Parser(tokens, max_depth=max_depth).parse_expression()


__all__ = ["Parser", "parse", "parse_expression"]
