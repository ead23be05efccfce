"""
Tree-walking evaluator for the Lumen language.

The `Interpreter` implements both visitor protocols from `lumen_ast`:
expressions evaluate to a `Value`, statements run for their effect.

Operator semantics are defined per pair of operand types:

    Number  x Number   + - * /  -> Number,  > >= < <= == !=  -> Boolean
    Text    x Text     +        -> Text,    == !=            -> Boolean
    Number  x Text     +        -> Text (both sides displayed and joined)
    (either order)     ==  -> false, != -> true
    Boolean x Boolean  == !=
    Nil     x Nil      == -> true, != -> false
    Nil     x other    == -> false, != -> true (either order)

Anything else is an "Illegal expression" runtime error on the operator's
line. Unary ``-`` negates numbers and yields nil for every other operand;
unary ``!`` negates truthiness.

Division follows IEEE-754, so dividing by zero gives ``inf``, ``-inf`` or
``NaN`` instead of failing.
"""

import logging
import math
import sys
from typing import TextIO

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
    walk,
)
from lumen.lumen_config import DEFAULT_MAX_DEPTH
from lumen.lumen_environment import Environment
from lumen.lumen_errors import ErrorReporter, LumenRuntimeError
from lumen.lumen_lexer import Token
from lumen.lumen_values import (
    FALSE,
    INVALID,
    NIL,
    TRUE,
    Boolean,
    InvalidOperation,
    Nil,
    Number,
    Text,
    Value,
    display,
    is_truthy,
)

logger = logging.getLogger(__name__)

ILLEGAL = "Illegal expression"
TOO_DEEP = "Expression too deeply nested."


def divide(left: float, right: float) -> float:
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _numbers(op: str, left: float, right: float) -> Value | InvalidOperation:
    if op == tk.PLUS:
        return Number(left + right)
    if op == tk.MINUS:
        return Number(left - right)
    if op == tk.STAR:
        return Number(left * right)
    if op == tk.SLASH:
        return Number(divide(left, right))
    if op == tk.GREATER:
        return Boolean(left > right)
    if op == tk.GREATER_EQUAL:
        return Boolean(left >= right)
    if op == tk.LESS:
        return Boolean(left < right)
    if op == tk.LESS_EQUAL:
        return Boolean(left <= right)
    if op == tk.EQUAL_EQUAL:
        return Boolean(left == right)
    if op == tk.BANG_EQUAL:
        return Boolean(left != right)
    return INVALID


def _equality_only(op: str, equal: bool) -> Value | InvalidOperation:
    if op == tk.EQUAL_EQUAL:
        return Boolean(equal)
    if op == tk.BANG_EQUAL:
        return Boolean(not equal)
    return INVALID


def apply_binary(op: str, left: Value, right: Value) -> Value | InvalidOperation:
    """Applies binary operator ``op`` (a token kind) to two values.

    Returns `INVALID` when the operator is not defined for the operand pair.
    """
    if isinstance(left, Number) and isinstance(right, Number):
        return _numbers(op, left.value, right.value)

    if isinstance(left, Text) and isinstance(right, Text):
        if op == tk.PLUS:
            return Text(left.value + right.value)
        return _equality_only(op, left.value == right.value)

    if isinstance(left, (Number, Text)) and isinstance(right, (Number, Text)):
        if op == tk.PLUS:
            return Text(display(left) + display(right))
        return _equality_only(op, False)

    if isinstance(left, Boolean) and isinstance(right, Boolean):
        return _equality_only(op, left.value == right.value)

    if isinstance(left, Nil) or isinstance(right, Nil):
        return _equality_only(op, isinstance(left, Nil) and isinstance(right, Nil))

    return INVALID


def apply_unary(op: str, right: Value) -> Value:
    if op == tk.MINUS:
        if isinstance(right, Number):
            return Number(-right.value)
        return NIL
    if op == tk.BANG:
        return FALSE if is_truthy(right) else TRUE
    raise ValueError(f"Unknown unary operator: {op}")


class Interpreter:
    """Evaluates Lumen statements and expressions.

    Attributes:
        environment (Environment): Variable bindings; shared across calls so a
            session keeps its variables.
        reporter (ErrorReporter): Receives runtime errors from `interpret`.
        out (TextIO | None): Where ``print`` writes. ``None`` means
            ``sys.stdout`` at the time of printing.
        max_depth (int): Deepest expression nesting evaluated.
        last_value (Value | None): Value of the last statement executed when it
            was an expression statement, otherwise None.
    """

    def __init__(
        self,
        environment: Environment | None = None,
        reporter: ErrorReporter | None = None,
        out: TextIO | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.environment = environment if environment is not None else Environment()
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.out = out
        self.max_depth = max_depth
        self.last_value: Value | None = None
        self._depth = 0

    def interpret(self, statements: list[Stmt]) -> bool:
        """Runs ``statements`` in order.

        A runtime error is reported and abandons only the statement it
        happened in; the remaining statements still run.

        Returns:
            bool: True if no statement failed.
        """
        ok = True
        for stmt in statements:
            try:
                self.execute(stmt)
            except LumenRuntimeError as e:
                self.reporter.report(e)
                ok = False
            except RecursionError:
                self._depth = 0
                self.reporter.report(self._too_deep(stmt))
                ok = False
        return ok

    def execute(self, stmt: Stmt) -> None:
        self.last_value = None
        stmt.accept(self)

    def evaluate(self, expr: Expr) -> Value:
        """Evaluates one expression.

        Only parentheses and prefix operators count toward `max_depth`, the same
        nesting the parser limits. Chains of binary operators are folded
        iteratively and may be any length.

        Raises:
            LumenRuntimeError: For illegal operands, undefined variables, or
                nesting deeper than `max_depth`.
        """
        if not isinstance(expr, (Grouping, Unary)):
            return expr.accept(self)
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise self._too_deep(expr)
            return expr.accept(self)
        finally:
            self._depth -= 1

    # Statements

    def visit_print_stmt(self, stmt: Print) -> None:
        value = self.evaluate(stmt.expression)
        out = self.out if self.out is not None else sys.stdout
        print(display(value), file=out)

    def visit_expression_stmt(self, stmt: Expression) -> None:
        self.last_value = self.evaluate(stmt.expression)

    def visit_var_stmt(self, stmt: Var) -> None:
        value: Value = NIL
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        logger.debug("define %s = %r", stmt.name.lexeme, value)
        self.environment.define(stmt.name.lexeme, value)

    # Expressions

    def visit_literal_expr(self, expr: Literal) -> Value:
        return expr.value if expr.value is not None else NIL

    def visit_grouping_expr(self, expr: Grouping) -> Value:
        return self.evaluate(expr.expression)

    def visit_unary_expr(self, expr: Unary) -> Value:
        right = self.evaluate(expr.right)
        return apply_unary(expr.operator.type, right)

    def visit_binary_expr(self, expr: Binary) -> Value:
        spine: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        left = self.evaluate(node)
        for binary in reversed(spine):
            right = self.evaluate(binary.right)
            result = apply_binary(binary.operator.type, left, right)
            if isinstance(result, InvalidOperation):
                raise LumenRuntimeError.at(binary.operator, ILLEGAL)
            left = result
        return left

    def visit_variable_expr(self, expr: Variable) -> Value:
        return self.environment.get(expr.name)

    def _too_deep(self, node: Expr | Stmt) -> LumenRuntimeError:
        token = _first_token(node)
        if token is None:
            return LumenRuntimeError(0, TOO_DEEP)
        return LumenRuntimeError(token.line, TOO_DEEP, token)


def _first_token(node: Expr | Stmt) -> Token | None:
    if isinstance(node, Var):
        return node.name
    if isinstance(node, (Print, Expression)):
        node = node.expression
    for expr in walk(node):
        if isinstance(expr, (Binary, Unary)):
            return expr.operator
        if isinstance(expr, Grouping) and expr.paren is not None:
            return expr.paren
        if isinstance(expr, Variable):
            return expr.name
    return None


__all__ = ["Interpreter", "apply_binary", "apply_unary", "divide"]
