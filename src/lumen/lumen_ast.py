"""
Defines the abstract syntax tree (AST) for the Lumen programming language.

Expression nodes:
    Binary(left, operator, right)
    Grouping(expression, paren)
    Literal(value)
    Unary(operator, right)
    Variable(name)

Statement nodes:
    Print(expression)
    Expression(expression)
    Var(name, initializer)

Nodes are immutable and hold plain references to their children, so one child
object may be shared by several parents. Node equality is identity: a node is
equal only to itself, never to a separately built node of the same shape.
Analyses that key caches or side tables by node rely on this.

Traversals implement ``ExprVisitor`` / ``StmtVisitor`` (one ``visit_*``
method per node class) and call ``node.accept(visitor)``.

Example:
    >>> from lumen.lumen_values import Number
    >>> one = Literal(Number(1.0))
    >>> one == one, one == Literal(Number(1.0))
    (True, False)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol, TypeVar, Union

from lumen.lumen_lexer import Token
from lumen.lumen_values import Value

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ExprVisitor(Protocol[T_co]):
    """Protocol for traversals over expression nodes."""

    def visit_binary_expr(self, expr: Binary) -> T_co: ...  # pragma: no cover

    def visit_grouping_expr(self, expr: Grouping) -> T_co: ...  # pragma: no cover

    def visit_literal_expr(self, expr: Literal) -> T_co: ...  # pragma: no cover

    def visit_unary_expr(self, expr: Unary) -> T_co: ...  # pragma: no cover

    def visit_variable_expr(self, expr: Variable) -> T_co: ...  # pragma: no cover


class StmtVisitor(Protocol[T_co]):
    """Protocol for traversals over statement nodes."""

    def visit_print_stmt(self, stmt: Print) -> T_co: ...  # pragma: no cover

    def visit_expression_stmt(self, stmt: Expression) -> T_co: ...  # pragma: no cover

    def visit_var_stmt(self, stmt: Var) -> T_co: ...  # pragma: no cover


@dataclass(frozen=True, eq=False)
class Binary:
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor[T]) -> T:
        return visitor.visit_binary_expr(self)


@dataclass(frozen=True, eq=False)
class Grouping:
    expression: Expr
    paren: Token | None = None

    def accept(self, visitor: ExprVisitor[T]) -> T:
        return visitor.visit_grouping_expr(self)


@dataclass(frozen=True, eq=False)
class Literal:
    value: Value | None

    def accept(self, visitor: ExprVisitor[T]) -> T:
        return visitor.visit_literal_expr(self)


@dataclass(frozen=True, eq=False)
class Unary:
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor[T]) -> T:
        return visitor.visit_unary_expr(self)


@dataclass(frozen=True, eq=False)
class Variable:
    name: Token

    def accept(self, visitor: ExprVisitor[T]) -> T:
        return visitor.visit_variable_expr(self)


Expr = Union[Binary, Grouping, Literal, Unary, Variable]


@dataclass(frozen=True, eq=False)
class Print:
    expression: Expr

    def accept(self, visitor: StmtVisitor[T]) -> T:
        return visitor.visit_print_stmt(self)


@dataclass(frozen=True, eq=False)
class Expression:
    expression: Expr

    def accept(self, visitor: StmtVisitor[T]) -> T:
        return visitor.visit_expression_stmt(self)


@dataclass(frozen=True, eq=False)
class Var:
    name: Token
    initializer: Expr | None = None

    def accept(self, visitor: StmtVisitor[T]) -> T:
        return visitor.visit_var_stmt(self)


Stmt = Union[Print, Expression, Var]


def children(expr: Expr) -> tuple[Expr, ...]:
    """Returns the direct sub-expressions of ``expr``, left to right."""
    if isinstance(expr, Binary):
        return (expr.left, expr.right)
    if isinstance(expr, Grouping):
        return (expr.expression,)
    if isinstance(expr, Unary):
        return (expr.right,)
    return ()


def walk(expr: Expr) -> Iterator[Expr]:
    """Yields ``expr`` and every expression below it, depth first.

    Iterative, so tree depth is not bounded by the recursion limit.
    """
    stack: list[Expr] = [expr]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(children(node)))


__all__ = [
    "Binary",
    "Expr",
    "ExprVisitor",
    "Expression",
    "Grouping",
    "Literal",
    "Print",
    "Stmt",
    "StmtVisitor",
    "Unary",
    "Var",
    "Variable",
    "children",
    "walk",
]
