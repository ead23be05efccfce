"""
Renders Lumen syntax trees as fully parenthesized prefix text.

Example:
    >>> from lumen.lumen_lexer import scan
    >>> from lumen.lumen_parser import parse_expression
    >>> AstPrinter().print(parse_expression(scan("-1 + (2 * x)")))
    '(+ (- 1) (group (* 2 x)))'
"""

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
from lumen.lumen_values import display


class AstPrinter:
    """Expression and statement visitor producing debug text."""

    def print(self, expr: Expr) -> str:
        return expr.accept(self)

    def print_stmt(self, stmt: Stmt) -> str:
        return stmt.accept(self)

    def parenthesize(self, name: str, *exprs: Expr) -> str:
        parts = [name] + [expr.accept(self) for expr in exprs]
        return f"({' '.join(parts)})"

    def visit_binary_expr(self, expr: Binary) -> str:
        # Left-folded chains can be arbitrarily long; render the spine in a loop.
        spine: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        text = node.accept(self)
        for binary in reversed(spine):
            text = f"({binary.operator.lexeme} {text} {binary.right.accept(self)})"
        return text

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self.parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr: Literal) -> str:
        if expr.value is None:
            return "nil"
        return display(expr.value)

    def visit_unary_expr(self, expr: Unary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_variable_expr(self, expr: Variable) -> str:
        return expr.name.lexeme

    def visit_print_stmt(self, stmt: Print) -> str:
        return self.parenthesize("print", stmt.expression)

    def visit_expression_stmt(self, stmt: Expression) -> str:
        return self.parenthesize(";", stmt.expression)

    def visit_var_stmt(self, stmt: Var) -> str:
        if stmt.initializer is None:
            return f"(var {stmt.name.lexeme})"
        return self.parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)


__all__ = ["AstPrinter"]
