import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lumen.lumen_ast import (
    Binary,
    Expression,
    Grouping,
    Literal,
    Print,
    Unary,
    Var,
    Variable,
    children,
    walk,
)
from lumen.lumen_lexer import Token
from lumen.lumen_values import Number, Text

PLUS = Token("PLUS", "+", None, 1)
MINUS = Token("MINUS", "-", None, 1)
NAME = Token("IDENTIFIER", "x", None, 1)


class Recorder:
    """Visitor that records which method was dispatched to."""

    def visit_binary_expr(self, expr: Binary) -> str:
        return "binary"

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return "grouping"

    def visit_literal_expr(self, expr: Literal) -> str:
        return "literal"

    def visit_unary_expr(self, expr: Unary) -> str:
        return "unary"

    def visit_variable_expr(self, expr: Variable) -> str:
        return "variable"

    def visit_print_stmt(self, stmt: Print) -> str:
        return "print"

    def visit_expression_stmt(self, stmt: Expression) -> str:
        return "expression"

    def visit_var_stmt(self, stmt: Var) -> str:
        return "var"


def test_accept_dispatches_by_node_class() -> None:
    one = Literal(Number(1.0))
    nodes = [
        (Binary(one, PLUS, one), "binary"),
        (Grouping(one), "grouping"),
        (one, "literal"),
        (Unary(MINUS, one), "unary"),
        (Variable(NAME), "variable"),
        (Print(one), "print"),
        (Expression(one), "expression"),
        (Var(NAME, one), "var"),
    ]
    visitor = Recorder()
    assert [node.accept(visitor) for node, _ in nodes] == [name for _, name in nodes]


def test_visitor_receives_the_node_itself() -> None:
    class Identity:
        def visit_literal_expr(self, expr: Literal) -> Literal:
            return expr

    node = Literal(Text("x"))
    assert node.accept(Identity()) is node  # type: ignore[arg-type]


def test_equality_is_identity() -> None:
    a = Literal(Number(1.0))
    b = Literal(Number(1.0))
    assert a == a
    assert a != b
    assert Variable(NAME) != Variable(NAME)


@given(st.floats(allow_nan=False))  # type: ignore[misc]
def test_structurally_equal_literals_differ(value: float) -> None:
    assert Literal(Number(value)) != Literal(Number(value))


def test_nodes_usable_as_dict_keys_by_identity() -> None:
    a = Literal(Number(1.0))
    b = Literal(Number(1.0))
    cache = {a: "first", b: "second"}
    assert cache[a] == "first"
    assert cache[b] == "second"


def test_shared_child() -> None:
    shared = Literal(Number(2.0))
    left = Unary(MINUS, shared)
    tree = Binary(left, PLUS, shared)
    assert tree.right is shared
    assert left.right is shared
    assert [n for n in walk(tree)].count(shared) == 2


def test_nodes_are_immutable() -> None:
    node = Grouping(Literal(None))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.expression = Literal(None)  # type: ignore[misc]


def test_children_and_walk_order() -> None:
    one = Literal(Number(1.0))
    two = Literal(Number(2.0))
    group = Grouping(two)
    tree = Binary(one, PLUS, Unary(MINUS, group))
    assert children(tree)[0] is one
    assert children(one) == ()
    assert [type(n).__name__ for n in walk(tree)] == [
        "Binary",
        "Literal",
        "Unary",
        "Grouping",
        "Literal",
    ]


def test_walk_handles_deep_trees() -> None:
    node = Literal(Number(0.0))
    for _ in range(10_000):
        node = Grouping(node)
    assert sum(1 for _ in walk(node)) == 10_001


def test_var_initializer_defaults_to_none() -> None:
    assert Var(NAME).initializer is None
