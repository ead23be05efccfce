"""
Runtime value model for the Lumen language.

Every value the interpreter handles is one of four immutable scalars:

    Number(float)   IEEE-754 double
    Text(str)       string value
    Boolean(bool)   true / false
    Nil()           the absence of a value

``InvalidOperation`` is an internal sentinel. The evaluator produces it when an
operator is not defined for a pair of operands and turns it into a runtime
error before anything else can observe it.

Equality is structural per variant: ``Number(1.0) == Number(1.0)`` but
``Number(1.0) != Boolean(True)``.

Example:
    >>> display(Number(3.0))
    '3'
    >>> is_truthy(Number(0.0))
    True
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class Number:
    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Text:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Boolean:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Nil:
    def __str__(self) -> str:
        return "nil"


@dataclass(frozen=True)
class InvalidOperation:
    """Marker for an operator applied to operands it does not support."""

    def __str__(self) -> str:
        return "<invalid operation>"


Value = Union[Number, Text, Boolean, Nil]
"""Any user-visible Lumen value."""

NIL = Nil()
TRUE = Boolean(True)
FALSE = Boolean(False)
INVALID = InvalidOperation()


def format_number(value: float) -> str:
    """Renders a float the way Lumen prints numbers.

    Finite values use the shortest digits that round-trip, written out in
    positional notation (``1e-07`` -> ``0.0000001``, ``1e21`` ->
    ``1000000000000000000000``) with no ``.0`` on integral values. Non-finite
    values print as ``inf``, ``-inf`` and ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def display(value: Value) -> str:
    """Returns the text a ``print`` statement writes for ``value``."""
    return str(value)


def is_truthy(value: Value) -> bool:
    """``false`` and ``nil`` are falsey, every other value is truthy."""
    if isinstance(value, Nil):
        return False
    if isinstance(value, Boolean):
        return value.value
    return True


def compare(left: Value, right: Value) -> int | None:
    """Orders two values.

    Returns -1, 0 or 1 for ordered pairs and ``None`` for pairs that have no
    ordering. Only two numbers (neither NaN) and two nils are ordered.
    """
    if isinstance(left, Number) and isinstance(right, Number):
        if math.isnan(left.value) or math.isnan(right.value):
            return None
        return (left.value > right.value) - (left.value < right.value)
    if isinstance(left, Nil) and isinstance(right, Nil):
        return 0
    return None


__all__ = [
    "FALSE",
    "INVALID",
    "NIL",
    "TRUE",
    "Boolean",
    "InvalidOperation",
    "Nil",
    "Number",
    "Text",
    "Value",
    "compare",
    "display",
    "format_number",
    "is_truthy",
]
