"""Variable storage for the Lumen interpreter."""

from lumen.lumen_errors import LumenRuntimeError
from lumen.lumen_lexer import Token
from lumen.lumen_values import Value


class Environment:
    """A flat mapping from variable names to values.

    ``define`` is an upsert: declaring a name twice replaces the first binding
    without complaint.
    """

    def __init__(self) -> None:
        self.values: dict[str, Value] = {}

    def define(self, name: str, value: Value) -> None:
        self.values[name] = value

    def get(self, name: Token) -> Value:
        try:
            return self.values[name.lexeme]
        except KeyError:
            raise LumenRuntimeError.at(
                name, f"Undefined variable '{name.lexeme}'."
            ) from None

    def names(self) -> list[str]:
        return sorted(self.values)

    def snapshot(self) -> dict[str, Value]:
        return dict(self.values)

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Environment({len(self.values)} bindings)"


__all__ = ["Environment"]
