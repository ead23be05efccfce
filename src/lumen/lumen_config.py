"""
Runtime settings for the Lumen interpreter.

Settings come from three places, later ones winning:

    1. Defaults defined here.
    2. Environment variables ``LUMEN_MAX_DEPTH`` and ``LUMEN_LOG_LEVEL``.
    3. Command-line flags (applied by ``lumen_cli`` through ``Settings.replace``).

Example:
    >>> Settings.from_env({"LUMEN_MAX_DEPTH": "50"}).max_depth
    50
"""

import dataclasses
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_MAX_DEPTH = 100
"""Deepest expression nesting the parser and evaluator accept."""

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Interpreter settings.

    Attributes:
        max_depth (int): Nesting limit for parsing and evaluating expressions.
        log_level (str): Name of the ``logging`` level the CLI configures.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        object.__setattr__(self, "log_level", self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Builds settings from ``LUMEN_*`` environment variables.

        Raises:
            ValueError: If a variable is present but malformed.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        if env.get("LUMEN_MAX_DEPTH"):
            try:
                overrides["max_depth"] = int(env["LUMEN_MAX_DEPTH"])
            except ValueError as e:
                raise ValueError(
                    f"LUMEN_MAX_DEPTH must be an integer, got {env['LUMEN_MAX_DEPTH']!r}"
                ) from e
        if env.get("LUMEN_LOG_LEVEL"):
            overrides["log_level"] = env["LUMEN_LOG_LEVEL"]
        return cls(**overrides)

    def replace(self, **changes: Any) -> "Settings":
        """Returns a copy with the non-``None`` ``changes`` applied."""
        return dataclasses.replace(
            self, **{k: v for k, v in changes.items() if v is not None}
        )

    @property
    def logging_level(self) -> int:
        return int(getattr(logging, self.log_level))


__all__ = ["DEFAULT_MAX_DEPTH", "Settings"]
