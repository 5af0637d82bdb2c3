"""
Calculator configuration.

Settings are plain pydantic models so they can be loaded from YAML files
and validated in one step.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator

from .errors import ErrorKind


SUPPORTED_INT_BITS = (8, 16, 32, 64)


def integer_bounds(int_bits: int) -> Tuple[int, int]:
    """Return the (min, max) values of a signed integer of ``int_bits`` bits."""
    limit = 1 << (int_bits - 1)
    return -limit, limit - 1


DEFAULT_HELP = (
    "The program calculates integer expressions with +, -, *, /, ^ "
    "and parentheses. Assign variables with name = value."
)


class ExponentMode(str, Enum):
    """How ``^`` is computed."""

    FLOAT = "float"  # floating-point power truncated toward zero
    INTEGER = "integer"  # exact integer power, negative exponents rejected


def _default_error_messages() -> Dict[ErrorKind, str]:
    return {
        ErrorKind.INVALID_EXPRESSION: "Invalid expression",
        ErrorKind.UNKNOWN_VARIABLE: "Unknown variable",
        ErrorKind.DIVISION_BY_ZERO: "Division by zero",
        ErrorKind.INTEGER_OVERFLOW: "Integer overflow",
        ErrorKind.INVALID_IDENTIFIER: "Invalid identifier",
        ErrorKind.INVALID_ASSIGNMENT: "Invalid assignment",
    }


class Messages(BaseModel):
    """User-facing strings printed by the session driver."""

    help: str = DEFAULT_HELP
    bye: str = "Bye!"
    unknown_command: str = "Unknown command"
    errors: Dict[ErrorKind, str] = Field(default_factory=_default_error_messages)

    @field_validator("errors")
    @classmethod
    def fill_missing_errors(cls, value: Dict[ErrorKind, str]) -> Dict[ErrorKind, str]:
        """Keep defaults for kinds the user did not override."""
        merged = _default_error_messages()
        merged.update(value)
        return merged

    def for_error(self, kind: ErrorKind) -> str:
        return self.errors[kind]


class CalculatorConfig(BaseModel):
    """Top-level calculator settings."""

    int_bits: int = 64
    exponent_mode: ExponentMode = ExponentMode.FLOAT
    prompt: str = ""
    messages: Messages = Field(default_factory=Messages)

    @field_validator("int_bits")
    @classmethod
    def validate_int_bits(cls, value: int) -> int:
        if value not in SUPPORTED_INT_BITS:
            raise ValueError(
                f"int_bits must be one of {', '.join(map(str, SUPPORTED_INT_BITS))}"
            )
        return value

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "CalculatorConfig":
        """Load configuration from YAML content."""
        data = yaml.safe_load(yaml_content) or {}
        if not isinstance(data, dict):
            raise ValueError("Calculator configuration must be a YAML mapping")
        return cls.model_validate(data.get("calculator", data))

    @classmethod
    def from_file(cls, path: Path) -> "CalculatorConfig":
        """Load configuration from a file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())


def load_config(path: Optional[Path] = None) -> CalculatorConfig:
    """Load configuration from ``path``, or return defaults when no path is given."""
    if path is None:
        return CalculatorConfig()
    return CalculatorConfig.from_file(Path(path))
