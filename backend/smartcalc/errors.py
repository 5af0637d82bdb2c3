"""
Calculator error taxonomy.

Every stage of the expression pipeline raises one of these errors; the
session driver maps them to user-facing messages by ``kind``.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported by the calculator."""

    INVALID_EXPRESSION = "invalid_expression"
    UNKNOWN_VARIABLE = "unknown_variable"
    DIVISION_BY_ZERO = "division_by_zero"
    INTEGER_OVERFLOW = "integer_overflow"
    INVALID_IDENTIFIER = "invalid_identifier"
    INVALID_ASSIGNMENT = "invalid_assignment"


class CalculatorError(Exception):
    """Base class for all reportable calculator failures."""

    kind: ErrorKind

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.kind.value.replace("_", " "))
        self.detail = detail

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, detail={self.detail!r})"


class InvalidExpressionError(CalculatorError):
    kind = ErrorKind.INVALID_EXPRESSION


class UnknownVariableError(CalculatorError):
    kind = ErrorKind.UNKNOWN_VARIABLE

    def __init__(self, name: str):
        super().__init__(f"Unknown variable: {name}")
        self.name = name


class DivisionByZeroError(CalculatorError):
    kind = ErrorKind.DIVISION_BY_ZERO


class IntegerOverflowError(CalculatorError):
    kind = ErrorKind.INTEGER_OVERFLOW


class InvalidIdentifierError(CalculatorError):
    kind = ErrorKind.INVALID_IDENTIFIER


class InvalidAssignmentError(CalculatorError):
    kind = ErrorKind.INVALID_ASSIGNMENT
