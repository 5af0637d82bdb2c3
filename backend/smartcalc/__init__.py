"""
SmartCalc: integer expression calculator with variables.

This package provides the expression pipeline (normalizer, infix-to-postfix
converter, postfix evaluator), the variable scope and an interactive
session driver.
"""

__version__ = "1.0.0"

from .errors import (
    ErrorKind,
    CalculatorError,
    InvalidExpressionError,
    UnknownVariableError,
    DivisionByZeroError,
    IntegerOverflowError,
    InvalidIdentifierError,
    InvalidAssignmentError,
)
from .scope import VariableScope
from .config import CalculatorConfig, ExponentMode, Messages
from .calculator import Calculator, Response

__all__ = [
    "ErrorKind",
    "CalculatorError",
    "InvalidExpressionError",
    "UnknownVariableError",
    "DivisionByZeroError",
    "IntegerOverflowError",
    "InvalidIdentifierError",
    "InvalidAssignmentError",
    "VariableScope",
    "CalculatorConfig",
    "ExponentMode",
    "Messages",
    "Calculator",
    "Response",
]
