"""
Variable assignment statements.

Handles lines of the form ``name = 42`` or ``name = other``.
"""

from __future__ import annotations

import logging
import re
from typing import Tuple

from .config import integer_bounds
from .errors import InvalidAssignmentError, InvalidIdentifierError
from .scope import VariableScope

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z]+")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def is_assignment(line: str) -> bool:
    """Check whether a line is an assignment rather than an expression."""
    return "=" in line


def is_valid_identifier(name: str) -> bool:
    """Check that a name is nonempty and made of ASCII letters only."""
    return bool(IDENTIFIER_PATTERN.fullmatch(name))


def assign(line: str, scope: VariableScope, int_bits: int = 64) -> Tuple[str, int]:
    """
    Execute an assignment statement.

    The right-hand side is either an integer literal (optionally signed) or
    the name of an existing variable.

    Args:
        line: Statement text containing at least one ``=``.
        scope: Scope receiving the binding.
        int_bits: Integer width literals must fit in.

    Returns:
        Tuple of (name, value).

    Raises:
        InvalidIdentifierError: Left-hand side is not a valid name.
        InvalidAssignmentError: Right-hand side is neither a literal nor a name.
        UnknownVariableError: Right-hand side names an unbound variable.
    """
    lhs, rhs = (part.strip() for part in line.split("=", 1))

    if not is_valid_identifier(lhs):
        raise InvalidIdentifierError(f"Invalid identifier: {lhs!r}")

    if INTEGER_PATTERN.fullmatch(rhs):
        value = int(rhs)
        min_int, max_int = integer_bounds(int_bits)
        if not min_int <= value <= max_int:
            raise InvalidAssignmentError(f"Literal {rhs} is out of range")
    elif is_valid_identifier(rhs):
        value = scope.get(rhs)
    else:
        raise InvalidAssignmentError(f"Invalid assignment: {rhs!r}")

    scope.set(lhs, value)
    logger.debug("Assigned %s = %d", lhs, value)
    return lhs, value
