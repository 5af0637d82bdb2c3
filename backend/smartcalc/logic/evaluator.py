"""
Postfix Evaluator.

Evaluates Reverse Polish token sequences with a single value stack.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Union

from ..config import ExponentMode, integer_bounds
from ..errors import DivisionByZeroError, IntegerOverflowError, InvalidExpressionError
from .tokens import Number, Operator, Token

logger = logging.getLogger(__name__)


class PostfixEvaluator:
    """
    Stack machine for postfix integer expressions.

    Supports:
    - ``+``, ``-``, ``*``: exact integer arithmetic
    - ``/``: division truncating toward zero
    - ``^``: power, see ``ExponentMode``

    Every result must fit the configured signed integer width.
    """

    def __init__(
        self,
        int_bits: int = 64,
        exponent_mode: Union[ExponentMode, str] = ExponentMode.FLOAT,
    ):
        self.int_bits = int_bits
        self.min_int, self.max_int = integer_bounds(int_bits)
        self.exponent_mode = ExponentMode(exponent_mode)
        self._operations: Dict[str, Callable[[int, int], int]] = {
            "+": lambda a, b: a + b,
            "-": lambda a, b: a - b,
            "*": lambda a, b: a * b,
            "/": self._divide,
            "^": self._power,
        }

    def evaluate(self, tokens: List[Token]) -> int:
        """
        Evaluate a postfix sequence.

        Raises:
            InvalidExpressionError: Missing operands or leftover values.
            DivisionByZeroError: Division by zero.
            IntegerOverflowError: A result does not fit the integer width.
        """
        stack: List[int] = []

        for token in tokens:
            if isinstance(token, Number):
                stack.append(token.value)
            elif isinstance(token, Operator):
                right = self._pop(stack)
                left = self._pop(stack)
                stack.append(self.apply(token.symbol, left, right))
            else:
                raise ValueError(f"Unexpected token in postfix sequence: {token!r}")

        if len(stack) != 1:
            raise InvalidExpressionError(
                f"Expected exactly one value after evaluation, found {len(stack)}"
            )
        return stack[0]

    def apply(self, symbol: str, left: int, right: int) -> int:
        """Apply a binary operator and range-check the result."""
        try:
            operation = self._operations[symbol]
        except KeyError:
            raise ValueError(f"Unsupported operator: {symbol!r}") from None

        result = operation(left, right)
        if not self.min_int <= result <= self.max_int:
            raise IntegerOverflowError(
                f"{left} {symbol} {right} does not fit in {self.int_bits} bits"
            )
        return result

    @staticmethod
    def _pop(stack: List[int]) -> int:
        if not stack:
            raise InvalidExpressionError("Operator is missing an operand")
        return stack.pop()

    @staticmethod
    def _divide(left: int, right: int) -> int:
        if right == 0:
            raise DivisionByZeroError(f"{left} / 0")
        quotient = abs(left) // abs(right)
        return -quotient if (left < 0) != (right < 0) else quotient

    def _power(self, base: int, exponent: int) -> int:
        if self.exponent_mode is ExponentMode.INTEGER:
            return self._integer_power(base, exponent)

        # Float power truncated toward zero: negative exponents yield 0
        # unless the base is 1 or -1.
        if base == 0 and exponent < 0:
            raise DivisionByZeroError(f"0 ^ {exponent}")
        try:
            result = math.pow(base, exponent)
        except OverflowError:
            raise IntegerOverflowError(f"{base} ^ {exponent} is too large") from None
        return int(result)

    def _integer_power(self, base: int, exponent: int) -> int:
        if exponent < 0:
            raise InvalidExpressionError(f"Negative exponent {exponent}")
        if abs(base) > 1 and exponent >= self.int_bits:
            raise IntegerOverflowError(f"{base} ^ {exponent} is too large")
        return base ** exponent
