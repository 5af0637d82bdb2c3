"""
Expression Normalizer.

Turns raw expression text into a flat infix token sequence:

    "a * -(2 + 3)"  with a = 4
    ->  4 * ( 0 - ( 2 + 3 ) )

Variable names are first replaced by their values as text, giving a flat
character stream. A small state machine then assembles number literals,
collapses runs of ``+``/``-`` and checks that operators and parentheses sit
next to operands.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List

from ..config import integer_bounds
from ..errors import InvalidExpressionError
from ..scope import VariableScope
from .tokens import LEFT_PAREN, RIGHT_PAREN, Number, Operator, Token

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
ASCII_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class State(Enum):
    """Scanner states."""

    START = "start"  # an operand is expected next
    SIGN_RUN = "sign_run"
    NUMBER = "number"
    AFTER_OPERAND = "after_operand"


class Normalizer:
    """
    Normalizes expression text into infix tokens.

    Example:
        >>> scope = VariableScope()
        >>> scope.set("a", 5)
        >>> Normalizer(scope).normalize("--a + 3")
        [Number(value=5), Operator(symbol='+'), Number(value=3)]
        >>> Normalizer(scope).normalize("a3")
        [Number(value=53)]
    """

    def __init__(self, scope: VariableScope, int_bits: int = 64):
        self.scope = scope
        self.min_int, self.max_int = integer_bounds(int_bits)

    def normalize(self, text: str) -> List[Token]:
        """
        Normalize an expression.

        Raises:
            UnknownVariableError: A referenced variable is unbound.
            InvalidExpressionError: The expression is malformed.
        """
        flat = self.resolve_names(text)
        tokens = _TokenBuilder(self.min_int, self.max_int).build(flat)
        logger.debug("Normalized %r into %d tokens", text, len(tokens))
        return tokens

    def resolve_names(self, text: str) -> str:
        """
        Replace variable names with their values and drop whitespace.

        Values are spliced in as decimal text, so digits next to a name join
        the same literal (``a3`` with a = 5 is ``53``) and a negative value
        contributes its own ``-`` sign.

        Every name is resolved before any structural check, so an unbound
        variable is reported even in an otherwise malformed expression.
        """
        flat: List[str] = []
        name: List[str] = []

        for char in text:
            if char in ASCII_LETTERS:
                name.append(char)
                continue
            if name:
                flat.append(str(self.scope.get("".join(name))))
                name = []
            if char.isspace():
                continue
            flat.append(char)

        if name:
            flat.append(str(self.scope.get("".join(name))))

        return "".join(flat)


class _TokenBuilder:
    """Single-use state machine producing tokens from a flat character stream."""

    def __init__(self, min_int: int, max_int: int):
        self.min_int = min_int
        self.max_int = max_int
        self.tokens: List[Token] = []
        self.state = State.START
        self.digits: List[str] = []
        self.negate_literal = False
        self.plus_count = 0
        self.minus_count = 0
        self.run_is_binary = False
        # One flag per open parenthesis: True when the group was opened as 0 - ( ... )
        self.groups: List[bool] = []

    def build(self, flat: str) -> List[Token]:
        for char in flat:
            self._char(char)
        self._finish()
        return self.tokens

    def _char(self, char: str) -> None:
        if char in DIGITS:
            self._digit(char)
            return

        if self.state is State.NUMBER:
            self._close_number()

        if char in "+-":
            self._sign(char)
        elif char in "*/^":
            self._binary(char)
        elif char == "(":
            self._open_paren()
        elif char == ")":
            self._close_paren()
        else:
            raise InvalidExpressionError(f"Unexpected character {char!r}")

    def _digit(self, char: str) -> None:
        if self.state is State.NUMBER:
            self.digits.append(char)
            return
        if self.state is State.AFTER_OPERAND:
            raise InvalidExpressionError("Number directly after an operand")

        self.negate_literal = self._close_sign_run() if self.state is State.SIGN_RUN else False
        self.digits = [char]
        self.state = State.NUMBER

    def _sign(self, char: str) -> None:
        if self.state is State.SIGN_RUN:
            if (char == "+" and self.minus_count) or (char == "-" and self.plus_count):
                raise InvalidExpressionError("Mixed run of '+' and '-'")
        else:
            self.run_is_binary = self.state is State.AFTER_OPERAND
            self.plus_count = self.minus_count = 0
            self.state = State.SIGN_RUN

        if char == "+":
            self.plus_count += 1
        else:
            self.minus_count += 1

    def _binary(self, char: str) -> None:
        if self.state is not State.AFTER_OPERAND:
            raise InvalidExpressionError(f"Operator {char!r} without a left operand")
        self.tokens.append(Operator(char))
        self.state = State.START

    def _open_paren(self) -> None:
        if self.state is State.AFTER_OPERAND:
            raise InvalidExpressionError("'(' directly after an operand")

        negated = self._close_sign_run() if self.state is State.SIGN_RUN else False
        if negated:
            self.tokens.extend([LEFT_PAREN, Number(0), Operator("-"), LEFT_PAREN])
        else:
            self.tokens.append(LEFT_PAREN)
        self.groups.append(negated)
        self.state = State.START

    def _close_paren(self) -> None:
        if self.state is not State.AFTER_OPERAND:
            raise InvalidExpressionError("')' without a preceding operand")
        self.tokens.append(RIGHT_PAREN)
        # An unmatched ')' is left for the postfix converter to report.
        if self.groups and self.groups.pop():
            self.tokens.append(RIGHT_PAREN)

    def _close_sign_run(self) -> bool:
        """
        Close the pending sign run.

        A binary run emits its effective sign as an operator. A unary run emits
        nothing and returns True when the following operand must be negated.
        """
        sign = "-" if self.minus_count % 2 else "+"
        self.plus_count = self.minus_count = 0
        if self.run_is_binary:
            self.tokens.append(Operator(sign))
            return False
        return sign == "-"

    def _close_number(self) -> None:
        literal = "".join(self.digits)
        value = int(literal)
        if self.negate_literal:
            value = -value
        if not self.min_int <= value <= self.max_int:
            raise InvalidExpressionError(f"Literal {literal} is out of range")
        self.tokens.append(Number(value))
        self.digits = []
        self.negate_literal = False
        self.state = State.AFTER_OPERAND

    def _finish(self) -> None:
        if self.state is State.NUMBER:
            self._close_number()
        elif self.state is State.SIGN_RUN:
            raise InvalidExpressionError("Expression ends with a sign")
        elif self.state is State.START:
            raise InvalidExpressionError("Expression ends where an operand is expected")
