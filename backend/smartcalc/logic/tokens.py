"""
Expression tokens.

Tokens are immutable; a sequence of them encodes the expression's structure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Union


OPERATOR_SYMBOLS = "+-*/^"

# Higher binds tighter; equal precedence resolves left to right.
PRECEDENCE: Dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
}


@dataclass(frozen=True)
class Number:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Operator:
    symbol: str

    def __post_init__(self) -> None:
        if self.symbol not in PRECEDENCE:
            raise ValueError(f"Unsupported operator: {self.symbol!r}")

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self.symbol]

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class LeftParen:
    def __str__(self) -> str:
        return "("


@dataclass(frozen=True)
class RightParen:
    def __str__(self) -> str:
        return ")"


Token = Union[Number, Operator, LeftParen, RightParen]

LEFT_PAREN = LeftParen()
RIGHT_PAREN = RightParen()


def format_tokens(tokens: List[Token]) -> str:
    """Render a token sequence as space-separated text, e.g. ``1 2 +``."""
    return " ".join(str(t) for t in tokens)
