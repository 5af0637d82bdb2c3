"""
Infix to postfix conversion (shunting-yard).

Operators of equal precedence are resolved left to right, including ``^``.
"""

from __future__ import annotations

import logging
from typing import List

from ..errors import InvalidExpressionError
from .tokens import LeftParen, Number, Operator, RightParen, Token, format_tokens

logger = logging.getLogger(__name__)


class InfixToPostfix:
    """Converts infix token sequences to Reverse Polish order."""

    def convert(self, tokens: List[Token]) -> List[Token]:
        """
        Convert an infix sequence.

        Args:
            tokens: Infix tokens as produced by the normalizer.

        Returns:
            Postfix tokens without parentheses.

        Raises:
            InvalidExpressionError: On unbalanced parentheses.
        """
        output: List[Token] = []
        stack: List[Token] = []

        for token in tokens:
            if isinstance(token, Number):
                output.append(token)
            elif isinstance(token, LeftParen):
                stack.append(token)
            elif isinstance(token, RightParen):
                self._unwind_group(stack, output)
            elif isinstance(token, Operator):
                while (
                    stack
                    and isinstance(stack[-1], Operator)
                    and stack[-1].precedence >= token.precedence
                ):
                    output.append(stack.pop())
                stack.append(token)
            else:
                raise ValueError(f"Unexpected token in infix sequence: {token!r}")

        while stack:
            top = stack.pop()
            if isinstance(top, LeftParen):
                raise InvalidExpressionError("Unmatched '('")
            output.append(top)

        logger.debug("Postfix: %s", format_tokens(output))
        return output

    def _unwind_group(self, stack: List[Token], output: List[Token]) -> None:
        """Pop operators until the matching '(' and discard it."""
        while stack:
            top = stack.pop()
            if isinstance(top, LeftParen):
                return
            output.append(top)
        raise InvalidExpressionError("Unmatched ')'")
