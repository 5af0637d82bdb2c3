"""
Calculator session.

Ties the expression pipeline, the variable scope and the session commands
together. One ``Calculator`` is one interactive session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .assignment import assign, is_assignment
from .config import CalculatorConfig
from .errors import CalculatorError, ErrorKind
from .logic import InfixToPostfix, Normalizer, PostfixEvaluator
from .logic.tokens import format_tokens
from .scope import VariableScope

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"
HELP_COMMAND = "/help"
EXIT_COMMAND = "/exit"


@dataclass
class Response:
    """Outcome of executing one input line."""

    output: Optional[str] = None
    exit: bool = False
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Calculator:
    """
    Interactive integer calculator.

    Lines are handled one at a time; the scope is only mutated by
    assignments, between evaluations.
    """

    def __init__(
        self,
        config: Optional[CalculatorConfig] = None,
        scope: Optional[VariableScope] = None,
    ):
        self.config = config or CalculatorConfig()
        self.scope = scope if scope is not None else VariableScope()
        self.converter = InfixToPostfix()
        self.evaluator = PostfixEvaluator(
            int_bits=self.config.int_bits,
            exponent_mode=self.config.exponent_mode,
        )

    def evaluate(self, expression: str) -> int:
        """
        Evaluate an expression against the current scope.

        Raises:
            CalculatorError: Any pipeline failure; later stages do not run.
        """
        normalizer = Normalizer(self.scope, int_bits=self.config.int_bits)
        infix = normalizer.normalize(expression)
        logger.debug("Infix: %s", format_tokens(infix))
        postfix = self.converter.convert(infix)
        result = self.evaluator.evaluate(postfix)
        logger.debug("Result of %r: %d", expression, result)
        return result

    def execute(self, line: str) -> Response:
        """Handle one raw input line."""
        line = line.strip()
        messages = self.config.messages

        if not line:
            return Response()
        if line == HELP_COMMAND:
            return Response(output=messages.help)
        if line == EXIT_COMMAND:
            return Response(output=messages.bye, exit=True)
        if line.startswith(COMMAND_PREFIX):
            return Response(output=messages.unknown_command)

        try:
            if is_assignment(line):
                assign(line, self.scope, int_bits=self.config.int_bits)
                logger.debug(
                    "Scope holds %d variable(s): %s", len(self.scope), self.scope.snapshot()
                )
                return Response()
            return Response(output=str(self.evaluate(line)))
        except CalculatorError as e:
            logger.debug("Line %r failed: %s (%s)", line, e.kind.value, e)
            return Response(output=messages.for_error(e.kind), error=e.kind)
