"""
Expression engine for the calculator.

Provides normalization, infix-to-postfix conversion and postfix evaluation.
"""

from .tokens import Token, Number, Operator, LeftParen, RightParen, PRECEDENCE
from .normalizer import Normalizer
from .converter import InfixToPostfix
from .evaluator import PostfixEvaluator

__all__ = [
    "Token",
    "Number",
    "Operator",
    "LeftParen",
    "RightParen",
    "PRECEDENCE",
    "Normalizer",
    "InfixToPostfix",
    "PostfixEvaluator",
]
