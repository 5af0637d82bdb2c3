"""
Tests for the calculator session and the full expression pipeline.
"""

import logging

import pytest

from backend.smartcalc import Calculator, CalculatorConfig, ErrorKind
from backend.smartcalc.errors import (
    DivisionByZeroError,
    InvalidExpressionError,
    UnknownVariableError,
)
from backend.smartcalc.logic import InfixToPostfix, Normalizer, PostfixEvaluator
from backend.smartcalc.logic.tokens import LeftParen, Operator


def reference_evaluate(tokens, evaluator):
    """Evaluate an infix sequence directly by precedence climbing."""
    pos = 0

    def operand():
        nonlocal pos
        token = tokens[pos]
        pos += 1
        if isinstance(token, LeftParen):
            value = expression(1)
            pos += 1  # closing paren
            return value
        return token.value

    def expression(min_precedence):
        nonlocal pos
        left = operand()
        while (
            pos < len(tokens)
            and isinstance(tokens[pos], Operator)
            and tokens[pos].precedence >= min_precedence
        ):
            op = tokens[pos]
            pos += 1
            right = expression(op.precedence + 1)
            left = evaluator.apply(op.symbol, left, right)
        return left

    return expression(1)


@pytest.fixture
def calculator():
    return Calculator()


class TestEvaluate:
    """Tests for Calculator.evaluate."""

    @pytest.mark.parametrize("expression,expected", [
        ("1 + 2 * 3", 7),
        ("(1 + 2) * 3", 9),
        ("2 ^ 3 ^ 2", 64),
        ("10 / 3", 3),
        ("--5", 5),
        ("---5", -5),
        ("8 - 3 - 2", 3),
        ("2 - -3", 5),
        ("2 --- 3", -1),
        ("3 + 8 * ((4 + 3) * 2 + 1) - 6 / (2 + 1)", 121),
        ("-(2 + 3) ^ 2", 25),
        ("-2 ^ 2", 4),
        ("2 ^ -1", 0),
        ("-10 / 4", -2),
        ("  42  ", 42),
        ("(((7)))", 7),
    ])
    def test_expressions(self, calculator, expression, expected):
        """Test end-to-end evaluation."""
        assert calculator.evaluate(expression) == expected

    def test_variables(self, calculator):
        """Test bound variables take part in expressions."""
        calculator.execute("a = 5")
        assert calculator.evaluate("a + 3") == 8
        with pytest.raises(UnknownVariableError):
            calculator.evaluate("b + 1")

    @pytest.mark.parametrize("expression,expected", [
        ("a3", 53),
        ("5 a", 55),
        ("a a", 55),
        ("2 n", -3),
        ("a3 - n", 58),
    ])
    def test_values_join_the_character_stream(self, calculator, expression, expected):
        """Test variable values are spliced into the text before scanning."""
        calculator.execute("a = 5")
        calculator.execute("n = -5")
        assert calculator.evaluate(expression) == expected

    def test_division_by_zero(self, calculator):
        """Test '/' by zero is its own failure kind."""
        with pytest.raises(DivisionByZeroError):
            calculator.evaluate("5 / 0")

    @pytest.mark.parametrize("expression", ["1 + ", "1 + (2", "1 + 2)", "(1 + 2))"])
    def test_invalid(self, calculator, expression):
        """Test trailing operators and unbalanced parentheses."""
        with pytest.raises(InvalidExpressionError):
            calculator.evaluate(expression)

    def test_idempotent(self, calculator):
        """Test repeated evaluation with an unchanged scope."""
        calculator.execute("x = 12")
        first = calculator.evaluate("x * (x - 2) / 3")
        assert calculator.evaluate("x * (x - 2) / 3") == first == 40

    def test_integer_exponent_mode(self):
        """Test configured exponent mode reaches the evaluator."""
        calculator = Calculator(CalculatorConfig(exponent_mode="integer"))
        with pytest.raises(InvalidExpressionError):
            calculator.evaluate("2 ^ -1")


class TestRoundTrip:
    """Tests that postfix evaluation matches direct infix evaluation."""

    @pytest.mark.parametrize("expression", [
        "1 + 2 * 3",
        "(1 + 2) * 3",
        "2 ^ 3 ^ 2",
        "8 - 3 - 2",
        "100 / 7 / 2",
        "2 * (3 + 4) ^ 2 - 10 / 3",
        "-(4 - 6) * 3",
        "a * -b + 12 / (a - 1)",
        "a ^ b - b ^ a * (a - b)",
    ])
    def test_matches_reference(self, expression):
        """Test shunting-yard plus stack evaluation."""
        calculator = Calculator()
        calculator.execute("a = 5")
        calculator.execute("b = 3")
        infix = Normalizer(calculator.scope).normalize(expression)
        evaluator = PostfixEvaluator()
        expected = reference_evaluate(infix, evaluator)
        assert evaluator.evaluate(InfixToPostfix().convert(infix)) == expected
        assert calculator.evaluate(expression) == expected


class TestExecute:
    """Tests for Calculator.execute line handling."""

    def test_empty_line(self, calculator):
        """Test blank lines produce no output."""
        response = calculator.execute("   ")
        assert response.output is None
        assert response.exit is False

    def test_help(self, calculator):
        """Test /help prints the help text."""
        response = calculator.execute("/help")
        assert response.output == calculator.config.messages.help

    def test_exit(self, calculator):
        """Test /exit ends the session."""
        response = calculator.execute("/exit")
        assert response.output == "Bye!"
        assert response.exit is True

    def test_unknown_command(self, calculator):
        """Test unrecognized commands."""
        assert calculator.execute("/go").output == "Unknown command"

    def test_expression_output(self, calculator):
        """Test results are printed as integers."""
        response = calculator.execute("  -3 * 4 ")
        assert response.output == "-12"
        assert response.ok

    def test_assignment_is_silent(self, calculator):
        """Test successful assignments print nothing."""
        response = calculator.execute("n = 9")
        assert response.output is None
        assert calculator.execute("n").output == "9"

    @pytest.mark.parametrize("line,message,kind", [
        ("1 +", "Invalid expression", ErrorKind.INVALID_EXPRESSION),
        ("q * 2", "Unknown variable", ErrorKind.UNKNOWN_VARIABLE),
        ("5 / 0", "Division by zero", ErrorKind.DIVISION_BY_ZERO),
        ("2 ^ 100", "Integer overflow", ErrorKind.INTEGER_OVERFLOW),
        ("a1 = 8", "Invalid identifier", ErrorKind.INVALID_IDENTIFIER),
        ("a = 7 = 8", "Invalid assignment", ErrorKind.INVALID_ASSIGNMENT),
        ("a = q", "Unknown variable", ErrorKind.UNKNOWN_VARIABLE),
    ])
    def test_error_messages(self, calculator, line, message, kind):
        """Test each failure kind maps to its message."""
        response = calculator.execute(line)
        assert response.output == message
        assert response.error is kind
        assert not response.ok
        assert response.exit is False

    def test_assignment_logs_scope(self, calculator, caplog):
        """Test bindings are logged at debug level after an assignment."""
        with caplog.at_level(logging.DEBUG, logger="backend.smartcalc.calculator"):
            calculator.execute("k = 4")
        assert "{'k': 4}" in caplog.text

    def test_session_continues_after_error(self, calculator):
        """Test failures do not end the session."""
        calculator.execute("5 / 0")
        calculator.execute("x = 1")
        assert calculator.execute("x + 1").output == "2"

    def test_custom_messages(self):
        """Test messages come from the configuration."""
        config = CalculatorConfig.from_yaml(
            "messages:\n  errors:\n    invalid_expression: Nope\n"
        )
        calculator = Calculator(config)
        assert calculator.execute("*").output == "Nope"
        assert calculator.execute("5 / 0").output == "Division by zero"
