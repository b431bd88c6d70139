"""Tests for the SymPy evaluator adapter."""

import pytest
import sympy as sp

from implicalc_pkg.config import MAX_INPUT_LENGTH, SUPPORTED_FUNCTIONS
from implicalc_pkg.evaluator import (
    is_balanced,
    is_valid_function,
    parse_function,
    validate_input,
)
from implicalc_pkg.types import ParseError, ValidationError

x = sp.Symbol("x")


class TestValidFunctions:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "x^2",
            "2x",
            "E^x",
            "log10(x)",
            "xxxxx",
            "sin(x)",
            "xsin(x)",
            "sin(x)cos(x)",
            "x/0",
            "(x+1)(x-3)",
            "cos(xsin(x)x)",
            "(2x+1)x",
            "(2x+1)pi",
            "pi(2x+1)",
            "pipipipipipix",
            "e^sin(x)",
            "E^sin(x)",
            "e^x",
            "x**2",
        ],
    )
    def test_valid(self, text):
        assert is_valid_function(text)

    @pytest.mark.parametrize("func", SUPPORTED_FUNCTIONS)
    def test_supported_function_of_x(self, func):
        assert is_valid_function(f"{func}(x)")

    def test_empty_is_none(self):
        assert parse_function("") is None

    def test_implicit_multiplication(self):
        assert parse_function("2x") == 2 * x
        assert parse_function("xxxxx") == x**5
        assert parse_function("(x+1)(x-3)") == (x + 1) * (x - 3)

    def test_constants(self):
        assert parse_function("2pi") == 2 * sp.pi
        assert parse_function("e^x") == sp.exp(x)

    def test_logarithms(self):
        assert parse_function("ln(x)") == sp.log(x)
        assert parse_function("log2(x)") == sp.log(x, 2)
        assert parse_function("log10(x)") == sp.log(x, 10)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("round(5/2)", 3),
            ("round(-5/2)", -3),
            ("round(-2.5)", -3),
            ("round(-12/10)", -1),
            ("round(0)", 0),
            ("trunc(-3/2)", -1),
            ("fract(-3/2)", sp.Rational(-1, 2)),
            ("fract(7/4)", sp.Rational(3, 4)),
            ("signum(0)", 1),
            ("signum(-2)", -1),
            ("signum(3)", 1),
        ],
    )
    def test_rounding_functions(self, text, expected):
        assert parse_function(text) == expected

    def test_results_are_cached(self):
        assert parse_function("sin(x)cos(x)") is parse_function("sin(x)cos(x)")


class TestInvalidFunctions:
    @pytest.mark.parametrize(
        "text",
        ["a", "log222(x)", "abcdef", "log10(x", "x^a", "sin(cos(x)))", "0/0"],
    )
    def test_invalid(self, text):
        assert not is_valid_function(text)

    def test_unknown_variable(self):
        with pytest.raises(ParseError) as exc_info:
            parse_function("a")
        assert str(exc_info.value) == "invalid variable: a"
        assert exc_info.value.code == "INVALID_VARIABLE"

    def test_several_unknown_variables(self):
        with pytest.raises(ParseError) as exc_info:
            parse_function("x^a+b")
        assert str(exc_info.value) == "invalid variables: ['a', 'b']"

    def test_unknown_function(self):
        with pytest.raises(ParseError) as exc_info:
            parse_function("log222(x)")
        assert exc_info.value.code == "UNKNOWN_FUNCTION"
        assert "log222" in str(exc_info.value)

    def test_undefined(self):
        with pytest.raises(ParseError) as exc_info:
            parse_function("0/0")
        assert exc_info.value.code == "UNDEFINED"

    def test_syntax_error(self):
        with pytest.raises(ParseError) as exc_info:
            parse_function("x+")
        assert exc_info.value.code == "SYNTAX_ERROR"


class TestValidateInput:
    """Test rejection before anything reaches SymPy."""

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_input("x" * (MAX_INPUT_LENGTH + 1))
        assert exc_info.value.code == "TOO_LONG"

    @pytest.mark.parametrize("text", ["__import__('os')", "x; y", "x,x", "[x]"])
    def test_forbidden_chars(self, text):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(text)
        assert exc_info.value.code == "FORBIDDEN_CHARS"

    def test_attribute_access(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_input("x.func")
        assert exc_info.value.code == "FORBIDDEN_TOKEN"

    def test_decimal_point_allowed(self):
        validate_input("1.5x")
        assert is_valid_function("1.5x")

    @pytest.mark.parametrize("text", ["(x", "x)", "sin(cos(x)))"])
    def test_unbalanced(self, text):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(text)
        assert exc_info.value.code == "UNBALANCED_PARENS"


class TestIsBalanced:
    def test_balanced(self):
        assert is_balanced("(x)(x)") == (True, None)
        assert is_balanced("") == (True, None)

    def test_unclosed(self):
        assert is_balanced("(()") == (False, 0)

    def test_unopened(self):
        assert is_balanced("())") == (False, 2)
