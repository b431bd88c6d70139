"""SymPy adapter for processed function strings.

This module handles:
- Input sanitization before anything reaches SymPy
- Conversion of implicit multiplication via the splitter
- Parsing with a whitelisted namespace of the supported functions
- Rejecting unknown functions, variables other than x, and undefined results
"""

from __future__ import annotations

from functools import lru_cache
from tokenize import TokenError

import sympy as sp
from sympy import parse_expr
from sympy.core.function import AppliedUndef

from .config import (
    ALLOWED_CHARS_REGEX,
    ALLOWED_SYMPY_NAMES,
    ALLOWED_VARIABLE_NAMES,
    ATTRIBUTE_ACCESS_REGEX,
    CACHE_SIZE_PARSE,
    CLOSE_PAREN,
    MAX_INPUT_LENGTH,
    OPEN_PAREN,
    SYMPY_GLOBALS,
    TRANSFORMATIONS,
)
from .logging_config import get_logger
from .splitter import process_func_str
from .types import ParseError, ValidationError

logger = get_logger("evaluator")


def is_balanced(text: str) -> tuple[bool, int | None]:
    """Check if parentheses are balanced. Returns (is_balanced, error_position)."""
    stack: list[int] = []
    for i, char in enumerate(text):
        if char == OPEN_PAREN:
            stack.append(i)
        elif char == CLOSE_PAREN:
            if not stack:
                return False, i
            stack.pop()
    if stack:
        return False, stack[0]
    return True, None


def validate_input(text: str) -> None:
    """Reject input that must not be handed to SymPy.

    Raises:
        ValidationError: If input is too long, contains characters outside
                        the expression alphabet, attribute access, or has
                        unbalanced parentheses
    """
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    if not ALLOWED_CHARS_REGEX.match(text):
        logger.warning(
            "Blocked input containing disallowed characters (length %d)", len(text)
        )
        raise ValidationError("Input contains disallowed characters", "FORBIDDEN_CHARS")
    if ATTRIBUTE_ACCESS_REGEX.search(text):
        logger.warning("Blocked input containing attribute access")
        raise ValidationError("Attribute access is not allowed", "FORBIDDEN_TOKEN")

    balanced, error_pos = is_balanced(text)
    if not balanced:
        raise ValidationError(
            f"Mismatched or unbalanced parentheses at position {error_pos}",
            "UNBALANCED_PARENS",
        )


def _check_variables(expr: sp.Basic) -> None:
    names = sorted(
        str(symbol)
        for symbol in expr.free_symbols
        if str(symbol) not in ALLOWED_VARIABLE_NAMES
    )
    if len(names) == 1:
        raise ParseError(f"invalid variable: {names[0]}", "INVALID_VARIABLE")
    if names:
        raise ParseError(f"invalid variables: {names}", "INVALID_VARIABLE")


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse_function(text: str) -> sp.Basic | None:
    """Parse a raw function string of ``x`` into a SymPy expression.

    Args:
        text: Function as typed by the user (e.g., "2sin(x)")

    Returns:
        The parsed expression, or None for empty input

    Raises:
        ValidationError: If the input is rejected before parsing
        ParseError: If SymPy cannot parse it, it calls an unknown function,
                    uses a variable other than x, or is undefined (0/0)
    """
    if not text:
        return None

    validate_input(text)
    processed = process_func_str(text)

    try:
        expr = parse_expr(
            processed,
            local_dict=dict(ALLOWED_SYMPY_NAMES),
            global_dict=dict(SYMPY_GLOBALS),
            transformations=TRANSFORMATIONS,
            evaluate=True,
        )
    except (SyntaxError, TokenError, TypeError, ValueError, NameError) as e:
        raise ParseError(f"Could not parse {processed!r}: {e}", "SYNTAX_ERROR") from e

    if not isinstance(expr, sp.Basic):
        raise ParseError(f"{processed!r} is not an expression", "NOT_AN_EXPRESSION")

    unknown = sorted(str(func.func) for func in expr.atoms(AppliedUndef))
    if unknown:
        raise ParseError(f"unknown function: {', '.join(unknown)}", "UNKNOWN_FUNCTION")

    _check_variables(expr)

    if expr.has(sp.nan):
        raise ParseError(f"{processed!r} is undefined", "UNDEFINED")

    return expr


def is_valid_function(text: str) -> bool:
    """Return True if ``text`` parses to a valid function of ``x``."""
    try:
        parse_function(text)
    except (ValidationError, ParseError) as e:
        logger.debug("Rejected %r: %s", text, e)
        return False
    return True
