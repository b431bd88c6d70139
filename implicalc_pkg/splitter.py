"""Splitting of expressions into implicitly multiplied terms.

This module handles:
- Boundary detection between adjacent characters (``2x``, ``)(``, ``xsin(x)``)
- Input spellings that would confuse the classifier (``pi``, ``**``, ``exp``)
- Joining split terms with explicit ``*`` for the evaluator
"""

from __future__ import annotations

from typing import Sequence

from .classifier import CharClass, classify, classify_after
from .config import (
    EXP_PLACEHOLDER,
    MULTIPLICATION_MARKER,
    OPEN_PAREN,
    SPLIT_SUBSTITUTIONS,
)
from .types import SplitPolicy


def is_split_boundary(
    char: str, curr: CharClass, prev: CharClass, policy: SplitPolicy
) -> bool:
    """Decide whether a new term starts at ``char``.

    The checks are ordered and the first one that applies decides the
    outcome, even when it answers False.
    """
    if char == MULTIPLICATION_MARKER or (
        policy is SplitPolicy.TERM and prev.is_open_paren
    ):
        return True
    if prev.is_close_paren:
        # `)x`, `)2`, `)(`
        return (
            char == OPEN_PAREN
            or (curr.is_letter and not curr.is_unmasked_variable)
            or curr.is_unmasked_variable
            or curr.is_unmasked_digit
        )
    if char == OPEN_PAREN:
        # `x(` and `2(`, but not `log(`
        return (
            prev.is_unmasked_variable or prev.is_unmasked_digit
        ) and not prev.is_letter
    if prev.is_unmasked_digit:
        # `2x`, `2sin(x)`
        return curr.is_unmasked_variable or curr.is_letter
    if curr.is_unmasked_variable or curr.is_letter:
        # `e2`, `xx`
        return (
            prev.is_unmasked_digit
            or (prev.is_unmasked_variable and curr.is_unmasked_variable)
            or prev.is_unmasked_variable
        )
    if (curr.is_unmasked_digit or curr.is_letter or curr.is_unmasked_variable) and (
        prev.is_unmasked_digit or prev.is_letter
    ):
        return True
    # `x2`
    return curr.is_unmasked_digit and prev.is_unmasked_variable


def split_function_chars(
    chars: Sequence[str], policy: SplitPolicy = SplitPolicy.MULTIPLICATION
) -> list[str]:
    """Split a sequence of characters into terms according to ``policy``.

    The multiplication marker is consumed wherever it opens a new term and is
    never part of the output.
    """
    if len(chars) == 0:
        return []
    if len(chars) == 1:
        return [chars[0]]

    terms: list[list[str]] = [[chars[0]]]
    prev = classify(chars[0])

    for char in chars[1:]:
        curr = classify_after(char, prev)

        if is_split_boundary(char, curr, prev, policy):
            terms.append([])

        if char != MULTIPLICATION_MARKER:
            terms[-1].append(char)

        prev = curr

    return ["".join(term) for term in terms]


def _substitute(text: str) -> str:
    for spelling, replacement in SPLIT_SUBSTITUTIONS:
        text = text.replace(spelling, replacement)
    return text


def split_function(
    text: str, policy: SplitPolicy = SplitPolicy.MULTIPLICATION
) -> list[str]:
    """Split ``text`` into terms.

    ``pi`` is rewritten to ``π`` and ``**`` to ``^`` before splitting. ``exp``
    is hidden behind a placeholder so its letters are not read as the
    variables ``e`` and ``x``, then restored in every returned term.

    Example:
        >>> split_function("2sin(x)cos(x)")
        ['2', 'sin(x)', 'cos(x)']
    """
    terms = split_function_chars(list(_substitute(text)), policy)
    return [term.replace(EXP_PLACEHOLDER, "exp") for term in terms]


def process_func_str(text: str) -> str:
    """Insert explicit multiplication signs where they are implied.

    Args:
        text: Raw function string (e.g., "2x", "(x+1)(x-3)")

    Returns:
        String ready for the evaluator (e.g., "2*x", "(x+1)*(x-3)")
    """
    if not text:
        return ""
    return MULTIPLICATION_MARKER.join(split_function(text))


def get_last_term(text: str) -> str:
    """Return the last term of ``text`` under the TERM policy.

    This is the piece of input the user is currently editing, e.g. ``cos`` for
    ``sin(cos`` and ``x)`` for ``cos(x)``.
    """
    terms = split_function(text, SplitPolicy.TERM)
    return terms[-1] if terms else ""
