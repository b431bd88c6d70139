"""Character classification for the expression splitter.

Each character of an expression is described by a ``CharClass``. Two masking
flags are carried from one character to the next so that digits and variable
symbols inside a longer identifier (the ``2`` in ``log2``, the ``e`` in
``ceil``) are not treated as standalone literals. Only the immediately
preceding character is ever consulted.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .config import CLOSE_PAREN, OPEN_PAREN, VALID_VARIABLES


def is_variable(char: str) -> bool:
    """Case-insensitive check for a character that represents a variable or constant."""
    if char.isascii():
        char = char.lower()
    return char in VALID_VARIABLES


def _is_ascii_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def _is_ascii_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


@dataclass(frozen=True)
class CharClass:
    """Classification of a single character plus its masking state."""

    is_close_paren: bool = False
    is_open_paren: bool = False
    is_digit: bool = False
    is_letter: bool = False
    is_known_variable: bool = False
    masked_digit: bool = False
    masked_variable: bool = False

    @property
    def is_unmasked_variable(self) -> bool:
        return self.is_known_variable and not self.masked_variable

    @property
    def is_unmasked_digit(self) -> bool:
        return self.is_digit and not self.masked_digit


def classify(
    char: str, prev_masked_digit: bool = False, prev_masked_variable: bool = False
) -> CharClass:
    """Classify ``char``, inheriting the previous character's mask flags.

    A mask flag only survives when the current character is of the same
    kind: a digit keeps ``prev_masked_digit``, a variable symbol keeps
    ``prev_masked_variable``.
    """
    digit = _is_ascii_digit(char)
    variable = is_variable(char)
    return CharClass(
        is_close_paren=char == CLOSE_PAREN,
        is_open_paren=char == OPEN_PAREN,
        is_digit=digit,
        is_letter=_is_ascii_letter(char),
        is_known_variable=variable,
        masked_digit=prev_masked_digit if digit else False,
        masked_variable=prev_masked_variable if variable else False,
    )


def propagate_mask(curr: CharClass, prev: CharClass) -> CharClass:
    """Return ``curr`` with masking strengthened by ``prev``.

    A plain letter (one that is not an unmasked variable) absorbs whatever
    follows it into the identifier run, so the following digit or variable
    symbol is masked.
    """
    if prev.masked_digit and curr.is_digit:
        return replace(curr, masked_digit=True)
    if prev.masked_variable and curr.is_known_variable:
        return replace(curr, masked_variable=True)
    if prev.is_letter and not prev.is_unmasked_variable:
        return replace(
            curr, masked_digit=curr.is_digit, masked_variable=curr.is_known_variable
        )
    return curr


def classify_after(char: str, prev: CharClass) -> CharClass:
    """Classify ``char`` as the successor of ``prev`` (classify then propagate)."""
    curr = classify(char, prev.masked_digit, prev.masked_variable)
    return propagate_mask(curr, prev)
