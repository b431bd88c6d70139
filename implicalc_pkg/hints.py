"""Hint resolution for the expression currently being typed."""

from __future__ import annotations

from functools import lru_cache

from .completion import get_completion
from .config import CACHE_SIZE_HINT, CLOSE_PAREN, OPEN_PAREN
from .splitter import split_function
from .types import HINT_CLOSED_PARENS, HINT_EMPTY, HINT_NONE, Hint, SplitPolicy


@lru_cache(maxsize=CACHE_SIZE_HINT)
def generate_hint(text: str) -> Hint:
    """Generate a hint for ``text``.

    Args:
        text: Current contents of the input field

    Returns:
        HINT_EMPTY for empty input, HINT_CLOSED_PARENS while a parenthesis is
        left open, otherwise the completion of the last term or HINT_NONE

    Example:
        >>> generate_hint("si")
        Hint.of_many(['n(', 'nh(', 'gnum('])
    """
    if not text:
        return HINT_EMPTY

    if text.count(OPEN_PAREN) > text.count(CLOSE_PAREN):
        return HINT_CLOSED_PARENS

    last_term = split_function(text, SplitPolicy.MULTIPLICATION)[-1]
    return get_completion(last_term) or HINT_NONE
