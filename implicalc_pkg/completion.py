"""Completion table built from the supported-function vocabulary.

Every supported name is suffixed with its opening parenthesis and cut at each
position; the part before the cut is a prefix the user may have typed and the
part after it is what completes the call. The table maps each prefix to a
``Hint`` and is never modified after it has been built.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .config import OPEN_PAREN, SUPPORTED_FUNCTIONS
from .logging_config import get_logger
from .types import Hint, TableBuildError

logger = get_logger("completion")


def sort_candidates(candidates: Iterable[str]) -> list[str]:
    """Order candidates shortest first, ties broken in reverse alphabetical order."""
    return sorted(sorted(candidates, reverse=True), key=len)


def all_possible_splits(
    func: str, seen: set[tuple[str, str]]
) -> list[tuple[str, str]]:
    """Return every (prefix, suffix) cut of ``func`` not already in ``seen``.

    Both parts are non-empty. New pairs are added to ``seen``.
    """
    splits = []
    for i in range(1, len(func)):
        pair = (func[:i], func[i:])
        if pair in seen:
            continue
        seen.add(pair)
        splits.append(pair)
    return splits


def compile_hashmap(vocabulary: Iterable[str]) -> list[tuple[str, Hint]]:
    """Compute the (prefix, hint) entries for ``vocabulary``.

    Entries are ordered by the first appearance of each prefix, so the same
    vocabulary always produces the same list.

    Raises:
        TableBuildError: If a name ends up without a completion for its full
            spelling
    """
    names = list(vocabulary)
    seen: set[tuple[str, str]] = set()
    pairs = [
        pair
        for name in names
        for pair in all_possible_splits(name + OPEN_PAREN, seen)
    ]

    grouped: dict[str, list[str]] = {}
    for prefix, suffix in pairs:
        grouped.setdefault(prefix, []).append(suffix)

    for name in names:
        if name not in grouped:
            raise TableBuildError(f"Number of completions for {name!r} is 0")

    entries: list[tuple[str, Hint]] = []
    for prefix, suffixes in grouped.items():
        if len(suffixes) == 1:
            entries.append((prefix, Hint.of_single(suffixes[0])))
        else:
            entries.append((prefix, Hint.of_many(sort_candidates(suffixes))))
    return entries


def build_completion_table(vocabulary: Iterable[str]) -> Mapping[str, Hint]:
    """Build a read-only prefix -> hint mapping for ``vocabulary``."""
    names = list(vocabulary)
    for name in names:
        if not name or OPEN_PAREN in name or ")" in name:
            raise TableBuildError(
                f"Invalid function name {name!r}", "INVALID_FUNCTION_NAME"
            )
    table = dict(compile_hashmap(names))
    logger.debug(
        "Built completion table with %d prefixes from %d functions",
        len(table),
        len(names),
    )
    return MappingProxyType(table)


@lru_cache(maxsize=None)
def get_completion_table() -> Mapping[str, Hint]:
    """Return the table for the supported functions, building it on first use."""
    return build_completion_table(SUPPORTED_FUNCTIONS)


def get_completion(key: str) -> Hint | None:
    """Look up the completion for ``key`` in the shared table."""
    if not key:
        return None
    return get_completion_table().get(key)


def table_to_dict(table: Mapping[str, Hint]) -> dict[str, Any]:
    """Convert a table to a dictionary for JSON serialization."""
    return {prefix: hint.to_dict() for prefix, hint in table.items()}
