"""Type definitions shared across the splitter, completion table and autocomplete session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from .config import (
    CLOSED_PARENS_HINT_TEXT,
    COMPLETE_KEYS,
    DEFAULT_HINT_TEXT,
    DOWN_KEYS,
    UP_KEYS,
)


class SplitPolicy(Enum):
    """How finely an expression is split.

    MULTIPLICATION only breaks where a multiplication is implied or written;
    TERM additionally breaks after every opening parenthesis.
    """

    MULTIPLICATION = "multiplication"
    TERM = "term"


class Movement(Enum):
    """Navigation command applied to an autocomplete session."""

    UP = "up"
    DOWN = "down"
    COMPLETE = "complete"
    NONE = "none"

    def is_none(self) -> bool:
        return self is Movement.NONE

    def is_complete(self) -> bool:
        return self is Movement.COMPLETE

    @classmethod
    def from_key(cls, key: str | None) -> Movement:
        """Map a UI key name (e.g. "Tab", "Up", "ArrowDown") to a movement."""
        if not key:
            return cls.NONE
        name = key.strip().lower()
        if name.startswith("arrow"):
            name = name[len("arrow"):]
        if name in COMPLETE_KEYS:
            return cls.COMPLETE
        if name in UP_KEYS:
            return cls.UP
        if name in DOWN_KEYS:
            return cls.DOWN
        return cls.NONE


class HintKind(Enum):
    SINGLE = "single"
    MANY = "many"
    NONE = "none"


@dataclass(frozen=True)
class Hint:
    """Completion suggestion for the trailing token of an input.

    A SINGLE hint carries exactly one candidate, a MANY hint at least two
    distinct candidates in display order, and a NONE hint nothing.
    """

    kind: HintKind
    candidates: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        count = len(self.candidates)
        if self.kind is HintKind.SINGLE and count != 1:
            raise ValueError(f"Single hint needs exactly one candidate, got {count}")
        if self.kind is HintKind.NONE and count:
            raise ValueError("None hint cannot carry candidates")
        if self.kind is HintKind.MANY:
            if count < 2:
                raise ValueError(f"Many hint needs at least two candidates, got {count}")
            if len(set(self.candidates)) != count:
                raise ValueError(f"Many hint has duplicate candidates: {self.candidates!r}")

    @classmethod
    def of_single(cls, text: str) -> Hint:
        return cls(HintKind.SINGLE, (text,))

    @classmethod
    def of_many(cls, candidates: Iterable[str]) -> Hint:
        return cls(HintKind.MANY, tuple(candidates))

    def is_none(self) -> bool:
        return self.kind is HintKind.NONE

    def is_some(self) -> bool:
        return not self.is_none()

    def is_single(self) -> bool:
        return self.kind is HintKind.SINGLE

    def is_many(self) -> bool:
        return self.kind is HintKind.MANY

    @property
    def single(self) -> str | None:
        """The text of a SINGLE hint, otherwise None."""
        return self.candidates[0] if self.is_single() else None

    @property
    def many(self) -> tuple[str, ...] | None:
        """The candidates of a MANY hint, otherwise None."""
        return self.candidates if self.is_many() else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"type": self.kind.value}
        if self.is_single():
            result_dict["hint"] = self.candidates[0]
        elif self.is_many():
            result_dict["hints"] = list(self.candidates)
        return result_dict

    def __str__(self) -> str:
        if self.is_single():
            return self.candidates[0]
        if self.is_many():
            return "[" + ", ".join(f'"{c}"' for c in self.candidates) + "]"
        return "None"

    def __repr__(self) -> str:
        if self.is_single():
            return f"Hint.of_single({self.candidates[0]!r})"
        if self.is_many():
            return f"Hint.of_many({list(self.candidates)!r})"
        return "HINT_NONE"


HINT_NONE = Hint(HintKind.NONE)
HINT_EMPTY = Hint.of_single(DEFAULT_HINT_TEXT)
HINT_CLOSED_PARENS = Hint.of_single(CLOSED_PARENS_HINT_TEXT)


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when parsing fails."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class TableBuildError(Exception):
    """Raised when the completion table cannot be built from a vocabulary."""

    def __init__(self, message: str, code: str = "TABLE_BUILD_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
