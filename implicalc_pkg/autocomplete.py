"""Autocomplete session state for a single input field.

The session keeps the text being edited, the hint resolved for it and a
cursor over the candidates of a MANY hint. Navigation is driven by
``Movement`` commands coming from key bindings.
"""

from __future__ import annotations

from .hints import generate_hint
from .logging_config import get_logger
from .types import HINT_EMPTY, Hint, Movement

logger = get_logger("autocomplete")


class AutoComplete:
    """Mutable autocomplete state owned by one input field.

    Attributes:
        cursor_index: Selected candidate; only meaningful for a MANY hint
        active_hint: Hint for ``current_text``
        current_text: Text currently in the input field
    """

    def __init__(self) -> None:
        self.cursor_index = 0
        self.active_hint: Hint = HINT_EMPTY
        self.current_text = ""

    @classmethod
    def empty(cls) -> AutoComplete:
        return cls()

    def reset(self) -> None:
        """Return to the initial empty state."""
        self.cursor_index = 0
        self.active_hint = HINT_EMPTY
        self.current_text = ""

    def update_string(self, text: str) -> None:
        """Record new input field contents and recompute the hint if they changed."""
        if self.current_text == text:
            return
        if not text:
            self.reset()
        else:
            self.current_text = text
            self._refresh()

    def _refresh(self) -> None:
        self.cursor_index = 0
        self.active_hint = generate_hint(self.current_text)

    def register_movement(self, movement: Movement) -> None:
        """Apply a navigation command to the session."""
        if movement.is_none() or self.active_hint.is_none():
            return

        if self.active_hint.is_single():
            if movement.is_complete():
                self.apply_hint(self.active_hint.candidates[0])
            return

        candidates = self.active_hint.candidates
        if movement is Movement.UP:
            if self.cursor_index == 0:
                self.cursor_index = len(candidates) - 1
            else:
                self.cursor_index -= 1
        elif movement is Movement.DOWN:
            self.cursor_index += 1
            if self.cursor_index > len(candidates) - 1:
                self.cursor_index = 0
        elif movement is Movement.COMPLETE:
            self.apply_hint(candidates[self.cursor_index])
        logger.debug(
            "Movement %s on %r -> cursor %d",
            movement.value,
            self.current_text,
            self.cursor_index,
        )

    def apply_hint(self, hint: str) -> None:
        """Append ``hint`` to the text and recompute the hint from scratch."""
        self.current_text += hint
        self._refresh()

    @property
    def selected(self) -> str | None:
        """The candidate the cursor currently points at, if any."""
        if self.active_hint.is_single():
            return self.active_hint.candidates[0]
        if self.active_hint.is_many():
            return self.active_hint.candidates[self.cursor_index]
        return None

    def __repr__(self) -> str:
        return (
            f"AutoComplete(current_text={self.current_text!r}, "
            f"active_hint={self.active_hint!r}, cursor_index={self.cursor_index})"
        )
