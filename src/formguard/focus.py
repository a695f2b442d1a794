"""Focus controller for the sign-up form.

Tracks which field has input focus and advances focus along the fixed
order username -> email -> password -> passwordRepeat -> unfocused when the
focused field is committed (return key / submit).
"""

import logging
from dataclasses import dataclass

from formguard.validation.types import FieldId

logger = logging.getLogger(__name__)

FOCUS_ORDER: tuple[FieldId, ...] = tuple(FieldId)


@dataclass(frozen=True)
class Committed:
    """Emitted when a focused field is committed.

    Attributes:
        field: The field that had focus when the commit happened
    """

    field: FieldId


def next_field(field_id: FieldId) -> FieldId | None:
    """Return the field after `field_id` in focus order, or None after the last."""
    index = FOCUS_ORDER.index(field_id)
    if index + 1 < len(FOCUS_ORDER):
        return FOCUS_ORDER[index + 1]
    return None


class FocusController:
    """State machine with states `None` (unfocused) and a focused FieldId."""

    def __init__(self) -> None:
        self._focus: FieldId | None = None

    @property
    def focus(self) -> FieldId | None:
        return self._focus

    @property
    def is_focused(self) -> bool:
        return self._focus is not None

    def focus_on(self, field_id: FieldId | str | None) -> None:
        """Move focus to a field, or clear it with None."""
        self._focus = None if field_id is None else FieldId.parse(field_id)
        logger.debug("Focus -> %s", self._focus.value if self._focus else "none")

    def commit(self) -> Committed | None:
        """Commit the focused field and advance focus.

        Returns the Committed event, or None when nothing had focus.
        Committing while unfocused is a no-op.
        """
        if self._focus is None:
            return None

        event = Committed(self._focus)
        self._focus = next_field(self._focus)
        logger.debug(
            "Committed %s, focus -> %s",
            event.field.value,
            self._focus.value if self._focus else "none",
        )
        return event

    def reset(self) -> None:
        self._focus = None
