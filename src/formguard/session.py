"""Form session: the event interface the presentation layer talks to.

The presentation layer reports text changes, focus changes, commits and
form submission, and reads back snapshots. Each event is handled
synchronously: validity and visibility are recomputed before the handler
returns, so a snapshot taken right after an event always reflects it.

Sessions own all of their state. Two sessions never share mutable data.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from formguard.focus import Committed, FocusController
from formguard.metadata.loader import FormDefinition
from formguard.validation.rules import ERROR_CODES
from formguard.validation.store import ValidationStore
from formguard.validation.types import (
    FieldId,
    SubmitResult,
    ValidationError,
    ValidityState,
)
from formguard.visibility import (
    DEFAULT_VARIANT,
    FocusChanged,
    FormEvent,
    FormReset,
    MessageVisibility,
    MessageVisibilityPolicy,
    TextChanged,
    Variant,
)

logger = logging.getLogger(__name__)

MASK = "•"


@dataclass(frozen=True)
class FormSnapshot:
    """Read-only view of a session's state.

    Attributes:
        values: Current text of every field
        validity: Derived validity
        focus: Focused field, None when unfocused
        visibility: Per-field message visibility
    """

    values: Mapping[FieldId, str]
    validity: ValidityState
    focus: FieldId | None
    visibility: MessageVisibility

    @property
    def form_valid(self) -> bool:
        return self.validity.form_valid

    @property
    def visible_messages(self) -> Mapping[FieldId, str]:
        return self.visibility.messages

    def to_dict(self, definition: FormDefinition | None = None) -> dict[str, Any]:
        """JSON-friendly dict. Secure field values are masked."""
        definition = definition or FormDefinition.default()
        values = {
            f.value: MASK * len(text) if definition.is_secure(f) else text
            for f, text in self.values.items()
        }
        return {
            "values": values,
            "validity": self.validity.to_dict()["fields"],
            "focus": self.focus.value if self.focus else None,
            "visibleMessages": self.visibility.to_dict(),
            "formValid": self.form_valid,
        }


class FormSession:
    """One sign-up form session.

    Example:
        session = FormSession(variant="per_field")
        session.on_focus_changed(FieldId.EMAIL)
        session.on_text_changed(FieldId.EMAIL, "bad")
        session.on_commit()
        session.get_snapshot().visibility[FieldId.EMAIL]  # True
    """

    def __init__(
        self,
        variant: Variant | str = DEFAULT_VARIANT,
        definition: FormDefinition | None = None,
    ):
        self.definition = definition or FormDefinition.default()
        # Unknown variants fail here, not on the first event
        self.policy = MessageVisibilityPolicy(variant, self.definition)
        self.store = ValidationStore()
        self.focus_controller = FocusController()
        self._dispatch(FormReset())

    @property
    def variant(self) -> Variant:
        return self.policy.variant

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on_text_changed(self, field_id: FieldId | str, text: str) -> None:
        field_id = FieldId.parse(field_id)
        self.store.set_field(field_id, text)
        self._dispatch(TextChanged(field_id))

    def on_focus_changed(self, field_id: FieldId | str | None) -> None:
        self.focus_controller.focus_on(field_id)
        self._dispatch(FocusChanged(self.focus_controller.focus))

    def on_commit(self) -> Committed | None:
        """Commit the focused field. Returns the event, or None if unfocused."""
        event = self.focus_controller.commit()
        if event is not None:
            self._dispatch(event)
        return event

    def on_submit_form(self) -> SubmitResult:
        """Submit the whole form.

        Valid only when every field is valid; otherwise reports each
        invalid field. Never raises for invalid data.
        """
        validity = self.store.get_validity()
        if validity.form_valid:
            logger.info("Form submitted")
            return SubmitResult(valid=True, message=self.definition.success_message)

        errors = [
            ValidationError(
                message=self.definition.message(field_id),
                code=ERROR_CODES[field_id],
                field=field_id,
            )
            for field_id in validity.invalid_fields()
        ]
        logger.info(
            "Form submit rejected, invalid fields: %s",
            ", ".join(e.field.value for e in errors),
        )
        return SubmitResult(valid=False, errors=errors)

    def reset(self) -> None:
        """Clear values, focus and visible messages."""
        self.store.reset()
        self.focus_controller.reset()
        self._dispatch(FormReset())

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_snapshot(self) -> FormSnapshot:
        return FormSnapshot(
            values=self.store.values,
            validity=self.store.get_validity(),
            focus=self.focus_controller.focus,
            visibility=self.policy.current,
        )

    def is_form_valid(self) -> bool:
        return self.store.is_form_valid()

    def snapshot_dict(self) -> dict[str, Any]:
        return self.get_snapshot().to_dict(self.definition)

    def _dispatch(self, event: FormEvent) -> MessageVisibility:
        return self.policy.decide(
            event, self.store.get_validity(), self.focus_controller.focus
        )
