"""Message visibility policy.

Decides, per field, whether an error message is shown. One engine serves
three variants selected by configuration:

- always: a field's message is visible whenever the field is invalid.
- focus_keyed: legacy behavior. Committing an invalid field stores
  "Invalid <title>" under that field. A field shows the message stored for
  the *currently focused* field when one of the message's words equals the
  field's title. Moving focus without committing hides or swaps messages,
  and a title with more than one word never matches.
- per_field: committing a field toggles its own message on (invalid) or off
  (valid), independent of focus. This is the default.

In every variant a field's message is hidden as soon as the field is valid.
"""

import logging
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

import regex

from formguard.focus import Committed
from formguard.metadata.loader import FormDefinition
from formguard.validation.types import FieldId, FormConfigError, ValidityState

logger = logging.getLogger(__name__)

# A letter or digit keeps its combining marks.
_WORD_PATTERN = regex.compile(r"(?:[\p{L}\p{N}]\p{M}*)+")


class Variant(Enum):
    """Selectable message visibility behavior."""

    ALWAYS = "always"
    FOCUS_KEYED = "focus_keyed"
    PER_FIELD = "per_field"

    @classmethod
    def parse(cls, value: "Variant | str") -> "Variant":
        """Resolve a variant from a member, its value or a v1/v2/v3 alias."""
        if isinstance(value, cls):
            return value
        tag = str(value).strip().lower()
        tag = _VARIANT_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            valid = ", ".join(v.value for v in cls)
            raise FormConfigError(
                f"Unknown visibility variant '{value}'. Expected one of: {valid}"
            ) from None


_VARIANT_ALIASES = {
    "v1": "always",
    "v2": "focus_keyed",
    "v3": "per_field",
}

DEFAULT_VARIANT = Variant.PER_FIELD


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class TextChanged:
    field: FieldId


@dataclass(frozen=True)
class FocusChanged:
    field: FieldId | None


@dataclass(frozen=True)
class FormReset:
    pass


FormEvent = Union[TextChanged, FocusChanged, Committed, FormReset]


# =============================================================================
# Visibility snapshot
# =============================================================================


@dataclass(frozen=True)
class MessageVisibility:
    """Per-field "show error now" flags and the text to show.

    Attributes:
        visible: Flag for every field
        messages: Message text, only for visible fields
    """

    visible: Mapping[FieldId, bool]
    messages: Mapping[FieldId, str] = field(default_factory=dict)

    @classmethod
    def hidden(cls) -> "MessageVisibility":
        return cls(visible=MappingProxyType({f: False for f in FieldId}))

    def __getitem__(self, field_id: FieldId) -> bool:
        return self.visible[field_id]

    def visible_fields(self) -> list[FieldId]:
        return [f for f in FieldId if self.visible[f]]

    def to_dict(self) -> dict[str, Any]:
        return {f.value: self.messages[f] for f in self.visible_fields()}


def title_matches(message: str, title: str) -> bool:
    """True if a word of `message` equals `title`, ignoring case.

    Words are runs of letters and digits. Both sides are compared in NFC,
    so composed and decomposed accents match.
    """
    wanted = unicodedata.normalize("NFC", title).casefold()
    words = _WORD_PATTERN.findall(unicodedata.normalize("NFC", message))
    return any(word.casefold() == wanted for word in words)


# =============================================================================
# Policy
# =============================================================================


class MessageVisibilityPolicy:
    """Stateful visibility decisions for one form session.

    Every event is passed to `decide` together with the validity and focus
    that hold after the event was applied.
    """

    def __init__(
        self,
        variant: Variant | str = DEFAULT_VARIANT,
        definition: FormDefinition | None = None,
    ):
        self.variant = Variant.parse(variant)
        self.definition = definition or FormDefinition.default()
        # per_field: toggled flag per field
        self._toggles: dict[FieldId, bool] = {f: False for f in FieldId}
        # focus_keyed: message stored by the field that produced it
        self._stored: dict[FieldId, str] = {}
        self._current = MessageVisibility.hidden()

    @property
    def current(self) -> MessageVisibility:
        return self._current

    def decide(
        self,
        event: FormEvent,
        validity: ValidityState,
        focus: FieldId | None,
    ) -> MessageVisibility:
        """Apply an event and return the resulting visibility."""
        if isinstance(event, FormReset):
            self._clear()
        elif isinstance(event, Committed):
            self._on_commit(event.field, validity)

        if self.variant is Variant.ALWAYS:
            raw = {f: True for f in FieldId}
            texts = {f: self.definition.message(f) for f in FieldId}
        elif self.variant is Variant.PER_FIELD:
            raw = dict(self._toggles)
            texts = {f: self.definition.message(f) for f in FieldId}
        else:
            raw, texts = self._focus_keyed(focus)

        visible: dict[FieldId, bool] = {}
        for field_id in FieldId:
            if validity[field_id]:
                self._forget(field_id)
                visible[field_id] = False
            else:
                visible[field_id] = raw[field_id]

        decided = MessageVisibility(
            visible=MappingProxyType(visible),
            messages=MappingProxyType(
                {f: texts[f] for f in FieldId if visible[f]}
            ),
        )
        if decided.visible != self._current.visible:
            logger.debug(
                "Visible messages (%s): %s",
                self.variant.value,
                [f.value for f in decided.visible_fields()],
            )
        self._current = decided
        return decided

    def _on_commit(self, field_id: FieldId, validity: ValidityState) -> None:
        invalid = not validity[field_id]
        if self.variant is Variant.PER_FIELD:
            self._toggles[field_id] = invalid
        elif self.variant is Variant.FOCUS_KEYED:
            if invalid:
                title = self.definition.title(field_id)
                self._stored[field_id] = f"Invalid {title.lower()}"
            else:
                self._stored.pop(field_id, None)

    def _focus_keyed(
        self, focus: FieldId | None
    ) -> tuple[dict[FieldId, bool], dict[FieldId, str]]:
        message = self._stored.get(focus) if focus is not None else None
        if message is None:
            return {f: False for f in FieldId}, {}
        raw = {
            f: title_matches(message, self.definition.title(f)) for f in FieldId
        }
        return raw, {f: message for f in FieldId}

    def _forget(self, field_id: FieldId) -> None:
        self._toggles[field_id] = False
        self._stored.pop(field_id, None)

    def _clear(self) -> None:
        self._toggles = {f: False for f in FieldId}
        self._stored.clear()


def decide_visibility(
    policy: MessageVisibilityPolicy,
    event: FormEvent,
    validity: ValidityState,
    focus: FieldId | None,
) -> MessageVisibility:
    """Functional entry point; see MessageVisibilityPolicy.decide."""
    return policy.decide(event, validity, focus)
