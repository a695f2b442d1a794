"""Validation store: current field text and derived validity."""

import logging
from types import MappingProxyType
from typing import Mapping

from formguard.validation.rules import FIELD_RULES, evaluate_all, passwords_match
from formguard.validation.types import FieldId, ValidityState

logger = logging.getLogger(__name__)

_PASSWORD_FIELDS = (FieldId.PASSWORD, FieldId.PASSWORD_REPEAT)


class ValidationStore:
    """Holds the form's text values and recomputes validity on every change.

    Recomputation is synchronous: a read after `set_field` always observes
    the new state. Changing either password field recomputes both password
    flags since the repeat check depends on both values.
    """

    def __init__(self) -> None:
        self._values: dict[FieldId, str] = {f: "" for f in FieldId}
        self._validity: dict[FieldId, bool] = evaluate_all(self._values)
        self._snapshot = ValidityState.from_fields(self._validity)

    def set_field(self, field_id: FieldId | str, text: str) -> ValidityState:
        """Replace the text of a field and return the new validity snapshot."""
        field_id = FieldId.parse(field_id)
        self._values[field_id] = text

        if field_id in _PASSWORD_FIELDS:
            self._recompute_passwords()
        else:
            self._validity[field_id] = FIELD_RULES[field_id](text)

        self._snapshot = ValidityState.from_fields(self._validity)
        logger.debug(
            "Field %s changed (valid=%s, form_valid=%s)",
            field_id.value,
            self._validity[field_id],
            self._snapshot.form_valid,
        )
        return self._snapshot

    def get_validity(self) -> ValidityState:
        return self._snapshot

    def is_form_valid(self) -> bool:
        return self._snapshot.form_valid

    def get_value(self, field_id: FieldId | str) -> str:
        return self._values[FieldId.parse(field_id)]

    @property
    def values(self) -> Mapping[FieldId, str]:
        """Read-only view of the current values."""
        return MappingProxyType(dict(self._values))

    def invalid_fields(self) -> list[FieldId]:
        return self._snapshot.invalid_fields()

    def reset(self) -> None:
        """Clear every field back to the empty string."""
        for field_id in FieldId:
            self._values[field_id] = ""
        self._recompute_all()

    def _recompute_passwords(self) -> None:
        password = self._values[FieldId.PASSWORD]
        repeated = self._values[FieldId.PASSWORD_REPEAT]
        self._validity[FieldId.PASSWORD] = FIELD_RULES[FieldId.PASSWORD](password)
        self._validity[FieldId.PASSWORD_REPEAT] = passwords_match(password, repeated)

    def _recompute_all(self) -> None:
        self._validity = evaluate_all(self._values)
        self._snapshot = ValidityState.from_fields(self._validity)
