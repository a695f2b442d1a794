"""Core types for the formguard validation engine.

This module defines the foundational types shared by every layer:
- FieldId: the four fields of the sign-up form, in focus order
- ValidityState: derived per-field validity plus the aggregate flag
- ValidationError / SubmitResult: the outcome of submitting the form
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class FormConfigError(ValueError):
    """Raised for setup errors: unknown variant, field or malformed definition."""


class FieldId(Enum):
    """Identifies a form field.

    Declaration order is the focus order used when a field is committed.
    """

    USERNAME = "username"
    EMAIL = "email"
    PASSWORD = "password"
    PASSWORD_REPEAT = "passwordRepeat"

    @classmethod
    def parse(cls, value: "FieldId | str") -> "FieldId":
        """Resolve a FieldId from a member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(f.value for f in cls)
            raise FormConfigError(
                f"Unknown field '{value}'. Expected one of: {valid}"
            ) from None


@dataclass(frozen=True)
class ValidityState:
    """Snapshot of derived validity.

    Attributes:
        fields: Validity of each field
        form_valid: True only when every field is valid
    """

    fields: Mapping[FieldId, bool]
    form_valid: bool

    @classmethod
    def from_fields(cls, fields: Mapping[FieldId, bool]) -> "ValidityState":
        frozen = MappingProxyType(dict(fields))
        return cls(fields=frozen, form_valid=all(frozen.values()))

    def __getitem__(self, field_id: FieldId) -> bool:
        return self.fields[field_id]

    def invalid_fields(self) -> list[FieldId]:
        return [f for f in FieldId if not self.fields[f]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": {f.value: valid for f, valid in self.fields.items()},
            "formValid": self.form_valid,
        }


@dataclass(frozen=True)
class ValidationError:
    """A single invalid field reported on submit.

    Attributes:
        message: Human-readable message for the field
        code: Machine-readable error code (e.g., "INVALID_EMAIL")
        field: The field this error relates to
    """

    message: str
    code: str
    field: FieldId

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "field": self.field.value,
        }


@dataclass
class SubmitResult:
    """Result of submitting the form.

    Attributes:
        valid: True if every field was valid at submit time
        errors: One error per invalid field, in focus order
        message: Success message when valid, empty otherwise
    """

    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    message: str = ""

    @property
    def invalid_fields(self) -> list[FieldId]:
        return [e.field for e in self.errors]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }
        if self.message:
            result["message"] = self.message
        return result
