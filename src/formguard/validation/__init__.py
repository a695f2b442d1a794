"""formguard validation layer.

Pure field rules, the validation store that derives validity from field
text, and the result types returned on submit.

Usage:
    from formguard.validation import FieldId, ValidationStore

    store = ValidationStore()
    store.set_field(FieldId.USERNAME, "alice")
    store.is_form_valid()
"""

from formguard.validation.rules import (
    EMAIL_PATTERN,
    PASSWORD_PATTERN,
    USERNAME_MIN_LENGTH,
    is_valid_email,
    is_valid_password,
    is_valid_username,
    passwords_match,
)
from formguard.validation.store import ValidationStore
from formguard.validation.types import (
    FieldId,
    FormConfigError,
    SubmitResult,
    ValidationError,
    ValidityState,
)

__all__ = [
    # Types
    "FieldId",
    "FormConfigError",
    "SubmitResult",
    "ValidationError",
    "ValidityState",
    # Rules
    "EMAIL_PATTERN",
    "PASSWORD_PATTERN",
    "USERNAME_MIN_LENGTH",
    "is_valid_email",
    "is_valid_password",
    "is_valid_username",
    "passwords_match",
    # Store
    "ValidationStore",
]
