"""Field rules: pure predicates over raw field text.

Each rule is total. The empty string is invalid for username, email and
password. The password rule requires an uppercase letter and a digit only;
lowercase and special characters are allowed but not required.
"""

import re
from typing import Callable

import regex

from formguard.validation.types import FieldId


# =============================================================================
# Patterns
# =============================================================================

USERNAME_MIN_LENGTH = 5

# Extended grapheme clusters: one match per user-perceived character.
GRAPHEME_PATTERN = regex.compile(r"\X")

EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}"
)

PASSWORD_PATTERN = re.compile(
    r"(?=.*[A-Z])(?=.*[0-9])[A-Za-z0-9@$!%*?&]{8,}",
    re.DOTALL,
)


# =============================================================================
# Predicates
# =============================================================================


def is_valid_username(value: str) -> bool:
    """At least five user-perceived characters, not code points."""
    return len(GRAPHEME_PATTERN.findall(value)) >= USERNAME_MIN_LENGTH


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_password(value: str) -> bool:
    return PASSWORD_PATTERN.fullmatch(value) is not None


def passwords_match(password: str, repeated: str) -> bool:
    """Exact, case-sensitive comparison. No trimming."""
    return password == repeated


# Single-value rules keyed by field. The repeated password depends on two
# values and is evaluated by the store.
FieldRule = Callable[[str], bool]

FIELD_RULES: dict[FieldId, FieldRule] = {
    FieldId.USERNAME: is_valid_username,
    FieldId.EMAIL: is_valid_email,
    FieldId.PASSWORD: is_valid_password,
}

ERROR_CODES: dict[FieldId, str] = {
    FieldId.USERNAME: "INVALID_USERNAME",
    FieldId.EMAIL: "INVALID_EMAIL",
    FieldId.PASSWORD: "INVALID_PASSWORD",
    FieldId.PASSWORD_REPEAT: "PASSWORD_MISMATCH",
}


def evaluate_all(values: dict[FieldId, str]) -> dict[FieldId, bool]:
    """Evaluate every field rule against a full set of values."""
    result = {
        field_id: rule(values[field_id]) for field_id, rule in FIELD_RULES.items()
    }
    result[FieldId.PASSWORD_REPEAT] = passwords_match(
        values[FieldId.PASSWORD], values[FieldId.PASSWORD_REPEAT]
    )
    return result
