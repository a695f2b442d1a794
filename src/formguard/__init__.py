"""formguard — reactive validation engine for sign-up forms.

The presentation layer owns the widgets and reports events to a
FormSession; the session derives field validity, form validity, focus
advancement and which error messages to show.

Usage:
    from formguard import FieldId, FormSession

    session = FormSession(variant="per_field")
    session.on_focus_changed(FieldId.USERNAME)
    session.on_text_changed(FieldId.USERNAME, "alice")
    session.on_commit()
    result = session.on_submit_form()
"""

from formguard.config import FormSettings, create_session
from formguard.focus import Committed, FocusController
from formguard.metadata import FormDefinition
from formguard.session import FormSession, FormSnapshot
from formguard.validation import (
    FieldId,
    FormConfigError,
    SubmitResult,
    ValidationError,
    ValidationStore,
    ValidityState,
)
from formguard.visibility import (
    MessageVisibility,
    MessageVisibilityPolicy,
    Variant,
    decide_visibility,
)

__all__ = [
    "Committed",
    "FieldId",
    "FocusController",
    "FormConfigError",
    "FormDefinition",
    "FormSession",
    "FormSettings",
    "FormSnapshot",
    "MessageVisibility",
    "MessageVisibilityPolicy",
    "SubmitResult",
    "ValidationError",
    "ValidationStore",
    "ValidityState",
    "Variant",
    "create_session",
    "decide_visibility",
]
