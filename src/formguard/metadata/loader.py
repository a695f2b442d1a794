"""Load the form definition (field titles, messages) from YAML."""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from formguard.metadata.validator import FORM_SCHEMA, validate_yaml_file
from formguard.validation.types import FieldId, FormConfigError

logger = logging.getLogger(__name__)

# The password message lists four character classes while the rule only
# requires an uppercase letter and a digit. Kept as is until product decides.
PASSWORD_MESSAGE = (
    "The password must contain a combination of uppercase and lowercase "
    "letter, number and a special character"
)

DEFAULT_SUCCESS_MESSAGE = "Successfully signed in"


@dataclass(frozen=True)
class FieldSpec:
    """Presentation metadata for a single field.

    Attributes:
        title: Label shown next to the input (also used by focus_keyed messages)
        message: Error message shown when the field is invalid
        secure: Value is masked in snapshots and CLI output
    """

    title: str
    message: str
    secure: bool = False


DEFAULT_FIELDS: dict[FieldId, FieldSpec] = {
    FieldId.USERNAME: FieldSpec(
        title="Username",
        message="Username must be at least 5 characters",
    ),
    FieldId.EMAIL: FieldSpec(title="Email", message="Invalid email"),
    FieldId.PASSWORD: FieldSpec(
        title="Password", message=PASSWORD_MESSAGE, secure=True
    ),
    FieldId.PASSWORD_REPEAT: FieldSpec(
        title="Repeat password", message="Passwords don't match", secure=True
    ),
}


@dataclass
class FormDefinition:
    """Field metadata and form-level settings.

    Attributes:
        fields: Spec for every FieldId
        success_message: Message returned by a successful submit
        variant: Visibility variant tag, or None to use the configured default
    """

    fields: dict[FieldId, FieldSpec] = field(
        default_factory=lambda: dict(DEFAULT_FIELDS)
    )
    success_message: str = DEFAULT_SUCCESS_MESSAGE
    variant: str | None = None

    @classmethod
    def default(cls) -> "FormDefinition":
        return cls()

    def title(self, field_id: FieldId) -> str:
        return self.fields[field_id].title

    def message(self, field_id: FieldId) -> str:
        return self.fields[field_id].message

    def is_secure(self, field_id: FieldId) -> bool:
        return self.fields[field_id].secure

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormDefinition":
        """Create a FormDefinition from a parsed YAML/JSON dict.

        Fields not mentioned keep their defaults.
        """
        form = data.get("form", data)
        fields = dict(DEFAULT_FIELDS)

        for name, overrides in (form.get("fields") or {}).items():
            field_id = FieldId.parse(name)
            overrides = overrides or {}
            unknown = set(overrides) - {"title", "message", "secure"}
            if unknown:
                logger.warning(
                    "Ignoring unknown keys for field '%s': %s",
                    name,
                    ", ".join(sorted(unknown)),
                )
            fields[field_id] = replace(
                fields[field_id],
                **{k: v for k, v in overrides.items() if k not in unknown},
            )

        return cls(
            fields=fields,
            success_message=form.get("successMessage", DEFAULT_SUCCESS_MESSAGE),
            variant=form.get("variant"),
        )


def load_form_definition(path: Path) -> FormDefinition:
    """Load and schema-check a form definition YAML file.

    Raises:
        FormConfigError: If the file can't be parsed or fails the schema
    """
    issues = validate_yaml_file(path, FORM_SCHEMA)
    if issues:
        raise FormConfigError(
            "Invalid form definition:\n" + "\n".join(str(i) for i in issues)
        )

    with path.open() as fh:
        data = yaml.safe_load(fh)

    definition = FormDefinition.from_dict(data)
    logger.debug("Loaded form definition from %s", path)
    return definition
