"""Form definitions and YAML schema validation."""

from formguard.metadata.loader import (
    DEFAULT_FIELDS,
    FieldSpec,
    FormDefinition,
    load_form_definition,
)
from formguard.metadata.validator import (
    FORM_SCHEMA,
    SCRIPT_SCHEMA,
    ValidationIssue,
    validate_yaml_file,
)

__all__ = [
    "DEFAULT_FIELDS",
    "FORM_SCHEMA",
    "FieldSpec",
    "FormDefinition",
    "SCRIPT_SCHEMA",
    "ValidationIssue",
    "load_form_definition",
    "validate_yaml_file",
]
