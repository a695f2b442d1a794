"""
metadata/validator.py — JSON Schema validation for formguard YAML documents.

Validates form definition and event script YAML files against the JSON
Schemas shipped in ``schemas/``.

Usage:
    from formguard.metadata.validator import FORM_SCHEMA, validate_yaml_file

    issues = validate_yaml_file(Path("signup.yaml"), FORM_SCHEMA)
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"

FORM_SCHEMA = "form.schema.json"
SCRIPT_SCHEMA = "script.schema.json"

_SCHEMA_NAMES = ["_defs.schema.json", FORM_SCHEMA, SCRIPT_SCHEMA]


@dataclass
class ValidationIssue:
    """A single validation finding for a YAML document."""

    file: Path
    message: str
    path: str = ""  # JSON pointer path within the document, e.g. "steps/[2]"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"{self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema(name: str) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _load_registry() -> Registry:
    """Build a jsonschema Registry containing all formguard schemas."""
    resources = []
    for name in _SCHEMA_NAMES:
        schema = _load_schema(name)
        resources.append(
            (schema["$id"], Resource(contents=schema, specification=DRAFT202012))
        )
    return Registry().with_resources(resources)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def detect_schema(doc: Any) -> str | None:
    """Guess the schema for a parsed document from its top-level key."""
    if isinstance(doc, dict):
        if "form" in doc:
            return FORM_SCHEMA
        if "steps" in doc:
            return SCRIPT_SCHEMA
    return None


def validate_document(
    doc: Any,
    schema_name: str,
    *,
    source: Path,
    registry: Registry | None = None,
) -> list[ValidationIssue]:
    """Validate an already-parsed document against the named schema."""
    if registry is None:
        registry = _load_registry()

    schema = _load_schema(schema_name)
    validator = Draft202012Validator(schema, registry=registry)

    return [
        ValidationIssue(file=source, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    ]


def validate_yaml_file(
    yaml_path: Path,
    schema_name: str | None = None,
    *,
    registry: Registry | None = None,
) -> list[ValidationIssue]:
    """
    Validate a single YAML file against the named schema.

    Args:
        yaml_path:   Path to the YAML file to validate.
        schema_name: Filename of the schema (e.g. ``"form.schema.json"``).
                     Detected from the document's top-level key if omitted.
        registry:    Pre-built schema registry.  Built automatically if omitted.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        return [ValidationIssue(file=yaml_path, message=f"Cannot read file: {exc}")]
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    if schema_name is None:
        schema_name = detect_schema(raw)
        if schema_name is None:
            return [
                ValidationIssue(
                    file=yaml_path,
                    message="Cannot determine document type. Expected a top-level 'form' or 'steps' key.",
                )
            ]

    logger.debug("Validating %s against %s", yaml_path, schema_name)
    return validate_document(raw, schema_name, source=yaml_path, registry=registry)
