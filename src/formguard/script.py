"""Event scripts: replay a recorded sequence of form events.

A script is a YAML document:

    variant: focus_keyed        # optional
    steps:
      - focus: email
      - text: {field: email, value: "bad"}
      - commit
      - submit
      - reset
      - blur                    # same as focus: null

Scripts are schema-checked before they run.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from formguard.metadata.validator import SCRIPT_SCHEMA, validate_yaml_file
from formguard.session import FormSession, FormSnapshot
from formguard.validation.types import FieldId, FormConfigError, SubmitResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScriptStep:
    """One event in a script.

    Attributes:
        action: "text", "focus", "commit", "submit" or "reset"
        field: Target field for text and focus (None blurs on focus)
        value: New text for a text step
    """

    action: str
    field: FieldId | None = None
    value: str = ""

    @classmethod
    def from_raw(cls, raw: Any) -> "ScriptStep":
        if raw == "blur":
            return cls(action="focus")
        if isinstance(raw, str):
            return cls(action=raw)
        if "focus" in raw:
            target = raw["focus"]
            return cls(
                action="focus",
                field=FieldId.parse(target) if target is not None else None,
            )
        text = raw["text"]
        return cls(action="text", field=FieldId.parse(text["field"]), value=text["value"])

    def describe(self, masked: bool = False) -> str:
        if self.action == "text":
            value = "***" if masked else repr(self.value)
            return f"text {self.field.value}={value}"
        if self.action == "focus":
            return f"focus {self.field.value if self.field else 'none'}"
        return self.action


@dataclass
class EventScript:
    steps: list[ScriptStep]
    variant: str | None = None


@dataclass(frozen=True)
class StepOutcome:
    """State after a step ran."""

    step: ScriptStep
    snapshot: FormSnapshot
    submit: SubmitResult | None = None
    committed: FieldId | None = None


def load_script(path: Path) -> EventScript:
    """Load and schema-check an event script.

    Raises:
        FormConfigError: If the file can't be parsed or fails the schema
    """
    issues = validate_yaml_file(path, SCRIPT_SCHEMA)
    if issues:
        raise FormConfigError(
            "Invalid event script:\n" + "\n".join(str(i) for i in issues)
        )

    with path.open() as fh:
        data = yaml.safe_load(fh)

    return EventScript(
        steps=[ScriptStep.from_raw(raw) for raw in data["steps"]],
        variant=data.get("variant"),
    )


def apply_step(session: FormSession, step: ScriptStep) -> StepOutcome:
    submit = None
    committed = None

    if step.action == "text":
        session.on_text_changed(step.field, step.value)
    elif step.action == "focus":
        session.on_focus_changed(step.field)
    elif step.action == "commit":
        event = session.on_commit()
        committed = event.field if event else None
    elif step.action == "submit":
        submit = session.on_submit_form()
    elif step.action == "reset":
        session.reset()
    else:
        raise FormConfigError(f"Unknown script action '{step.action}'")

    return StepOutcome(
        step=step,
        snapshot=session.get_snapshot(),
        submit=submit,
        committed=committed,
    )


def run_script(session: FormSession, script: EventScript) -> list[StepOutcome]:
    """Run every step against the session, collecting the state after each."""
    outcomes = [apply_step(session, step) for step in script.steps]
    logger.debug("Replayed %d step(s)", len(outcomes))
    return outcomes
