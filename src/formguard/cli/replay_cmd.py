"""Replay command — run an event script through a form session."""

import json
from pathlib import Path

import click

from formguard.cli.check_cmd import build_settings
from formguard.config import create_session
from formguard.script import StepOutcome, load_script, run_script
from formguard.validation.types import FormConfigError


def _is_secure(outcome: StepOutcome, session) -> bool:
    field_id = outcome.step.field
    return field_id is not None and session.definition.is_secure(field_id)


def _outcome_dict(outcome: StepOutcome, session) -> dict:
    entry = {
        "step": outcome.step.describe(masked=_is_secure(outcome, session)),
        "snapshot": outcome.snapshot.to_dict(session.definition),
    }
    if outcome.committed is not None:
        entry["committed"] = outcome.committed.value
    if outcome.submit is not None:
        entry["submit"] = outcome.submit.to_dict()
    return entry


def _echo_outcome(index: int, entry: dict) -> None:
    snap = entry["snapshot"]
    focus = snap["focus"] or "none"
    valid = "valid" if snap["formValid"] else "invalid"
    click.echo(f"[{index}] {entry['step']}  focus={focus}  form={valid}")

    for name, message in snap["visibleMessages"].items():
        click.echo(click.style(f"      ! {name}: {message}", fg="red"))

    submit = entry.get("submit")
    if submit is not None:
        if submit["valid"]:
            click.echo(click.style(f"      submit: {submit['message']}", fg="green"))
        else:
            fields = ", ".join(e["field"] for e in submit["errors"])
            click.echo(click.style(f"      submit rejected: {fields}", fg="yellow"))


@click.command()
@click.argument("script_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--variant",
    default=None,
    type=click.Choice(["always", "focus_keyed", "per_field", "v1", "v2", "v3"]),
    help="Message visibility variant (overrides the script and environment).",
)
@click.option(
    "--form",
    "form_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Form definition YAML overriding titles and messages.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
def replay(script_path: Path, variant: str | None, form_path: Path | None, as_json: bool):
    """Replay a YAML event script and print the state after each step."""
    try:
        script = load_script(script_path)
        settings = build_settings(variant or script.variant, form_path)
        session = create_session(settings)
    except FormConfigError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    entries = [_outcome_dict(o, session) for o in run_script(session, script)]

    if as_json:
        click.echo(
            json.dumps(
                {"variant": session.variant.value, "steps": entries},
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    click.echo(f"Variant: {session.variant.value}\n")
    for i, entry in enumerate(entries, 1):
        _echo_outcome(i, entry)
