"""Check command — evaluate field values against the form rules."""

from pathlib import Path

import click

from formguard.config import FormSettings, create_session
from formguard.validation.types import FieldId, FormConfigError
from formguard.visibility import Variant


def build_settings(variant: str | None, form_path: Path | None) -> FormSettings:
    """Merge CLI options over environment settings."""
    if variant:
        try:
            variant = Variant.parse(variant)
        except FormConfigError as e:
            raise click.BadParameter(str(e), param_hint="--variant")

    settings = FormSettings.from_env(variant=variant)
    if form_path is not None:
        settings.definition_path = form_path
    return settings


@click.command()
@click.option("--username", default="", help="Username text.")
@click.option("--email", default="", help="Email text.")
@click.option("--password", default="", help="Password text.")
@click.option("--repeat", "repeat", default="", help="Repeated password text.")
@click.option(
    "--form",
    "form_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Form definition YAML overriding titles and messages.",
)
def check(username: str, email: str, password: str, repeat: str, form_path: Path | None):
    """Validate field values and report each field's status."""
    try:
        session = create_session(build_settings(None, form_path))
    except FormConfigError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    for field_id, text in (
        (FieldId.USERNAME, username),
        (FieldId.EMAIL, email),
        (FieldId.PASSWORD, password),
        (FieldId.PASSWORD_REPEAT, repeat),
    ):
        session.on_text_changed(field_id, text)

    validity = session.get_snapshot().validity
    definition = session.definition
    for field_id in FieldId:
        title = definition.title(field_id)
        if validity[field_id]:
            click.echo(click.style(f"  ✓ {title}", fg="green"))
        else:
            click.echo(click.style(f"  ✗ {title}: {definition.message(field_id)}", fg="red"))

    result = session.on_submit_form()
    if not result.valid:
        click.echo(
            click.style(f"\n{len(result.errors)} invalid field(s).", fg="red", bold=True)
        )
        raise SystemExit(1)

    click.echo(click.style(f"\n{result.message}", fg="green", bold=True))
