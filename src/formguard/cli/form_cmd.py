"""Form CLI commands — validate form definitions and event scripts."""

from pathlib import Path

import click

from formguard.metadata.validator import validate_yaml_file


@click.group()
def form():
    """Form definition commands."""
    pass


@form.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(path: Path):
    """Validate a form definition or event script YAML file."""
    issues = validate_yaml_file(path)

    for issue in issues:
        click.echo(click.style(str(issue), fg="red"))

    if issues:
        click.echo(
            click.style(f"\n{len(issues)} schema error(s) found", fg="red", bold=True)
        )
        raise SystemExit(1)

    click.echo(click.style(f"{path.name} is valid.", fg="green", bold=True))
