"""formguard CLI entry point."""

import click

from formguard.config import FormSettings
from formguard.validation.types import FormConfigError


@click.group()
@click.option(
    "--log-level",
    envvar="FORMGUARD_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    help="Logging level (DEBUG, INFO, WARNING, ERROR).",
)
def cli(log_level: str):
    """formguard — sign-up form validation engine CLI."""
    try:
        FormSettings(log_level=log_level).configure_logging()
    except FormConfigError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")


# Register subcommands
from formguard.cli.check_cmd import check  # noqa: E402
from formguard.cli.form_cmd import form  # noqa: E402
from formguard.cli.replay_cmd import replay  # noqa: E402

cli.add_command(check)
cli.add_command(form)
cli.add_command(replay)
