"""Runtime settings and session factory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from formguard.metadata.loader import FormDefinition, load_form_definition
from formguard.validation.types import FormConfigError
from formguard.visibility import DEFAULT_VARIANT, Variant

if TYPE_CHECKING:
    from formguard.session import FormSession

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FormSettings:
    """Engine configuration.

    Attributes:
        variant: Message visibility variant, None to defer to the form definition
        log_level: Root logging level name
        definition_path: Optional YAML form definition overriding the defaults
    """

    variant: Variant | None = None
    log_level: str = "WARNING"
    definition_path: Path | None = None

    def __post_init__(self) -> None:
        if self.variant is not None:
            self.variant = Variant.parse(self.variant)
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise FormConfigError(
                f"Unknown log level '{self.log_level}'. "
                f"Expected one of: {', '.join(_LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, variant: Variant | str | None = None) -> FormSettings:
        """Create settings from environment variables.

        A `variant` argument takes precedence over FORMGUARD_VARIANT, which is
        then not read at all.

        - FORMGUARD_VARIANT: always | focus_keyed | per_field
        - FORMGUARD_LOG_LEVEL: logging level name (default WARNING)
        - FORMGUARD_FORM_PATH: path to a form definition YAML file
        """
        form_path = os.environ.get("FORMGUARD_FORM_PATH")
        return cls(
            variant=variant or os.environ.get("FORMGUARD_VARIANT") or None,
            log_level=os.environ.get("FORMGUARD_LOG_LEVEL", "WARNING"),
            definition_path=Path(form_path) if form_path else None,
        )

    def load_definition(self) -> FormDefinition:
        if self.definition_path is None:
            return FormDefinition.default()
        return load_form_definition(self.definition_path)

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=self.log_level,
            format="%(levelname)s %(name)s: %(message)s",
        )


def create_session(settings: FormSettings | None = None) -> FormSession:
    """Create a new, isolated form session from settings.

    Variant resolution: settings, then the form definition, then per_field.
    """
    from formguard.session import FormSession

    settings = settings or FormSettings()
    definition = settings.load_definition()
    variant = settings.variant or definition.variant or DEFAULT_VARIANT
    return FormSession(variant=variant, definition=definition)
