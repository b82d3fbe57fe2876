"""Service configuration model and the builders that produce it.

:class:`ServiceConfig` is the single immutable record describing the service
being created.  :class:`ConfigBuilder` fills it in either interactively
(prompting until each answer is valid) or from a lone service-name argument
with every other field defaulted.  Both paths derive the secondary values
through the same functions in :mod:`spay_service_creator.naming`, so a given
service name always yields the same class name, title, package suggestion
and database name.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from rich.prompt import Confirm, Prompt

from .config import COMMON_HARBOR_PATHS, Settings
from .naming import (
    InvalidFormatError,
    derive_db_name,
    derive_description,
    derive_package_suggestion,
    derive_service_class,
    derive_service_title,
    validate_package_name,
    validate_service_name,
)
from .utils import console, print_error, print_hint, print_summary_table

# ---------------------------------------------------------------------------
# Placeholder tokens
# ---------------------------------------------------------------------------

PACKAGE_NAME_TOKEN = "{{PACKAGE_NAME}}"
SERVICE_CLASS_TOKEN = "{{SERVICE_CLASS}}"
SERVICE_NAME_TOKEN = "{{SERVICE_NAME}}"
SERVICE_TITLE_TOKEN = "{{SERVICE_TITLE}}"
SERVICE_DESCRIPTION_TOKEN = "{{SERVICE_DESCRIPTION}}"
HARBOR_PATH_TOKEN = "{{HARBOR_PATH}}"
DB_NAME_TOKEN = "{{DB_NAME}}"


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class ServiceConfig(BaseModel):
    """Everything needed to materialize one service from the template.

    ``service_class`` and ``service_title`` are computed from
    ``service_name`` on access rather than stored.
    """

    model_config = ConfigDict(frozen=True)

    service_name: str = Field(..., description="Hyphenated service name, e.g. payment-service")
    package_name: str = Field(..., description="Dotted Kotlin package name")
    db_name: str = Field(..., min_length=1, description="PostgreSQL database name")
    description: str = Field(default="", description="One-line service description")
    harbor_path: str = Field(..., min_length=1, description="Harbor project path")

    @field_validator("service_name")
    @classmethod
    def _check_service_name(cls, value: str) -> str:
        return validate_service_name(value)

    @field_validator("package_name")
    @classmethod
    def _check_package_name(cls, value: str) -> str:
        return validate_package_name(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def service_class(self) -> str:
        return derive_service_class(self.service_name)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def service_title(self) -> str:
        return derive_service_title(self.service_name)

    @property
    def application_class(self) -> str:
        """Name of the generated Spring Boot application class."""
        return f"{self.service_class}Application"

    @property
    def package_path(self) -> str:
        """``com.spaybusiness.payment`` -> ``com/spaybusiness/payment``."""
        return self.package_name.replace(".", "/")

    def harbor_image(self, registry: str) -> str:
        """Full image reference in the Harbor registry."""
        return f"{registry}/{self.harbor_path}/{self.service_name}"


def placeholder_map(config: ServiceConfig) -> dict[str, str]:
    """Map every template token to its value in *config*."""
    return {
        PACKAGE_NAME_TOKEN: config.package_name,
        SERVICE_CLASS_TOKEN: config.service_class,
        SERVICE_NAME_TOKEN: config.service_name,
        SERVICE_TITLE_TOKEN: config.service_title,
        SERVICE_DESCRIPTION_TOKEN: config.description,
        HARBOR_PATH_TOKEN: config.harbor_path,
        DB_NAME_TOKEN: config.db_name,
    }


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------

PromptFn = Callable[[str, Optional[str]], str]


def rich_prompt(label: str, default: Optional[str] = None) -> str:
    """Ask on the shared console; empty input returns ``""``."""
    return Prompt.ask(
        f"[blue]{label}[/blue]",
        default=default or "",
        show_default=bool(default),
        console=console,
    )


def ask_until_valid(
    prompt: PromptFn,
    label: str,
    validator: Callable[[str], str] | None = None,
    default: str | None = None,
    on_error: Callable[[str], None] = print_error,
) -> str:
    """Keep asking for *label* until the answer passes *validator*.

    Empty answers fall back to *default*.  When there is no default the
    question is repeated with a "required" message.
    """
    while True:
        answer = (prompt(label, default) or "").strip() or (default or "")
        if not answer:
            on_error(f"{label} is required")
            continue
        if validator is None:
            return answer
        try:
            return validator(answer)
        except InvalidFormatError as exc:
            on_error(exc.reason)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class ConfigBuilder:
    """Builds a :class:`ServiceConfig` interactively or from an argument."""

    def __init__(self, settings: Settings, prompt: PromptFn | None = None) -> None:
        self.settings = settings
        self.prompt = prompt or rich_prompt

    def from_service_name(self, service_name: str) -> ServiceConfig:
        """Build a config from a service name alone, using every default.

        Raises:
            InvalidFormatError: If *service_name* is not a valid service name.
        """
        validate_service_name(service_name)
        return ServiceConfig(
            service_name=service_name,
            package_name=derive_package_suggestion(service_name),
            db_name=derive_db_name(service_name),
            description=derive_description(service_name),
            harbor_path=self.settings.default_harbor_path,
        )

    def interactive(self) -> ServiceConfig:
        """Collect the config by prompting for each field."""
        service_name = ask_until_valid(
            self.prompt,
            "Service name (e.g., payment-service)",
            validate_service_name,
        )

        suggested_package = derive_package_suggestion(service_name)
        print_hint(f"Suggested package: [yellow]{suggested_package}[/yellow]")
        package_name = ask_until_valid(
            self.prompt, "Package name", validate_package_name, default=suggested_package
        )

        print_hint(
            f"Service class: [yellow]{derive_service_class(service_name)}Application[/yellow]"
        )

        db_name = ask_until_valid(
            self.prompt, "Database name", default=derive_db_name(service_name)
        )
        description = ask_until_valid(
            self.prompt, "Service description", default=derive_description(service_name)
        )

        print_hint(f"Common paths: [yellow]{', '.join(COMMON_HARBOR_PATHS)}[/yellow]")
        harbor_path = ask_until_valid(
            self.prompt,
            "Harbor registry path",
            default=self.settings.default_harbor_path,
        )

        return ServiceConfig(
            service_name=service_name,
            package_name=package_name,
            db_name=db_name,
            description=description,
            harbor_path=harbor_path,
        )

    def summary(self, config: ServiceConfig) -> dict[str, str]:
        """Labelled values shown before the user confirms."""
        return {
            "Service Name": config.service_name,
            "Package Name": config.package_name,
            "Service Class": config.application_class,
            "Database Name": config.db_name,
            "Description": config.description,
            "Harbor Registry": config.harbor_image(self.settings.harbor_registry),
        }

    def confirm(
        self,
        config: ServiceConfig,
        ask: Callable[[str], bool] | None = None,
    ) -> bool:
        """Show the configuration summary and ask whether to continue."""
        print_summary_table(self.summary(config), title="Configuration Summary")
        if ask is None:
            return Confirm.ask(
                "[blue]Continue with this configuration?[/blue]",
                default=True,
                console=console,
            )
        return ask("Continue with this configuration?")
