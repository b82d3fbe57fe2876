"""Command-line entry point for ``create-spay-service``.

Usage::

    create-spay-service                    # interactive mode
    create-spay-service payment-service    # quick start with defaults
    python -m spay_service_creator payment-service -o ~/work
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from .config import Settings
from .materializer import MaterializeError, MaterializeResult, ProjectMaterializer
from .naming import InvalidFormatError
from .service_config import ConfigBuilder, ServiceConfig
from .utils import console, print_error


class SetupCancelled(Exception):
    """Raised when the user declines the configuration or interrupts a prompt."""


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def collect_config(builder: ConfigBuilder, service_name: str | None = None) -> ServiceConfig:
    """Build the service config from an argument or by prompting.

    Raises:
        InvalidFormatError: If *service_name* is given and invalid.
        SetupCancelled: If the user rejects the interactive summary.
    """
    if service_name is not None:
        console.print("[bold]Quick creating service with defaults...[/bold]")
        return builder.from_service_name(service_name)

    console.print(
        Panel("[bold]Create Spay Spring Boot Service[/bold]", border_style="cyan")
    )
    config = builder.interactive()
    if not builder.confirm(config):
        raise SetupCancelled("Setup cancelled")
    return config


async def create_service(
    settings: Settings,
    service_name: str | None = None,
    builder: ConfigBuilder | None = None,
    materializer: ProjectMaterializer | None = None,
) -> MaterializeResult:
    """Collect the config, materialize the project and print next steps."""
    builder = builder or ConfigBuilder(settings)
    materializer = materializer or ProjectMaterializer(settings)

    config = collect_config(builder, service_name)
    result = await materializer.materialize(config)
    print_next_steps(config, settings, result)
    return result


def print_next_steps(
    config: ServiceConfig, settings: Settings, result: MaterializeResult
) -> None:
    """Print what to do after the project has been created."""
    name = config.service_name
    org = settings.github_org
    lines = [
        f"[bold]Project:[/bold] [cyan]{result.project_root}[/cyan]",
        "",
        "[bold]Next steps:[/bold]",
        f"  1. [blue]cd {result.project_root}[/blue]",
        "  2. [blue]docker-compose up -d postgres[/blue]",
        "  3. [blue]./gradlew bootRun[/blue]",
        "  4. [blue]curl http://localhost:8080/api/v1/health[/blue]",
        "",
        "[bold]Create GitHub repository:[/bold]",
        f"  [blue]gh repo create {org}/{name} --public[/blue]",
        f"  [blue]git remote add origin https://github.com/{org}/{name}.git[/blue]",
        "  [blue]git push -u origin main[/blue]",
        "",
        "[bold]Remember to:[/bold]",
        "  - Add Harbor registry credentials to GitHub secrets",
        "  - Configure ArgoCD for deployment",
        "  - Update database migrations in src/main/resources/db/migration/",
    ]
    if not result.git_initialized:
        lines += ["  - Initialize git yourself: [blue]git init && git add . && git commit[/blue]"]
    console.print(
        Panel("\n".join(lines), title="Service created successfully!", border_style="green")
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-spay-service",
        description="Create a Spay Spring Boot service from the template repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-spay-service\n"
            "  create-spay-service payment-service\n"
            "  create-spay-service payment-service -o ~/work\n"
        ),
    )
    parser.add_argument(
        "service_name",
        nargs="?",
        default=None,
        help="Service name (e.g. payment-service); omit for interactive mode",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the new service (default: current directory)",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Template repository URL (default: the Spay Spring Boot template)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``create-spay-service``."""
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    overrides: dict[str, object] = {}
    if args.output:
        overrides["output_dir"] = Path(args.output)
    if args.template:
        overrides["template_url"] = args.template
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        asyncio.run(create_service(settings, args.service_name))
    except (InvalidFormatError, MaterializeError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)
    except (SetupCancelled, KeyboardInterrupt, EOFError):
        print_error("Setup cancelled")
        sys.exit(1)


if __name__ == "__main__":
    main()
