"""Synthesis of the files a new service gets on top of the template.

Given a ``ServiceConfig``, produces the Spring Boot entry point, a health
controller and its integration test, the runtime and test profiles, the
initial Flyway migration and ``settings.gradle.kts``.  Every artifact is a
pure function of the config: rendering reads only the bundled Jinja2
templates, never the generated project tree.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from ..service_config import ServiceConfig
from ..utils import write_file
from .templates import TemplateRenderer

MAIN_KOTLIN_DIR = "src/main/kotlin"
TEST_KOTLIN_DIR = "src/test/kotlin"
MAIN_RESOURCES_DIR = "src/main/resources"
TEST_RESOURCES_DIR = "src/test/resources"
MIGRATION_DIR = f"{MAIN_RESOURCES_DIR}/db/migration"
INITIAL_MIGRATION = "V1_001__Initial_schema.sql"


@dataclass(frozen=True)
class Artifact:
    """A generated file: path relative to the project root plus its content."""

    path: PurePosixPath
    content: str


@dataclass(frozen=True)
class _ArtifactSpec:
    template: str
    target: Callable[[ServiceConfig], str]


# Order is the order files are written in.
_ARTIFACTS: tuple[_ArtifactSpec, ...] = (
    _ArtifactSpec(
        "kotlin/Application.kt.j2",
        lambda c: f"{MAIN_KOTLIN_DIR}/{c.package_path}/{c.application_class}.kt",
    ),
    _ArtifactSpec(
        "kotlin/HealthController.kt.j2",
        lambda c: f"{MAIN_KOTLIN_DIR}/{c.package_path}/controller/HealthController.kt",
    ),
    _ArtifactSpec(
        "kotlin/HealthControllerIT.kt.j2",
        lambda c: f"{TEST_KOTLIN_DIR}/{c.package_path}/integration/HealthControllerIT.kt",
    ),
    _ArtifactSpec(
        "resources/application.yml.j2",
        lambda c: f"{MAIN_RESOURCES_DIR}/application.yml",
    ),
    _ArtifactSpec(
        "resources/application-test.yml.j2",
        lambda c: f"{TEST_RESOURCES_DIR}/application-test.yml",
    ),
    _ArtifactSpec(
        f"resources/{INITIAL_MIGRATION}.j2",
        lambda c: f"{MIGRATION_DIR}/{INITIAL_MIGRATION}",
    ),
    _ArtifactSpec(
        "settings.gradle.kts.j2",
        lambda c: "settings.gradle.kts",
    ),
)


class ArtifactSynthesizer:
    """Renders the brand-new files for a service."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def build_context(self, config: ServiceConfig) -> dict[str, Any]:
        """Build the Jinja2 template context from the service config."""
        return {
            **config.model_dump(),
            "application_class": config.application_class,
            "package_path": config.package_path,
        }

    def synthesize(self, config: ServiceConfig) -> list[Artifact]:
        """Render every artifact for *config*, in write order."""
        context = self.build_context(config)
        return [
            Artifact(
                path=PurePosixPath(spec.target(config)),
                content=self.renderer.render(spec.template, context),
            )
            for spec in _ARTIFACTS
        ]


async def write_artifacts(project_root: str | Path, artifacts: Iterable[Artifact]) -> list[Path]:
    """Write *artifacts* under *project_root*, creating parent directories.

    Existing files at the same paths are overwritten.

    Returns:
        The written file paths.
    """
    root = Path(project_root)
    written: list[Path] = []
    for artifact in artifacts:
        out = root.joinpath(*artifact.path.parts)
        await asyncio.to_thread(write_file, out, artifact.content)
        written.append(out)
    return written
