"""Shared pytest fixtures for the Spay service creator test suite.

Provides reusable fixtures for:
- Settings and ServiceConfig instances
- A fake cloned template tree with placeholder tokens
- Scripted prompt answers for the interactive builder
- Mock git client and subprocess helpers
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from spay_service_creator.config import Settings
from spay_service_creator.service_config import ServiceConfig
from spay_service_creator.vcs import GitClient


# ---------------------------------------------------------------------------
# Template file contents
# ---------------------------------------------------------------------------

BUILD_GRADLE_TEMPLATE = """\
springBoot {
    mainClass.set("{{PACKAGE_NAME}}.{{SERVICE_CLASS}}ApplicationKt")
}

group = "{{PACKAGE_NAME}}"
version = "0.0.1-SNAPSHOT"
description = "{{SERVICE_DESCRIPTION}}"
"""

PIPELINE_TEMPLATE = """\
name: {{SERVICE_TITLE}} Pipeline
env:
  IMAGE: harbor.spaymfb.com/{{HARBOR_PATH}}/{{SERVICE_NAME}}
  DB: {{DB_NAME}}
"""

COMPOSE_TEMPLATE = """\
services:
  postgres:
    image: postgres:16
    environment:
      POSTGRES_DB: {{DB_NAME}}
  app:
    image: {{SERVICE_NAME}}
"""


def write_template_tree(root: Path) -> Path:
    """Populate *root* with the files a template clone would contain."""
    (root / ".github" / "workflows").mkdir(parents=True, exist_ok=True)
    (root / "build.gradle.kts").write_text(BUILD_GRADLE_TEMPLATE, encoding="utf-8")
    (root / ".github" / "workflows" / "main-pipeline.yml").write_text(
        PIPELINE_TEMPLATE, encoding="utf-8"
    )
    (root / "docker-compose.yml").write_text(COMPOSE_TEMPLATE, encoding="utf-8")
    (root / "settings.gradle.kts").write_text(
        'rootProject.name = "spay-springboot-template"\n', encoding="utf-8"
    )
    (root / "README.md").write_text("# {{SERVICE_TITLE}}\n", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing the output directory at a temp dir."""
    return Settings(output_dir=tmp_path / "out")


@pytest.fixture
def payment_config() -> ServiceConfig:
    """The default config for ``payment-service``."""
    return ServiceConfig(
        service_name="payment-service",
        package_name="com.spaybusiness.payment.service.service",
        db_name="payment_service",
        description="Spay payment service microservice",
        harbor_path="minjibir",
    )


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A directory shaped like a fresh clone of the template."""
    root = tmp_path / "template"
    root.mkdir()
    return write_template_tree(root)


# ---------------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_prompt() -> Callable[..., MagicMock]:
    """Factory for a prompt callable that replays canned answers.

    Usage:
        def test_x(scripted_prompt):
            prompt = scripted_prompt("payment-service", "", "")
            ...
            prompt.call_args_list  # [(label, default), ...]
    """
    def factory(*answers: str) -> MagicMock:
        remaining = list(answers)

        def _answer(label: str, default: Optional[str] = None) -> str:
            if not remaining:
                raise AssertionError(f"Unexpected prompt: {label!r}")
            return remaining.pop(0)

        return MagicMock(side_effect=_answer)

    return factory


# ---------------------------------------------------------------------------
# Git helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_git() -> MagicMock:
    """A GitClient double whose clone writes the template tree."""
    git = MagicMock(spec=GitClient)

    async def _clone(url: str, destination: Path) -> Path:
        dest = Path(destination)
        dest.mkdir(parents=True)
        (dest / ".git").mkdir()
        write_template_tree(dest)
        return dest

    async def _strip_history(repo_path: Path) -> None:
        shutil.rmtree(Path(repo_path) / ".git", ignore_errors=True)

    git.clone = AsyncMock(side_effect=_clone)
    git.strip_history = AsyncMock(side_effect=_strip_history)
    git.init_and_commit = AsyncMock(return_value=None)
    return git


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing git command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
