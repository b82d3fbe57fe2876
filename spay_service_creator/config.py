"""Spay service creator settings.

Typed, environment-overridable settings for a scaffolding run.  Uses a
Pydantic v2 model so values are validated at construction time, in the same
way the per-service :class:`~spay_service_creator.service_config.ServiceConfig`
is.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TEMPLATE_URL = "https://github.com/SpayHQ/spay-springboot-template.git"
DEFAULT_HARBOR_REGISTRY = "harbor.spaymfb.com"
DEFAULT_HARBOR_PATH = "minjibir"
COMMON_HARBOR_PATHS = ("minjibir", "spay", "core")


class Settings(BaseModel):
    """Tool-wide settings shared by the CLI, builder and materializer.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to every component that needs them.
    """

    template_url: str = Field(
        default=DEFAULT_TEMPLATE_URL,
        description="Git URL (or local path) of the Spring Boot template repository",
    )
    harbor_registry: str = Field(
        default=DEFAULT_HARBOR_REGISTRY,
        description="Host of the Harbor container registry",
    )
    default_harbor_path: str = Field(default=DEFAULT_HARBOR_PATH, min_length=1)
    github_org: str = Field(default="SpayHQ", min_length=1)
    output_dir: Path = Field(
        default=Path("."),
        description="Parent directory in which the service directory is created",
    )
    commit_message: str = Field(
        default="initial service setup from spay-springboot-template",
        min_length=1,
    )

    def project_path(self, service_name: str) -> Path:
        """Directory the service named *service_name* is materialized into."""
        return self.output_dir / service_name

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            SPAY_TEMPLATE_URL, SPAY_HARBOR_REGISTRY, SPAY_HARBOR_PATH,
            SPAY_GITHUB_ORG, SPAY_OUTPUT_DIR.
        """
        env_map = {
            "SPAY_TEMPLATE_URL": "template_url",
            "SPAY_HARBOR_REGISTRY": "harbor_registry",
            "SPAY_HARBOR_PATH": "default_harbor_path",
            "SPAY_GITHUB_ORG": "github_org",
            "SPAY_OUTPUT_DIR": "output_dir",
        }
        kwargs: dict[str, Any] = {}
        for env_var, field_name in env_map.items():
            if os.environ.get(env_var):
                kwargs[field_name] = os.environ[env_var]
        return cls(**kwargs)
