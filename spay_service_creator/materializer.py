"""Service materialization pipeline.

Turns a finished ``ServiceConfig`` into a project directory:

fetch         -- clone the template into ``<output>/<service-name>``.
strip-history -- drop the template's ``.git`` directory.
customize     -- substitute placeholders, then write synthesized files.
git-init      -- ``git init`` + first commit (failure is only a warning).

Stages run one after another.  A failure in the first three stages raises
:class:`MaterializeError` naming the stage; nothing is cleaned up, so the
partial directory stays on disk for inspection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from .config import Settings
from .scaffolder import ArtifactSynthesizer, TemplateSubstitutor, write_artifacts
from .service_config import ServiceConfig, placeholder_map
from .utils import console, print_stage_header, print_success, print_warning
from .vcs import GitClient, GitError

# ---------------------------------------------------------------------------
# Exceptions / results
# ---------------------------------------------------------------------------


class MaterializeError(Exception):
    """Raised when a materialization stage fails irrecoverably."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"Stage {stage} failed: {message}")


@dataclass
class MaterializeResult:
    """What a materialization run produced."""

    project_root: Path
    substitutions: dict[str, int] = field(default_factory=dict)
    written_files: list[Path] = field(default_factory=list)
    git_initialized: bool = False


# ---------------------------------------------------------------------------
# Materializer
# ---------------------------------------------------------------------------


class ProjectMaterializer:
    """Drives the clone/customize/commit pipeline for one service."""

    def __init__(
        self,
        settings: Settings,
        git: GitClient | None = None,
        synthesizer: ArtifactSynthesizer | None = None,
    ) -> None:
        self.settings = settings
        self.git = git or GitClient()
        self.synthesizer = synthesizer or ArtifactSynthesizer()

    async def materialize(
        self, config: ServiceConfig, output_dir: str | Path | None = None
    ) -> MaterializeResult:
        """Create the project for *config* under *output_dir*.

        Args:
            config: Fully built service configuration.
            output_dir: Parent directory.  Defaults to ``settings.output_dir``.

        Raises:
            MaterializeError: If fetching or customizing fails.
        """
        parent = Path(output_dir) if output_dir is not None else self.settings.output_dir
        project_root = parent / config.service_name
        result = MaterializeResult(project_root=project_root)

        await self._fetch(project_root)
        await self._strip_history(project_root)
        await self._customize(config, result)
        result.git_initialized = await self._init_git(project_root)
        return result

    # -- Stages ------------------------------------------------------------

    async def _fetch(self, project_root: Path) -> None:
        print_stage_header("fetch")
        if project_root.exists():
            raise MaterializeError("fetch", f"Directory already exists: {project_root}")
        try:
            await self.git.clone(self.settings.template_url, project_root)
        except GitError as exc:
            raise MaterializeError("fetch", f"Failed to clone template: {exc}") from exc
        print_success("Template cloned successfully")

    async def _strip_history(self, project_root: Path) -> None:
        print_stage_header("strip-history")
        try:
            await self.git.strip_history(project_root)
        except OSError as exc:
            raise MaterializeError("strip-history", str(exc)) from exc

    async def _customize(self, config: ServiceConfig, result: MaterializeResult) -> None:
        print_stage_header("customize")
        substitutor = TemplateSubstitutor(placeholder_map(config))
        try:
            result.substitutions = substitutor.apply(result.project_root)
            artifacts = self.synthesizer.synthesize(config)
            result.written_files = await write_artifacts(result.project_root, artifacts)
        except (OSError, UnicodeDecodeError) as exc:
            raise MaterializeError("customize", str(exc)) from exc

        for rel_path, count in result.substitutions.items():
            console.print(f"  [green]+[/green] {rel_path} ({count} replacements)")
        for path in result.written_files:
            console.print(f"  [green]+[/green] {path.relative_to(result.project_root).as_posix()}")
        print_success("Template customized successfully")

    async def _init_git(self, project_root: Path) -> bool:
        print_stage_header("git-init")
        try:
            await self.git.init_and_commit(project_root, self.settings.commit_message)
        except GitError as exc:
            print_warning(f"Git initialization failed: {escape(str(exc))}")
            return False
        print_success("Git repository initialized")
        return True
