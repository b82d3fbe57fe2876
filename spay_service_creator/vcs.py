"""Git operations used while creating a service.

Clones the template repository, strips its history and initializes a fresh
repository with a first commit.  Every call shells out to ``git`` and
raises :class:`GitError` on a non-zero exit.
"""

import asyncio
import shutil
from pathlib import Path


class GitError(Exception):
    """Raised when a git operation fails."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


async def _run_git(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Raises GitError if git cannot be started, times out, or exits with a
    non-zero code.
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise GitError(f"git executable not found: {exc}", command=cmd_str) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        raise GitError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        message = f"Git command failed (exit {process.returncode}): {cmd_str}"
        if stderr:
            # stderr is folded onto one line; the full text stays on .stderr
            lines = [line.strip() for line in stderr.splitlines() if line.strip()]
            message += ": " + "; ".join(lines)
        raise GitError(
            message,
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


class GitClient:
    """Thin async wrapper around the ``git`` CLI."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    async def clone(self, url: str, destination: str | Path) -> Path:
        """Clone *url* into *destination* and return the destination path."""
        dest = Path(destination)
        await _run_git("clone", url, str(dest), timeout=self.timeout)
        return dest

    async def strip_history(self, repo_path: str | Path) -> None:
        """Delete the ``.git`` directory so the clone has no history."""
        git_dir = Path(repo_path) / ".git"
        if git_dir.exists():
            await asyncio.to_thread(shutil.rmtree, git_dir)

    async def init_and_commit(self, repo_path: str | Path, message: str) -> None:
        """Initialize a repository, stage everything and commit it."""
        await _run_git("init", cwd=repo_path, timeout=self.timeout)
        await _run_git("add", ".", cwd=repo_path, timeout=self.timeout)
        await _run_git("commit", "-m", message, cwd=repo_path, timeout=self.timeout)
