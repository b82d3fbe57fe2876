"""Unit tests for git operations (spay_service_creator.vcs).

Tests cover:
- _run_git success, non-zero exit, timeout and missing executable
- GitClient.clone / strip_history / init_and_commit command sequences
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, call, patch

import pytest

from spay_service_creator.vcs import GitClient, GitError, _run_git

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# _run_git
# ---------------------------------------------------------------------------


class TestRunGit:
    async def test_success_returns_stdout_stderr(self, mock_subprocess):
        proc = mock_subprocess(stdout="Cloning into 'x'...", stderr="", returncode=0)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as exec_mock:
            stdout, stderr = await _run_git("clone", "url", "x")
        assert stdout == "Cloning into 'x'..."
        assert stderr == ""
        assert exec_mock.call_args.args == ("git", "clone", "url", "x")

    async def test_cwd_passed_as_string(self, mock_subprocess, tmp_path: Path):
        proc = mock_subprocess()
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as exec_mock:
            await _run_git("init", cwd=tmp_path)
        assert exec_mock.call_args.kwargs["cwd"] == str(tmp_path)

    async def test_nonzero_exit_raises(self, mock_subprocess):
        proc = mock_subprocess(stderr="fatal: repository not found", returncode=128)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(GitError, match="Git command failed") as exc_info:
                await _run_git("clone", "bad-url", "x")
        assert exc_info.value.stderr == "fatal: repository not found"
        assert exc_info.value.command == "git clone bad-url x"

    async def test_multiline_stderr_folded_into_one_line(self, mock_subprocess):
        stderr = "Cloning into 'x'...\nfatal: repository 'bad-url' does not exist\n"
        proc = mock_subprocess(stderr=stderr, returncode=128)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(GitError) as exc_info:
                await _run_git("clone", "bad-url", "x")
        message = str(exc_info.value)
        assert "\n" not in message
        assert message == (
            "Git command failed (exit 128): git clone bad-url x: "
            "Cloning into 'x'...; fatal: repository 'bad-url' does not exist"
        )
        assert exc_info.value.stderr == stderr.strip()

    async def test_timeout_raises(self, mock_subprocess):
        proc = mock_subprocess()

        async def _slow():
            await asyncio.sleep(10)

        proc.communicate = _slow
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(GitError, match="timed out"):
                await _run_git("status", timeout=0.01)
        proc.kill.assert_called_once()

    async def test_missing_git_raises(self):
        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("git")),
        ):
            with pytest.raises(GitError, match="not found"):
                await _run_git("status")


# ---------------------------------------------------------------------------
# GitClient
# ---------------------------------------------------------------------------


class TestGitClient:
    async def test_clone(self, tmp_path: Path):
        dest = tmp_path / "payment-service"
        with patch("spay_service_creator.vcs._run_git", AsyncMock(return_value=("", ""))) as run:
            result = await GitClient().clone("https://example.com/t.git", dest)
        assert result == dest
        run.assert_awaited_once_with(
            "clone", "https://example.com/t.git", str(dest), timeout=None
        )

    async def test_strip_history_removes_git_dir(self, tmp_path: Path):
        (tmp_path / ".git" / "objects").mkdir(parents=True)
        (tmp_path / "build.gradle.kts").write_text("x", encoding="utf-8")
        await GitClient().strip_history(tmp_path)
        assert not (tmp_path / ".git").exists()
        assert (tmp_path / "build.gradle.kts").exists()

    async def test_strip_history_without_git_dir(self, tmp_path: Path):
        await GitClient().strip_history(tmp_path)
        assert tmp_path.exists()

    async def test_init_and_commit_sequence(self, tmp_path: Path):
        with patch("spay_service_creator.vcs._run_git", AsyncMock(return_value=("", ""))) as run:
            await GitClient(timeout=30).init_and_commit(tmp_path, "initial commit")
        assert run.await_args_list == [
            call("init", cwd=tmp_path, timeout=30),
            call("add", ".", cwd=tmp_path, timeout=30),
            call("commit", "-m", "initial commit", cwd=tmp_path, timeout=30),
        ]

    async def test_init_and_commit_stops_on_failure(self, tmp_path: Path):
        run = AsyncMock(side_effect=[("", ""), GitError("add failed")])
        with patch("spay_service_creator.vcs._run_git", run):
            with pytest.raises(GitError, match="add failed"):
                await GitClient().init_and_commit(tmp_path, "msg")
        assert run.await_count == 2
