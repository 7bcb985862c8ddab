# SPDX-License-Identifier: MIT
"""Pytest configuration and shared fixtures for the gitgate test suite.

This module provides:
- FakeRunner, a CommandRunner whose commands return canned output
- A CheckContext factory bound to a temporary directory
- A real throwaway git repository for end-to-end checks
"""

from __future__ import annotations

import io
import os
import shlex
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from gitgate.checks import CheckContext
from gitgate.config import GateConfig
from gitgate.report import Reporter
from gitgate.runner import CommandRunner, RunResult

# ---------------------------------------------------------------------------
# Fake command runner
# ---------------------------------------------------------------------------


class FakeRunner(CommandRunner):
    """CommandRunner returning canned ``(returncode, lines)`` per command line.

    Unknown commands fail with rc=127. ``calls`` records every command that
    actually reached ``_execute`` (cache hits do not).
    """

    def __init__(
        self,
        responses: dict[str, tuple[int, list[str]]] | None = None,
        *,
        installed: set[str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        super().__init__(cwd)
        self.responses = dict(responses or {})
        self.installed = installed if installed is not None else set()
        self.calls: list[list[str]] = []

    def _execute(self, cmd: list[str]) -> RunResult:
        self.calls.append(cmd)
        rc, lines = self.responses.get(shlex.join(cmd), (127, [f"{cmd[0]}: command not found"]))
        return RunResult(cmd=cmd, returncode=rc, lines=list(lines), note=f"rc={rc}")

    def which(self, tool: str) -> str | None:
        return f"/usr/bin/{tool}" if tool in self.installed else None


class CapturedReporter(Reporter):
    def __init__(self) -> None:
        super().__init__(out=io.StringIO(), err=io.StringIO())

    @property
    def stdout(self) -> str:
        return self.out.getvalue()

    @property
    def stderr(self) -> str:
        return self.err.getvalue()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_ctx(tmp_path: Path) -> Callable[..., CheckContext]:
    """Factory for a CheckContext rooted at ``tmp_path``."""

    def _make(
        responses: dict[str, tuple[int, list[str]]] | None = None,
        *,
        installed: set[str] | None = None,
        config: GateConfig | None = None,
        root: Path | None = None,
    ) -> CheckContext:
        base = root or tmp_path
        return CheckContext(
            root=base,
            runner=FakeRunner(responses, installed=installed, cwd=base),
            config=config or GateConfig(),
            reporter=CapturedReporter(),
        )

    return _make


def _git(cwd: Path, *args: str) -> str:
    proc = subprocess.run(["git", *args], cwd=str(cwd), check=True, capture_output=True, text=True)
    return proc.stdout


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An initialised git repository with one commit, cwd set to it."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    for key, value in {
        "GIT_AUTHOR_NAME": "gitgate",
        "GIT_AUTHOR_EMAIL": "gitgate@example.com",
        "GIT_COMMITTER_NAME": "gitgate",
        "GIT_COMMITTER_EMAIL": "gitgate@example.com",
        "GIT_CONFIG_NOSYSTEM": "1",
    }.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("HOME", str(tmp_path))
    _git(repo, "init", "-q")
    (repo / "README.md").write_text("# demo\n", encoding="utf-8")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-q", "-m", "initial")
    monkeypatch.chdir(repo)
    return repo


@pytest.fixture
def git() -> Callable[..., str]:
    return _git


def install_hooks(repo: Path, hooks: tuple[str, ...] = ("pre-commit", "pre-push")) -> None:
    hooks_dir = repo / ".git" / "hooks"
    hooks_dir.mkdir(parents=True, exist_ok=True)
    for hook in hooks:
        path = hooks_dir / hook
        path.write_text(f"#!/bin/sh\nexec gitgate {hook}\n", encoding="utf-8")
        os.chmod(path, 0o755)


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def hooks_installer() -> Callable[..., None]:
    return install_hooks
