"""External command execution with a per-run cache.

Every check shells out to git or to the project's tooling. Checks in one
sequence frequently ask for the same command (``git rev-parse`` is the usual
one), so the runner memoizes results keyed by the literal command line. The
cache lives on the runner instance and dies with it.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Untranslated messages from git and the test tools.
COMMAND_ENV = {"LC_ALL": "C", "LANG": "C"}


@dataclass(frozen=True)
class RunResult:
    """Outcome of one command.

    Attributes:
        cmd: The argv that was executed.
        returncode: Process exit code, or None on timeout / OS error.
        lines: Non-empty lines of combined stdout and stderr.
        note: Short status, e.g. ``rc=0`` or ``timeout after 60s``.
    """

    cmd: list[str]
    returncode: int | None
    lines: list[str] = field(default_factory=list)
    note: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def cli(self) -> str:
        return shlex.join(self.cmd)


def _split_lines(text: str | bytes | None) -> list[str]:
    if text is None:
        return []
    if isinstance(text, bytes):
        text = text.decode(errors="replace")
    return [line for line in text.splitlines() if line.strip()]


class CommandRunner:
    """Runs commands in ``cwd`` and caches their results by command line."""

    def __init__(self, cwd: Path | None = None, *, timeout_s: int | None = None) -> None:
        self.cwd = cwd or Path.cwd()
        self.timeout_s = timeout_s
        self._cache: dict[str, RunResult] = {}

    def run(self, title: str, cmd: list[str]) -> RunResult:
        cli = shlex.join(cmd)
        cached = self._cache.get(cli)
        if cached is not None:
            logger.debug("cache hit for %s", cli)
            return cached

        logger.info("%s: running %s", title, cli)
        result = self._execute(cmd)
        if not result.ok:
            logger.info("%s failed (%s)", cli, result.note)
            for line in result.lines:
                logger.debug("output: %s", line)
        self._cache[cli] = result
        return result

    def _execute(self, cmd: list[str]) -> RunResult:
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(self.cwd),
                text=True,
                encoding="utf-8",
                errors="replace",
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.timeout_s,
                env={**os.environ, **COMMAND_ENV},
            )
        except subprocess.TimeoutExpired as exc:
            return RunResult(
                cmd=cmd,
                returncode=None,
                lines=_split_lines(exc.stdout),
                note=f"timeout after {self.timeout_s}s",
            )
        except OSError as exc:
            return RunResult(cmd=cmd, returncode=None, lines=[str(exc)], note="os error")
        return RunResult(
            cmd=cmd,
            returncode=proc.returncode,
            lines=_split_lines(proc.stdout),
            note=f"rc={proc.returncode}",
        )

    def forget(self, cmd: list[str]) -> None:
        """Drop a cached result so the next run executes again."""
        self._cache.pop(shlex.join(cmd), None)

    @staticmethod
    def which(tool: str) -> str | None:
        return shutil.which(tool)
