"""Shared state handed to every check."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..config import GateConfig, load_config
from ..errors import CheckFailed
from ..report import Reporter, Suggestions
from ..runner import CommandRunner, RunResult


@dataclass
class CheckContext:
    """Everything a check may touch during one gitgate invocation.

    ``root`` starts as the working directory and is moved to the repository
    top by the ``git_top`` check, which also reloads the configuration from
    there unless an explicit config file was given.
    """

    root: Path
    runner: CommandRunner
    config: GateConfig = field(default_factory=GateConfig)
    reporter: Reporter = field(default_factory=Reporter)
    suggestions: Suggestions = field(default_factory=Suggestions)
    config_path: Path | None = None

    def suggest(self, fmt: str, *args: object) -> str:
        return self.suggestions.suggest(fmt, *args)

    def run(self, title: str, cmd: list[str]) -> RunResult:
        return self.runner.run(title, cmd)

    def move_to(self, root: Path) -> None:
        self.root = root
        self.runner.cwd = root
        self.config = load_config(root, self.config_path)
        self.runner.timeout_s = self.config.timeout_s


Check = Callable[[CheckContext], str]

__all__ = ["Check", "CheckContext", "CheckFailed"]
