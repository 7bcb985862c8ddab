"""Exception types shared across gitgate."""

from __future__ import annotations

from collections.abc import Iterable


class GitGateError(Exception):
    """Base exception for gitgate."""


class CheckFailed(GitGateError):
    """A check found a problem the user has to fix.

    ``lines`` is user-facing text, one entry per output line. Suggested
    commands are recorded separately on the run's Suggestions.
    """

    def __init__(self, lines: str | Iterable[str]) -> None:
        if isinstance(lines, str):
            lines = lines.split("\n")
        self.lines = [line for line in lines if line]
        super().__init__("\n".join(self.lines))
