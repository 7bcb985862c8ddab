"""Console output and suggested command lines.

Every failure path ends in one or more suggested shell commands. Checks
record suggestions while they run; the CLI prints them as a trailing block
once the sequence stops.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

PREFIX = "[gitgate]"


class Suggestions:
    """Ordered collection of suggested command lines for one invocation."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def suggest(self, fmt: str, *args: object) -> str:
        """Record ``fmt % args`` and return it for embedding in messages."""
        text = fmt % args if args else fmt
        self._items.append(text)
        return text

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def as_list(self) -> list[str]:
        return list(self._items)


class Reporter:
    """Writes ``[gitgate]``-prefixed lines; errors go to stderr."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _write(self, stream: TextIO, text: str) -> None:
        for line in text.split("\n"):
            if line:
                stream.write(f"{PREFIX} {line}\n")

    def title(self, text: str) -> None:
        self._write(self.out, text)

    def msg(self, text: str) -> None:
        self._write(self.out, text)

    def error(self, text: str) -> None:
        self._write(self.err, text)

    def suggestions(self, suggestions: Suggestions) -> None:
        if not len(suggestions):
            return
        self.out.write(f"{PREFIX} suggestion(s):\n")
        for item in suggestions:
            self.out.write(f"  {item}\n")


@dataclass
class CheckRecord:
    name: str
    passed: bool
    note: str = ""
    lines: list[str] = field(default_factory=list)

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"[{status}] {self.name} {('(' + self.note + ')') if self.note else ''}".rstrip()


def build_payload(command: str, records: list[CheckRecord], suggestions: Suggestions) -> dict[str, Any]:
    failed = [r.name for r in records if not r.passed]
    return {
        "ok": not failed,
        "command": command,
        "failed_checks": failed,
        "first_failed_check": failed[0] if failed else "",
        "checks": [
            {"name": r.name, "passed": r.passed, "note": r.note, "lines": r.lines}
            for r in records
        ],
        "suggestions": suggestions.as_list(),
    }


def write_payload(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
