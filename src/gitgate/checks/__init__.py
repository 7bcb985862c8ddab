"""Hygiene checks and the sequences the CLI runs them in.

Each check takes a :class:`CheckContext`, returns a short note on success
and raises :class:`CheckFailed` otherwise. A sequence stops at the first
failure.
"""

from __future__ import annotations

import logging

from ..report import CheckRecord
from .base import Check, CheckContext, CheckFailed
from .files import std_files
from .quality import lint, md_toc, py_tests
from .repo import all_committed, git_top, have_remote, hooks_installed
from .tags import TagGateDecision, evaluate_tag_gate, git_tag

logger = logging.getLogger(__name__)

CHECKS: dict[str, Check] = {
    "git_top": git_top,
    "hooks": hooks_installed,
    "stdfiles": std_files,
    "pytests": py_tests,
    "lint": lint,
    "mdtoc": md_toc,
    "allcommitted": all_committed,
    "haveremote": have_remote,
    "gittag": git_tag,
}

_PRE_COMMIT = ["git_top", "hooks", "stdfiles", "pytests", "lint", "mdtoc"]

SEQUENCES: dict[str, list[str]] = {
    "hooks": ["git_top", "hooks"],
    "pre-commit": _PRE_COMMIT,
    "stdfiles": ["git_top", "hooks", "stdfiles"],
    "pytests": ["git_top", "hooks", "pytests"],
    "lint": ["git_top", "hooks", "lint"],
    "mdtoc": ["git_top", "mdtoc"],
    "pre-push": [*_PRE_COMMIT, "allcommitted", "haveremote", "gittag"],
    "allcommitted": ["git_top", "hooks", "allcommitted"],
    "haveremote": ["git_top", "hooks", "haveremote"],
    "gittag": ["git_top", "hooks", "gittag"],
}


def run_sequence(ctx: CheckContext, action: str) -> list[CheckRecord]:
    """Run the checks of ``action`` in order, stopping at the first failure."""
    records: list[CheckRecord] = []
    for name in SEQUENCES[action]:
        logger.debug("running check %s", name)
        try:
            note = CHECKS[name](ctx)
        except CheckFailed as e:
            records.append(CheckRecord(name=name, passed=False, note="failed", lines=e.lines))
            break
        records.append(CheckRecord(name=name, passed=True, note=note))
    return records


__all__ = [
    "CHECKS",
    "SEQUENCES",
    "CheckContext",
    "CheckFailed",
    "TagGateDecision",
    "evaluate_tag_gate",
    "run_sequence",
]
