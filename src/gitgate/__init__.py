"""gitgate: pre-commit and pre-push hygiene gates for Python repositories.

gitgate shells out to git and to the project's tooling to verify that tests
exist and pass, lint is clean, scaffold files are present, nothing is left
uncommitted and the local version tag is ahead of the remote one. Every
failure ends with suggested commands.

Public API
----------
- :class:`Version` / :func:`parse` - a ``vMAJOR.MINOR.PATCH`` tag
- :class:`VersionSet` - accumulate tags and pick the highest
- :func:`evaluate_tag_gate` - decide whether a push may proceed

Example
-------
>>> from gitgate import VersionSet, evaluate_tag_gate, parse
>>> local = VersionSet.from_lines(["v1.0.0", "v1.1.0"]).highest()
>>> evaluate_tag_gate(local, parse("v1.0.9")).allowed
True
"""

from __future__ import annotations

from gitgate.checks.tags import TagGateDecision, evaluate_tag_gate
from gitgate.errors import CheckFailed, GitGateError
from gitgate.version import FormatError, Version, compare, is_zero, next_tag, parse
from gitgate.version_set import EmptySetError, VersionSet

__version__ = "0.1.0"

__all__ = [
    "CheckFailed",
    "EmptySetError",
    "FormatError",
    "GitGateError",
    "TagGateDecision",
    "Version",
    "VersionSet",
    "__version__",
    "compare",
    "evaluate_tag_gate",
    "is_zero",
    "next_tag",
    "parse",
]
