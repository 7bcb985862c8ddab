"""Accumulator of parsed version tags.

A VersionSet is built once per tag query (local or remote), fed one raw line
at a time, and then asked for its highest element.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .version import Version, parse


class EmptySetError(LookupError):
    """Raised by :meth:`VersionSet.highest` when no version was ever added."""


class VersionSet:
    """Insertion-ordered sequence of Versions; duplicates are kept."""

    def __init__(self) -> None:
        self._versions: list[Version] = []

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> VersionSet:
        """Build a set from raw tag strings; stops at the first FormatError."""
        versions = cls()
        for line in lines:
            versions.add(line)
        return versions

    def add(self, raw: str) -> Version:
        """Parse ``raw`` and append it.

        Raises:
            FormatError: Propagated from :func:`gitgate.version.parse`; the
                set is left unchanged.
        """
        version = parse(raw)
        self._versions.append(version)
        return version

    def has_any(self) -> bool:
        return bool(self._versions)

    def highest(self) -> Version:
        """Return the maximum version.

        Raises:
            EmptySetError: If the set is empty.
        """
        if not self._versions:
            raise EmptySetError("no tag set, can't determine highest one")
        high = self._versions[0]
        for version in self._versions[1:]:
            if version > high:
                high = version
        return high

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[Version]:
        return iter(self._versions)

    def __repr__(self) -> str:
        return f"VersionSet([{', '.join(str(v) for v in self._versions)}])"
