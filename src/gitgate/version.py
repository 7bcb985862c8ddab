"""Semantic version tags of the form ``v<major>.<minor>.<patch>``.

A tag is parsed into three non-negative integers so that tags can be ordered.
The textual form is always rendered as ``v{major}.{minor}.{patch}`` in plain
decimal, so ``v01.2.3`` parses but does not round-trip.

Usage:
    >>> v = parse("v1.2.3")
    >>> str(v.next())
    'v1.2.4'
    >>> compare(parse("v1.10.0"), parse("v1.9.9"))
    1
"""

from __future__ import annotations

import re
from dataclasses import dataclass

TAG_PREFIX = "v"
TAG_FORMAT = r"v\d+\.\d+\.\d+"  # ex. v1.23.45
PLACEHOLDER_TAG = "$TAG"

TAG_RE = re.compile(TAG_FORMAT, re.ASCII)
_DIGITS_RE = re.compile(r"[0-9]+")
_COMPONENTS = ("major", "minor", "patch")


class FormatError(ValueError):
    """Raised when a raw tag string is not of the form ``vMAJOR.MINOR.PATCH``.

    Attributes:
        raw: The offending raw string, verbatim.
        component: Which part failed: ``prefix``, ``segments``, ``major``,
            ``minor`` or ``patch``.
    """

    def __init__(self, raw: str, component: str, message: str) -> None:
        super().__init__(message)
        self.raw = raw
        self.component = component


@dataclass(frozen=True, order=True)
class Version:
    """Immutable (major, minor, patch) triple, ordered lexicographically."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in _COMPONENTS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @property
    def is_zero(self) -> bool:
        return self.major == 0 and self.minor == 0 and self.patch == 0

    def next(self) -> Version:
        """Return the successor with only the patch number incremented."""
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{TAG_PREFIX}{self.major}.{self.minor}.{self.patch}"


ZERO = Version(0, 0, 0)


def parse(raw: str) -> Version:
    """Parse ``raw`` into a Version.

    Raises:
        FormatError: If the prefix is missing, the segment count is not 3, or
            a segment is not a non-negative base-10 integer.
    """
    if not raw.startswith(TAG_PREFIX):
        raise FormatError(raw, "prefix", f"tag {raw!r} doesn't start with {TAG_PREFIX!r}")
    parts = raw[len(TAG_PREFIX) :].split(".")
    if len(parts) != len(_COMPONENTS):
        raise FormatError(raw, "segments", f"tag {raw!r} doesn't have 3 parts, just {parts}")

    numbers: list[int] = []
    for name, part in zip(_COMPONENTS, parts):
        if not _DIGITS_RE.fullmatch(part):
            raise FormatError(raw, name, f"can't parse {name} number of tag {raw!r} ({part!r})")
        numbers.append(int(part))
    return Version(*numbers)


def compare(a: Version, b: Version) -> int:
    """Three-way comparison: -1 if a < b, 0 if equal, 1 if a > b."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def is_zero(version: Version | None) -> bool:
    """Return True for v0.0.0 and for an absent version (no tag yet)."""
    return version is None or version.is_zero


def next_tag(raw: str) -> str:
    """Return the successor of ``raw``, or ``$TAG`` when it does not parse."""
    try:
        return str(parse(raw).next())
    except FormatError:
        return PLACEHOLDER_TAG
