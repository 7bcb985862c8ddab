"""Tag ordering between the local repository and its remote.

A push is allowed only when the highest local tag is strictly greater than
the highest remote tag, or when the remote has no tags yet. The decision is
a pure predicate, :func:`evaluate_tag_gate`, so it can be tested without git.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..version import TAG_RE, FormatError, Version, is_zero, next_tag
from ..version_set import VersionSet
from .base import CheckContext, CheckFailed

LOCAL_TAGS_CMD = ["git", "tag"]
REMOTE_TAGS_CMD = ["git", "ls-remote", "--tags"]
BOOTSTRAP_TAG = "v0.0.0"
PEELED_SUFFIX = "^{}"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagGateDecision:
    allowed: bool
    reason: str
    next_tag: Version | None = None


def evaluate_tag_gate(local: Version, remote: Version | None) -> TagGateDecision:
    if remote is None or is_zero(remote):
        return TagGateDecision(True, "remote has no tags yet")
    if local > remote:
        return TagGateDecision(True, f"local {local} is ahead of remote {remote}")
    return TagGateDecision(
        False,
        "the local tag should indicate a higher version than the remote one",
        next_tag=remote.next(),
    )


def local_highest_tag(ctx: CheckContext) -> Version:
    res = ctx.run("checking local git tag", LOCAL_TAGS_CMD)
    if not res.ok:
        raise CheckFailed([*res.lines, f"{res.cli} failed ({res.note})"])
    if not res.lines:
        raise CheckFailed(
            [
                "local tag not found, for a first tagging, run:",
                ctx.suggest("git tag -a %s -m %s", BOOTSTRAP_TAG, BOOTSTRAP_TAG),
            ]
        )

    tags = VersionSet()
    for line in res.lines:
        raw = line.strip()
        try:
            tags.add(raw)
        except FormatError as e:
            retag = next_tag(raw)
            raise CheckFailed(
                [
                    str(e),
                    "manually correct using:",
                    ctx.suggest("git tag -d %s", raw),
                    ctx.suggest("git tag -a %s -m %s", retag, retag),
                ]
            ) from e
    return tags.highest()


def remote_highest_tag(ctx: CheckContext) -> Version | None:
    """Highest tag on the remote, or None when the remote carries no tags.

    Refs that are not version tags (``release-2020``, ``v1.0.0-rc1``) are
    skipped; peeled entries (``v1.0.0^{}``) count as their tag.
    """
    res = ctx.run("checking remote git tag", REMOTE_TAGS_CMD)
    if not res.ok:
        raise CheckFailed([*res.lines, f"{res.cli} failed ({res.note})"])

    marker = ctx.config.remote_tag_marker
    tags = VersionSet()
    for line in res.lines:
        if marker not in line:
            continue
        ref = line.split(marker, 1)[1].strip().removesuffix(PEELED_SUFFIX)
        if TAG_RE.fullmatch(ref) is None:
            logger.debug("skipping remote ref %r", ref)
            continue
        tags.add(ref)
    if not tags.has_any():
        return None
    return tags.highest()


def git_tag(ctx: CheckContext) -> str:
    ctx.reporter.title("checking git tags")
    local = local_highest_tag(ctx)
    remote = remote_highest_tag(ctx)
    remote_text = str(remote) if remote is not None else "none"
    ctx.reporter.msg(f"local tag: {str(local)!r}, remote tag: {remote_text!r}")

    decision = evaluate_tag_gate(local, remote)
    if not decision.allowed:
        nxt = decision.next_tag
        raise CheckFailed(
            [
                decision.reason,
                "increase the local tag first, run:",
                ctx.suggest("git tag -a %s -m %s  # or increase major/minor numbers", nxt, nxt),
                ctx.suggest("git push"),
                ctx.suggest("git push origin %s", nxt),
                "alternatively, to stay on the same tag number, run:",
                ctx.suggest("git push --no-verify"),
            ]
        )

    ctx.reporter.msg(f"local tag {local} will need pushing to remote, remember to run:")
    ctx.reporter.msg(ctx.suggest("git push origin %s", local))
    return f"local {local}, remote {remote_text}"
