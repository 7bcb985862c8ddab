"""Checks on the git repository itself: location, hooks, status, remotes."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from .base import CheckContext, CheckFailed

logger = logging.getLogger(__name__)

GIT_TOP_CMD = ["git", "rev-parse", "--show-toplevel"]
GIT_STATUS_CMD = ["git", "status", "--porcelain=v1"]
GIT_REMOTE_CMD = ["git", "remote"]
GITHUB_HOST = "github.com"


def git_top(ctx: CheckContext) -> str:
    res = ctx.run("finding top level git folder", GIT_TOP_CMD)
    if not res.ok:
        raise CheckFailed([*res.lines, f"{res.cli} failed ({res.note}), try:", ctx.suggest("git init")])
    if len(res.lines) != 1:
        raise CheckFailed([*res.lines, "need exactly 1 output to find the top level git folder"])

    top = Path(res.lines[0])
    if not top.is_dir():
        raise CheckFailed(f"top level git folder {str(top)!r} is not a directory")
    ctx.move_to(top)
    ctx.reporter.msg(f"top level git folder: {str(top)!r}")
    return str(top)


def hooks_installed(ctx: CheckContext) -> str:
    ctx.reporter.title("checking that .git/hooks are installed")
    problems: list[str] = []
    for hook in ctx.config.hooks:
        rel = f".git/hooks/{hook}"
        path = ctx.root / rel
        if not path.exists():
            problems.extend(
                [
                    f"hook {rel!r} doesn't exist, run:",
                    ctx.suggest("echo exec gitgate %s > %s", hook, rel),
                    ctx.suggest("chmod +x %s", rel),
                ]
            )
        elif not os.access(path, os.X_OK):
            problems.extend([f"hook {rel!r} is not executable, run:", ctx.suggest("chmod +x %s", rel)])
    if problems:
        raise CheckFailed(problems)
    return f"{len(ctx.config.hooks)} hook(s)"


def all_committed(ctx: CheckContext) -> str:
    res = ctx.run("checking that everything is locally committed", GIT_STATUS_CMD)
    if not res.ok:
        raise CheckFailed([*res.lines, f"{res.cli} failed ({res.note})"])
    if not res.lines:
        return "working tree clean"
    raise CheckFailed(
        [
            *res.lines,
            "not everything is committed, run:",
            ctx.suggest("git status              # to check what's needed"),
            ctx.suggest("git add $FILE(s)        # to add new files if needed"),
            ctx.suggest("git commit -m $MESSAGE  # to locally commit"),
        ]
    )


def have_remote(ctx: CheckContext) -> str:
    res = ctx.run("checking for remote repositories", GIT_REMOTE_CMD)
    if not res.ok:
        raise CheckFailed([*res.lines, f"{res.cli} failed ({res.note})"])
    if res.lines:
        for remote in res.lines:
            ctx.reporter.msg(f"{remote!r} is a remote repository")
        return ", ".join(res.lines)

    problems = ["no remote repository is configured"]
    github_path = _github_path(ctx.root)
    if github_path is not None:
        problems.extend(
            [
                f"on {GITHUB_HOST} add the repository {PurePosixPath(github_path).name}, and then:",
                ctx.suggest("git remote add origin https://%s/%s.git", GITHUB_HOST, github_path),
            ]
        )
    else:
        problems.append(ctx.suggest("git remote add $REMOTE $URL"))
    raise CheckFailed(problems)


def _github_path(root: Path) -> str | None:
    """Return ``owner/repo`` for checkouts under a ``.../github.com/owner/repo`` tree."""
    posix = root.as_posix()
    if GITHUB_HOST not in posix:
        return None
    after = posix.split(GITHUB_HOST, 1)[1].strip("/")
    if not after:
        logger.debug("no repository path after %s in %s", GITHUB_HOST, posix)
        return None
    return after
