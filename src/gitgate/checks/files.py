"""Presence of the standard project scaffold files."""

from __future__ import annotations

from .base import CheckContext, CheckFailed


def std_files(ctx: CheckContext) -> str:
    ctx.reporter.title("checking that standard files are present")
    problems: list[str] = []
    for name in ctx.config.required_files:
        if not (ctx.root / name).is_file():
            problems.append(f"file {name} not found, create one and retry")

    if not (ctx.root / ".gitignore").is_file():
        problems.extend(
            [
                "`.gitignore` not found, create one and retry, at a minimum run:",
                ctx.suggest("echo .git > .gitignore"),
            ]
        )
    if not (ctx.root / "pyproject.toml").is_file():
        problems.extend(
            [
                "`pyproject.toml` not found, declare the build system and project metadata, then run:",
                ctx.suggest("python -m pip install -e ."),
            ]
        )
    if problems:
        raise CheckFailed(problems)
    return f"{len(ctx.config.required_files) + 2} file(s)"
