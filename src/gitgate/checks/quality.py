"""Code quality checks: test coverage by file, test run, lint, README TOC."""

from __future__ import annotations

import logging
from pathlib import Path

from ..testframe import expected_test_name
from .base import CheckContext, CheckFailed
from .repo import GIT_STATUS_CMD

logger = logging.getLogger(__name__)

SKIP_DIRS = frozenset({"__pycache__", "build", "dist", "node_modules", "venv"})
NON_TEST_MODULES = frozenset({"__init__.py", "__main__.py", "conftest.py"})
MAX_OUTPUT_LINES = 50

TOC_START = "<!-- toc -->"
TOC_END = "<!-- /toc -->"
README = "README.md"


def _is_test_file(path: Path) -> bool:
    return path.name.startswith("test_") or path.name.endswith("_test.py")


def _walk_python(base: Path, root: Path) -> list[Path]:
    found: list[Path] = []
    if not base.is_dir():
        return found
    for path in sorted(base.rglob("*.py")):
        rel_parts = path.relative_to(root).parts[:-1]
        if any(part in SKIP_DIRS or part.startswith(".") for part in rel_parts):
            continue
        if path.is_file():
            found.append(path)
    return found


def find_python_sources(root: Path, source_dirs: list[str]) -> list[Path]:
    """Python modules under ``source_dirs`` that ought to have tests."""
    sources: list[Path] = []
    for name in source_dirs:
        for path in _walk_python(root / name, root):
            if path.name in NON_TEST_MODULES or _is_test_file(path):
                continue
            sources.append(path)
    return sources


def python_sources(ctx: CheckContext) -> list[Path]:
    return find_python_sources(ctx.root, ctx.config.source_dirs)


def existing_test_files(ctx: CheckContext) -> set[str]:
    tests_dir = ctx.root / ctx.config.tests_dir
    return {p.name for p in _walk_python(tests_dir, ctx.root) if _is_test_file(p)}


def py_tests(ctx: CheckContext) -> str:
    ctx.reporter.title("checking for python tests")
    sources = python_sources(ctx)
    have = existing_test_files(ctx)
    logger.debug("%d source(s), %d test file(s)", len(sources), len(have))

    problems: list[str] = []
    missing: list[str] = []
    tests_found = False
    for src in sources:
        rel = src.relative_to(ctx.root).as_posix()
        want = expected_test_name(src, ctx.root, sources)
        if want in have:
            tests_found = True
            continue
        problems.append(f"python source {rel!r} lacks a test {ctx.config.tests_dir + '/' + want!r}")
        missing.append(rel)

    note = f"{len(sources) - len(missing)}/{len(sources)} source(s) with tests"
    if tests_found:
        res = ctx.run("running python tests", ctx.config.test_command)
        if not res.ok:
            problems.extend(res.lines[-MAX_OUTPUT_LINES:])
            problems.append(f"{res.cli} failed ({res.note})")
    if missing:
        problems.append("at a minimum run:")
        problems.extend(ctx.suggest("gitgate make-test-frame %s", rel) for rel in missing)
    if problems:
        raise CheckFailed(problems)
    return note


def lint(ctx: CheckContext) -> str:
    cmd = ctx.config.lint_command
    if not cmd:
        return "skipped (disabled)"
    if ctx.runner.which(cmd[0]) is None:
        ctx.reporter.msg(f"(Not fatal) {cmd[0]} is not installed, lint skipped")
        return "skipped (not installed)"
    res = ctx.run(f"checking {cmd[0]} on local sources", cmd)
    if not res.ok:
        raise CheckFailed([*res.lines[-MAX_OUTPUT_LINES:], f"{res.cli} failed ({res.note})"])
    return res.note


def md_toc(ctx: CheckContext) -> str:
    readme = ctx.root / README
    try:
        text = readme.read_text(encoding="utf-8")
    except OSError as e:
        raise CheckFailed(f"cannot read {README}: {e}") from e

    starts: list[int] = []
    ends: list[int] = []
    for lineno, line in enumerate(text.split("\n")):
        if line.startswith(TOC_START):
            starts.append(lineno)
        elif line.startswith(TOC_END):
            ends.append(lineno)

    if not starts and not ends:
        ctx.reporter.error(
            "\n".join(
                [
                    f"(Not fatal) {README} has no Table of Contents section",
                    "to have the TOC automatically updated, run:",
                    ctx.suggest("go install sigs.k8s.io/mdtoc@latest"),
                    ctx.suggest("add   %s    to %s (at first column)", TOC_START, README),
                    ctx.suggest("add   %s   to %s (at first column)", TOC_END, README),
                ]
            )
        )
        return "no toc markers (not fatal)"
    if len(starts) != 1 or len(ends) != 1 or starts[0] > ends[0]:
        raise CheckFailed(
            f"{README} must contain exactly one tag `{TOC_START}` followed by one tag `{TOC_END}`, "
            f"found: {len(starts) + len(ends)}"
        )

    cmd = ctx.config.toc_command
    if not cmd:
        return "skipped (disabled)"
    if ctx.runner.which(cmd[0]) is None:
        ctx.reporter.msg(f"(Not fatal) {cmd[0]} is not installed, {README} TOC not refreshed, run:")
        ctx.reporter.msg(ctx.suggest("go install sigs.k8s.io/mdtoc@latest"))
        return "skipped (not installed)"
    res = ctx.run(f"refreshing {README} TOC", cmd)
    if not res.ok:
        raise CheckFailed([*res.lines, f"{res.cli} failed ({res.note})"])
    # the README changed on disk, a cached status is stale
    ctx.runner.forget(GIT_STATUS_CMD)
    return "toc refreshed"
