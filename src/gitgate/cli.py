"""gitgate command line.

Usage:
  # check that we're in a git repository and suggest to install hooks
  gitgate hooks

  # pre-commit checks
  gitgate pre-commit  # or: gitgate stdfiles && gitgate pytests && gitgate lint && gitgate mdtoc

  # pre-push checks, runs the above pre-commit checks first
  gitgate pre-push    # or: gitgate allcommitted && gitgate haveremote && gitgate gittag

  # create a test frame for python sources
  gitgate make-test-frame src/pkg/a.py src/pkg/b.py  # creates tests/test_a.py and tests/test_b.py

Exit codes:
  0 = all checks passed
  1 = check failure
  2 = usage error
  3 = tool error (invalid configuration)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .checks import SEQUENCES, CheckContext, run_sequence
from .checks.quality import find_python_sources
from .checks.repo import GIT_TOP_CMD
from .config import ConfigError, load_config
from .report import Reporter, build_payload, write_payload
from .runner import CommandRunner
from .testframe import TestFrameError, make_test_frame

logger = logging.getLogger(__name__)

ACTION_HELP = {
    "hooks": "Check that the git hooks are installed",
    "pre-commit": "Run all pre-commit checks",
    "stdfiles": "Check that standard project files are present",
    "pytests": "Check that sources have tests and that the tests pass",
    "lint": "Run the linter on local sources",
    "mdtoc": "Refresh the README.md table of contents",
    "pre-push": "Run the pre-commit checks, then all pre-push checks",
    "allcommitted": "Check that everything is locally committed",
    "haveremote": "Check that a remote repository is configured",
    "gittag": "Check that the local tag is ahead of the remote tag",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gitgate", description="Pre-commit and pre-push hygiene gates")
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("-v", "--verbose", action="count", default=0)
    shared.add_argument("--config", type=Path, default=None, help="Config file (default: <repo>/.gitgate.yaml)")
    shared.add_argument("--json", dest="json_path", type=Path, default=None, help="Write a JSON report here")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for action, help_text in ACTION_HELP.items():
        subparsers.add_parser(action, help=help_text, parents=[shared])

    frame = subparsers.add_parser(
        "make-test-frame",
        help="Create a minimal pytest module for each python source",
        parents=[shared],
    )
    frame.add_argument("sources", nargs="+", type=Path)
    return parser


def _setup_logging(verbose: int) -> None:
    log_level = logging.WARNING
    if verbose >= 1:
        log_level = logging.INFO
    if verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")


def _repo_root_or_cwd(runner: CommandRunner) -> Path:
    res = runner.run("finding top level git folder", GIT_TOP_CMD)
    if res.ok and len(res.lines) == 1:
        return Path(res.lines[0])
    return Path.cwd()


def _cmd_make_test_frame(args: argparse.Namespace, reporter: Reporter) -> int:
    root = _repo_root_or_cwd(CommandRunner(Path.cwd()))
    config = load_config(root, args.config)
    sources = find_python_sources(root, config.source_dirs)
    for src in args.sources:
        try:
            target = make_test_frame(src, root, config.tests_dir, sources)
        except TestFrameError as e:
            reporter.error(str(e))
            return 1
        reporter.msg(f"created {target}")
    return 0


def _cmd_checks(args: argparse.Namespace, reporter: Reporter) -> int:
    cwd = Path.cwd()
    config = load_config(cwd, args.config)
    ctx = CheckContext(
        root=cwd,
        runner=CommandRunner(cwd, timeout_s=config.timeout_s),
        config=config,
        reporter=reporter,
        config_path=args.config,
    )
    records = run_sequence(ctx, args.command)

    for record in records:
        reporter.msg(record.summary())
    failed = [r for r in records if not r.passed]
    for record in failed:
        reporter.error("\n".join(record.lines))
    reporter.suggestions(ctx.suggestions)

    if args.json_path:
        write_payload(args.json_path, build_payload(args.command, records, ctx.suggestions))
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    reporter = Reporter()

    try:
        if args.command == "make-test-frame":
            return _cmd_make_test_frame(args, reporter)
        if args.command in SEQUENCES:
            return _cmd_checks(args, reporter)
        parser.error(f"Unknown command: {args.command}")
        return 2
    except ConfigError as e:
        reporter.error(str(e))
        if args.verbose >= 2:
            logger.exception("configuration error")
        return 3


if __name__ == "__main__":
    sys.exit(main())
