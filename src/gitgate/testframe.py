"""Scaffold a minimal pytest module for a Python source file.

``gitgate make-test-frame src/pkg/mod.py`` writes ``tests/test_mod.py`` with
an import smoke test, which is enough to satisfy the ``pytests`` check until
real tests are written.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from .errors import GitGateError

TEST_FRAME = '''from __future__ import annotations

import importlib


def test_{stem}_imports() -> None:
    assert importlib.import_module("{module}") is not None
'''


class TestFrameError(GitGateError):
    """Raised when a test frame cannot be created."""

    __test__ = False


def module_name(src: Path, root: Path) -> str:
    """Dotted import path of ``src``; a leading ``src/`` directory is dropped."""
    try:
        rel = PurePosixPath(src.resolve().relative_to(root.resolve()).as_posix())
    except ValueError:
        rel = PurePosixPath(src.as_posix())
    parts = list(rel.with_suffix("").parts)
    if len(parts) > 1 and parts[0] == "src":
        parts = parts[1:]
    return ".".join(parts)


def expected_test_name(src: Path, root: Path, sources: Iterable[Path] = ()) -> str:
    """Test module name for ``src``.

    ``test_<stem>.py`` unless another of ``sources`` shares the stem, in which
    case the dotted module path is spelled out, e.g. ``test_pkg_a_util.py``.
    Test modules share one namespace under the tests dir, so names must be
    unique per source.
    """
    own = src.resolve()
    if any(other.stem == src.stem and other.resolve() != own for other in sources):
        return f"test_{module_name(src, root).replace('.', '_')}.py"
    return f"test_{src.stem}.py"


def make_test_frame(src: Path, root: Path, tests_dir: str = "tests", sources: Iterable[Path] = ()) -> Path:
    """Write ``<root>/<tests_dir>/test_<stem>.py`` for ``src``.

    ``sources`` are the other project sources; see :func:`expected_test_name`.

    Raises:
        TestFrameError: If ``src`` is not a Python source, is already a test,
            does not exist, or the test file exists already.
    """
    if src.suffix != ".py":
        raise TestFrameError(f"{src} is not a python source")
    if src.name.startswith("test_") or src.name.endswith("_test.py"):
        raise TestFrameError(f"{src} looks like a test file already")
    if not src.is_file():
        raise TestFrameError(f"can't stat {src}: no such file")

    target = root / tests_dir / expected_test_name(src, root, sources)
    if target.exists():
        raise TestFrameError(f"test file {target} already exists, won't overwrite")

    content = TEST_FRAME.format(stem=src.stem, module=module_name(src, root))
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TestFrameError(f"failed to write {target}: {e}") from e
    return target
