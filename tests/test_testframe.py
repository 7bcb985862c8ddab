"""Unit tests for gitgate.testframe."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitgate.testframe import TestFrameError, expected_test_name, make_test_frame, module_name


def _src(root: Path, rel: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("VALUE = 1\n", encoding="utf-8")
    return path


class TestModuleName:
    def test_src_layout(self, tmp_path: Path) -> None:
        assert module_name(tmp_path / "src" / "pkg" / "core.py", tmp_path) == "pkg.core"

    def test_flat_layout(self, tmp_path: Path) -> None:
        assert module_name(tmp_path / "pkg" / "sub" / "core.py", tmp_path) == "pkg.sub.core"

    def test_outside_root(self, tmp_path: Path) -> None:
        assert module_name(Path("tools/verify.py"), tmp_path / "elsewhere") == "tools.verify"


class TestExpectedTestName:
    def test_unique_stem(self, tmp_path: Path) -> None:
        src = tmp_path / "src" / "pkg" / "core.py"
        assert expected_test_name(src, tmp_path, [src, tmp_path / "src" / "pkg" / "util.py"]) == "test_core.py"

    def test_shared_stem_spells_out_module(self, tmp_path: Path) -> None:
        a = tmp_path / "src" / "pkg" / "a" / "util.py"
        b = tmp_path / "src" / "pkg" / "b" / "util.py"
        assert expected_test_name(a, tmp_path, [a, b]) == "test_pkg_a_util.py"
        assert expected_test_name(b, tmp_path, [a, b]) == "test_pkg_b_util.py"


class TestMakeTestFrame:
    def test_writes_frame(self, tmp_path: Path) -> None:
        src = _src(tmp_path, "src/pkg/core.py")
        target = make_test_frame(src, tmp_path)
        assert target == tmp_path / "tests" / "test_core.py"
        text = target.read_text(encoding="utf-8")
        assert 'importlib.import_module("pkg.core")' in text
        assert "def test_core_imports() -> None:" in text

    def test_custom_tests_dir(self, tmp_path: Path) -> None:
        src = _src(tmp_path, "app.py")
        assert make_test_frame(src, tmp_path, "test") == tmp_path / "test" / "test_app.py"

    def test_shared_stem_gets_distinct_frames(self, tmp_path: Path) -> None:
        a = _src(tmp_path, "src/pkg/a/util.py")
        b = _src(tmp_path, "src/pkg/b/util.py")
        assert make_test_frame(a, tmp_path, sources=[a, b]) == tmp_path / "tests" / "test_pkg_a_util.py"
        target = make_test_frame(b, tmp_path, sources=[a, b])
        assert target == tmp_path / "tests" / "test_pkg_b_util.py"
        assert 'import_module("pkg.b.util")' in target.read_text(encoding="utf-8")

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        src = _src(tmp_path, "src/pkg/core.py")
        make_test_frame(src, tmp_path)
        with pytest.raises(TestFrameError, match="won't overwrite"):
            make_test_frame(src, tmp_path)

    @pytest.mark.parametrize("rel", ["tests/test_core.py", "pkg/core_test.py"])
    def test_refuses_test_files(self, tmp_path: Path, rel: str) -> None:
        with pytest.raises(TestFrameError, match="looks like a test file"):
            make_test_frame(_src(tmp_path, rel), tmp_path)

    def test_refuses_non_python(self, tmp_path: Path) -> None:
        with pytest.raises(TestFrameError, match="not a python source"):
            make_test_frame(_src(tmp_path, "README.md"), tmp_path)

    def test_refuses_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(TestFrameError, match="can't stat"):
            make_test_frame(tmp_path / "ghost.py", tmp_path)
