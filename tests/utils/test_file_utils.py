from __future__ import annotations

from pathlib import Path

import pytest

from utils.file_utils import FileUtils, InvalidFileTypeError


def test_resolve_path_relative_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert FileUtils.resolve_path("cache.json") == (tmp_path / "cache.json").resolve()


def test_resolve_path_expands_environment_variables(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GREETER_TEST_DIR", str(tmp_path))

    assert FileUtils.resolve_path("$GREETER_TEST_DIR/cache.json") == (tmp_path / "cache.json").resolve()


def test_resolve_path_strict_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileUtils.resolve_path(tmp_path / "absent.json", strict=True)


def test_read_bytes_missing_returns_none(tmp_path: Path) -> None:
    assert FileUtils.read_bytes(tmp_path / "absent.json") is None


def test_read_bytes_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(InvalidFileTypeError):
        FileUtils.read_bytes(tmp_path)


def test_overwrite_replaces_content(tmp_path: Path) -> None:
    target = tmp_path / "cache.json"
    target.write_bytes(b'{"long": "previous content"}')

    FileUtils.overwrite(target, b"{}")

    assert FileUtils.read_bytes(target) == b"{}"
