"""File loader registration and resolution rules."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from lib_configurator.adapters.file_loader.default import FileLoader, expand_glob, list_regular_files
from lib_configurator.domain.errors import ConfigError, ErrorKind, RegistrationConflict
from lib_configurator.item import FileItem


def test_add_file_and_load_by_logical_name(write_file) -> None:
    path = write_file("app.json", '{"name": "demo"}')
    loader = FileLoader().add_file(path)
    item = loader.load("app")
    assert isinstance(item, FileItem)
    assert item.path == str(path)
    assert item.json() == {"name": "demo"}


def test_unknown_target_returns_none(write_file) -> None:
    loader = FileLoader().add_file(write_file("app.json", "{}"))
    assert loader.load("other") is None
    assert loader.load("") is None


def test_same_path_twice_is_idempotent(write_file) -> None:
    path = write_file("a/foo.txt", "foo")
    loader = FileLoader()
    loader.add_file(path)
    loader.add_file(path)
    loader.add_file(str(path.parent / "*"))
    assert len(loader.entries("foo")) == 1


def test_same_name_and_extension_from_different_paths_conflicts(write_file) -> None:
    first = write_file("a/foo.txt", "first")
    second = write_file("a/bar/foo.txt", "second")
    loader = FileLoader().add_file(first)
    with pytest.raises(RegistrationConflict) as excinfo:
        loader.add_file(second)
    assert excinfo.value.kind is ErrorKind.REGISTRATION_CONFLICT
    assert excinfo.value.existing == str(first)
    assert excinfo.value.incoming == str(second)
    assert str(loader.load("foo")) == "first"


def test_conflicting_batch_commits_nothing(write_file, tmp_path: Path) -> None:
    write_file("a/x.json", "{}")
    write_file("a/foo.txt", "a")
    write_file("b/foo.txt", "b")
    loader = FileLoader()
    with pytest.raises(RegistrationConflict):
        loader.add_file(str(tmp_path / "*" / "*"))
    assert "x" not in loader
    assert "foo" not in loader


def test_explicit_extension_disambiguates(write_file, tmp_path: Path) -> None:
    write_file("conf/a.json", '{"name": "a.json"}')
    write_file("conf/a.toml", 'name = "a.toml"')
    loader = FileLoader().add_dir(tmp_path / "conf")
    assert loader.load("a.json").json()["name"] == "a.json"
    assert loader.load("a.toml").toml()["name"] == "a.toml"
    assert loader.load("a.xyz") is None


def test_bare_name_prefers_most_recent_registration(write_file) -> None:
    toml_path = write_file("a.toml", 'name = "toml"')
    json_path = write_file("a.json", '{"name": "json"}')
    loader = FileLoader().add_file(toml_path).add_file(json_path)
    assert loader.load("a").base == "a.json"
    assert [entry.extension for entry in loader.entries("a")] == [".toml", ".json"]


def test_exact_logical_name_wins_over_stripped_name(write_file) -> None:
    dotted = write_file("a.json.bak", "backup")
    plain = write_file("a.json", "{}")
    loader = FileLoader().add_file(plain).add_file(dotted)
    assert loader.load("a.json").base == "a.json.bak"


def test_add_dir_filters_extensions_and_skips_subdirectories(write_file, tmp_path: Path) -> None:
    write_file("conf/app.json", "{}")
    write_file("conf/app.yaml", "a: 1")
    write_file("conf/README", "docs")
    write_file("conf/nested/db.json", "{}")
    loader = FileLoader().add_dir(tmp_path / "conf", "json", ".yaml")
    assert {entry.extension for entry in loader.entries("app")} == {".json", ".yaml"}
    assert "README" not in loader
    assert "db" not in loader


def test_add_dir_empty_extension_selects_extensionless_files(write_file, tmp_path: Path) -> None:
    write_file("conf/README", "docs")
    write_file("conf/app.json", "{}")
    loader = FileLoader().add_dir(tmp_path / "conf", "")
    assert "README" in loader
    assert "app" not in loader


def test_add_dir_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileLoader().add_dir(tmp_path / "missing")


def test_add_file_missing_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileLoader().add_file(tmp_path / "missing.json")


def test_add_file_rejects_directories(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        FileLoader().add_file(tmp_path)
    assert excinfo.value.kind is ErrorKind.INVALID_SOURCE


def test_glob_without_matches_registers_nothing(tmp_path: Path) -> None:
    loader = FileLoader().add_file(str(tmp_path / "*.json"))
    assert loader.load("anything") is None


def test_deleted_candidate_falls_back_to_older_one(write_file) -> None:
    older = write_file("a.toml", 'name = "toml"')
    newer = write_file("a.json", '{"name": "json"}')
    loader = FileLoader().add_file(older).add_file(newer)
    newer.unlink()
    assert loader.load("a").base == "a.toml"
    assert loader.load("a.json") is None


def test_deleted_only_candidate_returns_none(write_file) -> None:
    path = write_file("app.json", "{}")
    loader = FileLoader().add_file(path)
    path.unlink()
    assert loader.load("app") is None


@pytest.mark.skipif(sys.platform.startswith("win") or os.geteuid() == 0, reason="requires POSIX permissions as non-root")
def test_unreadable_file_error_propagates(write_file) -> None:
    path = write_file("secret.json", "{}")
    loader = FileLoader().add_file(path)
    path.chmod(0)
    try:
        with pytest.raises(PermissionError):
            loader.load("secret")
    finally:
        path.chmod(0o600)


def test_candidate_replaced_by_directory_raises(write_file) -> None:
    path = write_file("app.json", "{}")
    loader = FileLoader().add_file(path)
    path.unlink()
    path.mkdir()
    with pytest.raises(IsADirectoryError):
        loader.load("app")


def test_literal_path_with_bracket_is_not_a_glob(write_file) -> None:
    path = write_file("cfg[1].json", '{"name": "literal"}')
    write_file("cfg1.json", '{"name": "glob"}')
    loader = FileLoader().add_file(str(path))
    assert loader.load("cfg[1]").json() == {"name": "literal"}
    assert loader.load("cfg1") is None


def test_file_content_is_read_at_load_time(write_file) -> None:
    path = write_file("app.txt", "v1")
    loader = FileLoader().add_file(path)
    first = loader.load("app")
    path.write_text("v2", encoding="utf-8")
    assert str(first) == "v1"
    assert str(loader.load("app")) == "v2"


def test_enumeration_helpers(write_file, tmp_path: Path) -> None:
    write_file("d/b.json", "{}")
    write_file("d/a.toml", "")
    write_file("d/sub/c.yaml", "")
    assert [name for name, _ in list_regular_files(tmp_path / "d")] == ["a.toml", "b.json"]
    assert [Path(p).name for p in expand_glob(str(tmp_path / "d" / "**" / "*.yaml"))] == ["c.yaml"]
