from __future__ import annotations

from lib_configurator.domain.errors import ConfigError, EmptyItem, ErrorKind, NotFound, RegistrationConflict


def test_error_hierarchy() -> None:
    assert issubclass(NotFound, ConfigError)
    assert issubclass(EmptyItem, ConfigError)
    assert issubclass(RegistrationConflict, ConfigError)
    for exception in (NotFound("app"), EmptyItem("json"), RegistrationConflict("a", ".json", "/x/a.json", "/y/a.json")):
        assert isinstance(exception, ConfigError)


def test_errors_compare_by_kind() -> None:
    assert NotFound("app").kind is ErrorKind.NOT_FOUND
    assert EmptyItem("yaml").kind is ErrorKind.EMPTY_ITEM
    assert RegistrationConflict("a", ".json", "/x/a.json", "/y/a.json").kind is ErrorKind.REGISTRATION_CONFLICT
    assert ConfigError("plain").kind is ErrorKind.INVALID_SOURCE
    assert ConfigError("target", kind=ErrorKind.INVALID_TARGET).kind is ErrorKind.INVALID_TARGET


def test_errors_carry_payload() -> None:
    missing = NotFound("database")
    assert missing.target == "database"
    assert "database" in str(missing)

    empty = EmptyItem("toml")
    assert empty.format == "toml"

    conflict = RegistrationConflict("foo", ".txt", "/a/foo.txt", "/a/bar/foo.txt")
    assert (conflict.name, conflict.extension) == ("foo", ".txt")
    assert conflict.existing == "/a/foo.txt"
    assert conflict.incoming == "/a/bar/foo.txt"
