"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by loaders, items, and the composition
root. Every library error derives from :class:`ConfigError` and carries an
:class:`ErrorKind` so callers can branch on ``exc.kind`` instead of relying on
exception identity.

Contents
--------
* :class:`ErrorKind` – closed enumeration of library error kinds.
* :class:`ConfigError` – umbrella base class for all library failures.
* :class:`NotFound` – no loader produced content for a target.
* :class:`EmptyItem` – a typed decode was attempted on empty content.
* :class:`RegistrationConflict` – two distinct files claim the same logical
  name and extension.

System Role
-----------
:class:`NotFound` is the only error that lets the loader chain continue.
Decoder failures and filesystem errors are never wrapped; they propagate as the
exceptions raised by the underlying parser or the operating system.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error kinds raised by ``lib_configurator``.

    Examples
    --------
    >>> ErrorKind.NOT_FOUND.value
    'not_found'
    """

    NOT_FOUND = "not_found"
    EMPTY_ITEM = "empty_item"
    REGISTRATION_CONFLICT = "registration_conflict"
    INVALID_SOURCE = "invalid_source"
    INVALID_TARGET = "invalid_target"


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_configurator``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling, while :attr:`kind` keeps the fine-grained classification.

    Examples
    --------
    >>> error = ConfigError("bad source", kind=ErrorKind.INVALID_SOURCE)
    >>> error.kind is ErrorKind.INVALID_SOURCE
    True
    >>> str(error)
    'bad source'
    """

    default_kind: ErrorKind = ErrorKind.INVALID_SOURCE

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.kind = kind or self.default_kind


class NotFound(ConfigError):
    """Raised when no loader in the chain produced content for a target.

    Loaders may also raise it to say "not mine"; the chain treats it exactly
    like a ``None`` result.

    Examples
    --------
    >>> NotFound("app").target
    'app'
    >>> str(NotFound("app"))
    'configuration not found: app'
    """

    default_kind = ErrorKind.NOT_FOUND

    def __init__(self, target: str) -> None:
        super().__init__(f"configuration not found: {target}")
        self.target = target


class EmptyItem(ConfigError):
    """Raised when a typed decode is attempted on an item without content."""

    default_kind = ErrorKind.EMPTY_ITEM

    def __init__(self, format: str) -> None:
        super().__init__(f"cannot decode empty item as {format}")
        self.format = format


class RegistrationConflict(ConfigError):
    """Raised when two distinct paths collide on the same logical name and extension.

    Why
    ----
    The file loader resolves targets by logical name; two different files for
    the same ``(name, extension)`` pair would make resolution ambiguous, so the
    whole registration batch is rejected.

    Examples
    --------
    >>> err = RegistrationConflict("foo", ".txt", "/a/foo.txt", "/a/bar/foo.txt")
    >>> err.kind.value
    'registration_conflict'
    >>> str(err)
    'duplicate file foo.txt: /a/foo.txt and /a/bar/foo.txt'
    """

    default_kind = ErrorKind.REGISTRATION_CONFLICT

    def __init__(self, name: str, extension: str, existing: str, incoming: str) -> None:
        super().__init__(f"duplicate file {name}{extension}: {existing} and {incoming}")
        self.name = name
        self.extension = extension
        self.existing = existing
        self.incoming = incoming
