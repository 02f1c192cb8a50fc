"""Filesystem-backed loader that resolves targets by logical file name.

Purpose
-------
Index configuration files by their base name without extension (the *logical
name*) and resolve targets against that index. Files are registered one by one,
by glob pattern, or by directory; the index is rebuilt from these calls on every
process start.

Contents
--------
* :class:`FileEntry` – one indexed candidate (extension, base name, path).
* :class:`FileLoader` – implements :class:`lib_configurator.application.ports.Loader`.
* :func:`expand_glob` / :func:`list_regular_files` – filesystem enumeration
  helpers.

Resolution rules
----------------
* ``load("app")`` returns the newest registered ``app.*`` file.
* ``load("app.json")`` returns ``app.json`` even when ``app.toml`` is newer;
  ``load("app.xyz")`` returns ``None`` when no ``.xyz`` candidate exists.
* A candidate whose file was deleted after registration is skipped; every
  other :class:`OSError` propagates.

Registration rules
------------------
Each ``add_*`` call is one batch. Two distinct paths with the same logical name
and extension raise :class:`~lib_configurator.domain.errors.RegistrationConflict`
and nothing from that batch is committed. Registering a path that is already
indexed is a no-op.
"""

from __future__ import annotations

import glob
import os
import re
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple

from ...concurrency import RWLock
from ...domain.errors import ConfigError, ErrorKind, RegistrationConflict
from ...item import FileItem, split_extension
from ...observability import log_debug, log_error, log_info, make_event

_GLOB_MAGIC = re.compile(r"[*?[]")


@dataclass(frozen=True, slots=True)
class FileEntry:
    """Indexed candidate for a logical name."""

    extension: str
    base: str
    path: str


def expand_glob(pattern: str) -> List[str]:
    """Return absolute paths of regular files matching *pattern*, sorted.

    ``**`` matches recursively.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> for name in ("a.json", "b.toml"):
    ...     _ = (Path(tmp.name) / name).write_text("x", encoding="utf-8")
    >>> _ = (Path(tmp.name) / "sub").mkdir()
    >>> [Path(p).name for p in expand_glob(os.path.join(tmp.name, "*"))]
    ['a.json', 'b.toml']
    >>> tmp.cleanup()
    """

    matches = (os.path.abspath(match) for match in glob.glob(pattern, recursive=True))
    return sorted(match for match in matches if Path(match).is_file())


def list_regular_files(directory: str | os.PathLike[str]) -> List[Tuple[str, str]]:
    """Return ``(base_name, absolute_path)`` for regular files directly inside *directory*.

    Raises
    ------
    FileNotFoundError
        When *directory* does not exist.
    NotADirectoryError
        When *directory* is not a directory.
    """

    root = Path(os.path.abspath(directory))
    return [(entry.name, str(entry)) for entry in sorted(root.iterdir()) if entry.is_file()]


def normalize_extension(extension: str) -> str:
    """Return *extension* with exactly one leading dot (``""`` stays empty).

    Examples
    --------
    >>> [normalize_extension(value) for value in ("json", ".toml", "")]
    ['.json', '.toml', '']
    """

    if not extension:
        return ""
    return "." + extension.lstrip(".")


class FileLoader:
    """Resolve targets against an index of registered configuration files.

    Why
    ----
    Applications keep their configuration as ``<name>.<format>`` files and ask
    for ``<name>``; the loader maps one onto the other and lets an explicit
    extension pick between formats.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "app.json").write_text('{"name": "json"}', encoding="utf-8")
    >>> _ = (Path(tmp.name) / "app.toml").write_text('name = "toml"', encoding="utf-8")
    >>> loader = FileLoader().add_dir(tmp.name)
    >>> loader.load("app.json").json()["name"]
    'json'
    >>> loader.load("app").base
    'app.toml'
    >>> loader.load("app.xyz") is None
    True
    >>> tmp.cleanup()
    """

    def __init__(self) -> None:
        self._lock = RWLock()
        self._files: dict[str, list[FileEntry]] = {}

    def add_file(self, pattern: str | os.PathLike[str]) -> FileLoader:
        """Register one file, or every regular file matching a glob *pattern*.

        A *pattern* naming an existing path is taken literally even when it
        contains ``*``, ``?`` or ``[`` (``cfg[1].json``).

        Raises
        ------
        FileNotFoundError
            When a non-glob *pattern* does not exist.
        ConfigError
            Kind ``INVALID_SOURCE`` when a non-glob *pattern* is not a regular
            file.
        RegistrationConflict
            When a file collides with a different, already known path.
        """

        source = os.fspath(pattern)
        if _GLOB_MAGIC.search(source) and not os.path.exists(source):
            paths = expand_glob(source)
        else:
            position = os.path.abspath(source)
            if not stat.S_ISREG(os.stat(position).st_mode):
                raise ConfigError(f"file {source} is not a regular file", kind=ErrorKind.INVALID_SOURCE)
            paths = [position]
        self._register(paths, source)
        return self

    def add_dir(self, directory: str | os.PathLike[str], *extensions: str) -> FileLoader:
        """Register the regular files directly inside *directory*.

        Parameters
        ----------
        directory:
            Directory to scan (not recursive).
        extensions:
            Optional extensions to keep, with or without the leading dot. An
            empty string selects files without an extension. When omitted every
            file is registered.
        """

        wanted = {normalize_extension(extension) for extension in extensions}
        paths = [
            path
            for base, path in list_regular_files(directory)
            if not wanted or split_extension(base)[1] in wanted
        ]
        self._register(paths, os.fspath(directory))
        return self

    def load(self, target: str) -> FileItem | None:
        """Return the file item for *target* or ``None`` when no candidate is readable."""

        for entry in self._candidates(target):
            try:
                return FileItem.from_path(entry.path)
            except FileNotFoundError:
                log_debug("file_candidate_missing", **make_event("file", target, {"path": entry.path}))
        return None

    def entries(self, name: str) -> tuple[FileEntry, ...]:
        """Return the candidates indexed under logical *name*, oldest first."""

        with self._lock.read():
            return tuple(self._files.get(name, ()))

    def __contains__(self, name: object) -> bool:
        with self._lock.read():
            return name in self._files

    def _candidates(self, target: str) -> list[FileEntry]:
        """Snapshot the candidates for *target* in the order they should be tried."""

        name, extension = split_extension(target)
        with self._lock.read():
            ordered = list(reversed(self._files.get(target, ())))
            if extension:
                ordered.extend(entry for entry in reversed(self._files.get(name, ())) if entry.extension == extension)
        return ordered

    def _register(self, paths: Iterable[str], source: str) -> None:
        """Validate *paths* as one batch and commit them only if none conflicts."""

        with self._lock.write():
            staged: dict[tuple[str, str], FileEntry] = {}
            for path in paths:
                base = os.path.basename(path)
                name, extension = split_extension(base)
                existing = staged.get((name, extension)) or self._find(name, extension)
                if existing is not None:
                    if existing.path == path:
                        continue
                    log_error(
                        "registration_conflict",
                        **make_event("file", name, {"existing": existing.path, "incoming": path, "source": source}),
                    )
                    raise RegistrationConflict(name, extension, existing.path, path)
                staged[(name, extension)] = FileEntry(extension, base, path)
            for (name, _), entry in staged.items():
                self._files.setdefault(name, []).append(entry)
        log_info("files_registered", **make_event("file", None, {"source": source, "count": len(staged)}))

    def _find(self, name: str, extension: str) -> FileEntry | None:
        for entry in self._files.get(name, ()):
            if entry.extension == extension:
                return entry
        return None
