"""Composition root for ``lib_configurator``.

Purpose
-------
Provide the entry points that own the ordered loader list and expose the typed
``load_*`` accessors.

Contents
--------
* :class:`Client` – an ordered loader chain with no built-in sources.
* :class:`Configurator` – a :class:`Client` whose lowest-priority loader is a
  built-in :class:`~lib_configurator.adapters.file_loader.default.FileLoader`.

Precedence
----------
The loader registered last is consulted first. ``Configurator`` registers its
file loader at construction, so every loader passed to :meth:`Client.use`
overrides files added through :meth:`Configurator.add_file` and
:meth:`Configurator.add_dir`.
"""

from __future__ import annotations

import io
import os
from typing import Any, Callable, Optional, TypeVar

from .adapters.file_loader.default import FileLoader
from .application.chain import loader_name, resolve
from .application.ports import Loader, as_loader
from .concurrency import RWLock
from .item import Item
from .observability import log_debug, make_event

T = TypeVar("T")


class Client:
    """Resolve targets through an ordered chain of loaders.

    Why
    ----
    Applications combine several sources (files, memory, their own services)
    and need one call that asks them in a predictable order.

    What
    ----
    Keeps the loaders in registration order and delegates each lookup to
    :func:`lib_configurator.application.chain.resolve`, which asks them from
    the last registered to the first.

    Examples
    --------
    >>> from lib_configurator.adapters.memory_loader.default import MemoryLoader
    >>> client = Client().use(MemoryLoader({"app": b'{"name": "base"}'}))
    >>> _ = client.use(MemoryLoader({"app": b'{"name": "override"}'}))
    >>> client.load_json("app")["name"]
    'override'
    >>> client.load("missing")
    Traceback (most recent call last):
    ...
    lib_configurator.domain.errors.NotFound: configuration not found: missing
    """

    def __init__(self) -> None:
        self._lock = RWLock()
        self._loaders: list[Loader] = []

    def use(self, loader: Loader | Callable[[str], Optional[Item]]) -> Client:
        """Append *loader* as the new highest-priority source and return ``self``.

        Bare callables ``(target) -> Item | None`` are wrapped in
        :class:`~lib_configurator.application.ports.LoaderFunc`.
        """

        normalized = as_loader(loader)
        with self._lock.write():
            self._loaders.append(normalized)
            position = len(self._loaders) - 1
        log_debug("loader_registered", **make_event(loader_name(normalized), None, {"index": position}))
        return self

    @property
    def loaders(self) -> tuple[Loader, ...]:
        """Registered loaders, lowest priority first."""

        with self._lock.read():
            return tuple(self._loaders)

    def load(self, target: str) -> Item:
        """Return the item for *target* from the highest-priority loader that has it.

        Raises
        ------
        NotFound
            When no loader produced an item.
        Exception
            Whatever a loader raised other than ``NotFound``, unchanged.
        """

        return resolve(self.loaders, target)

    def load_bytes(self, target: str) -> bytes:
        """Return the raw content of *target*."""

        return self.load(target).data

    def load_buffer(self, target: str) -> io.BytesIO:
        """Return the content of *target* as a fresh binary stream."""

        return self.load(target).reader()

    def load_json(self, target: str, obj: T | None = None) -> Any:
        """Load *target* and decode it as JSON, binding into *obj* when given."""

        return self.load(target).json(obj)

    def load_xml(self, target: str, obj: T | None = None) -> Any:
        """Load *target* and decode it as XML, binding into *obj* when given."""

        return self.load(target).xml(obj)

    def load_toml(self, target: str, obj: T | None = None) -> Any:
        """Load *target* and decode it as TOML, binding into *obj* when given."""

        return self.load(target).toml(obj)

    def load_yaml(self, target: str, obj: T | None = None) -> Any:
        """Load *target* and decode it as YAML, binding into *obj* when given."""

        return self.load(target).yaml(obj)


class Configurator(Client):
    """Loader chain with a built-in file loader at the lowest priority.

    Examples
    --------
    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> from lib_configurator.adapters.memory_loader.default import MemoryLoader
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "app.toml").write_text('name = "file"', encoding="utf-8")
    >>> configurator = Configurator().add_dir(tmp.name, "toml")
    >>> configurator.load_toml("app")["name"]
    'file'
    >>> _ = configurator.use(MemoryLoader({"app": b'name = "memory"'}))
    >>> configurator.load_toml("app")["name"]
    'memory'
    >>> tmp.cleanup()
    """

    def __init__(self) -> None:
        super().__init__()
        self._files = FileLoader()
        self.use(self._files)

    @property
    def files(self) -> FileLoader:
        """The built-in file loader."""

        return self._files

    def add_file(self, pattern: str | os.PathLike[str]) -> Configurator:
        """Register a file or glob pattern with the built-in file loader."""

        self._files.add_file(pattern)
        return self

    def add_dir(self, directory: str | os.PathLike[str], *extensions: str) -> Configurator:
        """Register a directory with the built-in file loader."""

        self._files.add_dir(directory, *extensions)
        return self
