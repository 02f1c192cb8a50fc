"""Public package surface for ``lib_configurator``.

Resolve a configuration target name through an ordered chain of loaders and
decode the result::

    from lib_configurator import Configurator, MemoryLoader

    configurator = Configurator().add_dir("/etc/myapp", "toml", "json")
    configurator.use(MemoryLoader({"feature-flags": b'{"beta": true}'}))
    settings = configurator.load_toml("app")

Loaders registered later take priority; the built-in file loader of
:class:`Configurator` is always consulted last.
"""

from __future__ import annotations

from .adapters.file_loader.default import FileEntry, FileLoader
from .adapters.memory_loader.default import MemoryLoader
from .application.ports import Loader, LoaderFunc
from .core import Client, Configurator
from .domain.errors import ConfigError, EmptyItem, ErrorKind, NotFound, RegistrationConflict
from .item import FileItem, Item
from .observability import bind_trace_id, get_logger

__all__ = [
    "Client",
    "Configurator",
    "ConfigError",
    "EmptyItem",
    "ErrorKind",
    "FileEntry",
    "FileItem",
    "FileLoader",
    "Item",
    "Loader",
    "LoaderFunc",
    "MemoryLoader",
    "NotFound",
    "RegistrationConflict",
    "bind_trace_id",
    "get_logger",
]
