"""Configuration items returned by loaders.

Purpose
-------
Wrap the raw bytes a loader resolved for a target and offer typed decoders on
top of them. Items are immutable value objects; a :class:`FileItem` reads its
file exactly once when constructed and never observes later changes.

Contents
--------
* :class:`Item` – bytes plus ``json``/``xml``/``toml``/``yaml`` decoders.
* :class:`FileItem` – :class:`Item` with ``path``/``base``/``name`` metadata.
* :func:`split_extension` – split a file base name into logical name and
  extension; shared with the file loader's index.

System Role
-----------
Every successful :meth:`lib_configurator.core.Client.load` returns an
:class:`Item`. Typed accessors on the client delegate to the methods here.
"""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, TypeVar

from .adapters.codecs.structured import decoder_for
from .domain.binding import bind
from .domain.errors import EmptyItem
from .observability import log_debug

T = TypeVar("T")


def split_extension(base: str) -> tuple[str, str]:
    """Return ``(logical_name, extension)`` for file base name *base*.

    The extension keeps its leading dot. Leading-dot names such as ``.env``
    have no extension.

    Examples
    --------
    >>> split_extension("app.json")
    ('app', '.json')
    >>> split_extension("archive.tar.gz")
    ('archive.tar', '.gz')
    >>> split_extension("README")
    ('README', '')
    >>> split_extension(".env")
    ('.env', '')
    """

    return os.path.splitext(base)


@dataclass(frozen=True, slots=True)
class Item:
    """Immutable configuration payload.

    Why
    ----
    Loaders return bytes; callers want either the bytes or a decoded structure.
    Keeping both views on one value object lets the chain stay format-agnostic.

    What
    ----
    Stores a private ``bytes`` copy of the payload. Decoding an empty item raises
    :class:`~lib_configurator.domain.errors.EmptyItem` before any parser runs;
    parser errors propagate unchanged.

    Examples
    --------
    >>> item = Item.from_string('{"name": "demo"}')
    >>> len(item), item.is_empty()
    (16, False)
    >>> item.json()["name"]
    'demo'
    >>> Item(b"").toml()
    Traceback (most recent call last):
    ...
    lib_configurator.domain.errors.EmptyItem: cannot decode empty item as toml
    """

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Item:
        """Create an item from a bytes-like object (copied)."""

        return cls(bytes(data))

    @classmethod
    def from_string(cls, text: str, encoding: str = "utf-8") -> Item:
        """Create an item from *text* encoded with *encoding*."""

        return cls(text.encode(encoding))

    @classmethod
    def from_reader(cls, reader: IO[Any], encoding: str = "utf-8") -> Item:
        """Create an item from everything left in *reader* (binary or text).

        Examples
        --------
        >>> Item.from_reader(io.StringIO("key: 1")).yaml()
        {'key': 1}
        """

        content = reader.read()
        if isinstance(content, str):
            content = content.encode(encoding)
        return cls(content)

    def is_empty(self) -> bool:
        return not self.data

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.text()

    def text(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        """Return the payload decoded as text.

        ``str(item)`` uses the defaults, so bytes that are not valid in
        *encoding* become U+FFFD and the original bytes cannot be recovered
        from the result. Pass ``errors="surrogateescape"`` for text that
        encodes back to :attr:`data`, or ``errors="strict"`` to fail instead.
        """

        return self.data.decode(encoding, errors=errors)

    def reader(self) -> io.BytesIO:
        """Return a fresh binary stream positioned at the start of the payload."""

        return io.BytesIO(self.data)

    def json(self, target: T | None = None) -> Any:
        """Decode the payload as JSON, binding into *target* when given."""

        return self._decode("json", target)

    def xml(self, target: T | None = None) -> Any:
        """Decode the payload as XML, binding into *target* when given."""

        return self._decode("xml", target)

    def toml(self, target: T | None = None) -> Any:
        """Decode the payload as TOML, binding into *target* when given."""

        return self._decode("toml", target)

    def yaml(self, target: T | None = None) -> Any:
        """Decode the payload as YAML, binding into *target* when given."""

        return self._decode("yaml", target)

    def _decode(self, format: str, target: Any) -> Any:
        if not self.data:
            raise EmptyItem(format)
        payload = decoder_for(format)(self.data)
        log_debug("item_decoded", format=format, size=len(self.data), bound=target is not None)
        if target is None:
            return payload
        return bind(payload, target, format=format)


@dataclass(frozen=True, slots=True)
class FileItem(Item):
    """Item read from a file, carrying the file's location.

    Attributes
    ----------
    path:
        Absolute file path.
    base:
        File base name (``app.json``).
    name:
        Base name without extension (``app``).

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "app.toml"
    >>> _ = target.write_text('name = "demo"', encoding="utf-8")
    >>> item = FileItem.from_path(target)
    >>> item.base, item.name, item.toml()["name"]
    ('app.toml', 'app', 'demo')
    >>> tmp.cleanup()
    """

    path: str
    base: str
    name: str

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> FileItem:
        """Read *path* once and return a :class:`FileItem`.

        Raises
        ------
        FileNotFoundError
            When the file does not exist.
        OSError
            For every other read failure.
        """

        position = os.path.abspath(path)
        data = Path(position).read_bytes()
        base = os.path.basename(position)
        name, _ = split_extension(base)
        return cls(data, position, base, name)
