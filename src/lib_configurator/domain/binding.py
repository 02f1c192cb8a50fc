"""Bind decoded configuration payloads into caller-provided objects.

Purpose
-------
Typed item decoders hand their parsed payload to :func:`bind`, which copies the
values into whatever structure the caller supplied. Dataclass fields may carry
per-format key overrides in their metadata, the Python counterpart of struct
field tags::

    @dataclass
    class Service:
        name: str = field(default="", metadata={"json": "service_name", "name": "name"})

Contents
--------
* :func:`bind` – dispatch on the target type.
* :func:`field_key` – payload key used for a dataclass field.

System Role
-----------
Pure domain helper; contains no I/O and never sees raw bytes. Decoding always
completes before :func:`bind` runs, so a malformed document cannot leave a
target half-populated.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import Field, fields, is_dataclass
from typing import Any, TypeVar

from .errors import ConfigError, ErrorKind

T = TypeVar("T")


def bind(payload: Any, target: T, *, format: str) -> T:
    """Copy *payload* into *target* and return *target*.

    Parameters
    ----------
    payload:
        Decoded document; must be a mapping, or ``None`` for an empty document
        (a comment-only YAML file, the JSON literal ``null``), which leaves
        *target* unchanged.
    target:
        A mutable mapping (updated in place), a dataclass instance (fields
        matched via :func:`field_key`), or any object whose existing public
        attributes are assigned.
    format:
        Decoder name (``"json"``, ``"xml"``, ``"toml"``, ``"yaml"``) used to look
        up per-format metadata keys.

    Raises
    ------
    ConfigError
        With kind ``INVALID_TARGET`` when the payload is not a mapping, the
        target is a class, or the target is a frozen dataclass.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Value:
    ...     name: str = field(default="", metadata={"json": "key"})
    >>> bind({"key": "foo"}, Value(), format="json").name
    'foo'
    >>> bind(None, {"b": 2}, format="yaml")
    {'b': 2}
    >>> bind({"a": 1}, {"b": 2}, format="yaml")
    {'b': 2, 'a': 1}
    """

    if payload is None:
        return target
    if not isinstance(payload, Mapping):
        raise ConfigError(
            f"cannot bind {type(payload).__name__} {format} payload into {type(target).__name__}",
            kind=ErrorKind.INVALID_TARGET,
        )
    if isinstance(target, type):
        raise ConfigError(f"cannot bind into class {target.__name__}; pass an instance", kind=ErrorKind.INVALID_TARGET)
    if isinstance(target, MutableMapping):
        target.update(payload)
    elif is_dataclass(target):
        _bind_dataclass(payload, target, format)
    else:
        _bind_attributes(payload, target)
    return target


def field_key(item: Field[Any], format: str) -> str:
    """Return the payload key for dataclass field *item* under *format*.

    Lookup order is ``metadata[format]``, then ``metadata["name"]``, then the
    attribute name.

    Examples
    --------
    >>> from dataclasses import dataclass, field, fields
    >>> @dataclass
    ... class Value:
    ...     port: int = field(default=0, metadata={"toml": "listen_port", "name": "port_number"})
    >>> [field_key(f, "toml") for f in fields(Value)]
    ['listen_port']
    >>> [field_key(f, "json") for f in fields(Value)]
    ['port_number']
    """

    metadata = item.metadata
    return str(metadata.get(format) or metadata.get("name") or item.name)


def _bind_dataclass(payload: Mapping[str, Any], target: Any, format: str) -> None:
    if target.__dataclass_params__.frozen:
        raise ConfigError(f"cannot bind into frozen dataclass {type(target).__name__}", kind=ErrorKind.INVALID_TARGET)
    for item in fields(target):
        key = field_key(item, format)
        if key not in payload:
            continue
        value = payload[key]
        current = getattr(target, item.name, None)
        if current is not None and is_dataclass(current) and not isinstance(current, type) and isinstance(value, Mapping):
            _bind_dataclass(value, current, format)
        else:
            setattr(target, item.name, value)


def _bind_attributes(payload: Mapping[str, Any], target: Any) -> None:
    for key, value in payload.items():
        if isinstance(key, str) and not key.startswith("_") and hasattr(target, key):
            setattr(target, key, value)
