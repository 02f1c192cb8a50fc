"""Logging helpers shared by the loaders, the chain, and item decoding.

Every record goes through the ``lib_configurator`` logger and carries a
``context`` dict (available as ``record.context`` to formatters and filters)
with the active trace id plus event fields such as ``loader``, ``target``, or
``path``. The library installs only a :class:`logging.NullHandler`; host
applications decide where records go.

Levels
    ``debug`` for per-lookup events (``loader_matched``, ``item_decoded``),
    ``info`` for registration (``files_registered``), and ``error`` for events
    that accompany a raised exception (``loader_failed``,
    ``registration_conflict``, ``item_decode_failed``). Logging never replaces
    raising.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_configurator_trace_id", default=None)
"""Trace identifier copied into every record's context while bound."""

_LOGGER: Final[logging.Logger] = logging.getLogger(__name__.partition(".")[0])
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the package logger so applications can attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind *trace_id* to the current context; ``None`` clears it.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _emit(logging.ERROR, message, fields)


def make_event(loader: str, target: str | None, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return the fields describing a loader event, ready for ``**`` unpacking.

    *loader* is a loader class name or a short source tag (``"file"``,
    ``"memory"``, ``"chain"``); *target* is ``None`` for events not tied to a
    lookup, such as registration.

    Examples
    --------
    >>> make_event('memory', 'app', {'size': 3})
    {'loader': 'memory', 'target': 'app', 'size': 3}
    >>> make_event('file', None)
    {'loader': 'file', 'target': None}
    """

    return {"loader": loader, "target": target, **(payload or {})}


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    # context is only built for enabled levels
    if not _LOGGER.isEnabledFor(level):
        return
    _LOGGER.log(level, message, extra={"context": {"trace_id": TRACE_ID.get(), **fields}})
