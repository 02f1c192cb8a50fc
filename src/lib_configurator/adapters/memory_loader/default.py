"""In-process key/value loader.

Purpose
-------
Serve configuration content held in memory, typically registered last so it
overrides files (tests, generated defaults, values fetched by the host
application).

Key behaviours
--------------
* ``add`` inserts only when the target is absent and reports whether the stored
  value equals the offered one.
* ``set`` overwrites; ``None`` deletes the target.
* Values are copied into immutable ``bytes`` on write, so a caller's
  ``bytearray`` can be mutated afterwards without touching the store.
"""

from __future__ import annotations

from typing import Mapping, Union

from ...concurrency import RWLock
from ...item import Item
from ...observability import log_debug, make_event

Buffer = Union[bytes, bytearray, memoryview]


class MemoryLoader:
    """Resolve targets from an in-memory store.

    Examples
    --------
    >>> loader = MemoryLoader({"app": b"name: demo"})
    >>> loader.add("app", b"name: other")
    False
    >>> loader.load("app").yaml()
    {'name': 'demo'}
    >>> loader.set("app", None)
    >>> loader.load("app") is None
    True
    """

    def __init__(self, items: Mapping[str, Buffer] | None = None) -> None:
        """Initialise the store, copying any *items* supplied for convenience."""

        self._lock = RWLock()
        self._items: dict[str, bytes] = {target: bytes(value) for target, value in (items or {}).items()}

    def add(self, target: str, value: Buffer | None) -> bool:
        """Store *value* for *target* unless present.

        ``None`` stores nothing: it returns ``True`` for an absent target and
        otherwise compares like an empty value.

        Returns
        -------
        bool
            ``True`` when the value was stored or an equal value already exists;
            ``False`` when a different value is kept.
        """

        incoming = None if value is None else bytes(value)
        with self._lock.write():
            existing = self._items.get(target)
            if existing is not None:
                return existing == (incoming or b"")
            if incoming is None:
                return True
            self._items[target] = incoming
        log_debug("memory_item_added", **make_event("memory", target, {"size": len(incoming)}))
        return True

    def set(self, target: str, value: Buffer | None) -> None:
        """Store *value* for *target*, replacing any previous value; ``None`` deletes."""

        with self._lock.write():
            if value is None:
                self._items.pop(target, None)
            else:
                self._items[target] = bytes(value)

    def load(self, target: str) -> Item | None:
        with self._lock.read():
            data = self._items.get(target)
        if data is None:
            return None
        return Item(data)

    def __contains__(self, target: object) -> bool:
        with self._lock.read():
            return target in self._items

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._items)
