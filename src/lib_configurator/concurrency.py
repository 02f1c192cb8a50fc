"""Reader/writer lock guarding the loader indexes.

Purpose
    The file index, the memory store, and the client's loader list are read on
    every ``load`` and written only during registration. Reads may overlap each
    other; a write excludes everything else.

Contents
    - ``RWLock``: writer-preferring lock exposing ``read()``/``write()`` context
      managers.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class RWLock:
    """Shared/exclusive lock built on :class:`threading.Condition`.

    Waiting writers block new readers so a steady stream of ``load`` calls
    cannot starve registration. The lock is not reentrant.

    Examples
    --------
    >>> lock = RWLock()
    >>> with lock.read():
    ...     with lock.read():
    ...         "shared"
    'shared'
    >>> with lock.write():
    ...     "exclusive"
    'exclusive'
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()
