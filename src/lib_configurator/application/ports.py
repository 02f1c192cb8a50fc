"""Application-layer port describing what a configuration source must provide.

Purpose
-------
Define the single structural contract the loader chain depends on, so the
client can consult files, memory, or any custom source without knowing its
implementation.

Contents
--------
* :class:`Loader` – the one-method protocol every source implements.
* :class:`LoaderFunc` – adapts a plain callable to :class:`Loader`.
* :func:`as_loader` – normalises objects passed to ``Client.use``.

System Role
-----------
New sources are added by implementing :meth:`Loader.load`, never by
subclassing the built-in loaders. A loader answers with an item, or returns
``None`` (or raises :class:`~lib_configurator.domain.errors.NotFound`) to let
the next loader try. Any other exception stops resolution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..item import Item


@runtime_checkable
class Loader(Protocol):
    """Resolve a target name into an item.

    Why
    ----
    Keep the chain-of-responsibility policy independent of where configuration
    lives.
    """

    def load(self, target: str) -> Optional[Item]:
        """Return the item for *target*, or ``None`` when this loader has nothing."""


class LoaderFunc:
    """Wrap a callable ``(target) -> Item | None`` as a :class:`Loader`.

    Examples
    --------
    >>> from lib_configurator.item import Item
    >>> loader = LoaderFunc(lambda target: Item.from_string(target.upper()))
    >>> str(loader.load("app"))
    'APP'
    >>> isinstance(loader, Loader)
    True
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[str], Optional[Item]]) -> None:
        self._func = func

    def load(self, target: str) -> Optional[Item]:
        return self._func(target)

    def __repr__(self) -> str:
        return f"LoaderFunc({self._func!r})"


def as_loader(candidate: Loader | Callable[[str], Optional[Item]]) -> Loader:
    """Return *candidate* as a :class:`Loader`, wrapping bare callables.

    Raises
    ------
    TypeError
        When *candidate* is neither a loader nor callable.
    """

    if isinstance(candidate, Loader):
        return candidate
    if callable(candidate):
        return LoaderFunc(candidate)
    raise TypeError(f"expected a Loader or callable, got {type(candidate).__name__}")
