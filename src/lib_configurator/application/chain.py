"""Priority-ordered resolution across a list of loaders.

Purpose
-------
Implement the chain-of-responsibility policy as an explicit index loop: the
most recently registered loader is asked first and the first item wins.

Contents
--------
* :func:`resolve` – walk *loaders* from the last element to the first.
* :func:`loader_name` – label used in log events.

System Role
-----------
Called by :meth:`lib_configurator.core.Client.load` with a snapshot of its
loader list. The policy lives here, apart from the client, in the same way
precedence rules are kept out of the adapters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ..domain.errors import NotFound
from ..observability import log_debug, log_error, make_event
from .ports import Loader

if TYPE_CHECKING:
    from ..item import Item


def resolve(loaders: Sequence[Loader], target: str) -> Item:
    """Return the first item produced for *target*, highest priority first.

    Why
    ----
    Later registrations are more specific (a test double, an in-memory
    override), so they must shadow earlier ones without the earlier loaders
    being consulted at all.

    What
    ----
    * a non-``None`` result ends the walk immediately;
    * ``None`` or :class:`NotFound` moves on to the next lower priority loader;
    * any other exception propagates unchanged and ends the walk;
    * when every loader declined, :class:`NotFound` is raised.

    Examples
    --------
    >>> from lib_configurator.application.ports import LoaderFunc
    >>> from lib_configurator.item import Item
    >>> low = LoaderFunc(lambda target: Item.from_string("low"))
    >>> high = LoaderFunc(lambda target: Item.from_string("high") if target == "app" else None)
    >>> str(resolve([low, high], "app")), str(resolve([low, high], "db"))
    ('high', 'low')
    >>> resolve([], "app")
    Traceback (most recent call last):
    ...
    lib_configurator.domain.errors.NotFound: configuration not found: app
    """

    for index in range(len(loaders) - 1, -1, -1):
        loader = loaders[index]
        try:
            item = loader.load(target)
        except NotFound:
            continue
        except Exception as exc:
            log_error("loader_failed", **make_event(loader_name(loader), target, {"index": index, "error": str(exc)}))
            raise
        if item is not None:
            log_debug("loader_matched", **make_event(loader_name(loader), target, {"index": index}))
            return item
    log_debug("target_not_found", **make_event("chain", target, {"loaders": len(loaders)}))
    raise NotFound(target)


def loader_name(loader: Loader) -> str:
    """Return a short, stable label for *loader*.

    Examples
    --------
    >>> class Custom:
    ...     def load(self, target):
    ...         return None
    >>> loader_name(Custom())
    'Custom'
    """

    return type(loader).__name__
