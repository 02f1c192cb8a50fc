from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_configurator.application.chain import resolve
from lib_configurator.application.ports import LoaderFunc, as_loader
from lib_configurator.domain.errors import ErrorKind, NotFound
from lib_configurator.item import Item

TARGET = st.text(min_size=1, max_size=8)


class RecordingLoader:
    """Loader that answers for a fixed set of targets and records every call."""

    def __init__(self, label: str, targets: set[str]) -> None:
        self.label = label
        self.targets = targets
        self.calls: list[str] = []

    def load(self, target: str) -> Item | None:
        self.calls.append(target)
        if target in self.targets:
            return Item.from_string(self.label)
        return None


def test_last_registered_loader_wins_and_short_circuits() -> None:
    low = RecordingLoader("low", {"app"})
    high = RecordingLoader("high", {"app"})
    assert str(resolve([low, high], "app")) == "high"
    assert high.calls == ["app"]
    assert low.calls == []


def test_declining_loaders_fall_through() -> None:
    low = RecordingLoader("low", {"app"})
    high = RecordingLoader("high", set())
    assert str(resolve([low, high], "app")) == "low"
    assert high.calls == ["app"]


def test_not_found_raised_by_a_loader_continues_the_chain() -> None:
    def refuse(target: str) -> Item | None:
        raise NotFound(target)

    low = RecordingLoader("low", {"app"})
    assert str(resolve([low, LoaderFunc(refuse)], "app")) == "low"


def test_other_errors_abort_resolution() -> None:
    def broken(target: str) -> Item | None:
        raise PermissionError("denied")

    low = RecordingLoader("low", {"app"})
    with pytest.raises(PermissionError, match="denied"):
        resolve([low, LoaderFunc(broken)], "app")
    assert low.calls == []


def test_empty_item_is_a_result() -> None:
    """An empty payload is still an answer; only ``None`` means "not mine"."""

    low = RecordingLoader("low", {"app"})
    empty = LoaderFunc(lambda target: Item(b""))
    assert resolve([low, empty], "app").is_empty()
    assert low.calls == []


def test_as_loader_wraps_callables_and_rejects_others() -> None:
    loader = RecordingLoader("x", set())
    assert as_loader(loader) is loader
    assert isinstance(as_loader(lambda target: None), LoaderFunc)
    with pytest.raises(TypeError):
        as_loader(42)  # type: ignore[arg-type]


@given(st.lists(st.booleans(), min_size=1, max_size=8), TARGET)
def test_highest_claiming_loader_wins(claims: list[bool], target: str) -> None:
    loaders = [RecordingLoader(str(index), {target} if claim else set()) for index, claim in enumerate(claims)]
    claiming = [index for index, claim in enumerate(claims) if claim]
    if not claiming:
        with pytest.raises(NotFound) as excinfo:
            resolve(loaders, target)
        assert excinfo.value.kind is ErrorKind.NOT_FOUND
        assert all(loader.calls == [target] for loader in loaders)
        return
    winner = max(claiming)
    assert str(resolve(loaders, target)) == str(winner)
    for index, loader in enumerate(loaders):
        assert loader.calls == ([target] if index >= winner else [])


@given(st.lists(TARGET, max_size=5), TARGET)
def test_unregistered_target_is_exactly_not_found(known: list[str], target: str) -> None:
    loaders = [RecordingLoader("known", {name}) for name in known if name != target]
    with pytest.raises(NotFound) as excinfo:
        resolve(loaders, target)
    assert excinfo.value.target == target
