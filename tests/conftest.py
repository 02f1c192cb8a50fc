"""Shared fixtures for the ``lib_configurator`` test-suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

WriteFile = Callable[..., Path]


@pytest.fixture()
def write_file(tmp_path: Path) -> WriteFile:
    """Return a helper that writes *content* to ``tmp_path / relative`` and returns the path."""

    def _write(relative: str, content: str | bytes = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write
