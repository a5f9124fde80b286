# pyright: reportUnusedFunction=false

from __future__ import annotations

import typing as _t

import pytest

from mxm.flowchart import registry


@pytest.fixture(autouse=True)
def _fresh_sample_registry() -> _t.Iterator[None]:
    """
    Start every test with an empty sample cache so tests that monkeypatch the
    catalogue cannot leak into each other. Restores the original cache on exit.
    """
    saved = registry._cache  # pyright: ignore[reportPrivateUsage]
    registry._cache = None  # pyright: ignore[reportPrivateUsage]
    yield
    registry._cache = saved  # pyright: ignore[reportPrivateUsage]


@pytest.fixture
def start_end_lr() -> str:
    return "flowchart LR\nA[Start] --> B[End]"
