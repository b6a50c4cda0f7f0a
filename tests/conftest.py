from __future__ import annotations

from collections.abc import Iterable

import pytest

from showcase.catalog import CatalogStore, Entry, load_catalog
from showcase.host import (
    ManualTimerService,
    MemoryClipboard,
    RecordingScrollService,
    SyntheticVisibilityService,
)


def make_entry(title: str, tags: Iterable[str] = (), summary: str = "", **extra) -> Entry:
    return Entry(title=title, tags=tuple(tags), summary=summary, **extra)


@pytest.fixture()
def catalog() -> CatalogStore:
    return load_catalog()


@pytest.fixture()
def credentials() -> CatalogStore:
    return load_catalog(section="credentials")


@pytest.fixture()
def small_catalog() -> CatalogStore:
    return CatalogStore(
        [
            make_entry("Alpha Board", ["Java", "UI"], "Dashboard for payroll"),
            make_entry("Beta Engine", ["Python"], "Queue worker"),
            make_entry("Gamma Viewer", ["Java", "3D"], "WebGL scene"),
            make_entry("Delta Tools", ["Go"], "CLI helpers"),
        ]
    )


@pytest.fixture()
def visibility() -> SyntheticVisibilityService:
    return SyntheticVisibilityService()


@pytest.fixture()
def timer() -> ManualTimerService:
    return ManualTimerService()


@pytest.fixture()
def scroll() -> RecordingScrollService:
    return RecordingScrollService()


@pytest.fixture()
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()
