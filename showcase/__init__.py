"""Showcase package bootstrap and curated public API surface."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("showcase")
except PackageNotFoundError:  # pragma: no cover - metadata may be unavailable when running from source
    __version__ = "0.0.0"


def get_version() -> str:
    """Return the resolved Showcase package version."""

    return __version__


from .browser import BrowserView, CardView, ContentBrowser, HostServices  # noqa: E402
from .catalog import (  # noqa: E402
    ALL_TAG,
    CatalogError,
    CatalogStore,
    Entry,
    EntryLink,
    load_catalog,
)
from .filtering import FilterEngine, FilterState, filter_entries, matches  # noqa: E402
from .overlay import CloseReason, DetailOverlayController  # noqa: E402
from .reveal import RevealStatus, RevealTracker  # noqa: E402
from .sections import SectionActivityTracker  # noqa: E402

__all__ = [
    "__version__",
    "get_version",
    "ALL_TAG",
    "BrowserView",
    "CardView",
    "CatalogError",
    "CatalogStore",
    "CloseReason",
    "ContentBrowser",
    "DetailOverlayController",
    "Entry",
    "EntryLink",
    "FilterEngine",
    "FilterState",
    "HostServices",
    "RevealStatus",
    "RevealTracker",
    "SectionActivityTracker",
    "filter_entries",
    "load_catalog",
    "matches",
]
