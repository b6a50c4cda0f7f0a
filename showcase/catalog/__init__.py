"""Catalog models and the immutable catalog store."""

from __future__ import annotations

from .models import Entry, EntryLink, slugify
from .store import (
    ALL_TAG,
    CATALOG_SECTIONS,
    DEFAULT_CATALOG_PATH,
    CatalogError,
    CatalogStore,
    build_tag_index,
    load_catalog,
)

__all__ = [
    "ALL_TAG",
    "CATALOG_SECTIONS",
    "DEFAULT_CATALOG_PATH",
    "CatalogError",
    "CatalogStore",
    "Entry",
    "EntryLink",
    "build_tag_index",
    "load_catalog",
    "slugify",
]
