"""Immutable catalog store, tag index and YAML loader."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import Entry

LOG = logging.getLogger(__name__)

ALL_TAG = "All"
DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.yaml"
CATALOG_SECTIONS = ("projects", "credentials")

__all__ = [
    "ALL_TAG",
    "CATALOG_SECTIONS",
    "DEFAULT_CATALOG_PATH",
    "CatalogError",
    "CatalogStore",
    "build_tag_index",
    "load_catalog",
]


class CatalogError(ValueError):
    """Raised when catalog data cannot be turned into a :class:`CatalogStore`."""


def build_tag_index(entries: Iterable[Entry]) -> tuple[str, ...]:
    """Return ``"All"`` followed by every distinct tag in first-seen order."""

    seen: dict[str, None] = {ALL_TAG: None}
    for entry in entries:
        for tag in entry.tags:
            seen.setdefault(tag, None)
    return tuple(seen)


class CatalogStore:
    """Ordered, read-only sequence of entries with a derived tag index."""

    __slots__ = ("_entries", "_by_key", "_tags")

    def __init__(self, entries: Iterable[Entry | Mapping[str, Any]] = ()) -> None:
        items = tuple(e if isinstance(e, Entry) else Entry.model_validate(e) for e in entries)
        by_key: dict[str, Entry] = {}
        for entry in items:
            if entry.key in by_key:
                raise CatalogError(f"Duplicate catalog entry key '{entry.key}'")
            by_key[entry.key] = entry
        self._entries = items
        self._by_key = by_key
        self._tags = build_tag_index(items)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @property
    def tags(self) -> tuple[str, ...]:
        return self._tags

    def get(self, key: str) -> Entry | None:
        return self._by_key.get(key)

    def index_of(self, entry: Entry) -> int:
        return self._entries.index(entry)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry: object) -> bool:
        return isinstance(entry, Entry) and self._by_key.get(entry.key) == entry

    def __repr__(self) -> str:
        return f"CatalogStore(entries={len(self._entries)}, tags={len(self._tags)})"


def _read_document(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
    except OSError as exc:
        raise CatalogError(f"Unable to read catalog file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"Malformed YAML in catalog file {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, Mapping):
        raise CatalogError(f"Unexpected format in {path}: expected a mapping of sections")
    return loaded


def load_catalog(path: str | Path | None = None, *, section: str = "projects") -> CatalogStore:
    """Build a :class:`CatalogStore` from one section of a YAML catalog file.

    ``path`` defaults to the catalog bundled with the package. A missing
    section yields an empty store.
    """

    source = Path(path) if path else DEFAULT_CATALOG_PATH
    if section not in CATALOG_SECTIONS:
        raise CatalogError(f"Unknown catalog section '{section}'")
    records = _read_document(source).get(section) or []
    if not isinstance(records, list):
        raise CatalogError(f"Catalog section '{section}' in {source} must be a list")
    try:
        store = CatalogStore(records)
    except ValidationError as exc:
        raise CatalogError(f"Invalid entry in catalog section '{section}': {exc}") from exc
    LOG.debug("Loaded %d %s from %s", len(store), section, source)
    return store
