"""Derive the visible catalog subset from a free-text query and a tag."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .catalog import ALL_TAG, CatalogStore, Entry

__all__ = ["FilterEngine", "FilterState", "filter_entries", "matches", "normalize_query"]

_CACHE_LIMIT = 256


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = ""
    active_tag: str = ALL_TAG

    def with_changes(self, *, query: Optional[str] = None, tag: Optional[str] = None) -> "FilterState":
        return FilterState(
            query=self.query if query is None else query,
            active_tag=self.active_tag if tag is None else (tag or ALL_TAG),
        )


def normalize_query(query: str) -> str:
    return (query or "").strip().lower()


def _matches_query(entry: Entry, needle: str) -> bool:
    if not needle:
        return True
    return (
        needle in entry.title.lower()
        or needle in entry.summary.lower()
        or any(needle in tag.lower() for tag in entry.tags)
    )


def matches(entry: Entry, state: FilterState) -> bool:
    """Return ``True`` when ``entry`` satisfies both the query and the tag filter."""

    tag_ok = state.active_tag == ALL_TAG or entry.has_tag(state.active_tag)
    return tag_ok and _matches_query(entry, normalize_query(state.query))


def filter_entries(catalog: CatalogStore, state: FilterState) -> tuple[Entry, ...]:
    """Stable filter of ``catalog``; output keeps catalog order."""

    return tuple(entry for entry in catalog if matches(entry, state))


class FilterEngine:
    """Filter a fixed catalog, memoizing results per ``(query, tag)`` pair."""

    def __init__(self, catalog: CatalogStore) -> None:
        self.catalog = catalog
        self._cache: dict[tuple[str, str], tuple[Entry, ...]] = {}

    def apply(self, state: FilterState) -> tuple[Entry, ...]:
        cache_key = (normalize_query(state.query), state.active_tag)
        cached = self._cache.get(cache_key)
        if cached is None:
            cached = filter_entries(self.catalog, state)
            if len(self._cache) >= _CACHE_LIMIT:
                self._cache.clear()
            self._cache[cache_key] = cached
        return cached

    __call__ = apply

    def cache_size(self) -> int:
        return len(self._cache)
