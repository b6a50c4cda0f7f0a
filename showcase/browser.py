"""Composition root wiring the catalog, filter, reveal, section and overlay state."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .catalog import CatalogStore, Entry, load_catalog
from .config import Settings
from .filtering import FilterEngine, FilterState
from .host import (
    ClipboardService,
    ElementResolver,
    ScrollService,
    TimerService,
    VisibilityService,
)
from .overlay import DetailOverlayController
from .reveal import RevealTracker
from .sections import SectionActivityTracker

LOG = logging.getLogger(__name__)

__all__ = ["BrowserView", "CardView", "ContentBrowser", "HostServices", "credential_element_id"]


def credential_element_id(entry: Entry) -> str:
    return f"credential:{entry.key}"


@dataclass(frozen=True)
class HostServices:
    """Host collaborators; any of them may be absent."""

    visibility: Optional[VisibilityService] = None
    timer: Optional[TimerService] = None
    scroll: Optional[ScrollService] = None
    clipboard: Optional[ClipboardService] = None
    resolver: Optional[ElementResolver] = None


@dataclass(frozen=True)
class CardView:
    entry: Entry
    element_id: str
    revealed: bool


@dataclass(frozen=True)
class BrowserView:
    """Snapshot of everything a renderer needs for one frame."""

    cards: tuple[CardView, ...]
    credentials: tuple[CardView, ...]
    tags: tuple[str, ...]
    filter_state: FilterState
    active_landmark: str
    landmarks: tuple[str, ...]
    overlay: Optional[Entry]
    static_revealed: dict[str, bool]

    @property
    def is_empty(self) -> bool:
        return not self.cards


class ContentBrowser:
    def __init__(
        self,
        catalog: CatalogStore,
        *,
        credentials: CatalogStore | Iterable[Entry] = (),
        settings: Optional[Settings] = None,
        host: Optional[HostServices] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.host = host or HostServices()
        self.catalog = catalog
        self.credentials = (
            credentials if isinstance(credentials, CatalogStore) else CatalogStore(credentials)
        )
        self._engine = FilterEngine(catalog)
        self._filter_state = FilterState()
        self._rendered: tuple[Entry, ...] = self._engine.apply(self._filter_state)
        self._mounted = False

        reveal_cfg = self.settings.reveal
        sections_cfg = self.settings.sections
        self.reveal = RevealTracker(
            self.host.visibility,
            threshold=reveal_cfg.threshold,
            resolver=self.host.resolver,
            timer=self.host.timer,
            settle_delay_ms=reveal_cfg.settle_delay_ms,
        )
        self.sections = SectionActivityTracker(
            sections_cfg.landmarks,
            self.host.visibility,
            thresholds=sections_cfg.thresholds,
            resolver=self.host.resolver,
        )
        self.overlay = DetailOverlayController(
            self.host.scroll, catalog_landmark=sections_cfg.catalog_landmark
        )

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, host: Optional[HostServices] = None
    ) -> "ContentBrowser":
        """Load the configured catalog (projects and credentials) and build a browser."""

        settings = settings or Settings()
        path = settings.catalog.path
        return cls(
            load_catalog(path, section="projects"),
            credentials=load_catalog(path, section="credentials"),
            settings=settings,
            host=host,
        )

    # -------------------- lifecycle --------------------

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        self.sections.start()
        self.reveal.register(self.revealable_ids())
        LOG.debug("Browser mounted with %d rendered entries", len(self._rendered))

    def unmount(self) -> None:
        self.reveal.close()
        self.sections.stop()
        self._mounted = False

    def revealable_ids(self) -> list[str]:
        ids = list(self.settings.reveal.static_ids)
        ids.extend(credential_element_id(entry) for entry in self.credentials)
        ids.extend(entry.element_id for entry in self._rendered)
        return ids

    # -------------------- filtering --------------------

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    @property
    def tags(self) -> tuple[str, ...]:
        return self.catalog.tags

    @property
    def rendered_entries(self) -> tuple[Entry, ...]:
        return self._rendered

    def apply_filter(
        self, query: Optional[str] = None, tag: Optional[str] = None
    ) -> tuple[Entry, ...]:
        state = self._filter_state.with_changes(query=query, tag=tag)
        if state == self._filter_state:
            return self._rendered
        self._filter_state = state
        rendered = self._engine.apply(state)
        if rendered != self._rendered:
            self._rendered = rendered
            if self._mounted:
                self.reveal.schedule_register(self.revealable_ids())
        return self._rendered

    def _rendered_entry(self, key: str) -> Optional[Entry]:
        for entry in self._rendered:
            if entry.key == key:
                return entry
        LOG.debug("Entry %s is not currently rendered", key)
        return None

    # -------------------- overlay --------------------

    @property
    def selected(self) -> Optional[Entry]:
        return self.overlay.selected

    def open_details(self, key: str) -> bool:
        entry = self._rendered_entry(key)
        if entry is None:
            return False
        self.overlay.select_entry(entry)
        return True

    def activate_link(self, key: str, index: int) -> Optional[str]:
        """Follow link ``index`` of a rendered entry; returns an external target if any."""

        entry = self._rendered_entry(key)
        if entry is None:
            return None
        try:
            link = entry.links[index]
        except IndexError:
            LOG.debug("Entry %s has no link #%d", key, index)
            return None
        return self.overlay.activate_link(entry, link)

    def close_details(self) -> bool:
        return self.overlay.close()

    def dismiss_details(self) -> bool:
        return self.overlay.dismiss_outside()

    def return_to_catalog(self) -> bool:
        return self.overlay.return_to_catalog()

    # -------------------- navigation & convenience actions --------------------

    @property
    def active_landmark(self) -> str:
        return self.sections.active

    def scroll_to(self, landmark: str) -> None:
        if self.host.scroll is None:
            LOG.debug("No scroll service; ignoring request for %s", landmark)
            return
        self.host.scroll.scroll_to(landmark)

    def copy_contact(self) -> bool:
        clipboard = self.host.clipboard
        if clipboard is None:
            return False
        try:
            clipboard.write_text(self.settings.contact.email)
        except Exception as exc:  # clipboard writes are best effort
            LOG.debug("Clipboard write failed: %s", exc)
            return False
        return True

    # -------------------- rendering --------------------

    def view(self) -> BrowserView:
        is_revealed = self.reveal.is_revealed
        return BrowserView(
            cards=tuple(
                CardView(entry, entry.element_id, is_revealed(entry.element_id))
                for entry in self._rendered
            ),
            credentials=tuple(
                CardView(entry, credential_element_id(entry), is_revealed(credential_element_id(entry)))
                for entry in self.credentials
            ),
            tags=self.tags,
            filter_state=self._filter_state,
            active_landmark=self.sections.active,
            landmarks=self.sections.landmarks,
            overlay=self.overlay.selected,
            static_revealed={eid: is_revealed(eid) for eid in self.settings.reveal.static_ids},
        )
