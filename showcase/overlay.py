"""Single-entry detail overlay selection."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .catalog import Entry, EntryLink
from .host import ScrollService

LOG = logging.getLogger(__name__)

__all__ = ["CloseReason", "DetailOverlayController"]


class CloseReason(str, Enum):
    CLOSE_BUTTON = "close"
    OUTSIDE = "outside"
    RETURN_TO_CATALOG = "return_to_catalog"


class DetailOverlayController:
    """Holds zero or one selected entry.

    Opening replaces any current selection. Every close trigger clears the
    selection; returning to the catalog additionally scrolls the host to the
    catalog landmark.
    """

    def __init__(
        self,
        scroll: Optional[ScrollService] = None,
        *,
        catalog_landmark: str = "projects",
    ) -> None:
        self._scroll = scroll
        self.catalog_landmark = catalog_landmark
        self._selected: Optional[Entry] = None
        self.last_close_reason: Optional[CloseReason] = None

    @property
    def selected(self) -> Optional[Entry]:
        return self._selected

    @property
    def is_open(self) -> bool:
        return self._selected is not None

    def select_entry(self, entry: Entry) -> None:
        self._selected = entry
        self.last_close_reason = None
        LOG.debug("Detail overlay opened for %s", entry.key)

    def activate_link(self, entry: Entry, link: EntryLink) -> Optional[str]:
        """Act on one of ``entry``'s links.

        Detail links open the overlay and return ``None``; external links
        leave the selection alone and return the target for the host to open.
        """

        if link.kind == "external":
            return link.target
        self.select_entry(entry)
        return None

    def clear_selection(self, reason: CloseReason = CloseReason.CLOSE_BUTTON) -> bool:
        was_open = self._selected is not None
        self._selected = None
        if was_open:
            self.last_close_reason = reason
            LOG.debug("Detail overlay closed (%s)", reason.value)
        return was_open

    def close(self) -> bool:
        return self.clear_selection(CloseReason.CLOSE_BUTTON)

    def dismiss_outside(self) -> bool:
        return self.clear_selection(CloseReason.OUTSIDE)

    def return_to_catalog(self) -> bool:
        closed = self.clear_selection(CloseReason.RETURN_TO_CATALOG)
        if self._scroll is not None:
            self._scroll.scroll_to(self.catalog_landmark)
        return closed
