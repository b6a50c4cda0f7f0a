"""One-shot, visibility-driven reveal state for rendered elements.

Every tracked element is either ``PENDING`` or ``REVEALED``. The transition is
one-way: a revealed element stays revealed for as long as it is tracked, and
is never observed again. Registration recomputes the tracked set from the
currently rendered elements; elements that left the rendered set are dropped
and start over as ``PENDING`` if they come back.

Without a visibility capability every registered element is revealed at
registration time, so content is never hidden on hosts that cannot report
visibility.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Optional

from .host import (
    ElementResolver,
    SerialDispatcher,
    Subscription,
    TimerHandle,
    TimerService,
    VisibilityService,
    VisibilitySignal,
    resolve_all,
)

LOG = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.12

__all__ = ["DEFAULT_THRESHOLD", "RevealStatus", "RevealTracker"]


class RevealStatus(str, Enum):
    PENDING = "pending"
    REVEALED = "revealed"


class RevealTracker:
    def __init__(
        self,
        visibility: Optional[VisibilityService] = None,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        resolver: Optional[ElementResolver] = None,
        timer: Optional[TimerService] = None,
        settle_delay_ms: int = 0,
    ) -> None:
        if not 0.0 < threshold <= 1.0:
            raise ValueError("threshold must be within (0, 1]")
        self._visibility = visibility
        self._threshold = threshold
        self._resolver = resolver or resolve_all
        self._timer = timer
        self._settle_delay_ms = max(0, int(settle_delay_ms))
        self._states: dict[str, RevealStatus] = {}
        self._subscription: Optional[Subscription] = None
        self._pending_timer: Optional[TimerHandle] = None
        self._dispatcher = SerialDispatcher(self._process_batch)

    @property
    def capable(self) -> bool:
        """Whether the host can deliver visibility signals."""

        return self._visibility is not None

    @property
    def states(self) -> Mapping[str, RevealStatus]:
        return MappingProxyType(self._states)

    def status(self, element_id: str) -> Optional[RevealStatus]:
        return self._states.get(element_id)

    def is_revealed(self, element_id: str) -> bool:
        return self._states.get(element_id) is RevealStatus.REVEALED

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(eid for eid, st in self._states.items() if st is RevealStatus.PENDING)

    @property
    def revealed(self) -> tuple[str, ...]:
        return tuple(eid for eid, st in self._states.items() if st is RevealStatus.REVEALED)

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    @property
    def registration_scheduled(self) -> bool:
        return self._pending_timer is not None

    # -------------------- registration --------------------

    def register(self, element_ids: Iterable[str]) -> tuple[str, ...]:
        """Track exactly the rendered ``element_ids``; return the ids now observed."""

        self._cancel_timer()
        current: list[str] = []
        for element_id in dict.fromkeys(element_ids):
            if self._resolver(element_id):
                current.append(element_id)
            else:
                LOG.debug("Skipping unresolved revealable element %s", element_id)

        keep = set(current)
        for stale in [eid for eid in self._states if eid not in keep]:
            del self._states[stale]
        for element_id in current:
            self._states.setdefault(element_id, RevealStatus.PENDING)

        self._release_subscription()
        if self._visibility is None:
            for element_id in current:
                self._states[element_id] = RevealStatus.REVEALED
            return ()

        to_observe = tuple(eid for eid in current if self._states[eid] is RevealStatus.PENDING)
        if to_observe:
            self._subscription = self._visibility.subscribe(
                to_observe, (self._threshold,), self._dispatcher.submit
            )
        LOG.debug(
            "Reveal registration: %d tracked, %d observed", len(current), len(to_observe)
        )
        return to_observe

    def schedule_register(self, element_ids: Sequence[str]) -> None:
        """Register after the settle delay, superseding any earlier schedule.

        Without a visibility service nothing is measured, so registration
        (and therefore reveal) happens immediately.
        """

        if self._visibility is None or self._timer is None or self._settle_delay_ms == 0:
            self.register(element_ids)
            return
        self._cancel_timer()
        snapshot = tuple(element_ids)

        def _fire() -> None:
            self._pending_timer = None
            self.register(snapshot)

        self._pending_timer = self._timer.schedule(self._settle_delay_ms, _fire)

    # -------------------- signals --------------------

    def handle_batch(self, signals: Sequence[VisibilitySignal]) -> None:
        """Entry point for a host-delivered batch; batches never interleave."""

        self._dispatcher.submit(signals)

    def _process_batch(self, signals: Sequence[VisibilitySignal]) -> None:
        for signal in signals:
            if signal.intersecting:
                self.mark_revealed(signal.element_id)

    def mark_revealed(self, element_id: str) -> bool:
        """Move a pending element to ``REVEALED``; returns ``True`` on transition."""

        if self._states.get(element_id) is not RevealStatus.PENDING:
            return False
        self._states[element_id] = RevealStatus.REVEALED
        if self._subscription is not None:
            self._subscription.unobserve(element_id)
        LOG.debug("Revealed %s", element_id)
        return True

    # -------------------- teardown --------------------

    def _cancel_timer(self) -> None:
        if self._pending_timer is not None:
            self._pending_timer.cancel()
            self._pending_timer = None

    def _release_subscription(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def close(self) -> None:
        """Release the subscription and any scheduled registration."""

        self._cancel_timer()
        self._release_subscription()
