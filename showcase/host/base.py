"""Contracts for the host platform collaborators used by the browser core."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

LOG = logging.getLogger(__name__)

__all__ = [
    "BatchHandler",
    "ClipboardService",
    "ElementResolver",
    "ScrollService",
    "SerialDispatcher",
    "Subscription",
    "TimerHandle",
    "TimerService",
    "VisibilityService",
    "VisibilitySignal",
    "resolve_all",
]


@dataclass(frozen=True)
class VisibilitySignal:
    """One visibility observation delivered by the host for a single element."""

    element_id: str
    intersecting: bool
    ratio: float = 0.0


BatchHandler = Callable[[Sequence[VisibilitySignal]], None]
ElementResolver = Callable[[str], bool]


def resolve_all(element_id: str) -> bool:
    """Resolver used when the host cannot report which elements are mounted."""

    return True


class Subscription(Protocol):
    """Handle returned by :meth:`VisibilityService.subscribe`."""

    def unobserve(self, element_id: str) -> None:
        """Stop delivering signals for ``element_id``."""

        ...

    def unsubscribe(self) -> None:
        """Release the subscription; no further batches are delivered."""

        ...


class VisibilityService(Protocol):
    """Host capability delivering batched visibility signals asynchronously."""

    def subscribe(
        self,
        element_ids: Sequence[str],
        thresholds: Sequence[float],
        callback: BatchHandler,
    ) -> Subscription:
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class TimerService(Protocol):
    """One-shot timers measured in milliseconds."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        ...


class ScrollService(Protocol):
    def scroll_to(self, landmark: str) -> None:
        """Ask the host to bring ``landmark`` into view."""

        ...


class ClipboardService(Protocol):
    def write_text(self, text: str) -> None:
        ...


class SerialDispatcher:
    """Run batch handlers one at a time, in submission order.

    A batch submitted while another is being handled (for example when a
    handler triggers a synchronous delivery) is queued and processed once the
    running handler returns.
    """

    def __init__(self, handler: BatchHandler) -> None:
        self._handler = handler
        self._queue: deque[tuple[VisibilitySignal, ...]] = deque()
        self._running = False

    @property
    def busy(self) -> bool:
        return self._running

    def submit(self, batch: Sequence[VisibilitySignal]) -> None:
        self._queue.append(tuple(batch))
        if self._running:
            LOG.debug("Queued re-entrant batch of %d signal(s)", len(batch))
            return
        self._running = True
        try:
            while self._queue:
                self._handler(self._queue.popleft())
        finally:
            self._running = False
            if self._queue:
                LOG.debug("Dropping %d queued batch(es) after handler error", len(self._queue))
                self._queue.clear()
