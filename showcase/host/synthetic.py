"""In-memory host implementations for tests and headless sessions."""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from .base import BatchHandler, VisibilitySignal

LOG = logging.getLogger(__name__)

__all__ = [
    "ManualTimerService",
    "MemoryClipboard",
    "RecordingScrollService",
    "SyntheticSubscription",
    "SyntheticVisibilityService",
]


@dataclass
class SyntheticSubscription:
    """Subscription record kept by :class:`SyntheticVisibilityService`."""

    service: "SyntheticVisibilityService"
    thresholds: tuple[float, ...]
    callback: BatchHandler
    observed: list[str] = field(default_factory=list)
    active: bool = True

    def unobserve(self, element_id: str) -> None:
        if element_id in self.observed:
            self.observed.remove(element_id)

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self.service._release(self)


class SyntheticVisibilityService:
    """Visibility capability driven explicitly through :meth:`deliver`.

    The service also plays the role of the rendering surface: ``mounted``
    holds the element identifiers that currently exist, and :meth:`resolve`
    can be injected as an element resolver.
    """

    def __init__(self, mounted: Iterable[str] | None = None) -> None:
        self.mounted: set[str] = set(mounted or ())
        self.subscriptions: list[SyntheticSubscription] = []

    def resolve(self, element_id: str) -> bool:
        return element_id in self.mounted

    def mount(self, *element_ids: str) -> None:
        self.mounted.update(element_ids)

    def unmount(self, *element_ids: str) -> None:
        self.mounted.difference_update(element_ids)

    def subscribe(
        self,
        element_ids: Sequence[str],
        thresholds: Sequence[float],
        callback: BatchHandler,
    ) -> SyntheticSubscription:
        subscription = SyntheticSubscription(
            service=self,
            thresholds=tuple(thresholds),
            callback=callback,
            observed=list(dict.fromkeys(element_ids)),
        )
        self.subscriptions.append(subscription)
        return subscription

    def _release(self, subscription: SyntheticSubscription) -> None:
        if subscription in self.subscriptions:
            self.subscriptions.remove(subscription)

    @property
    def active_subscriptions(self) -> list[SyntheticSubscription]:
        return [sub for sub in self.subscriptions if sub.active]

    def observed(self) -> set[str]:
        """Return every element currently observed by any live subscription."""

        return {eid for sub in self.active_subscriptions for eid in sub.observed}

    def deliver(self, signals: Iterable[VisibilitySignal | tuple]) -> int:
        """Deliver one batch to every live subscription observing its elements.

        Tuples are accepted as ``(element_id, intersecting, ratio)`` shorthand.
        Returns the number of subscriptions that received a non-empty batch.
        """

        batch = [s if isinstance(s, VisibilitySignal) else VisibilitySignal(*s) for s in signals]
        delivered = 0
        for sub in list(self.active_subscriptions):
            relevant = [s for s in batch if s.element_id in sub.observed]
            if relevant:
                sub.callback(relevant)
                delivered += 1
        return delivered


@dataclass(order=True)
class _ScheduledCall:
    due_ms: int
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerService:
    """Timer service on a virtual clock advanced with :meth:`advance`."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._heap: list[_ScheduledCall] = []
        self._seq = itertools.count()

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> _ScheduledCall:
        call = _ScheduledCall(self.now_ms + max(0, int(delay_ms)), next(self._seq), callback)
        heapq.heappush(self._heap, call)
        return call

    @property
    def pending(self) -> int:
        return sum(1 for call in self._heap if not call.cancelled)

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward, firing due callbacks in order. Returns the count fired."""

        target = self.now_ms + max(0, int(delta_ms))
        fired = 0
        while self._heap and self._heap[0].due_ms <= target:
            call = heapq.heappop(self._heap)
            self.now_ms = call.due_ms
            if call.cancelled:
                continue
            call.callback()
            fired += 1
        self.now_ms = target
        return fired


class RecordingScrollService:
    def __init__(self) -> None:
        self.requests: list[str] = []

    def scroll_to(self, landmark: str) -> None:
        LOG.debug("Scroll requested to %s", landmark)
        self.requests.append(landmark)


class MemoryClipboard:
    """Clipboard that keeps written text; ``fail=True`` simulates a denied write."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.contents: str | None = None

    def write_text(self, text: str) -> None:
        if self.fail:
            raise PermissionError("clipboard write denied")
        self.contents = text
