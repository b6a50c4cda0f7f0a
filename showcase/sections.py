"""Track which fixed page landmark is currently active."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Optional

from .host import (
    ElementResolver,
    SerialDispatcher,
    Subscription,
    VisibilityService,
    VisibilitySignal,
    resolve_all,
)

LOG = logging.getLogger(__name__)

DEFAULT_LANDMARK = "home"
DEFAULT_THRESHOLDS: tuple[float, ...] = (0.15, 0.25, 0.35, 0.5)

LandmarkListener = Callable[[str], None]

__all__ = ["DEFAULT_LANDMARK", "DEFAULT_THRESHOLDS", "SectionActivityTracker", "pick_active"]


def pick_active(signals: Sequence[VisibilitySignal]) -> Optional[str]:
    """Return the intersecting element with the greatest ratio.

    Equal ratios resolve to the signal delivered last. ``None`` when nothing
    in the batch is intersecting.
    """

    best: Optional[VisibilitySignal] = None
    for signal in signals:
        if not signal.intersecting:
            continue
        if best is None or signal.ratio >= best.ratio:
            best = signal
    return best.element_id if best is not None else None


class SectionActivityTracker:
    """Keeps the active landmark in step with host visibility signals.

    The active landmark is sticky: a batch without any intersecting landmark
    leaves it unchanged. Without a visibility capability it stays at the first
    configured landmark unless set explicitly.
    """

    def __init__(
        self,
        landmarks: Sequence[str],
        visibility: Optional[VisibilityService] = None,
        *,
        thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
        resolver: Optional[ElementResolver] = None,
    ) -> None:
        self.landmarks: tuple[str, ...] = tuple(dict.fromkeys(landmarks))
        self._visibility = visibility
        self._thresholds = tuple(thresholds)
        self._resolver = resolver or resolve_all
        self._active = self.landmarks[0] if self.landmarks else DEFAULT_LANDMARK
        self._subscription: Optional[Subscription] = None
        self._listeners: list[LandmarkListener] = []
        self._dispatcher = SerialDispatcher(self._process_batch)

    @property
    def active(self) -> str:
        return self._active

    @property
    def running(self) -> bool:
        return self._subscription is not None

    def add_listener(self, listener: LandmarkListener) -> None:
        self._listeners.append(listener)

    def start(self) -> tuple[str, ...]:
        """Subscribe over the resolvable landmarks; returns the observed ids."""

        self.stop()
        if self._visibility is None:
            LOG.debug("No visibility capability; active landmark fixed at %s", self._active)
            return ()
        observed = tuple(lm for lm in self.landmarks if self._resolver(lm))
        skipped = len(self.landmarks) - len(observed)
        if skipped:
            LOG.debug("Skipping %d unresolved landmark(s)", skipped)
        if observed:
            self._subscription = self._visibility.subscribe(
                observed, self._thresholds, self._dispatcher.submit
            )
        return observed

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def handle_batch(self, signals: Sequence[VisibilitySignal]) -> None:
        self._dispatcher.submit(signals)

    def _process_batch(self, signals: Sequence[VisibilitySignal]) -> None:
        winner = pick_active([s for s in signals if s.element_id in self.landmarks])
        if winner is not None:
            self.set_active_landmark(winner)

    def set_active_landmark(self, landmark: str) -> bool:
        """Make ``landmark`` active; unknown landmarks are ignored."""

        if landmark not in self.landmarks:
            LOG.debug("Ignoring unknown landmark %s", landmark)
            return False
        if landmark == self._active:
            return False
        self._active = landmark
        for listener in list(self._listeners):
            listener(landmark)
        return True
