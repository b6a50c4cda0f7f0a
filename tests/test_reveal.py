from __future__ import annotations

import pytest

from showcase.host import ManualTimerService, SyntheticVisibilityService, VisibilitySignal
from showcase.reveal import RevealStatus, RevealTracker


def _tracker(visibility: SyntheticVisibilityService, **kwargs) -> RevealTracker:
    return RevealTracker(visibility, resolver=visibility.resolve, **kwargs)


def test_registration_observes_pending_elements(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a", "b")
    tracker = _tracker(visibility)

    observed = tracker.register(["a", "b"])

    assert observed == ("a", "b")
    assert tracker.pending == ("a", "b")
    assert visibility.observed() == {"a", "b"}
    assert visibility.active_subscriptions[0].thresholds == (0.12,)


def test_intersecting_signal_reveals_and_unobserves(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a", "b")
    tracker = _tracker(visibility)
    tracker.register(["a", "b"])

    visibility.deliver([("a", True, 0.3), ("b", False, 0.0)])

    assert tracker.status("a") is RevealStatus.REVEALED
    assert tracker.status("b") is RevealStatus.PENDING
    assert visibility.observed() == {"b"}


def test_revealed_never_reverts(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a")
    tracker = _tracker(visibility)
    tracker.register(["a"])
    tracker.handle_batch([VisibilitySignal("a", True, 0.5)])

    tracker.handle_batch([VisibilitySignal("a", False, 0.0)])
    tracker.register(["a"])

    assert tracker.is_revealed("a")
    assert tracker.mark_revealed("a") is False


def test_unresolved_ids_are_skipped(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a")
    tracker = _tracker(visibility)

    observed = tracker.register(["a", "ghost"])

    assert observed == ("a",)
    assert tracker.status("ghost") is None


def test_reregistration_skips_revealed_and_adds_new(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a", "b", "c")
    tracker = _tracker(visibility)
    tracker.register(["a", "b"])
    visibility.deliver([("a", True, 0.2)])
    first = visibility.active_subscriptions[0]

    observed = tracker.register(["a", "b", "c"])

    assert observed == ("b", "c")
    assert not first.active
    assert len(visibility.active_subscriptions) == 1
    assert tracker.is_revealed("a")


def test_stale_elements_are_dropped_and_restart_pending(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a", "b")
    tracker = _tracker(visibility)
    tracker.register(["a", "b"])
    visibility.deliver([("b", True, 0.9)])

    tracker.register(["a"])
    assert tracker.status("b") is None
    assert set(tracker.states) == {"a"}

    tracker.register(["a", "b"])
    assert tracker.status("b") is RevealStatus.PENDING


def test_signals_for_untracked_elements_are_ignored(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a")
    tracker = _tracker(visibility)
    tracker.register(["a"])

    tracker.handle_batch([VisibilitySignal("elsewhere", True, 1.0)])

    assert tracker.status("elsewhere") is None


def test_nothing_pending_means_no_subscription(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a")
    tracker = _tracker(visibility)
    tracker.register(["a"])
    visibility.deliver([("a", True, 1.0)])

    assert tracker.register(["a"]) == ()
    assert not tracker.subscribed
    assert visibility.active_subscriptions == []


def test_capability_absent_reveals_everything_immediately() -> None:
    tracker = RevealTracker(None)

    observed = tracker.register(["x", "y"])

    assert observed == ()
    assert not tracker.capable
    assert tracker.revealed == ("x", "y")
    assert tracker.pending == ()


def test_schedule_register_waits_for_settle_delay(
    visibility: SyntheticVisibilityService, timer: ManualTimerService
) -> None:
    visibility.mount("a", "b")
    tracker = _tracker(visibility, timer=timer, settle_delay_ms=50)

    tracker.schedule_register(["a"])
    assert tracker.registration_scheduled
    assert tracker.states == {}

    timer.advance(49)
    assert tracker.states == {}
    timer.advance(1)
    assert tracker.pending == ("a",)
    assert not tracker.registration_scheduled


def test_newer_schedule_supersedes_older(
    visibility: SyntheticVisibilityService, timer: ManualTimerService
) -> None:
    visibility.mount("a", "b")
    tracker = _tracker(visibility, timer=timer, settle_delay_ms=50)

    tracker.schedule_register(["a"])
    timer.advance(30)
    tracker.schedule_register(["b"])

    assert timer.pending == 1
    assert timer.advance(100) == 1
    assert set(tracker.states) == {"b"}
    assert len(visibility.active_subscriptions) == 1


def test_schedule_without_timer_registers_immediately(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a")
    tracker = _tracker(visibility, settle_delay_ms=50)

    tracker.schedule_register(["a"])

    assert tracker.pending == ("a",)


def test_close_releases_subscription_and_timer(
    visibility: SyntheticVisibilityService, timer: ManualTimerService
) -> None:
    visibility.mount("a")
    tracker = _tracker(visibility, timer=timer, settle_delay_ms=10)
    tracker.register(["a"])
    tracker.schedule_register(["a"])

    tracker.close()

    assert visibility.active_subscriptions == []
    assert timer.pending == 0
    assert timer.advance(100) == 0


def test_reentrant_delivery_is_serialized(visibility: SyntheticVisibilityService) -> None:
    visibility.mount("a", "b")
    tracker = _tracker(visibility)
    tracker.register(["a", "b"])
    order: list[str] = []
    real_mark = tracker.mark_revealed

    def spy(element_id: str) -> bool:
        order.append(f"start:{element_id}")
        if element_id == "a":
            tracker.handle_batch([VisibilitySignal("b", True, 0.5)])
        result = real_mark(element_id)
        order.append(f"end:{element_id}")
        return result

    tracker.mark_revealed = spy  # type: ignore[method-assign]
    tracker.handle_batch([VisibilitySignal("a", True, 0.5)])

    assert order == ["start:a", "end:a", "start:b", "end:b"]
    assert tracker.revealed == ("a", "b")


@pytest.mark.parametrize("threshold", [0.0, -0.1, 1.5])
def test_threshold_must_be_a_fraction(threshold: float) -> None:
    with pytest.raises(ValueError):
        RevealTracker(None, threshold=threshold)


def test_schedule_register_without_visibility_reveals_immediately(
    timer: ManualTimerService,
) -> None:
    tracker = RevealTracker(timer=timer, settle_delay_ms=50)

    tracker.schedule_register(["a", "b"])

    assert tracker.revealed == ("a", "b")
    assert not tracker.registration_scheduled
    assert timer.pending == 0
