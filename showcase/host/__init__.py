"""Host platform boundary: protocols plus in-memory and asyncio implementations."""

from __future__ import annotations

from .aio import AsyncioTimerService
from .base import (
    BatchHandler,
    ClipboardService,
    ElementResolver,
    ScrollService,
    SerialDispatcher,
    Subscription,
    TimerHandle,
    TimerService,
    VisibilityService,
    VisibilitySignal,
    resolve_all,
)
from .synthetic import (
    ManualTimerService,
    MemoryClipboard,
    RecordingScrollService,
    SyntheticVisibilityService,
)

__all__ = [
    "AsyncioTimerService",
    "BatchHandler",
    "ClipboardService",
    "ElementResolver",
    "ManualTimerService",
    "MemoryClipboard",
    "RecordingScrollService",
    "ScrollService",
    "SerialDispatcher",
    "Subscription",
    "SyntheticVisibilityService",
    "TimerHandle",
    "TimerService",
    "VisibilityService",
    "VisibilitySignal",
    "resolve_all",
]
