"""Host services backed by an :mod:`asyncio` event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

__all__ = ["AsyncioTimerService"]


class AsyncioTimerService:
    """One-shot timers scheduled with :meth:`asyncio.AbstractEventLoop.call_later`."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._resolve_loop().call_later(max(0, delay_ms) / 1000.0, callback)
