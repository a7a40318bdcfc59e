"""Countdown scheduling hooks.

The engine never owns a thread; the host's event loop drives the one-second
tick through a :class:`Ticker`.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol


class TickHandle(Protocol):
    def cancel(self) -> None:
        """Stop any further callbacks."""


class Ticker(Protocol):
    def every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        """Invoke ``callback`` every ``interval`` seconds until cancelled."""


class _RepeatingCall:
    def __init__(
        self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self.cancelled = False
        self._schedule()

    def _schedule(self) -> None:
        self._handle = self._loop.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        if self.cancelled:
            return
        self._schedule()
        self._callback()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioTicker:
    """Ticker backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def every(self, interval: float, callback: Callable[[], None]) -> _RepeatingCall:
        loop = self._loop or asyncio.get_running_loop()
        return _RepeatingCall(loop, interval, callback)
