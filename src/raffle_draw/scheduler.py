from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after ``delay`` seconds on the caller's timeline."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Handle: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop (the running one by default)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        return self.loop.call_later(max(delay, 0.0), callback, *args)
