from __future__ import annotations

from typing import Any, Callable, Iterable, List

import pytest

from raffle_draw.config import Settings
from raffle_draw.session import RaffleSession


class ManualHandle:
    def __init__(self, when: float, seq: int, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Fake clock. Nothing runs until the test advances time.
    With ``honor_cancel=False`` cancelled handles still fire, which is how the
    epoch guard gets exercised on its own.
    """

    def __init__(self, honor_cancel: bool = True) -> None:
        self.now = 0.0
        self.honor_cancel = honor_cancel
        self._queue: List[ManualHandle] = []
        self._seq = 0

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualHandle:
        self._seq += 1
        handle = ManualHandle(self.now + delay, self._seq, callback, args)
        self._queue.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self._queue if h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._queue.remove(handle)
            self.now = max(self.now, handle.when)
            if handle.cancelled and self.honor_cancel:
                continue
            handle.callback(*handle.args)
        self.now = target

    def run_all(self, limit: int = 10_000) -> None:
        for _ in range(limit):
            if not self._queue:
                return
            self.advance(max(h.when for h in self._queue) - self.now)
        raise AssertionError("scheduler never drained")


def scripted(indices: Iterable[int]) -> Callable[[int], int]:
    it = iter(indices)

    def pick(n: int) -> int:
        return next(it) % n

    return pick


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(
        tick_count=2,
        tick_interval_s=0.1,
        reveal_delay_s=0.5,
        celebration_s=3.0,
        history_limit=2,
        seed=7,
    )


@pytest.fixture
def make_session(scheduler, fast_settings):
    def factory(names=(), random_index=None, settings=None) -> RaffleSession:
        session = RaffleSession(scheduler, settings or fast_settings, random_index=random_index)
        for name in names:
            session.add_participant(name)
        return session

    return factory
