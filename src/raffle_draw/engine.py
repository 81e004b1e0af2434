"""Draw engine: animated random selection with an epoch-guarded timeline."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Sequence

from .history import History, Winner
from .project_constants import CELEBRATION_S, REVEAL_DELAY_S, TICK_COUNT, TICK_INTERVAL_S
from .registry import Participant
from .scheduler import Handle, Scheduler

log = logging.getLogger(__name__)

RandomIndex = Callable[[int], int]
Listener = Callable[[str], None]


class DrawState(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"
    REVEALED = "revealed"


def win_chance_percent(pool_size: int) -> int:
    """Pre-draw chance of any single entry, rounded half up like the display."""
    if pool_size <= 0:
        return 0
    return int(100 / pool_size + 0.5)


def default_random_index(seed: Optional[int] = None) -> RandomIndex:
    return random.Random(seed).randrange


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DrawEngine:
    """
    Runs one draw at a time: ``tick_count`` highlighted picks, a pause, then an
    independent final pick that becomes the Winner.

    Every scheduled step remembers the epoch it was scheduled under. Clearing,
    resetting or restarting bumps the epoch, so steps left over from an older
    draw find a mismatch and do nothing.
    """

    def __init__(
        self,
        history: History,
        scheduler: Scheduler,
        *,
        tick_count: int = TICK_COUNT,
        tick_interval_s: float = TICK_INTERVAL_S,
        reveal_delay_s: float = REVEAL_DELAY_S,
        celebration_s: float = CELEBRATION_S,
        random_index: Optional[RandomIndex] = None,
        clock: Callable[[], datetime] = _utc_now,
        listener: Optional[Listener] = None,
    ) -> None:
        self.history = history
        self.scheduler = scheduler
        self.tick_count = tick_count
        self.tick_interval_s = tick_interval_s
        self.reveal_delay_s = reveal_delay_s
        self.celebration_s = celebration_s
        self.random_index = random_index or default_random_index()
        self.clock = clock
        self.listener = listener

        self.state = DrawState.IDLE
        self.highlighted: Optional[Participant] = None
        self.current_winner: Optional[Winner] = None
        self.celebrating = False
        self.epoch = 0

        self._step: Optional[Handle] = None
        self._celebration: Optional[Handle] = None

    # ---- public intents ----

    def start(self, snapshot: Sequence[Participant]) -> bool:
        pool = tuple(snapshot)
        if not pool:
            log.debug("Draw ignored: no participants")
            return False

        if self.state is DrawState.ANIMATING:
            log.info("Superseding draw in progress (epoch %d)", self.epoch)
        self._invalidate()
        self.highlighted = None
        self.current_winner = None
        self.celebrating = False

        self.state = DrawState.ANIMATING
        log.info("Draw started: %d entries, epoch %d", len(pool), self.epoch)
        self._emit("start")
        if self.tick_count <= 0:
            self._schedule(self.reveal_delay_s, self._reveal, pool)
        else:
            self._schedule(self.tick_interval_s, self._tick, pool, self.tick_count)
        return True

    def clear_winner(self) -> None:
        if self.state is DrawState.IDLE:
            return
        self._invalidate()
        self.state = DrawState.IDLE
        self.highlighted = None
        self.current_winner = None
        self.celebrating = False
        self._emit("clear")

    def reset(self) -> None:
        self._invalidate()
        self.state = DrawState.IDLE
        self.highlighted = None
        self.current_winner = None
        self.celebrating = False
        self.history.clear_all()
        self._emit("reset")

    @property
    def current(self) -> Optional[Participant]:
        """Whoever the audience should see right now, if anyone."""
        if self.state is DrawState.ANIMATING:
            return self.highlighted
        if self.current_winner is not None:
            return self.current_winner.participant
        return None

    # ---- timeline ----

    def _pick(self, pool: Sequence[Participant]) -> Participant:
        return pool[self.random_index(len(pool))]

    def _schedule(self, delay: float, step, *args) -> None:
        epoch = self.epoch

        def run() -> None:
            if epoch != self.epoch:
                log.debug("Dropping stale step from epoch %d", epoch)
                return
            self._step = None
            step(*args)

        self._step = self.scheduler.call_later(delay, run)

    def _tick(self, pool: Sequence[Participant], remaining: int) -> None:
        self.highlighted = self._pick(pool)
        self._emit("tick")

        if remaining > 1:
            self._schedule(self.tick_interval_s, self._tick, pool, remaining - 1)
        else:
            self._schedule(self.reveal_delay_s, self._reveal, pool)

    def _reveal(self, pool: Sequence[Participant]) -> None:
        # Independent of whatever the last tick showed.
        winner = Winner(participant=self._pick(pool), timestamp=self.clock())
        self.state = DrawState.REVEALED
        self.highlighted = None
        self.current_winner = winner
        self.history.record(winner)
        self.celebrating = True
        log.info("Winner: %s", winner.participant.name)
        self._emit("reveal")

        epoch = self.epoch

        def end_celebration() -> None:
            if epoch != self.epoch:
                return
            self._celebration = None
            self.celebrating = False
            self._emit("celebration_end")

        self._celebration = self.scheduler.call_later(self.celebration_s, end_celebration)

    def _invalidate(self) -> None:
        self.epoch += 1
        for handle in (self._step, self._celebration):
            if handle is not None:
                handle.cancel()
        self._step = None
        self._celebration = None

    def _emit(self, event: str) -> None:
        if self.listener is not None:
            self.listener(event)
