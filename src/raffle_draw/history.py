from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from .registry import Participant


@dataclass(frozen=True)
class Winner:
    participant: Participant
    timestamp: datetime


class History:
    """Past winners, newest first. Storage is never truncated."""

    def __init__(self) -> None:
        self._winners: List[Winner] = []

    def __len__(self) -> int:
        return len(self._winners)

    def __iter__(self):
        return iter(self._winners)

    @property
    def winners(self) -> Tuple[Winner, ...]:
        return tuple(self._winners)

    def record(self, winner: Winner) -> None:
        self._winners.insert(0, winner)

    def clear_all(self) -> None:
        self._winners.clear()

    def recent(self, limit: int) -> Tuple[Winner, ...]:
        return tuple(self._winners[: max(limit, 0)])
