from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .ids import IdFactory


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    email: Optional[str] = None


def _clean_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    email = email.strip()
    return email or None


class Registry:
    def __init__(self, ids: Optional[IdFactory] = None) -> None:
        self.ids = ids or IdFactory()
        self._entries: Tuple[Participant, ...] = ()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, participant_id: object) -> bool:
        return any(p.id == participant_id for p in self._entries)

    @property
    def participants(self) -> Tuple[Participant, ...]:
        return self._entries

    def snapshot(self) -> Tuple[Participant, ...]:
        # The backing tuple is replaced on every mutation, never edited in place.
        return self._entries

    def add(self, name: str, email: Optional[str] = None) -> Optional[Participant]:
        name = (name or "").strip()
        if not name:
            return None
        participant = Participant(self.ids.manual(), name, _clean_email(email))
        self._entries = self._entries + (participant,)
        return participant

    def extend(self, participants: Iterable[Participant]) -> List[Participant]:
        """Append an accepted import batch in a single step."""
        batch = list(participants)
        if batch:
            self._entries = self._entries + tuple(batch)
        return batch

    def remove(self, participant_id: str) -> bool:
        kept = tuple(p for p in self._entries if p.id != participant_id)
        if len(kept) == len(self._entries):
            return False
        self._entries = kept
        return True

    def reset(self) -> None:
        self._entries = ()
