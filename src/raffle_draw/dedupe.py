from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Set

from .registry import Participant


def normalize_name(name: str) -> str:
    return name.strip().casefold()


@dataclass(frozen=True)
class DedupResult:
    accepted: List[Participant]
    excluded: List[Participant]


def filter_new_candidates(
    candidates: Iterable[Participant],
    existing: Iterable[Participant],
) -> DedupResult:
    """
    Drop candidates whose name already exists in the pool.

    Only the existing pool is checked; two equal names inside one batch both
    pass when neither is already registered.
    """
    known: Set[str] = {normalize_name(p.name) for p in existing}
    accepted: List[Participant] = []
    excluded: List[Participant] = []
    for candidate in candidates:
        if normalize_name(candidate.name) in known:
            excluded.append(candidate)
        else:
            accepted.append(candidate)
    return DedupResult(accepted=accepted, excluded=excluded)
