from __future__ import annotations

import itertools

import base58

from .project_constants import IMPORT_ID_PREFIX, MANUAL_ID_PREFIX


class IdFactory:
    """
    Hands out participant ids from one monotonic counter.
    Ids are never reused, even after the participant is removed.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def _next(self, prefix: str) -> str:
        token = base58.b58encode_int(next(self._counter)).decode("ascii")
        return f"{prefix}-{token}"

    def manual(self) -> str:
        return self._next(MANUAL_ID_PREFIX)

    def batch(self) -> str:
        return self._next(IMPORT_ID_PREFIX)
