from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from .project_constants import (
    CELEBRATION_S,
    HISTORY_DISPLAY_LIMIT,
    REVEAL_DELAY_S,
    TICK_COUNT,
    TICK_INTERVAL_S,
)


def _env_number(name: str, default: float, cast=float):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}")
    if not math.isfinite(value) or value < 0:
        raise RuntimeError(f"{name} must be a finite, non-negative number, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    tick_count: int = TICK_COUNT
    tick_interval_s: float = TICK_INTERVAL_S
    reveal_delay_s: float = REVEAL_DELAY_S
    celebration_s: float = CELEBRATION_S
    history_limit: int = HISTORY_DISPLAY_LIMIT
    seed: Optional[int] = None

    @staticmethod
    def from_env(
        seed_override: Optional[int] = None,
        instant: bool = False,
    ) -> "Settings":
        load_dotenv()

        seed_raw = os.getenv("RAFFLE_SEED", "").strip()
        seed: Optional[int] = None
        if seed_raw:
            try:
                seed = int(seed_raw)
            except ValueError:
                raise RuntimeError(f"RAFFLE_SEED must be an integer, got {seed_raw!r}")

        # --seed on the command line wins over the environment.
        if seed_override is not None:
            seed = seed_override

        settings = Settings(
            tick_count=_env_number("RAFFLE_TICK_COUNT", TICK_COUNT, int),
            tick_interval_s=_env_number("RAFFLE_TICK_INTERVAL", TICK_INTERVAL_S),
            reveal_delay_s=_env_number("RAFFLE_REVEAL_DELAY", REVEAL_DELAY_S),
            celebration_s=_env_number("RAFFLE_CELEBRATION_SECONDS", CELEBRATION_S),
            history_limit=_env_number("RAFFLE_HISTORY_LIMIT", HISTORY_DISPLAY_LIMIT, int),
            seed=seed,
        )
        if instant:
            settings = replace(
                settings, tick_interval_s=0.0, reveal_delay_s=0.0, celebration_s=0.0
            )
        return settings
