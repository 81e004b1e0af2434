"""The raffle state container driven by the presentation layer."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from .config import Settings
from .dedupe import filter_new_candidates
from .engine import DrawEngine, DrawState, RandomIndex, default_random_index, win_chance_percent
from .history import History, Winner
from .ids import IdFactory
from .import_parser import ImportFormat, parse_import_text
from .registry import Participant, Registry
from .scheduler import Scheduler

log = logging.getLogger(__name__)

SessionListener = Callable[[str, "RaffleSession"], None]


class RaffleSession:
    """
    Owns the registry, draw engine, history and pending import.

    Every user intent goes through a method here; listeners are told the name
    of the change after it has been applied.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        settings: Optional[Settings] = None,
        random_index: Optional[RandomIndex] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.ids = IdFactory()
        self.registry = Registry(self.ids)
        self.history = History()
        self.engine = DrawEngine(
            self.history,
            scheduler,
            tick_count=self.settings.tick_count,
            tick_interval_s=self.settings.tick_interval_s,
            reveal_delay_s=self.settings.reveal_delay_s,
            celebration_s=self.settings.celebration_s,
            random_index=random_index or default_random_index(self.settings.seed),
            listener=self._notify,
        )

        self.import_format = ImportFormat.NAMES_ONLY
        self.import_text = ""
        self.import_preview: List[Participant] = []
        self.last_import_excluded = 0

        self._listeners: List[SessionListener] = []

    # ---- observation ----

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    @property
    def participants(self) -> Tuple[Participant, ...]:
        return self.registry.participants

    @property
    def draw_state(self) -> DrawState:
        return self.engine.state

    @property
    def highlighted(self) -> Optional[Participant]:
        return self.engine.highlighted

    @property
    def current_winner(self) -> Optional[Winner]:
        return self.engine.current_winner

    @property
    def current(self) -> Optional[Participant]:
        return self.engine.current

    @property
    def celebrating(self) -> bool:
        return self.engine.celebrating

    @property
    def is_drawing(self) -> bool:
        return self.engine.state is DrawState.ANIMATING

    @property
    def history_entries(self) -> Tuple[Winner, ...]:
        return self.history.winners

    def recent_history(self) -> Tuple[Winner, ...]:
        return self.history.recent(self.settings.history_limit)

    @property
    def import_preview_size(self) -> int:
        return len(self.import_preview)

    @property
    def win_chance_percent(self) -> int:
        return win_chance_percent(len(self.registry))

    # ---- participants ----

    def add_participant(self, name: str, email: Optional[str] = None) -> Optional[Participant]:
        participant = self.registry.add(name, email)
        if participant is None:
            log.debug("Ignoring participant with blank name")
            return None
        self._notify("registry")
        return participant

    def remove_participant(self, participant_id: str) -> bool:
        removed = self.registry.remove(participant_id)
        if removed:
            self._notify("registry")
        return removed

    # ---- draw ----

    def start_draw(self) -> bool:
        return self.engine.start(self.registry.snapshot())

    def clear_winner(self) -> None:
        self.engine.clear_winner()

    def reset_all(self) -> None:
        self.registry.reset()
        self._clear_import()
        self.engine.reset()
        log.info("Session reset")

    # ---- batch import ----

    def set_import_format(self, fmt: ImportFormat | str) -> None:
        self.import_format = ImportFormat(fmt)
        self._refresh_preview()

    def submit_import_text(self, text: str) -> List[Participant]:
        self.import_text = text or ""
        self._refresh_preview()
        return self.import_preview

    def accept_import(self) -> List[Participant]:
        if not self.import_preview:
            self._clear_import()
            return []
        result = filter_new_candidates(self.import_preview, self.registry)
        accepted = self.registry.extend(result.accepted)
        self.last_import_excluded = len(result.excluded)
        log.info(
            "Imported %d participants (%d already registered)",
            len(accepted),
            len(result.excluded),
        )
        self._clear_import()
        self._notify("registry")
        return accepted

    def cancel_import(self) -> None:
        self._clear_import()
        self._notify("import")

    def _refresh_preview(self) -> None:
        if self.import_text:
            self.import_preview = parse_import_text(self.import_text, self.import_format, self.ids)
        else:
            self.import_preview = []
        self._notify("import")

    def _clear_import(self) -> None:
        self.import_text = ""
        self.import_preview = []
