# controllers/session_controller.py
"""
Root of the engine.

Owns the store selector, search index, Leitner deck and current mode.
The host feeds it abstract events and draws the returned ViewModel;
nothing else in the package is touched by the outside world.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from dicterm.controllers.events import (
    Backspace,
    Bookmark,
    CharTyped,
    ClearQuery,
    Grade,
    Mode,
    MoveCursor,
    RemoveCard,
    ShowDefinition,
    SwitchStore,
    ToggleMode,
)
from dicterm.models import LeitnerCard, utc_now
from dicterm.services.dictionary_store import DictionaryStore
from dicterm.services.leitner_deck import LeitnerDeck
from dicterm.services.search_index import SearchIndex
from dicterm.services.store_selector import StoreSelector

logger = logging.getLogger(__name__)


# ---------- Read-only snapshot handed to the renderer ----------
@dataclass(frozen=True)
class MatchRow:
    word: str
    definition: str
    selected: bool


@dataclass(frozen=True)
class DueCard:
    word: str
    definition: str
    box: int
    due: datetime
    position: int

    @classmethod
    def of(cls, card: LeitnerCard, position: int) -> "DueCard":
        return cls(card.word, card.definition, card.box, card.due, position)


@dataclass(frozen=True)
class ViewModel:
    mode: Mode
    active_store_name: Optional[str]
    store_names: Tuple[str, ...]
    active_store_index: int
    query: str
    visible_matches: Tuple[MatchRow, ...]
    selected_definition: Optional[str]
    match_count: int
    leitner_due_count: int
    deck_size: int
    current_due_card: Optional[DueCard]
    show_definition: bool
    notices: Tuple[str, ...] = ()


_SEARCH_ROUTES: Dict[type, str] = {
    CharTyped: "_on_search_char",
    Backspace: "_on_backspace",
    ClearQuery: "_on_clear",
    MoveCursor: "_on_search_move",
    SwitchStore: "_on_switch_store",
    Bookmark: "_on_bookmark",
    ToggleMode: "_on_toggle_mode",
}

_LEITNER_ROUTES: Dict[type, str] = {
    CharTyped: "_on_review_char",
    Grade: "_on_grade",
    ShowDefinition: "_on_show_definition",
    MoveCursor: "_on_review_move",
    RemoveCard: "_on_remove_card",
    ToggleMode: "_on_toggle_mode",
}

ROUTES: Dict[Mode, Dict[type, str]] = {
    Mode.DEFAULT: _SEARCH_ROUTES,
    Mode.COMPACT: _SEARCH_ROUTES,
    Mode.LEITNER: _LEITNER_ROUTES,
}


# payload checks applied before routing; a failing event is ignored
def _is_step(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_PAYLOAD_CHECKS: Dict[type, Callable[[object], bool]] = {
    CharTyped: lambda e: isinstance(e.char, str) and e.char != "",
    MoveCursor: lambda e: _is_step(e.delta),
    SwitchStore: lambda e: _is_step(e.direction),
    Grade: lambda e: isinstance(e.correct, bool),
    ToggleMode: lambda e: isinstance(e.kind, Mode),
}

# keys typed while reviewing
_REVIEW_KEYS = {
    "y": Grade(True),
    "n": Grade(False),
    " ": ShowDefinition(),
}


class SessionController:
    def __init__(
        self,
        stores: Sequence[DictionaryStore],
        deck: Optional[LeitnerDeck] = None,
        *,
        save_deck: Optional[Callable[[LeitnerDeck], None]] = None,
        autosave: bool = True,
        clock: Callable[[], datetime] = utc_now,
        substring_fallback: bool = True,
        visible_rows: int = 20,
        notices: Iterable[str] = (),
    ) -> None:
        self._selector = StoreSelector(stores)
        self._index = SearchIndex(self._selector, substring_fallback=substring_fallback)
        self._deck = deck if deck is not None else LeitnerDeck()
        self._save_deck = save_deck
        self._autosave = autosave
        self._clock = clock
        self._visible_rows = max(visible_rows, 1)
        self._notices = tuple(notices)

        self.mode = Mode.DEFAULT
        self._last_search_mode = Mode.DEFAULT
        self.show_definition = False

    @property
    def deck(self) -> LeitnerDeck:
        return self._deck

    @property
    def search(self) -> SearchIndex:
        return self._index

    @property
    def selector(self) -> StoreSelector:
        return self._selector

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def handle_event(self, event: object) -> ViewModel:
        handler_name = ROUTES[self.mode].get(type(event))
        check = _PAYLOAD_CHECKS.get(type(event))
        if handler_name is None:
            logger.debug("Ignoring %r in %s mode", event, self.mode.value)
        elif check is not None and not check(event):
            logger.warning("Ignoring malformed event %r", event)
        else:
            getattr(self, handler_name)(event)
        return self.view()

    def close(self) -> None:
        """Graceful shutdown: persist the deck once more."""
        if self._save_deck is not None:
            self._save_deck(self._deck)

    # ------------------------------------------------------------------
    # Mode switching
    # ------------------------------------------------------------------
    def _on_toggle_mode(self, event: ToggleMode) -> None:
        if event.kind is Mode.LEITNER:
            if self.mode is Mode.LEITNER:
                self.mode = self._last_search_mode
            else:
                self._last_search_mode = self.mode
                self.mode = Mode.LEITNER
                self.show_definition = False
                self._deck.rebuild_queue(self._clock())
        elif event.kind is Mode.COMPACT and self.mode is not Mode.LEITNER:
            self.mode = Mode.DEFAULT if self.mode is Mode.COMPACT else Mode.COMPACT
        logger.debug("Mode is now %s", self.mode.value)

    # ------------------------------------------------------------------
    # Search modes
    # ------------------------------------------------------------------
    def _on_search_char(self, event: CharTyped) -> None:
        self._index.type_char(event.char)

    def _on_backspace(self, event: Backspace) -> None:
        self._index.backspace()

    def _on_clear(self, event: ClearQuery) -> None:
        self._index.clear()

    def _on_search_move(self, event: MoveCursor) -> None:
        self._index.move(event.delta)

    def _on_switch_store(self, event: SwitchStore) -> None:
        self._index.switch_store(event.direction)

    def _on_bookmark(self, event: Bookmark) -> None:
        entry = self._index.selected()
        if entry is None:
            return
        if self._deck.add(entry.word, entry.definition, self._clock()):
            self._deck_changed()

    # ------------------------------------------------------------------
    # Leitner mode
    # ------------------------------------------------------------------
    def _on_review_char(self, event: CharTyped) -> None:
        mapped = _REVIEW_KEYS.get(event.char.lower())
        if mapped is not None:
            self.handle_event(mapped)

    def _on_grade(self, event: Grade) -> None:
        card = self._deck.current()
        if card is None:
            return
        now = self._clock()
        if self._deck.grade(card, event.correct, now):
            self._deck.rebuild_queue(now)
            self.show_definition = False
            self._deck_changed()

    def _on_show_definition(self, event: ShowDefinition) -> None:
        if self._deck.current() is not None:
            self.show_definition = not self.show_definition

    def _on_review_move(self, event: MoveCursor) -> None:
        before = self._deck.cursor
        self._deck.move(event.delta)
        if self._deck.cursor != before:
            self.show_definition = False

    def _on_remove_card(self, event: RemoveCard) -> None:
        card = self._deck.current()
        if card is not None and self._deck.remove(card.word):
            self.show_definition = False
            self._deck_changed()

    def _deck_changed(self) -> None:
        if self._autosave and self._save_deck is not None:
            self._save_deck(self._deck)

    # ------------------------------------------------------------------
    # View model
    # ------------------------------------------------------------------
    def _visible_window(self) -> Tuple[MatchRow, ...]:
        matches = self._index.matches
        cursor = self._index.cursor
        if cursor is None:
            return ()
        rows = self._visible_rows
        start = max(0, min(cursor - rows // 2, len(matches) - rows))
        return tuple(
            MatchRow(e.word, e.definition, start + i == cursor)
            for i, e in enumerate(matches[start:start + rows])
        )

    def view(self) -> ViewModel:
        store = self._selector.active
        selected = self._index.selected()
        card = None
        if self.mode is Mode.LEITNER:
            card = self._deck.current()
            due_count = self._deck.due_count
        else:
            due_count = self._deck.count_due(self._clock())
        return ViewModel(
            mode=self.mode,
            active_store_name=store.name if store else None,
            store_names=self._selector.names,
            active_store_index=self._selector.index,
            query=self._index.query,
            visible_matches=self._visible_window(),
            selected_definition=selected.definition if selected else None,
            match_count=len(self._index.matches),
            leitner_due_count=due_count,
            deck_size=len(self._deck),
            current_due_card=DueCard.of(card, self._deck.cursor) if card else None,
            show_definition=self.show_definition,
            notices=self._notices,
        )


__all__ = ["SessionController", "ViewModel", "MatchRow", "DueCard", "ROUTES"]
