# services/search_index.py
"""
Incremental lookup over the active dictionary.

``matches`` is recomputed from scratch after every edit or store switch;
dictionaries are small enough that a full rescan per keystroke is fine.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from dicterm.models import WordEntry
from dicterm.services.dictionary_store import DictionaryStore
from dicterm.services.store_selector import StoreSelector

logger = logging.getLogger(__name__)


class SearchIndex:
    def __init__(self, selector: StoreSelector, *, substring_fallback: bool = True) -> None:
        self._selector = selector
        self._substring_fallback = substring_fallback
        self.query: str = ""
        self.matches: List[WordEntry] = []
        self.cursor: Optional[int] = None
        self._refresh()

    @property
    def active_store(self) -> Optional[DictionaryStore]:
        return self._selector.active

    # ------------------------------------------------------------------
    # Query editing
    # ------------------------------------------------------------------
    def type_char(self, c: str) -> None:
        self.query += c
        self._refresh()

    def backspace(self) -> None:
        if not self.query:
            return
        self.query = self.query[:-1]
        self._refresh()

    def clear(self) -> None:
        if not self.query:
            return
        self.query = ""
        self._refresh()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def move(self, delta: int) -> None:
        if self.cursor is None:
            return
        self.cursor = min(max(self.cursor + delta, 0), len(self.matches) - 1)

    def switch_store(self, direction: int) -> None:
        store = self._selector.cycle(direction)
        logger.debug("Switched to store %s", store.name if store else None)
        self._refresh()

    def selected(self) -> Optional[WordEntry]:
        if self.cursor is None:
            return None
        return self.matches[self.cursor]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        store = self._selector.active
        if store is None:
            self.matches = []
        else:
            self.matches = store.prefix_search(self.query)
            if not self.matches and self.query and self._substring_fallback:
                self.matches = store.substring_search(self.query)
        self.cursor = 0 if self.matches else None


__all__ = ["SearchIndex"]
