# services/store_selector.py
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from dicterm.services.dictionary_store import DictionaryStore


class StoreSelector:
    """Fixed, ordered set of loaded stores plus the index of the active one."""

    def __init__(self, stores: Sequence[DictionaryStore], index: int = 0) -> None:
        self._stores: Tuple[DictionaryStore, ...] = tuple(stores)
        self._index = min(max(index, 0), max(len(self._stores) - 1, 0))

    @property
    def stores(self) -> Tuple[DictionaryStore, ...]:
        return self._stores

    @property
    def index(self) -> int:
        return self._index

    @property
    def active(self) -> Optional[DictionaryStore]:
        if not self._stores:
            return None
        return self._stores[self._index]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self._stores)

    def __len__(self) -> int:
        return len(self._stores)

    def cycle(self, direction: int) -> Optional[DictionaryStore]:
        """Step left (<0) or right (>0), wrapping at both ends."""
        if not self._stores or direction == 0:
            return self.active
        step = 1 if direction > 0 else -1
        self._index = (self._index + step) % len(self._stores)
        return self.active


__all__ = ["StoreSelector"]
