# services/dictionary_store.py
"""
Immutable in-memory dictionary.

Entries are kept sorted by their lower-cased word so a prefix query is a
contiguous range found by bisection.
"""
from __future__ import annotations

from bisect import bisect_left
from collections.abc import Mapping
from typing import Any, Iterable, List, Tuple

from dicterm.errors import LoadError
from dicterm.models import WordEntry


class DictionaryStore:
    """One loaded dictionary file. Never mutated after :func:`load`."""

    __slots__ = ("_name", "_entries", "_keys")

    def __init__(self, name: str, entries: Iterable[WordEntry]) -> None:
        # stable sort: equal keys keep their source order
        ordered = sorted(entries, key=lambda e: e.word.lower())
        self._name = name
        self._entries: Tuple[WordEntry, ...] = tuple(ordered)
        self._keys: Tuple[str, ...] = tuple(e.word.lower() for e in ordered)

    @property
    def name(self) -> str:
        return self._name

    @property
    def entries(self) -> Tuple[WordEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DictionaryStore({self._name!r}, {len(self._entries)} entries)"

    # ---------- Queries ----------
    def prefix_search(self, query: str) -> List[WordEntry]:
        if not query:
            return list(self._entries)
        q = query.lower()
        start = bisect_left(self._keys, q)
        end = start
        while end < len(self._keys) and self._keys[end].startswith(q):
            end += 1
        return list(self._entries[start:end])

    def substring_search(self, query: str) -> List[WordEntry]:
        if not query:
            return list(self._entries)
        q = query.lower()
        return [e for e, k in zip(self._entries, self._keys) if q in k]


# ---------- Construction ----------
def _coerce_entry(source: str, position: int, raw: Any) -> WordEntry:
    if isinstance(raw, WordEntry):
        return raw
    if isinstance(raw, Mapping):
        word, definition = raw.get("word"), raw.get("definition")
    elif isinstance(raw, (tuple, list)) and len(raw) == 2:
        word, definition = raw
    else:
        raise LoadError(source, f"entry {position} is not a (word, definition) record")

    if word is None or (isinstance(word, float) and word != word):
        raise LoadError(source, f"entry {position} has no word")
    if definition is None or (isinstance(definition, float) and definition != definition):
        raise LoadError(source, f"entry {position} ({word!r}) has no definition")
    return WordEntry(str(word), str(definition).replace("\r", "\n"))


def load(name: str, raw_entries: Iterable[Any]) -> DictionaryStore:
    """Build a store from raw records, raising :class:`LoadError` if malformed.

    Each record is a mapping with ``word`` and ``definition`` keys or a
    ``(word, definition)`` pair. Missing values (``None`` or NaN coming out
    of pandas) count as missing.
    """
    entries = [_coerce_entry(name, i, raw) for i, raw in enumerate(raw_entries)]
    return DictionaryStore(name, entries)


def prefix_search(store: DictionaryStore, query: str) -> List[WordEntry]:
    return store.prefix_search(query)


def substring_search(store: DictionaryStore, query: str) -> List[WordEntry]:
    return store.substring_search(query)


__all__ = ["DictionaryStore", "load", "prefix_search", "substring_search"]
