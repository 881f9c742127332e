"""Service package public interface.

Re-export the core engine classes so callers can simply do:

    from dicterm.services import SearchIndex, LeitnerDeck
"""

from .dictionary_store import DictionaryStore
from .leitner_deck import LeitnerDeck
from .search_index import SearchIndex
from .store_selector import StoreSelector

__all__: list[str] = [
    "DictionaryStore",
    "LeitnerDeck",
    "SearchIndex",
    "StoreSelector",
]
