"""Data-access layer: services and the controller never import db modules directly."""

from .dictionary_repository import DictionaryRepository, LoadResult
from .leitner_repository import LeitnerRepository

__all__: list[str] = [
    "DictionaryRepository",
    "LeitnerRepository",
    "LoadResult",
]
