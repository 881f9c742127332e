# repositories/dictionary_repository.py
"""
Pure data access: dictionary files on disk -> immutable stores.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dicterm import db
from dicterm.config import DictermConfig
from dicterm.errors import LoadError
from dicterm.services import dictionary_store
from dicterm.services.dictionary_store import DictionaryStore

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    stores: List[DictionaryStore] = field(default_factory=list)
    errors: List[LoadError] = field(default_factory=list)


class DictionaryRepository:
    """Discovers and loads every dictionary file in one folder."""

    def __init__(self, directory: Optional[Path] = None, extension: Optional[str] = None) -> None:
        self.directory = Path(directory or DictermConfig.DICPATH)
        self.extension = extension or DictermConfig.DICEXTENSION

    def list_names(self) -> List[str]:
        return [name for name, _ in db.list_databases(self.directory, self.extension)]

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}{self.extension}"

    def load_stores(self) -> LoadResult:
        """Load all stores; a malformed one is skipped and reported."""
        result = LoadResult()
        for name, path in db.list_databases(self.directory, self.extension):
            try:
                frame = db.read_dictionary(path)
                store = dictionary_store.load(name, frame.to_dict("records"))
            except LoadError as e:
                logger.warning("Skipping dictionary %s: %s", name, e.reason)
                result.errors.append(e)
                continue
            logger.info("Loaded dictionary %s (%d entries)", name, len(store))
            result.stores.append(store)
        return result
