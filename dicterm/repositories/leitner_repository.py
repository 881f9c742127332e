# repositories/leitner_repository.py
"""
Pure data access: Leitner deck <-> sqlite, via a DataFrame hand-off.
"""
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from dicterm import db_leitner
from dicterm.config import DictermConfig
from dicterm.errors import DictermError
from dicterm.models import LeitnerCard
from dicterm.services.leitner_deck import LeitnerDeck

logger = logging.getLogger(__name__)


def _parse_timestamp(raw: str) -> datetime:
    # rows written without an offset are UTC
    ts = datetime.fromisoformat(raw)
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


class LeitnerRepository:
    """Thin wrapper over db_leitner that speaks LeitnerDeck."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self.db_path = Path(db_path or DictermConfig.leitner_db_path())

    # ---------- DataFrame conversion ----------
    @staticmethod
    def deck_to_df(deck: LeitnerDeck) -> pd.DataFrame:
        rows = [
            {
                "word": c.word,
                "definition": c.definition,
                "box": c.box,
                "last_reviewed": c.last_reviewed.isoformat(),
                "next_review": c.due.isoformat(),
                "review_count": c.review_count,
                "correct_count": c.correct_count,
                "error_count": c.error_count,
            }
            for c in deck.cards()
        ]
        return pd.DataFrame(rows, columns=db_leitner.CARD_COLUMNS)

    @staticmethod
    def df_to_cards(df: pd.DataFrame) -> list[LeitnerCard]:
        return [
            LeitnerCard(
                word=row["word"],
                definition=row["definition"],
                box=int(row["box"]),
                last_reviewed=_parse_timestamp(row["last_reviewed"]),
                due=_parse_timestamp(row["next_review"]),
                review_count=int(row["review_count"]),
                correct_count=int(row["correct_count"]),
                error_count=int(row["error_count"]),
            )
            for _, row in df.iterrows()
        ]

    # ---------- Full load / save ----------
    def load_deck(self, intervals: Optional[Sequence[int]] = None) -> LeitnerDeck:
        try:
            df = db_leitner.load_cards(self.db_path)
        except sqlite3.Error as e:
            raise DictermError(f"cannot load Leitner deck {self.db_path}: {e}") from e
        deck = LeitnerDeck(
            self.df_to_cards(df),
            intervals=intervals or DictermConfig.leitner_intervals(),
        )
        logger.info("Loaded %d Leitner cards from %s", len(deck), self.db_path)
        return deck

    def save_deck(self, deck: LeitnerDeck) -> None:
        try:
            db_leitner.save_cards(self.db_path, self.deck_to_df(deck))
        except sqlite3.Error as e:
            raise DictermError(f"cannot save Leitner deck {self.db_path}: {e}") from e
