# models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


# ---------- Pure data: one dictionary row ----------
@dataclass(frozen=True)
class WordEntry:
    word: str
    definition: str


# ---------- Pure data: one bookmarked word ----------
@dataclass
class LeitnerCard:
    word: str
    definition: str
    box: int
    last_reviewed: datetime
    due: datetime
    review_count: int = 0
    correct_count: int = 0
    error_count: int = 0

    def is_due(self, now: datetime) -> bool:
        return self.due <= now


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["WordEntry", "LeitnerCard", "utc_now"]
