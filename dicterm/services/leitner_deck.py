# services/leitner_deck.py
"""
Leitner spaced-repetition scheduler.

Cards move up one box on a correct answer and fall back to box 1 on a
wrong one. Each box maps to a review interval; the mapping must be
strictly increasing so a promoted card is always seen less often.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from dicterm.models import LeitnerCard

logger = logging.getLogger(__name__)

# review interval (days) for boxes 1..5
DEFAULT_INTERVALS = [1, 2, 4, 6, 10]


class LeitnerDeck:
    """Bookmarked cards keyed by word, plus the queue of cards due now."""

    def __init__(
        self,
        cards: Iterable[LeitnerCard] = (),
        *,
        intervals: Sequence[int] = DEFAULT_INTERVALS,
    ) -> None:
        intervals = list(intervals)
        if not intervals:
            raise ValueError("at least one review interval is required")
        if intervals[0] <= 0 or any(b <= a for a, b in zip(intervals, intervals[1:])):
            raise ValueError(f"intervals must be positive and strictly increasing: {intervals}")
        self._intervals = intervals
        # dict keeps insertion order; used as the last tie-breaker of the queue
        self._cards: Dict[str, LeitnerCard] = {}
        for card in cards:
            card.box = min(max(card.box, 1), self.max_box)
            self._cards.setdefault(card.word, card)
        self.review_queue: List[LeitnerCard] = []
        self.cursor = 0

    # ---------- Basic access ----------
    @property
    def max_box(self) -> int:
        return len(self._intervals)

    def interval(self, box: int) -> timedelta:
        box = min(max(box, 1), self.max_box)
        return timedelta(days=self._intervals[box - 1])

    def cards(self) -> List[LeitnerCard]:
        return list(self._cards.values())

    def get(self, word: str) -> Optional[LeitnerCard]:
        return self._cards.get(word)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, word: object) -> bool:
        return word in self._cards

    @property
    def due_count(self) -> int:
        return len(self.review_queue)

    def count_due(self, now: datetime) -> int:
        return sum(1 for c in self._cards.values() if c.is_due(now))

    # ---------- Bookmarking ----------
    def add(self, word: str, definition: str, now: datetime) -> bool:
        """Bookmark ``word``. Re-adding an existing word changes nothing."""
        if word in self._cards:
            return False
        self._cards[word] = LeitnerCard(
            word=word,
            definition=definition,
            box=1,
            last_reviewed=now,
            due=now,
        )
        logger.info("Bookmarked %r", word)
        return True

    def remove(self, word: str) -> bool:
        card = self._cards.pop(word, None)
        if card is None:
            return False
        self._drop_from_queue(card)
        logger.info("Removed card %r", word)
        return True

    # ---------- Review ----------
    def grade(self, card: LeitnerCard, correct: bool, now: datetime) -> bool:
        """Apply an answer to a due card.

        Cards that are not due yet, or that belong to another deck, are
        left untouched and ``False`` is returned. The promote/reset rules
        therefore only apply to due cards; a card taken from
        :attr:`review_queue` always qualifies.
        """
        if self._cards.get(card.word) is not card or not card.is_due(now):
            return False

        card.box = min(card.box + 1, self.max_box) if correct else 1
        card.review_count += 1
        if correct:
            card.correct_count += 1
        else:
            card.error_count += 1
        card.last_reviewed = now
        card.due = now + self.interval(card.box)
        self._drop_from_queue(card)
        logger.debug("Graded %r correct=%s -> box %d, due %s", card.word, correct, card.box, card.due)
        return True

    def next_due(self) -> Optional[LeitnerCard]:
        return self.review_queue[0] if self.review_queue else None

    def current(self) -> Optional[LeitnerCard]:
        if not self.review_queue:
            return None
        return self.review_queue[self.cursor]

    def move(self, delta: int) -> None:
        if not self.review_queue:
            return
        self.cursor = min(max(self.cursor + delta, 0), len(self.review_queue) - 1)

    def rebuild_queue(self, now: datetime) -> None:
        previous = self.current()
        order = {word: i for i, word in enumerate(self._cards)}
        self.review_queue = sorted(
            (c for c in self._cards.values() if c.is_due(now)),
            key=lambda c: (c.due, c.box, order[c.word]),
        )
        if previous is not None and previous in self.review_queue:
            self.cursor = self.review_queue.index(previous)
        else:
            self.cursor = min(self.cursor, max(len(self.review_queue) - 1, 0))

    def _drop_from_queue(self, card: LeitnerCard) -> None:
        for i, queued in enumerate(self.review_queue):
            if queued is card:
                del self.review_queue[i]
                if i < self.cursor:
                    self.cursor -= 1
                break
        self.cursor = min(self.cursor, max(len(self.review_queue) - 1, 0))


__all__ = ["LeitnerDeck", "DEFAULT_INTERVALS"]
