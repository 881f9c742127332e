# db_leitner.py
import logging
import sqlite3
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

CARD_COLUMNS = [
    "word",
    "definition",
    "box",
    "last_reviewed",
    "next_review",
    "review_count",
    "correct_count",
    "error_count",
]


def init_cards_table(conn):
    """
    Create the Leitner card table if it is missing.

    Args:
        conn (sqlite3.Connection): open connection
    """
    conn.execute('''
    CREATE TABLE IF NOT EXISTS cards (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        word TEXT NOT NULL,
        definition TEXT NOT NULL,
        box INTEGER NOT NULL DEFAULT 1,
        last_reviewed TEXT NOT NULL,     -- ISO timestamp
        next_review TEXT NOT NULL,       -- ISO timestamp
        review_count INTEGER DEFAULT 0,
        correct_count INTEGER DEFAULT 0,
        error_count INTEGER DEFAULT 0,
        UNIQUE(word)
    )
    ''')
    conn.commit()


def get_leitner_connection(db_path):
    """
    Open the deck database, creating its folder and table on first use.

    Args:
        db_path (str | Path): deck file

    Returns:
        sqlite3.Connection: connection with the ``cards`` table ready
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    init_cards_table(conn)
    return conn


def load_cards(db_path):
    """
    Load every card.

    Args:
        db_path (str | Path): deck file

    Returns:
        pd.DataFrame: one row per card, in insertion order
    """
    conn = get_leitner_connection(db_path)
    try:
        return pd.read_sql_query(
            f"SELECT {', '.join(CARD_COLUMNS)} FROM cards ORDER BY id", conn
        )
    finally:
        conn.close()


def save_cards(db_path, cards):
    """
    Write the whole deck: upsert every row and delete cards that are gone.

    Args:
        db_path (str | Path): deck file
        cards (pd.DataFrame): columns as in :data:`CARD_COLUMNS`
    """
    conn = get_leitner_connection(db_path)
    try:
        cursor = conn.cursor()
        words = []
        for _, row in cards.iterrows():
            words.append(row["word"])
            cursor.execute("""
            INSERT INTO cards (word, definition, box, last_reviewed, next_review,
                               review_count, correct_count, error_count)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(word) DO UPDATE SET
                definition = excluded.definition,
                box = excluded.box,
                last_reviewed = excluded.last_reviewed,
                next_review = excluded.next_review,
                review_count = excluded.review_count,
                correct_count = excluded.correct_count,
                error_count = excluded.error_count
            """, (
                row["word"],
                row["definition"],
                int(row["box"]),
                row["last_reviewed"],
                row["next_review"],
                int(row["review_count"]),
                int(row["correct_count"]),
                int(row["error_count"]),
            ))

        # cards removed from the deck since the last save
        cursor.execute("SELECT word FROM cards")
        stale = {r[0] for r in cursor.fetchall()} - set(words)
        for word in stale:
            cursor.execute("DELETE FROM cards WHERE word = ?", (word,))

        conn.commit()
        logger.debug("Saved %d cards (%d removed) to %s", len(words), len(stale), db_path)
    finally:
        conn.close()
