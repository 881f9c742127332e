"""
Tests for the sqlite storage adapters and the repositories around them.
"""

import sqlite3
from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from dicterm import db, db_leitner
from dicterm.errors import LoadError
from dicterm.repositories import DictionaryRepository, LeitnerRepository
from dicterm.services.leitner_deck import LeitnerDeck


def write_dictionary(path, rows):
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE dictionary (word TEXT, definition TEXT)")
    conn.executemany("INSERT INTO dictionary VALUES (?, ?)", rows)
    conn.commit()
    conn.close()


@pytest.fixture
def dict_dir(tmp_path):
    folder = tmp_path / "dicts"
    folder.mkdir()
    write_dictionary(folder / "english.db", [("zebra", "striped"), ("apple", "fruit\rred")])
    write_dictionary(folder / "french.db", [("pomme", "apple")])
    (folder / "notes.txt").write_text("not a dictionary")
    return folder


class TestDictionaryFiles:

    def test_list_databases_sorted_and_filtered(self, dict_dir):
        names = [name for name, _ in db.list_databases(dict_dir, ".db")]
        assert names == ["english", "french"]

    def test_missing_directory(self, tmp_path):
        assert db.list_databases(tmp_path / "nope") == []

    def test_read_dictionary(self, dict_dir):
        frame = db.read_dictionary(dict_dir / "english.db")
        assert list(frame.columns) == ["word", "definition"]
        assert list(frame["word"]) == ["zebra", "apple"]

    def test_missing_table(self, tmp_path):
        path = tmp_path / "empty.db"
        sqlite3.connect(str(path)).close()
        with pytest.raises(LoadError):
            db.read_dictionary(path)

    def test_missing_column(self, tmp_path):
        path = tmp_path / "half.db"
        conn = sqlite3.connect(str(path))
        conn.execute("CREATE TABLE dictionary (word TEXT)")
        conn.commit()
        conn.close()
        with pytest.raises(LoadError) as exc:
            db.read_dictionary(path)
        assert "definition" in exc.value.reason

    def test_not_a_database(self, tmp_path):
        path = tmp_path / "junk.db"
        path.write_bytes(b"this is not sqlite" * 100)
        with pytest.raises(LoadError):
            db.read_dictionary(path)

    def test_create_dictionary_round_trip(self, tmp_path):
        frame = pd.DataFrame({
            "word": ["cat", "", "dog"],
            "definition": ["meows", "orphan", "barks"],
            "extra": ["x", "y", "z"],
        })
        path = tmp_path / "pets.db"
        assert db.create_dictionary(path, frame) == 2
        assert db.count_entries(path) == 2
        with pytest.raises(ValueError):
            db.create_dictionary(path, frame)
        assert db.create_dictionary(path, frame.iloc[:1], replace=True) == 1

    def test_create_dictionary_requires_columns(self, tmp_path):
        with pytest.raises(ValueError):
            db.create_dictionary(tmp_path / "x.db", pd.DataFrame({"word": ["a"]}))


class TestDictionaryRepository:

    def test_load_stores(self, dict_dir):
        result = DictionaryRepository(dict_dir, ".db").load_stores()
        assert [s.name for s in result.stores] == ["english", "french"]
        english = result.stores[0]
        assert [e.word for e in english.entries] == ["apple", "zebra"]
        assert english.entries[0].definition == "fruit\nred"
        assert result.errors == []

    def test_malformed_store_is_skipped(self, dict_dir):
        write_dictionary(dict_dir / "broken.db", [("word", None)])
        result = DictionaryRepository(dict_dir, ".db").load_stores()
        assert [s.name for s in result.stores] == ["english", "french"]
        assert [e.source for e in result.errors] == ["broken"]

    def test_list_names(self, dict_dir):
        assert DictionaryRepository(dict_dir, ".db").list_names() == ["english", "french"]

    def test_path_for(self, dict_dir):
        assert DictionaryRepository(dict_dir, ".db").path_for("french") == dict_dir / "french.db"


class TestLeitnerRepository:

    def test_empty_deck_on_first_use(self, tmp_path):
        repo = LeitnerRepository(tmp_path / "data" / "leitner.db")
        deck = repo.load_deck()
        assert len(deck) == 0
        assert (tmp_path / "data" / "leitner.db").exists()

    def test_save_and_load(self, tmp_path):
        now = datetime(2024, 3, 4, 9, 30, tzinfo=timezone.utc)
        path = tmp_path / "leitner.db"
        deck = LeitnerDeck()
        deck.add("apple", "A round fruit.", now)
        deck.add("pear", "Another fruit.", now)
        deck.grade(deck.get("apple"), True, now)

        repo = LeitnerRepository(path)
        repo.save_deck(deck)
        loaded = repo.load_deck()

        apple = loaded.get("apple")
        assert [c.word for c in loaded.cards()] == ["apple", "pear"]
        assert apple.box == 2
        assert apple.due == now + timedelta(days=2)
        assert apple.last_reviewed == now
        assert (apple.review_count, apple.correct_count, apple.error_count) == (1, 1, 0)

    def test_timestamps_without_offset_load_as_utc(self, tmp_path):
        naive = datetime(2024, 3, 4, 9, 30)
        deck = LeitnerDeck()
        deck.add("apple", "fruit", naive)
        repo = LeitnerRepository(tmp_path / "leitner.db")
        repo.save_deck(deck)

        apple = repo.load_deck().get("apple")
        assert apple.due == naive.replace(tzinfo=timezone.utc)
        assert apple.last_reviewed.tzinfo is not None

    def test_offset_is_stored(self, tmp_path):
        deck = LeitnerDeck()
        deck.add("apple", "fruit", datetime(2024, 3, 4, 9, 30, tzinfo=timezone.utc))
        frame = LeitnerRepository.deck_to_df(deck)
        assert frame.loc[0, "next_review"] == "2024-03-04T09:30:00+00:00"

    def test_removed_cards_are_deleted(self, tmp_path):
        now = datetime(2024, 3, 4)
        path = tmp_path / "leitner.db"
        deck = LeitnerDeck()
        deck.add("apple", "fruit", now)
        deck.add("pear", "fruit", now)
        repo = LeitnerRepository(path)
        repo.save_deck(deck)

        deck.remove("apple")
        repo.save_deck(deck)
        assert list(db_leitner.load_cards(path)["word"]) == ["pear"]

    def test_intervals_passed_through(self, tmp_path):
        deck = LeitnerRepository(tmp_path / "l.db").load_deck([1, 5, 30])
        assert deck.max_box == 3

    def test_dataframe_columns(self):
        frame = LeitnerRepository.deck_to_df(LeitnerDeck())
        assert list(frame.columns) == db_leitner.CARD_COLUMNS
