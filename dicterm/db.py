# db.py
"""
sqlite helpers for dictionary files.

A dictionary file is an sqlite database holding one table::

    dictionary(word TEXT, definition TEXT)

Row order in the file does not matter; stores sort on load.
"""
import logging
import os
import sqlite3
from pathlib import Path

import pandas as pd

from dicterm.errors import LoadError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("word", "definition")


def list_databases(directory, extension=".db"):
    """
    List dictionary files in a directory.

    Args:
        directory (str | Path): folder to scan
        extension (str): file suffix of dictionary files

    Returns:
        list[tuple[str, Path]]: (name without extension, full path), sorted by name
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Dictionary directory %s does not exist", directory)
        return []
    found = []
    for entry in os.scandir(directory):
        if entry.is_file() and entry.name.endswith(extension):
            found.append((entry.name[: -len(extension)], Path(entry.path)))
    return sorted(found, key=lambda item: item[0].lower())


def get_connection(db_path):
    return sqlite3.connect(str(db_path))


def table_columns(conn, table):
    """Column names of ``table`` (empty list if the table is missing)."""
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return [row[1] for row in rows]


def read_dictionary(db_path):
    """
    Read every (word, definition) row of a dictionary file.

    Args:
        db_path (str | Path): dictionary file

    Returns:
        pd.DataFrame: columns ``word`` and ``definition`` in file order

    Raises:
        LoadError: the file is not a database or lacks the required columns
    """
    source = Path(db_path).stem
    try:
        conn = get_connection(db_path)
    except sqlite3.Error as e:
        raise LoadError(source, f"cannot open: {e}") from e
    try:
        columns = table_columns(conn, "dictionary")
        if not columns:
            raise LoadError(source, "no 'dictionary' table")
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise LoadError(source, f"missing column(s): {', '.join(missing)}")
        return pd.read_sql_query(
            "SELECT word, definition FROM dictionary ORDER BY ROWID", conn
        )
    except sqlite3.DatabaseError as e:
        raise LoadError(source, str(e)) from e
    finally:
        conn.close()


def count_entries(db_path):
    conn = get_connection(db_path)
    try:
        (count,) = conn.execute("SELECT COUNT(*) FROM dictionary").fetchone()
        return count
    finally:
        conn.close()


def create_dictionary(db_path, frame, replace=False):
    """
    Write a DataFrame as a dictionary file.

    Args:
        db_path (str | Path): target file
        frame (pd.DataFrame): must contain ``word`` and ``definition``
        replace (bool): overwrite an existing ``dictionary`` table

    Returns:
        int: number of rows written
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"missing column(s): {', '.join(missing)}")

    # drop rows without a word or definition, keep source order
    rows = frame.loc[:, list(REQUIRED_COLUMNS)].dropna()
    rows = rows.astype(str)
    rows = rows[rows["word"].str.strip() != ""]

    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    try:
        rows.to_sql(
            "dictionary",
            conn,
            if_exists="replace" if replace else "fail",
            index=False,
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Wrote %d entries to %s", len(rows), db_path)
    return len(rows)
