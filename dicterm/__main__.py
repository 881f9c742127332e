#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dicterm command line.

Usage:
    dicterm [--dicpath DIR] [--data-dir DIR] [--no-autosave]
    dicterm list
    dicterm import NAME FILE [--sep SEP] [--replace]
"""
from __future__ import annotations

import argparse
import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

import pandas as pd

from dicterm import db
from dicterm.config import DictermConfig, parse_intervals, setup_logging
from dicterm.controllers.session_controller import SessionController
from dicterm.errors import DictermError
from dicterm.repositories import DictionaryRepository, LeitnerRepository

logger = logging.getLogger("dicterm")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dicterm",
        description="Incremental dictionary lookup with Leitner review.",
    )
    parser.add_argument("--dicpath", type=Path, help="folder holding *.db dictionaries")
    parser.add_argument("--data-dir", type=Path, help="folder for the Leitner deck and log")
    parser.add_argument("--intervals", help="review days per box, e.g. 1,2,4,6,10")
    parser.add_argument("--no-autosave", action="store_true", help="save the deck only on exit")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING ...")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("list", help="list dictionaries and their sizes")

    imp = sub.add_parser("import", help="build a dictionary from a CSV/TSV file")
    imp.add_argument("name", help="dictionary name (file name without .db)")
    imp.add_argument("file", type=Path, help="CSV/TSV with word and definition columns")
    imp.add_argument("--sep", default=None, help="field separator (default: by extension)")
    imp.add_argument("--replace", action="store_true", help="overwrite an existing dictionary")
    return parser


def apply_args(args: argparse.Namespace) -> None:
    DictermConfig.override(
        dicpath=args.dicpath,
        data_dir=args.data_dir,
        leitner_intervals=parse_intervals(args.intervals) if args.intervals else None,
        autosave=False if args.no_autosave else None,
    )


def cmd_list() -> int:
    repo = DictionaryRepository()
    names = repo.list_names()
    if not names:
        print(f"No dictionaries in {repo.directory}")
        return 1
    for name in names:
        try:
            print(f"{name:<24} {db.count_entries(repo.path_for(name)):>8}")
        except sqlite3.Error as e:
            print(f"{name:<24} {'error':>8}  {e}")
    return 0


def cmd_import(name: str, file: Path, sep: Optional[str], replace: bool) -> int:
    if sep is None:
        sep = "\t" if file.suffix.lower() in (".tsv", ".tab") else ","
    frame = pd.read_csv(file, sep=sep, dtype=str, keep_default_na=False)
    target = Path(DictermConfig.DICPATH) / f"{name}{DictermConfig.DICEXTENSION}"
    count = db.create_dictionary(target, frame, replace=replace)
    print(f"Imported {count} entries into {target}")
    return 0


def cmd_run() -> int:
    # imported here so `list` / `import` work without a terminal
    from dicterm.ui.app import TerminalApp

    intervals = DictermConfig.leitner_intervals()
    loaded = DictionaryRepository().load_stores()
    deck_repo = LeitnerRepository()
    deck = deck_repo.load_deck(intervals)

    controller = SessionController(
        loaded.stores,
        deck,
        save_deck=deck_repo.save_deck,
        autosave=DictermConfig.AUTOSAVE,
        substring_fallback=DictermConfig.SUBSTRING_FALLBACK,
        visible_rows=DictermConfig.VISIBLE_ROWS,
        notices=[f"skipped {e.source}" for e in loaded.errors],
    )
    TerminalApp(controller).run()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    apply_args(args)

    if args.command is None:
        # the full-screen UI owns stdout, so log to a file
        setup_logging(args.log_level, DictermConfig.log_file_path())
    else:
        setup_logging(args.log_level)

    try:
        if args.command == "list":
            return cmd_list()
        if args.command == "import":
            return cmd_import(args.name, args.file, args.sep, args.replace)
        return cmd_run()
    except (DictermError, ValueError, OSError) as e:
        logger.error("%s", e)
        raise SystemExit(f"dicterm: {e}")


if __name__ == "__main__":
    raise SystemExit(main())
