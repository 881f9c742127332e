# controllers/events.py
"""Abstract input events and the UI mode."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    DEFAULT = "default"
    COMPACT = "compact"
    LEITNER = "leitner"


@dataclass(frozen=True)
class CharTyped:
    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class ClearQuery:
    pass


@dataclass(frozen=True)
class MoveCursor:
    delta: int


@dataclass(frozen=True)
class SwitchStore:
    direction: int


@dataclass(frozen=True)
class ToggleMode:
    # Mode.LEITNER toggles review, Mode.COMPACT toggles the compact layout
    kind: Mode


@dataclass(frozen=True)
class Bookmark:
    pass


@dataclass(frozen=True)
class Grade:
    correct: bool


@dataclass(frozen=True)
class ShowDefinition:
    pass


@dataclass(frozen=True)
class RemoveCard:
    pass


__all__ = [
    "Mode",
    "CharTyped",
    "Backspace",
    "ClearQuery",
    "MoveCursor",
    "SwitchStore",
    "ToggleMode",
    "Bookmark",
    "Grade",
    "ShowDefinition",
    "RemoveCard",
]
