# ui/render.py
"""
Pure formatting helpers: ViewModel -> prompt_toolkit formatted text.

Nothing here talks to the terminal, so every function is testable on
its own.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from dicterm.controllers.events import Mode
from dicterm.controllers.session_controller import ViewModel

StyleAndText = Tuple[str, str]

HELP = {
    Mode.DEFAULT: [
        ("", "Press "), ("bold", "Ctrl-C"), ("", " to leave, "),
        ("bold", "Left/Right"), ("", " to change dictionary, "),
        ("bold", "`"), ("", " to bookmark, "),
        ("bold", "Alt-L"), ("", " to review, "),
        ("bold", "Alt-M"), ("", " for compact view."),
    ],
    Mode.LEITNER: [
        ("", "Press "), ("bold", "Y/N"), ("", " to grade, "),
        ("bold", "Space/Enter"), ("", " to show definition, "),
        ("bold", "Up/Down"), ("", " to browse, "),
        ("bold", "Del"), ("", " to remove, "),
        ("bold", "Alt-L"), ("", " to go back."),
    ],
}
HELP[Mode.COMPACT] = HELP[Mode.DEFAULT]


def box_symbol(box: int, max_box: int = 5) -> str:
    if box < 1 or box > max_box:
        return "☆" * max_box
    return "★" * box + "☆" * (max_box - box)


def relative_date(due: date, today: date) -> str:
    """Human label for a due date; past dates get an empty label."""
    if isinstance(due, datetime):
        # aware timestamps are shown in local time
        due = (due.astimezone() if due.tzinfo else due).date()
    if due < today:
        return ""
    if due == today:
        return "Today"
    if due == today + timedelta(days=1):
        return "Tomorrow"
    days = (due - today).days
    if due.isocalendar()[:2] == today.isocalendar()[:2]:
        return due.strftime("%A")
    if days <= 7:
        return "Next week"
    if days <= 10:
        return f"In {days} days"
    return ""


def help_line(vm: ViewModel) -> List[StyleAndText]:
    return list(HELP[vm.mode])


def status_line(vm: ViewModel) -> List[StyleAndText]:
    parts: List[StyleAndText] = [
        ("class:status", f" {vm.active_store_name or 'no dictionary'} "),
        ("class:status", f"| {vm.match_count} matches "),
        ("class:status", f"| {vm.leitner_due_count}/{vm.deck_size} due "),
    ]
    for notice in vm.notices:
        parts.append(("class:warning", f"| {notice} "))
    return parts


def store_list(vm: ViewModel) -> List[StyleAndText]:
    lines: List[StyleAndText] = []
    for i, name in enumerate(vm.store_names):
        style = "class:selected-store" if i == vm.active_store_index else ""
        lines.append((style, f"{name}\n"))
    return lines


def match_list(vm: ViewModel, with_definitions: bool = False) -> List[StyleAndText]:
    if not vm.visible_matches:
        return [("class:hint", "Not found!")]
    lines: List[StyleAndText] = []
    for row in vm.visible_matches:
        style = "class:selected" if row.selected else ""
        text = row.word
        if with_definitions:
            first_line = row.definition.splitlines()[0] if row.definition else ""
            text = f"{row.word:<24} {first_line}"
        lines.append((style, f"{text}\n"))
    return lines


def definition_text(vm: ViewModel) -> str:
    return vm.selected_definition or "Not found!"


def review_panel(vm: ViewModel, today: Optional[date] = None) -> List[StyleAndText]:
    card = vm.current_due_card
    if card is None:
        return [("class:hint", "Nothing to review.")]
    today = today or date.today()
    label = relative_date(card.due, today)
    lines: List[StyleAndText] = [
        ("class:hint", f"Card {card.position + 1} of {vm.leitner_due_count}"),
        ("class:hint", f"   {box_symbol(card.box)}"),
        ("class:hint", f"   {label}\n\n" if label else "\n\n"),
        ("bold", f"{card.word}\n\n"),
    ]
    if vm.show_definition:
        lines.append(("", card.definition))
    else:
        lines.append(("class:hint", "Press Space to show the definition."))
    return lines


__all__ = [
    "box_symbol",
    "relative_date",
    "help_line",
    "status_line",
    "store_list",
    "match_list",
    "definition_text",
    "review_panel",
]
