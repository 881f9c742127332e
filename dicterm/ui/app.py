# ui/app.py
"""
Terminal host: turns key presses into engine events and draws the
ViewModel with prompt_toolkit.
"""
from __future__ import annotations

import logging

from prompt_toolkit import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout.containers import DynamicContainer, HSplit, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension as D
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.styles import Style as PtStyle
from prompt_toolkit.widgets import Frame

from dicterm.controllers import events as ev
from dicterm.controllers.events import Mode
from dicterm.controllers.session_controller import SessionController
from dicterm.errors import DictermError
from dicterm.ui import render

logger = logging.getLogger(__name__)

STYLE = PtStyle.from_dict({
    "selected": "bg:#ffffff fg:#000000",
    "selected-store": "fg:ansiyellow bold",
    "query": "fg:ansibrightcyan",
    "hint": "fg:#888888",
    "status": "reverse",
    "warning": "fg:ansired reverse",
    "bold": "bold",
})


class TerminalApp:
    """Owns the prompt_toolkit Application around one SessionController."""

    def __init__(self, controller: SessionController) -> None:
        self.controller = controller
        self.view = controller.view()
        self.app = Application(
            layout=Layout(self._build_root()),
            key_bindings=self._build_key_bindings(),
            style=STYLE,
            full_screen=True,
            mouse_support=False,
        )
        self.app.ttimeoutlen = 0.05

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------
    def send(self, event: object) -> None:
        try:
            self.view = self.controller.handle_event(event)
        except DictermError as e:
            # the deck failed to save; keep the session alive
            logger.error("%s", e)
            self.view = self.controller.view()
        self.app.invalidate()

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        reviewing = Condition(lambda: self.view.mode is Mode.LEITNER)

        @kb.add("c-c")
        def _(event):
            event.app.exit()

        @kb.add("up")
        def _(event):
            self.send(ev.MoveCursor(-1))

        @kb.add("down")
        def _(event):
            self.send(ev.MoveCursor(1))

        @kb.add("s-up")
        @kb.add("pageup")
        def _(event):
            self.send(ev.MoveCursor(-10))

        @kb.add("s-down")
        @kb.add("pagedown")
        def _(event):
            self.send(ev.MoveCursor(10))

        @kb.add("left")
        def _(event):
            self.send(ev.SwitchStore(-1))

        @kb.add("right")
        def _(event):
            self.send(ev.SwitchStore(1))

        @kb.add("backspace")
        def _(event):
            self.send(ev.Backspace())

        @kb.add("c-u")
        def _(event):
            self.send(ev.ClearQuery())

        @kb.add("`")
        def _(event):
            self.send(ev.Bookmark())

        @kb.add("enter")
        def _(event):
            self.send(ev.ShowDefinition())

        @kb.add("delete", filter=reviewing)
        def _(event):
            self.send(ev.RemoveCard())

        @kb.add("escape", "l")
        def _(event):
            self.send(ev.ToggleMode(Mode.LEITNER))

        @kb.add("escape", "m")
        def _(event):
            self.send(ev.ToggleMode(Mode.COMPACT))

        @kb.add("<any>")
        def _(event):
            char = event.data
            if len(char) == 1 and char.isprintable():
                self.send(ev.CharTyped(char))

        return kb

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _text(self, fn, **window_kwargs) -> Window:
        return Window(FormattedTextControl(lambda: fn(self.view)), **window_kwargs)

    def _build_root(self):
        help_window = self._text(render.help_line, height=1)
        query_window = Frame(
            Window(FormattedTextControl(lambda: [("class:query", self.view.query)]), height=1),
            title="Word",
        )
        stores_window = Frame(
            self._text(render.store_list, height=D(max=4)),
            title="Dictionaries",
        )
        status_window = self._text(render.status_line, height=1, style="class:status")

        default_body = VSplit([
            Frame(self._text(render.match_list), title="Index", width=D.exact(24)),
            Frame(
                Window(FormattedTextControl(lambda: render.definition_text(self.view)), wrap_lines=True),
                title="Definition",
            ),
        ])
        compact_body = Frame(
            self._text(lambda vm: render.match_list(vm, with_definitions=True)),
            title="Index",
        )
        review_body = Frame(
            Window(FormattedTextControl(lambda: render.review_panel(self.view)), wrap_lines=True),
            title="Leitner",
        )

        def get_body():
            if self.view.mode is Mode.LEITNER:
                return review_body
            if self.view.mode is Mode.COMPACT:
                return compact_body
            return HSplit([query_window, stores_window, default_body])

        def get_header():
            if self.view.mode is Mode.COMPACT:
                return query_window
            return Window(height=0)

        return HSplit([
            help_window,
            DynamicContainer(get_header),
            DynamicContainer(get_body),
            status_window,
        ])

    def run(self) -> None:
        try:
            self.app.run()
        finally:
            self.controller.close()


__all__ = ["TerminalApp", "STYLE"]
