"""Inline prompt_toolkit application around ``SearchSession``."""

from __future__ import annotations

from typing import Any, Awaitable, Generic, Optional

from prompt_toolkit.application import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import ConditionalContainer
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.lexers import SimpleLexer
from prompt_toolkit.styles import Style

from sc_ui.tui.core import theme
from sc_ui.tui.system.components.search import (
    SearchConfig,
    SearchSession,
    SearchStatus,
    V,
)


class SearchPrompt(Generic[V]):
    """Single-line search input with the candidate block redrawn below it."""

    def __init__(self, config: SearchConfig[V]) -> None:
        self.session: SearchSession[V] = SearchSession(config)
        self.buffer = Buffer(multiline=False, on_text_changed=self._on_text_changed)

        live = Condition(lambda: self.session.status is not SearchStatus.DONE)
        input_row = VSplit(
            [
                Window(
                    FormattedTextControl(self._status_prefix),
                    dont_extend_width=True,
                    height=1,
                ),
                Window(
                    BufferControl(self.buffer, lexer=SimpleLexer("class:search-term")),
                    height=1,
                ),
            ]
        )
        root = HSplit(
            [
                ConditionalContainer(input_row, filter=live),
                ConditionalContainer(
                    Window(FormattedTextControl(self._status_line), height=1),
                    filter=~live,
                ),
                ConditionalContainer(Window(FormattedTextControl(self._content)), filter=live),
            ]
        )

        self.app: Application[Any] = Application(
            layout=Layout(root, focused_element=self.buffer),
            key_bindings=self._bindings(),
            style=Style.from_dict(dict(theme.search_prompt_style())),
            full_screen=False,
            refresh_interval=config.theme.spinner_interval,
        )

    def _status_prefix(self) -> StyleAndTextTuples:
        return self.session.status_prefix()

    def _status_line(self) -> StyleAndTextTuples:
        return self.session.render().status_line

    def _content(self) -> StyleAndTextTuples:
        return self.session.render().content

    def _schedule(self, pending: Optional[Awaitable[None]]) -> None:
        if pending is None:
            return

        async def _wait() -> None:
            await pending
            self.app.invalidate()

        self.app.create_background_task(_wait())

    def _on_text_changed(self, buffer: Buffer) -> None:
        self._schedule(self.session.handle_key("text", buffer.text))

    def _bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up")
        def _(event: Any) -> None:
            self.session.handle_key("up", self.buffer.text)

        @kb.add("down")
        def _(event: Any) -> None:
            self.session.handle_key("down", self.buffer.text)

        @kb.add("enter")
        def _(event: Any) -> None:
            self.session.handle_key("enter", self.buffer.text)
            if self.session.status is SearchStatus.DONE and self.session.answer is not None:
                event.app.exit(result=self.session.answer.value)

        @kb.add("c-c")
        def _(event: Any) -> None:
            event.app.exit(exception=KeyboardInterrupt, style="class:aborting")

        return kb

    def _start(self) -> None:
        self._schedule(self.session.start())

    def run(self) -> V:
        """Block until a candidate is submitted and return its value."""
        return self.app.run(pre_run=self._start)
