import asyncio
import inspect
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Any, ContextManager

from sc_ui.tui.system.components.search import SearchConfig, SearchSession
from sc_ui.tui.system.models import TableModel
from sc_ui.tui.system.protocols import (
    Form,
    Presenter,
    PresenterSink,
    Progress,
    Searcher,
    TablePresenter,
    UI,
)


@dataclass
class RecordedTable:
    model: TableModel


@dataclass
class RecordedSearch:
    message: str
    term: str
    answer: str


@dataclass
class HeadlessUI(UI):
    """Scripted UI for tests and non-interactive runs.

    Search prompts run the real ``SearchSession``: each queued term in
    ``next_search_terms`` is typed, then the first selectable candidate is
    submitted. An empty queue searches with no term. Form answers and
    confirmations are popped from their queues; once a queue is empty the
    prompt default (or ``next_form_response`` / ``next_confirm_response``)
    is used.
    """

    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)
    recorded_searches: list[RecordedSearch] = field(default_factory=list)

    next_search_terms: list[str] = field(default_factory=list)
    next_search_moves: list[int] = field(default_factory=list)
    next_form_responses: list[str] = field(default_factory=list)
    next_form_response: str = "default"
    next_confirm_responses: list[bool] = field(default_factory=list)
    next_confirm_response: bool = True

    def __post_init__(self):
        self.search = _HeadlessSearcher(self)
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)
        self.form = _HeadlessForm(self)
        self.progress = _HeadlessProgress(self)


def _settle(pending: Any) -> None:
    if pending is not None and inspect.isawaitable(pending):
        asyncio.run(_await(pending))


async def _await(pending: Any) -> None:
    await pending


class _HeadlessSearcher(Searcher):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def search(self, config: SearchConfig[Any]) -> Any | None:
        session: SearchSession[Any] = SearchSession(config)
        _settle(session.start())
        term = self._ui.next_search_terms.pop(0) if self._ui.next_search_terms else ""
        _settle(session.handle_key("text", term))
        moves = self._ui.next_search_moves.pop(0) if self._ui.next_search_moves else 0
        for _ in range(abs(moves)):
            session.handle_key("down" if moves > 0 else "up", term)
        session.handle_key("enter", term)
        if session.answer is None:
            return None
        self._ui.recorded_searches.append(
            RecordedSearch(config.message, term, session.answer_text())
        )
        return session.answer.value


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(RecordedTable(table))


class _HeadlessPresenterSink(PresenterSink):
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")

    def emit_panel(
        self,
        message: str,
        title: str | None,
        border_style: str | None,
    ) -> None:
        self._ui.recorded_messages.append(f"PANEL: {title} - {message}")


class _HeadlessPresenter(Presenter):
    def __init__(self, ui: HeadlessUI) -> None:
        super().__init__(_HeadlessPresenterSink(ui))


class _HeadlessForm(Form):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def ask(self, prompt: str, default: str | None = None, description: str | None = None) -> str:
        if self._ui.next_form_responses:
            return self._ui.next_form_responses.pop(0)
        if default is not None:
            return default
        return self._ui.next_form_response

    def confirm(self, prompt: str, default: bool = True) -> bool:
        if self._ui.next_confirm_responses:
            return self._ui.next_confirm_responses.pop(0)
        return self._ui.next_confirm_response


class _HeadlessProgress(Progress):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def status(self, message: str) -> ContextManager[None]:
        self._ui.recorded_messages.append(f"STATUS: {message}")
        return nullcontext()
