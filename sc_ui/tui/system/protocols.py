from typing import Any, ContextManager, Protocol

from sc_ui.tui.system.components.search import SearchConfig
from sc_ui.tui.system.models import TableModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class Searcher(Protocol):
    def search(self, config: SearchConfig[Any]) -> Any | None: ...


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...
    def emit_panel(self, message: str, title: str | None, border_style: str | None) -> None: ...


class Presenter:
    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def info(self, message: str) -> None:
        self._sink.emit("info", message)

    def warning(self, message: str) -> None:
        self._sink.emit("warning", message)

    def error(self, message: str) -> None:
        self._sink.emit("error", message)

    def success(self, message: str) -> None:
        self._sink.emit("success", message)

    def panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:
        self._sink.emit_panel(message, title, border_style)


class Form(Protocol):
    def ask(self, prompt: str, default: str | None = None, description: str | None = None) -> str: ...
    def confirm(self, prompt: str, default: bool = True) -> bool: ...


class Progress(Protocol):
    def status(self, message: str) -> ContextManager[None]: ...


class UI(Protocol):
    search: Searcher
    tables: TablePresenter
    present: Presenter
    form: Form
    progress: Progress
