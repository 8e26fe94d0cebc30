import sys
from typing import Any

from rich.console import Console

from sc_ui.tui.system.components.form import RichForm
from sc_ui.tui.system.components.presenter import RichPresenter
from sc_ui.tui.system.components.progress import RichProgress
from sc_ui.tui.system.components.search import SearchConfig
from sc_ui.tui.system.components.search_prompt import SearchPrompt
from sc_ui.tui.system.components.table import RichTablePresenter
from sc_ui.tui.system.protocols import (
    Form,
    Presenter,
    Progress,
    Searcher,
    TablePresenter,
    UI,
)


class PromptSearcher(Searcher):
    """Run the interactive search prompt; ``None`` without a TTY."""

    def search(self, config: SearchConfig[Any]) -> Any | None:
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            return None
        return SearchPrompt(config).run()


class TUI(UI):
    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self.search: Searcher = PromptSearcher()
        self.tables: TablePresenter = RichTablePresenter(self._console)
        self.present: Presenter = RichPresenter(self._console)
        self.form: Form = RichForm(self._console)
        self.progress: Progress = RichProgress(self._console)
