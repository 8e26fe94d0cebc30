from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from sc_ui.tui.core import theme
from sc_ui.tui.system.models import TableModel


def build_rich_table(
    model: TableModel,
    *,
    border_style: str = theme.RICH_BORDER_STYLE,
    header_style: str = theme.RICH_ACCENT_BOLD,
    box_style: box.Box = box.ROUNDED,
) -> Table:
    """Build a Rich Table from a TableModel; cells stay on one line."""
    title_text = Text.from_markup(model.title)
    title_text.no_wrap = True
    title_text.overflow = "ellipsis"

    rich_table = Table(
        title=title_text,
        box=box_style,
        border_style=border_style,
        header_style=header_style,
        title_style=header_style,
    )
    for col in model.columns:
        rich_table.add_column(col, overflow="ellipsis", no_wrap=True)
    for row in model.rows:
        rich_table.add_row(*row)
    return rich_table


class RichTablePresenter:
    def __init__(self, console: Console):
        self._console = console

    def show(self, table: TableModel) -> None:
        self._console.print(build_rich_table(table))
