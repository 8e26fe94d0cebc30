"""Stable UI API surface."""

from __future__ import annotations

from sc_ui.cli import app, ctx_store, main
from sc_ui.tui.system.components.box_table import Table, TableRow, build_table
from sc_ui.tui.system.components.search import (
    CancellationToken,
    Choice,
    SearchConfig,
    SearchSession,
    Separator,
)
from sc_ui.tui.system.components.search_prompt import SearchPrompt
from sc_ui.tui.system.headless import HeadlessUI

__all__ = [
    "app",
    "main",
    "ctx_store",
    "build_table",
    "Table",
    "TableRow",
    "CancellationToken",
    "Choice",
    "Separator",
    "SearchConfig",
    "SearchSession",
    "SearchPrompt",
    "HeadlessUI",
]
