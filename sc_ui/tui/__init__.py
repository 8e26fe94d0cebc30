"""
UI package providing prompt_toolkit/Rich renderers and a headless stand-in.
"""

from sc_ui.tui.system.protocols import UI, Searcher, TablePresenter, Presenter, Form, Progress
from sc_ui.tui.system.facade import TUI
from sc_ui.tui.system.headless import HeadlessUI

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "Searcher",
    "TablePresenter",
    "Presenter",
    "Form",
    "Progress",
]
