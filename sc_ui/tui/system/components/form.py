from rich.console import Console
from rich.prompt import Confirm, Prompt

from sc_ui.tui.system.protocols import Form


class RichForm(Form):
    def __init__(self, console: Console):
        self._console = console

    def ask(self, prompt: str, default: str | None = None, description: str | None = None) -> str:
        if description:
            self._console.print(f"[dim]{description}[/dim]")
        if default is not None:
            return Prompt.ask(prompt, console=self._console, default=default)
        return Prompt.ask(prompt, console=self._console)

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return Confirm.ask(prompt, console=self._console, default=default)
