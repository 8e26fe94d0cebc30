from __future__ import annotations

from typing import Mapping

RICH_ACCENT = "cyan"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[cyan]ℹ[/cyan] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

COMMAND_TYPE_STYLES: dict[str, str] = {
    "connect": "green",
    "port-forward": "magenta",
    "file-transfer": "yellow",
}


def command_type_text(kind: str) -> str:
    color = COMMAND_TYPE_STYLES.get(kind)
    if not color:
        return kind
    return f"[{color}]{kind}[/{color}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)


def search_prompt_style() -> Mapping[str, str]:
    return {
        "prefix": "fg:ansigreen bold",
        "message": "bold",
        "answer": "fg:ansicyan",
        "search-term": "fg:ansicyan",
        "highlight": "fg:ansicyan bold",
        "match": "fg:ansiyellow",
        "disabled": "fg:ansibrightblack",
        "separator": "fg:ansibrightblack",
        "help": "fg:ansibrightblack",
        "error": "fg:ansired",
        "description": "fg:ansicyan",
        "table": "",
    }
