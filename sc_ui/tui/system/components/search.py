"""Search prompt state machine.

``SearchSession`` owns everything the interactive prompt shows: the search
term, the candidate list returned by the source, the active row and the last
fetch error. It has no terminal dependency; ``search_prompt.SearchPrompt``
wires it to prompt_toolkit and ``HeadlessUI`` drives it directly.

Fetches are last-write-wins. Every fetch gets a fresh ``CancellationToken``
and issuing a new one cancels the previous token, so a slow result for a stale
term is dropped when it finally arrives.
"""

from __future__ import annotations

import inspect
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from prompt_toolkit.formatted_text import StyleAndTextTuples

from sc_ui.tui.system.components.box_table import DEFAULT_TABLE_STYLE

logger = logging.getLogger(__name__)

V = TypeVar("V")

DEFAULT_PAGE_SIZE = 7
NO_RESULTS_MESSAGE = "No results found"
HELP_MORE = "(Use arrow keys to reveal more choices)"
HELP_SHORT = "(Use arrow keys)"
HELP_SEARCHING = "(Searching, Enter is available once results load)"


class Separator:
    """Non-selectable divider between candidates."""

    def __init__(self, separator: str = "──────────────") -> None:
        self.separator = separator

    def __repr__(self) -> str:
        return f"Separator({self.separator!r})"


@dataclass(frozen=True)
class Choice(Generic[V]):
    value: V
    name: Optional[str] = None
    description: Optional[str] = None
    short: Optional[str] = None
    disabled: Union[bool, str] = False

    @property
    def line(self) -> str:
        return self.name if self.name is not None else str(self.value)


Item = Union[Choice[V], Separator]


def is_selectable(item: Item[Any]) -> bool:
    return isinstance(item, Choice) and not item.disabled


class CancellationToken:
    """Cooperative cancellation flag handed to every source call."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


SourceResult = Union[Iterable[Item[V]], Awaitable[Iterable[Item[V]]]]
Source = Callable[..., SourceResult]
AnswerConverter = Callable[[str], str]


class HelpMode(str, Enum):
    ALWAYS = "always"
    NEVER = "never"
    AUTO = "auto"


class SearchStatus(str, Enum):
    SEARCHING = "searching"
    PENDING = "pending"
    DONE = "done"


class SearchEvent(str, Enum):
    TERM_CHANGED = "term_changed"
    RESULTS_APPLIED = "results_applied"
    FETCH_FAILED = "fetch_failed"
    SUBMITTED = "submitted"


# (state, event) -> next state. Pairs missing here are ignored.
TRANSITIONS: dict[tuple[SearchStatus, SearchEvent], SearchStatus] = {
    (SearchStatus.SEARCHING, SearchEvent.TERM_CHANGED): SearchStatus.SEARCHING,
    (SearchStatus.PENDING, SearchEvent.TERM_CHANGED): SearchStatus.SEARCHING,
    (SearchStatus.SEARCHING, SearchEvent.RESULTS_APPLIED): SearchStatus.PENDING,
    (SearchStatus.SEARCHING, SearchEvent.FETCH_FAILED): SearchStatus.PENDING,
    (SearchStatus.PENDING, SearchEvent.SUBMITTED): SearchStatus.DONE,
}


def default_answer_converter(answer: str) -> str:
    """Turn a table row into ``first (second, third, ...)``.

    Plain (non-table) lines are returned trimmed.
    """
    vertical = DEFAULT_TABLE_STYLE.vertical
    if vertical not in answer:
        return answer.strip()
    cells = [cell.strip() for cell in answer.split(vertical)[1:-1]]
    if not cells:
        return ""
    if len(cells) == 1:
        return cells[0]
    return f"{cells[0]} ({', '.join(cells[1:])})"


@dataclass(frozen=True)
class SearchTheme:
    cursor: str = "❯"
    prefix_idle: str = "?"
    prefix_done: str = "✔"
    spinner: tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
    spinner_interval: float = 0.08
    disabled_label: str = "(disabled)"
    help_mode: HelpMode = HelpMode.AUTO


@dataclass
class SearchConfig(Generic[V]):
    message: str
    source: Source
    header: str = ""
    footer: str = ""
    page_size: int = DEFAULT_PAGE_SIZE
    theme: SearchTheme = field(default_factory=SearchTheme)
    answer_converter: Optional[AnswerConverter] = None


@dataclass(frozen=True)
class RenderedFrame:
    """One redraw: the prompt line and the block under it."""

    status_line: StyleAndTextTuples
    content: StyleAndTextTuples


def highlight_matches(text: str, term: str, style: str, match_style: str) -> StyleAndTextTuples:
    """Style every non-overlapping literal occurrence of ``term`` in ``text``."""
    if not term:
        return [(style, text)]
    fragments: StyleAndTextTuples = []
    parts = text.split(term)
    for idx, part in enumerate(parts):
        if idx:
            fragments.append((match_style, term))
        if part:
            fragments.append((style, part))
    return fragments


def page_window(total: int, active: int, page_size: int) -> range:
    """Indices of the rows visible when ``active`` must be on screen."""
    if total <= page_size:
        return range(total)
    start = max(0, active - page_size // 2)
    start = min(start, total - page_size)
    return range(start, start + page_size)


class SearchSession(Generic[V]):
    """State for a single search prompt invocation."""

    def __init__(self, config: SearchConfig[V]) -> None:
        self.config = config
        self.term = ""
        self.status = SearchStatus.SEARCHING
        self.items: tuple[Item[V], ...] = ()
        self.error: Optional[str] = None
        self.answer: Optional[Choice[V]] = None
        self._active: Optional[int] = None
        self._token: Optional[CancellationToken] = None
        self._navigated = False

    # -- state -------------------------------------------------------------

    def _dispatch(self, event: SearchEvent) -> bool:
        nxt = TRANSITIONS.get((self.status, event))
        if nxt is None:
            logger.debug("Ignoring %s in state %s", event.value, self.status.value)
            return False
        self.status = nxt
        return True

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def bounds(self) -> tuple[int, int]:
        """First and last selectable index, ``(-1, -1)`` when there is none."""
        selectable = [idx for idx, item in enumerate(self.items) if is_selectable(item)]
        if not selectable:
            return -1, -1
        return selectable[0], selectable[-1]

    @property
    def active(self) -> int:
        if self._active is not None:
            return self._active
        return self.bounds[0]

    @property
    def selected(self) -> Optional[Choice[V]]:
        if self.has_error:
            return None
        idx = self.active
        if idx < 0 or idx >= len(self.items):
            return None
        item = self.items[idx]
        return item if isinstance(item, Choice) and is_selectable(item) else None

    # -- fetching ----------------------------------------------------------

    def start(self) -> Optional[Awaitable[None]]:
        """Issue the initial fetch with no term."""
        return self._fetch(self.term)

    def update_term(self, line: str) -> Optional[Awaitable[None]]:
        """Record a new search term and refetch when it changed."""
        if self.status is SearchStatus.DONE or line == self.term:
            return None
        self.term = line
        return self._fetch(line)

    def _fetch(self, term: str) -> Optional[Awaitable[None]]:
        if self._token is not None:
            self._token.cancel()
        token = CancellationToken()
        self._token = token
        self._dispatch(SearchEvent.TERM_CHANGED)

        try:
            result = self.config.source(term or None, token=token)
        except Exception as exc:
            self._fail(token, exc)
            return None
        if inspect.isawaitable(result):
            return self._resolve(token, result)
        self._apply(token, result)
        return None

    async def _resolve(self, token: CancellationToken, pending: Awaitable[Iterable[Item[V]]]) -> None:
        try:
            results = await pending
        except Exception as exc:
            self._fail(token, exc)
            return
        self._apply(token, results)

    def _apply(self, token: CancellationToken, results: Iterable[Item[V]]) -> bool:
        if token.cancelled:
            logger.debug("Dropping stale search results")
            return False
        self.items = tuple(results)
        self._active = None
        self.error = None
        self._dispatch(SearchEvent.RESULTS_APPLIED)
        return True

    def _fail(self, token: CancellationToken, exc: Exception) -> None:
        if token.cancelled:
            return
        logger.debug("Search source failed: %s", exc)
        self.error = str(exc) or exc.__class__.__name__
        self._dispatch(SearchEvent.FETCH_FAILED)

    # -- input -------------------------------------------------------------

    def move(self, offset: int) -> bool:
        """Step to the previous/next selectable row; no-op at either end."""
        if self.status is not SearchStatus.PENDING or self.has_error or offset == 0:
            return False
        first, last = self.bounds
        if first < 0:
            return False
        current = self.active
        if (offset < 0 and current == first) or (offset > 0 and current == last):
            return False
        step = -1 if offset < 0 else 1
        nxt = current + step
        while not is_selectable(self.items[nxt]):
            nxt += step
        self._active = nxt
        if nxt > 0:
            self._navigated = True
        return True

    def submit(self) -> Optional[Choice[V]]:
        if self.status is not SearchStatus.PENDING:
            return None
        choice = self.selected
        if choice is None:
            return None
        self.answer = choice
        self._dispatch(SearchEvent.SUBMITTED)
        return choice

    def handle_key(self, name: str, line: str) -> Optional[Awaitable[None]]:
        """Apply one key event; ``line`` is the current input buffer.

        Returns the pending fetch when the key started an asynchronous one.
        """
        if name == "enter":
            self.submit()
            return None
        if name in ("up", "down") and self.status is not SearchStatus.SEARCHING:
            self.move(-1 if name == "up" else 1)
            return None
        return self.update_term(line)

    # -- rendering ---------------------------------------------------------

    def prefix(self, now: Optional[float] = None) -> str:
        theme = self.config.theme
        if self.status is SearchStatus.DONE:
            return theme.prefix_done
        if self.status is SearchStatus.SEARCHING:
            ticks = int((time.monotonic() if now is None else now) / theme.spinner_interval)
            return theme.spinner[ticks % len(theme.spinner)]
        return theme.prefix_idle

    def answer_text(self) -> str:
        if self.answer is None:
            return ""
        converter = self.config.answer_converter or default_answer_converter
        return converter(self.answer.short or self.answer.name or str(self.answer.value))

    def status_prefix(self, now: Optional[float] = None) -> StyleAndTextTuples:
        return [
            ("class:prefix", self.prefix(now)),
            ("", " "),
            ("class:message", self.config.message),
            ("", " "),
        ]

    def status_line(self, now: Optional[float] = None) -> StyleAndTextTuples:
        line = self.status_prefix(now)
        if self.status is SearchStatus.DONE:
            line.append(("class:answer", self.answer_text()))
        elif self.term:
            line.append(("class:search-term", self.term))
        return line

    def _render_item(self, item: Item[V], is_active: bool) -> StyleAndTextTuples:
        if isinstance(item, Separator):
            return [("class:separator", f" {item.separator}")]
        if item.disabled:
            label = item.disabled if isinstance(item.disabled, str) else self.config.theme.disabled_label
            return [("class:disabled", f"- {item.line} {label}")]
        cursor = self.config.theme.cursor if is_active else " "
        style = "class:highlight" if is_active else ""
        return highlight_matches(f"{cursor} {item.line}", self.term, style, "class:match")

    def render_page(self) -> StyleAndTextTuples:
        fragments: StyleAndTextTuples = []
        active = self.active
        for n, idx in enumerate(page_window(len(self.items), max(active, 0), self.config.page_size)):
            if n:
                fragments.append(("", "\n"))
            fragments.extend(self._render_item(self.items[idx], idx == active))
        return fragments

    def help_tip(self) -> str:
        mode = self.config.theme.help_mode
        if self.status is SearchStatus.SEARCHING and mode is not HelpMode.NEVER:
            return HELP_SEARCHING
        if self.status is not SearchStatus.PENDING or not self.items:
            return ""
        if mode is HelpMode.NEVER or (mode is HelpMode.AUTO and self._navigated):
            return ""
        if len(self.items) > self.config.page_size:
            return f"\n{HELP_MORE}"
        return HELP_SHORT

    def render_body(self) -> StyleAndTextTuples:
        """Exactly one of: error, empty-results notice, candidate page."""
        if self.has_error:
            return [("class:error", f"  {self.error}")]
        if not self.items and self.term and self.status is SearchStatus.PENDING:
            return [("class:error", f"  {NO_RESULTS_MESSAGE}")]
        return self.render_page()

    def render(self, now: Optional[float] = None) -> RenderedFrame:
        if self.status is SearchStatus.DONE:
            return RenderedFrame(status_line=self.status_line(now), content=[])

        content: StyleAndTextTuples = [("class:table", self.config.header)]
        content.extend(self.render_body())
        content.append(("class:table", self.config.footer))
        tip = self.help_tip()
        if tip:
            content.append(("class:help", tip))
        choice = self.selected
        if choice is not None and choice.description:
            content.append(("class:description", f"\n{choice.description}"))
        return RenderedFrame(status_line=self.status_line(now), content=content)


def table_choices(rows: Sequence[Any]) -> list[Choice[Any]]:
    """Wrap pre-rendered table rows (``TableRow``) as choices."""
    return [Choice(value=row.value, name=row.line) for row in rows]
