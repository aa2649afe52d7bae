"""Terminal rendering of lists and the stale-cache fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from enum import Enum

import click

from wunderlist_status.http.client import InvalidRequestError, RemoteError
from wunderlist_status.status.cache import CacheFormatError, RenderCache
from wunderlist_status.status.dates import (
    days_until,
    format_age,
    format_http_date,
    format_short_date,
    is_after_deadline,
)
from wunderlist_status.status.models import CachedRender, ListWithTasks, Task

logger = logging.getLogger(__name__)

STAR_MARKER = "*"
OVERDUE_MARKER = "!"
INVALID_REQUEST_MESSAGE = (
    "Invalid Request. It is possible that lack of data - Access Token or Client Id"
)


class Highlight(str, Enum):
    """Line highlight, valued by its terminal color name."""

    STARRED = "yellow"
    OVERDUE = "red"


def format_list_header(entry: ListWithTasks) -> str:
    return f"{entry.title} ( {len(entry.tasks)} )"


def format_task_line(task: Task, *, today: date) -> str:
    """Plain text line for one task, without any color."""

    overdue = is_after_deadline(task.due_date, today)
    star = STAR_MARKER if task.starred else " "
    urgency = OVERDUE_MARKER if overdue else " "
    line = f"  {star}{urgency} {task.title}"
    due = format_short_date(task.due_date)
    if due:
        line = f"{line}  {due}"
    if overdue:
        days = days_until(task.due_date, today) or 0
        line = f"{line} ({abs(days)} days ago)"
    return line


def task_highlight(task: Task, *, today: date) -> Highlight | None:
    if is_after_deadline(task.due_date, today):
        return Highlight.OVERDUE
    if task.starred:
        return Highlight.STARRED
    return None


class RenderBuilder:
    """Accumulates output lines, styling highlighted ones when color is enabled."""

    def __init__(self, *, color: bool = True) -> None:
        self._lines: list[str] = []
        self._color = color

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def add_line(self, line: str, highlight: Highlight | None = None) -> RenderBuilder:
        if highlight is not None and self._color:
            line = click.style(line, fg=highlight.value)
        self._lines.append(line)
        return self

    def add_separator(self) -> RenderBuilder:
        return self.add_line("")


def render_lists(lists: Iterable[ListWithTasks], *, today: date, color: bool = True) -> str:
    """Render non-empty lists: a header per list, then one line per task."""

    builder = RenderBuilder(color=color)
    for entry in lists:
        if not entry.tasks:
            continue
        builder.add_line(format_list_header(entry))
        for task in entry.tasks:
            builder.add_line(
                format_task_line(task, today=today),
                task_highlight(task, today=today),
            )
    return builder.text


class StatusPresenter:
    """Prints live results or, on failure, the last cached render."""

    def __init__(
        self,
        *,
        cache: RenderCache,
        echo: Callable[[str], None],
        now: Callable[[], datetime],
        color: bool = True,
    ) -> None:
        self.cache = cache
        self.echo = echo
        self.now = now
        self.color = color

    def show_lists(self, lists: list[ListWithTasks]) -> str:
        """Print the render and store it for later fallback."""

        moment = self.now()
        text = render_lists(lists, today=moment.date(), color=self.color)
        self.echo(text)
        try:
            self.cache.save(text, moment)
        except OSError as exc:
            logger.warning("Could not save render cache %s: %s", self.cache.path, exc)
        return text

    def show_failure(self, error: RemoteError) -> str:
        """Print the credential hint and/or cached render after a failed fetch."""

        logger.info("Live fetch failed (%s): %s", error.code, error)
        builder = RenderBuilder(color=self.color)
        if isinstance(error, InvalidRequestError):
            builder.add_line(INVALID_REQUEST_MESSAGE).add_separator()

        cached = self._load_cached()
        if cached is not None:
            builder.add_line(cached.text).add_separator().add_line(
                "Information from cache ( "
                f"{format_http_date(cached.saved_at)}, "
                f"{format_age(cached.saved_at, self.now())} )",
            )

        if builder.is_empty:
            return ""
        self.echo(builder.text)
        return builder.text

    def _load_cached(self) -> CachedRender | None:
        try:
            return self.cache.load()
        except FileNotFoundError:
            logger.info("No render cache at %s", self.cache.path)
        except OSError as exc:
            logger.warning("Could not read render cache %s: %s", self.cache.path, exc)
        except CacheFormatError as exc:
            logger.warning("Ignoring render cache: %s", exc)
        return None
