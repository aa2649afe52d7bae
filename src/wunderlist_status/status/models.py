"""Domain models for lists, tasks and cached renders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from wunderlist_status.http.client import UnexpectedPayloadError


@dataclass(frozen=True, slots=True)
class TaskList:
    """Read-only snapshot of one remote list."""

    id: int
    title: str
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: object) -> TaskList:
        data = _require_object(payload, "list")
        return cls(
            id=_require_id(data, "list"),
            title=_require_title(data, "list"),
            created_at=_parse_timestamp(data.get("created_at")),
        )


@dataclass(frozen=True, slots=True)
class Task:
    """Read-only snapshot of one remote task."""

    id: int
    title: str
    starred: bool = False
    due_date: date | None = None
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: object) -> Task:
        data = _require_object(payload, "task")
        return cls(
            id=_require_id(data, "task"),
            title=_require_title(data, "task"),
            starred=bool(data.get("starred", False)),
            due_date=_parse_date(data.get("due_date")),
            created_at=_parse_timestamp(data.get("created_at")),
        )


@dataclass(frozen=True, slots=True)
class ListWithTasks:
    """A list together with its ordered tasks for one render."""

    task_list: TaskList
    tasks: tuple[Task, ...] = ()

    @property
    def id(self) -> int:
        return self.task_list.id

    @property
    def title(self) -> str:
        return self.task_list.title


@dataclass(frozen=True, slots=True)
class CachedRender:
    """Last successful render and the moment it was produced."""

    text: str
    saved_at: datetime


def parse_collection(payload: object, kind: str) -> list[object]:
    if not isinstance(payload, list):
        raise UnexpectedPayloadError(
            f"Expected a JSON array of {kind}s, got {type(payload).__name__}",
        )
    return payload


def _require_object(payload: object, kind: str) -> dict[str, object]:
    if not isinstance(payload, dict):
        raise UnexpectedPayloadError(f"Expected a JSON object for {kind}, got {payload!r}")
    return payload


def _require_id(data: dict[str, object], kind: str) -> int:
    value = data.get("id")
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnexpectedPayloadError(f"Missing or non-integer {kind} id: {value!r}")
    return value


def _require_title(data: dict[str, object], kind: str) -> str:
    value = data.get("title")
    if not isinstance(value, str):
        raise UnexpectedPayloadError(f"Missing {kind} title for id {data.get('id')!r}")
    return value


def _parse_date(value: object) -> date | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise UnexpectedPayloadError(f"Invalid due_date: {value!r}")
    try:
        return date.fromisoformat(value[:10])
    except ValueError as error:
        raise UnexpectedPayloadError(f"Invalid due_date: {value!r}") from error


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
