from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

TASK_STATUSES: tuple[str, ...] = ("todo", "in-progress", "done", "blocked")

STATUS_COLORS: dict[str, str] = {
    "todo": "#9CA3AF",
    "in-progress": "#FEF3C7",
    "done": "#059669",
    "blocked": "#DC2626",
}


def normalize_date(value: dt.date) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def _normalize_fields(obj: object, *names: str) -> None:
    for name in names:
        value = getattr(obj, name)
        if value is not None:
            object.__setattr__(obj, name, normalize_date(value))


@dataclass(frozen=True)
class TimeRange:
    start: dt.date
    end: dt.date | None = None

    def __post_init__(self) -> None:
        _normalize_fields(self, "start", "end")
        if self.end is not None and self.end < self.start:
            raise ValueError("TimeRange.end must be >= start")

    @property
    def is_ongoing(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class WeekWindow:
    start: dt.date
    end: dt.date

    def __post_init__(self) -> None:
        _normalize_fields(self, "start", "end")
        if self.end < self.start:
            raise ValueError("WeekWindow.end must be >= start")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: dt.date) -> bool:
        return self.start <= normalize_date(day) <= self.end


@dataclass(frozen=True)
class VisualBounds:
    visual_start: dt.date
    visual_end: dt.date


@dataclass(frozen=True)
class RangeExtensions:
    starts_before_week: bool
    ends_after_week: bool


@dataclass(frozen=True)
class Geometry:
    left_percent: float
    width_percent: float

    @property
    def right_percent(self) -> float:
        return self.left_percent + self.width_percent


@dataclass(frozen=True)
class FlowTask:
    task_id: str
    project_id: str
    name: str
    status: str = "todo"
    assignee_id: str | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    deadline: dt.date | None = None
    progress: int = 0
    priority: str | None = None

    def __post_init__(self) -> None:
        _normalize_fields(self, "start_date", "end_date", "deadline")
        if not self.task_id.strip():
            raise ValueError("FlowTask.task_id must be non-empty")
        if not self.project_id.strip():
            raise ValueError("FlowTask.project_id must be non-empty")
        if self.status not in TASK_STATUSES:
            raise ValueError(f"Unsupported task status: {self.status}")
        if not 0 <= self.progress <= 100:
            raise ValueError("FlowTask.progress must be within 0..100")
        if self.start_date is not None and self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(f"Task `{self.task_id}` ends before it starts")

    @property
    def has_no_dates(self) -> bool:
        return self.start_date is None and self.end_date is None


@dataclass(frozen=True)
class FlowProject:
    project_id: str
    name: str
    start_date: dt.date
    end_date: dt.date | None = None
    deadline: dt.date | None = None
    progress: int = 0
    assignee_id: str | None = None
    multi_assignee_ids: tuple[str, ...] = ()
    tasks: tuple[FlowTask, ...] = ()

    def __post_init__(self) -> None:
        _normalize_fields(self, "start_date", "end_date", "deadline")
        if not self.project_id.strip():
            raise ValueError("FlowProject.project_id must be non-empty")
        if not self.name.strip():
            raise ValueError("FlowProject.name must be non-empty")
        if not 0 <= self.progress <= 100:
            raise ValueError("FlowProject.progress must be within 0..100")
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(f"Project `{self.project_id}` ends before it starts")
        for task in self.tasks:
            if task.project_id != self.project_id:
                raise ValueError(
                    f"Task `{task.task_id}` references project `{task.project_id}`, not `{self.project_id}`"
                )

    @property
    def is_ongoing(self) -> bool:
        return self.end_date is None

    @property
    def span(self) -> TimeRange:
        return TimeRange(start=self.start_date, end=self.end_date)


@dataclass(frozen=True)
class FlowBoard:
    title: str
    projects: tuple[FlowProject, ...] = ()

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("FlowBoard.title must be non-empty")

    def project_lookup(self) -> dict[str, FlowProject]:
        return {p.project_id: p for p in self.projects}

    def all_tasks(self) -> tuple[FlowTask, ...]:
        return tuple(task for project in self.projects for task in project.tasks)


BOARD_JSON_SCHEMA: dict[str, object] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Weekline Flow Board",
    "type": "object",
    "required": ["title", "projects"],
    "properties": {
        "title": {"type": "string"},
        "projects": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "name", "start_date"],
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "start_date": {"type": "string", "format": "date"},
                    "end_date": {"type": ["string", "null"], "format": "date"},
                    "deadline": {"type": ["string", "null"], "format": "date"},
                    "progress": {"type": "integer", "minimum": 0, "maximum": 100},
                    "assignee_id": {"type": "string"},
                    "multi_assignee_ids": {"type": "array", "items": {"type": "string"}},
                    "tasks": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["id", "name"],
                            "properties": {
                                "id": {"type": "string"},
                                "name": {"type": "string"},
                                "status": {"type": "string", "enum": list(TASK_STATUSES)},
                                "assignee_id": {"type": "string"},
                                "start_date": {"type": ["string", "null"], "format": "date"},
                                "end_date": {"type": ["string", "null"], "format": "date"},
                                "deadline": {"type": ["string", "null"], "format": "date"},
                                "progress": {"type": "integer", "minimum": 0, "maximum": 100},
                                "priority": {"type": "string"},
                            },
                        },
                    },
                },
            },
        },
    },
}


def board_json_schema() -> dict[str, object]:
    return json.loads(json.dumps(BOARD_JSON_SCHEMA))


def parse_date(raw: object, *, field_name: str = "date") -> dt.date:
    """Parse an ISO date or datetime into a local calendar date.

    Time-of-day is dropped so later comparisons are date-only.
    """
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    text = str(raw).strip()
    try:
        if len(text) == 10:
            return dt.date.fromisoformat(text)
        return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValueError(f"`{field_name}` is not an ISO date: {text!r}") from exc


def board_from_dict(payload: Mapping[str, object]) -> FlowBoard:
    title = str(payload.get("title", "Weekline Flow Board"))
    raw_projects = payload.get("projects")
    if not isinstance(raw_projects, list):
        raise TypeError("`projects` must be a list")

    projects: list[FlowProject] = []
    for raw in raw_projects:
        if not isinstance(raw, Mapping):
            raise TypeError("Each project must be a mapping")
        project_id = str(raw["id"])
        raw_tasks = raw.get("tasks", [])
        if not isinstance(raw_tasks, list):
            raise TypeError(f"`tasks` of project `{project_id}` must be a list")
        tasks = tuple(_task_from_dict(item, project_id) for item in raw_tasks if isinstance(item, Mapping))
        projects.append(
            FlowProject(
                project_id=project_id,
                name=str(raw["name"]),
                start_date=parse_date(raw["start_date"], field_name=f"{project_id}.start_date"),
                end_date=_optional_date(raw.get("end_date"), f"{project_id}.end_date"),
                deadline=_optional_date(raw.get("deadline"), f"{project_id}.deadline"),
                progress=int(raw.get("progress") or 0),
                assignee_id=_coerce_optional_str(raw.get("assignee_id")),
                multi_assignee_ids=_coerce_string_tuple(raw.get("multi_assignee_ids")),
                tasks=tasks,
            )
        )
    return FlowBoard(title=title, projects=tuple(projects))


def load_board_model(board_path: str | Path) -> FlowBoard:
    path = Path(board_path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, Mapping):
        raise TypeError("Board payload must be a JSON object")
    return board_from_dict(payload)


def _task_from_dict(raw: Mapping[str, Any], project_id: str) -> FlowTask:
    task_id = str(raw["id"])
    return FlowTask(
        task_id=task_id,
        project_id=str(raw.get("project_id", project_id)),
        name=str(raw["name"]),
        status=str(raw.get("status") or "todo"),
        assignee_id=_coerce_optional_str(raw.get("assignee_id")),
        start_date=_optional_date(raw.get("start_date"), f"{task_id}.start_date"),
        end_date=_optional_date(raw.get("end_date"), f"{task_id}.end_date"),
        deadline=_optional_date(raw.get("deadline"), f"{task_id}.deadline"),
        progress=int(raw.get("progress") or 0),
        priority=_coerce_optional_str(raw.get("priority")),
    )


def _optional_date(raw: object, field_name: str) -> dt.date | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return parse_date(raw, field_name=field_name)


def _coerce_optional_str(raw: object) -> str | None:
    if raw is None:
        return None
    text = str(raw).strip()
    return text if text else None


def _coerce_string_tuple(raw: object) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        text = raw.strip()
        return (text,) if text else ()
    if isinstance(raw, Iterable):
        out: list[str] = []
        for item in raw:
            value = str(item).strip()
            if value:
                out.append(value)
        return tuple(out)
    raise TypeError("Expected string or iterable of strings")
