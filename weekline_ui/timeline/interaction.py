from __future__ import annotations

import dataclasses
import datetime as dt
from dataclasses import dataclass

from .grid import add_weeks, current_week_monday, normalize_date
from .schema import TASK_STATUSES, FlowBoard, FlowProject, FlowTask


@dataclass(frozen=True)
class WeekViewState:
    week_start: dt.date
    status_filter: tuple[str, ...] = TASK_STATUSES
    assignee_filter: tuple[str, ...] = ()
    text_query: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.week_start, dt.date):
            raise TypeError("week_start must be a date")
        unknown = [status for status in self.status_filter if status not in TASK_STATUSES]
        if unknown:
            raise ValueError(f"Unsupported status filter: {', '.join(unknown)}")
        object.__setattr__(self, "week_start", normalize_date(self.week_start))


def pan_week_window(state: WeekViewState, *, delta_weeks: int) -> WeekViewState:
    return dataclasses.replace(state, week_start=add_weeks(state.week_start, delta_weeks))


def jump_to_week_of(state: WeekViewState, day: dt.date) -> WeekViewState:
    return dataclasses.replace(state, week_start=current_week_monday(day))


def apply_task_filters(board: FlowBoard, state: WeekViewState) -> FlowBoard:
    """Keep every project, with only the tasks matching status, assignee and text query."""
    query = state.text_query.strip().lower()
    projects = tuple(
        dataclasses.replace(
            project,
            tasks=tuple(task for task in project.tasks if _task_matches(task, state, query)),
        )
        for project in board.projects
    )
    return dataclasses.replace(board, projects=projects)


def user_projects(board: FlowBoard, user_id: str) -> tuple[FlowProject, ...]:
    """Projects shown on a user's row, each narrowed to the tasks that user should see.

    The main assignee sees every task; anyone else only sees tasks assigned to them.
    """
    out: list[FlowProject] = []
    for project in board.projects:
        is_main = project.assignee_id == user_id
        owns_task = any(task.assignee_id == user_id for task in project.tasks)
        if not (is_main or owns_task):
            continue
        if is_main:
            tasks = project.tasks
        else:
            tasks = tuple(task for task in project.tasks if task.assignee_id == user_id)
        out.append(dataclasses.replace(project, tasks=tasks))
    return tuple(out)


def _task_matches(task: FlowTask, state: WeekViewState, query: str) -> bool:
    if state.status_filter and task.status not in state.status_filter:
        return False
    if state.assignee_filter and task.assignee_id not in state.assignee_filter:
        return False
    if query:
        haystack = " ".join((task.task_id, task.name, task.project_id)).lower()
        if query not in haystack:
            return False
    return True
