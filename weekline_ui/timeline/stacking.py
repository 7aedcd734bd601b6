from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable

from .config import StackingConfig
from .schema import FlowProject, FlowTask, WeekWindow
from .visibility import is_project_visible, is_task_overdue, visible_tasks

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverdueSplit:
    overdue: tuple[FlowTask, ...]
    regular: tuple[FlowTask, ...]


@dataclass(frozen=True)
class TaskSlot:
    task: FlowTask
    stack_index: int
    top_px: int
    overdue: bool


@dataclass(frozen=True)
class StackedProject:
    project: FlowProject
    stack_level: int
    visible_tasks: tuple[FlowTask, ...]
    height: int
    top_px: int


@dataclass(frozen=True)
class ProjectStackingResult:
    stacked_projects: tuple[StackedProject, ...]
    total_row_height: int


def separate_overdue_tasks(tasks: Iterable[FlowTask], *, today: dt.date | None = None) -> OverdueSplit:
    day = today or dt.date.today()
    overdue: list[FlowTask] = []
    regular: list[FlowTask] = []
    for task in tasks:
        if task.status == "done":
            continue
        if is_task_overdue(task, today=day):
            overdue.append(task)
        else:
            regular.append(task)
    return OverdueSplit(overdue=tuple(overdue), regular=tuple(regular))


def stack_assignment(
    tasks: Iterable[FlowTask],
    *,
    today: dt.date | None = None,
    config: StackingConfig | None = None,
) -> tuple[TaskSlot, ...]:
    """Vertical slots for sibling task bars; overdue bars always stack below regular ones."""
    cfg = config or StackingConfig()
    split = separate_overdue_tasks(tasks, today=today)
    pitch = cfg.task_bar_height + cfg.task_bar_spacing
    ordered = [(task, False) for task in split.regular] + [(task, True) for task in split.overdue]
    return tuple(
        TaskSlot(task=task, stack_index=index, top_px=index * pitch, overdue=overdue)
        for index, (task, overdue) in enumerate(ordered)
    )


def task_container_height(task_count: int, config: StackingConfig | None = None) -> int:
    cfg = config or StackingConfig()
    if task_count <= 0:
        return 0
    return (
        task_count * cfg.task_bar_height
        + (task_count - 1) * cfg.task_bar_spacing
        + cfg.task_container_padding
    )


def project_bar_height(task_count: int, config: StackingConfig | None = None) -> int:
    cfg = config or StackingConfig()
    return (
        cfg.project_header_height
        + task_container_height(task_count, cfg)
        + cfg.project_padding * 2
        + cfg.project_border * 2
    )


def calculate_project_stacking(
    projects: Iterable[FlowProject],
    week: WeekWindow,
    *,
    today: dt.date | None = None,
    config: StackingConfig | None = None,
    row_top: int = 0,
) -> ProjectStackingResult:
    cfg = config or StackingConfig()
    stacked: list[StackedProject] = []
    current_top = row_top

    for project in list(projects)[: cfg.max_projects_per_row]:
        if not is_project_visible(project, week):
            LOGGER.debug("skipping project %s: not visible in %s..%s", project.project_id, week.start, week.end)
            continue
        shown = visible_tasks(project.tasks, week, project, today=today)
        if not shown:
            LOGGER.debug(
                "skipping project %s: no visible tasks (%d total)", project.project_id, len(project.tasks)
            )
            continue
        height = project_bar_height(len(shown), cfg)
        stacked.append(
            StackedProject(
                project=project,
                stack_level=len(stacked),
                visible_tasks=shown,
                height=height,
                top_px=current_top,
            )
        )
        current_top += height + cfg.project_gap

    if not stacked:
        total = cfg.empty_row_height
    else:
        total = current_top - cfg.project_gap + 1 - row_top
    LOGGER.debug("stacked %d project(s), row height %dpx", len(stacked), total)
    return ProjectStackingResult(stacked_projects=tuple(stacked), total_row_height=total)
