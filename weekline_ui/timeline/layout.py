"""Week layout assembly: raw project/task dates to positioned bars for one window."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable

from .columns import (
    clamp_for_display,
    column_position,
    column_widths,
    fit_within_container,
    today_anchored_position,
)
from .config import TimelineConfig
from .grid import Column, normalize_date, remaining_days, week_columns, week_window_for
from .schema import FlowBoard, FlowProject, FlowTask, Geometry, RangeExtensions, VisualBounds, WeekWindow
from .stacking import calculate_project_stacking, stack_assignment, task_container_height
from .visibility import project_visual_bounds, range_extensions, task_span, visual_bounds


@dataclass(frozen=True)
class TaskBar:
    task: FlowTask
    stack_index: int
    top_px: int
    overdue: bool
    bounds: VisualBounds
    geometry: Geometry
    display_geometry: Geometry
    overdue_indicator: Geometry | None = None


@dataclass(frozen=True)
class ProjectBar:
    project: FlowProject
    stack_level: int
    top_px: int
    height_px: int
    bounds: VisualBounds
    extensions: RangeExtensions
    geometry: Geometry
    display_geometry: Geometry
    remaining_days: int | None
    task_container_height: int
    task_bars: tuple[TaskBar, ...]


@dataclass(frozen=True)
class WeekLayout:
    title: str
    window: WeekWindow
    columns: tuple[Column, ...]
    column_widths_px: tuple[float, ...]
    today: dt.date
    project_bars: tuple[ProjectBar, ...]
    row_height: int

    def bar_for(self, project_id: str) -> ProjectBar | None:
        for bar in self.project_bars:
            if bar.project.project_id == project_id:
                return bar
        return None


def build_week_layout(
    board: FlowBoard,
    week_start: dt.date,
    *,
    today: dt.date | None = None,
    config: TimelineConfig | None = None,
    projects: Iterable[FlowProject] | None = None,
) -> WeekLayout:
    cfg = config or TimelineConfig()
    day = normalize_date(today or dt.date.today())
    start = normalize_date(week_start)
    window = week_window_for(start, cfg.layout)
    columns = week_columns(start, cfg.layout)
    rows = tuple(projects) if projects is not None else board.projects

    stacking = calculate_project_stacking(rows, window, today=day, config=cfg.stacking)
    project_bars: list[ProjectBar] = []
    for stacked in stacking.stacked_projects:
        project = stacked.project
        bounds = project_visual_bounds(project, window)
        geometry = column_position(bounds.visual_start, bounds.visual_end, start, config=cfg.layout)
        task_bars = tuple(
            _task_bar(slot.task, project, window, start, day, cfg, slot.stack_index, slot.top_px, slot.overdue)
            for slot in stack_assignment(stacked.visible_tasks, today=day, config=cfg.stacking)
        )
        project_bars.append(
            ProjectBar(
                project=project,
                stack_level=stacked.stack_level,
                top_px=stacked.top_px,
                height_px=stacked.height,
                bounds=bounds,
                extensions=range_extensions(project.span, window),
                geometry=geometry,
                display_geometry=clamp_for_display(geometry, floor=cfg.layout.display_left_floor),
                remaining_days=None if project.end_date is None else remaining_days(project.end_date, day),
                task_container_height=task_container_height(len(task_bars), cfg.stacking),
                task_bars=task_bars,
            )
        )

    return WeekLayout(
        title=board.title,
        window=window,
        columns=columns,
        column_widths_px=tuple(column_widths(columns, cfg.layout).tolist()),
        today=day,
        project_bars=tuple(project_bars),
        row_height=stacking.total_row_height,
    )


def _task_bar(
    task: FlowTask,
    project: FlowProject,
    window: WeekWindow,
    week_start: dt.date,
    today: dt.date,
    cfg: TimelineConfig,
    stack_index: int,
    top_px: int,
    overdue: bool,
) -> TaskBar:
    bounds = visual_bounds(task_span(task, project), window)
    geometry = column_position(bounds.visual_start, bounds.visual_end, week_start, config=cfg.layout)
    indicator = None
    if overdue:
        indicator = today_anchored_position(week_start, today=today, config=cfg.layout)
    return TaskBar(
        task=task,
        stack_index=stack_index,
        top_px=top_px,
        overdue=overdue,
        bounds=bounds,
        geometry=geometry,
        display_geometry=fit_within_container(geometry),
        overdue_indicator=indicator,
    )
