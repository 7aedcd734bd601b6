from __future__ import annotations

import datetime as dt
from typing import Iterable

from .schema import FlowProject, FlowTask, RangeExtensions, TimeRange, VisualBounds, WeekWindow, normalize_date


def is_range_visible(span: TimeRange, week: WeekWindow) -> bool:
    start = normalize_date(span.start)
    if span.end is None:
        return start <= week.end
    return _overlaps(start, normalize_date(span.end), week)


def range_extensions(span: TimeRange, week: WeekWindow) -> RangeExtensions:
    start = normalize_date(span.start)
    ends_after = True if span.end is None else normalize_date(span.end) > week.end
    return RangeExtensions(starts_before_week=start < week.start, ends_after_week=ends_after)


def visual_bounds(span: TimeRange, week: WeekWindow) -> VisualBounds:
    """Clip `span` to `week`. Ongoing spans always run to the end of the window."""
    visual_start = max(normalize_date(span.start), week.start)
    if span.end is None:
        visual_end = week.end
    else:
        visual_end = min(normalize_date(span.end), week.end)
    # Ranges entirely before the window still occupy its first column.
    if visual_end < visual_start:
        visual_end = visual_start
    return VisualBounds(visual_start=visual_start, visual_end=visual_end)


def is_project_visible(project: FlowProject, week: WeekWindow) -> bool:
    return is_range_visible(project.span, week)


def project_visual_bounds(project: FlowProject, week: WeekWindow) -> VisualBounds:
    return visual_bounds(project.span, week)


def is_task_overdue(task: FlowTask, *, today: dt.date | None = None) -> bool:
    if task.status == "done" or task.end_date is None:
        return False
    return normalize_date(task.end_date) < normalize_date(today or dt.date.today())


def task_span(task: FlowTask, project: FlowProject) -> TimeRange:
    start = task.start_date if task.start_date is not None else project.start_date
    end = task.end_date if task.end_date is not None else project.end_date
    if end is not None and end < start:
        # A task with only one date may sit outside its project's span.
        end = start
    return TimeRange(start=start, end=end)


def is_task_visible(
    task: FlowTask,
    week: WeekWindow,
    project: FlowProject,
    *,
    today: dt.date | None = None,
) -> bool:
    if task.status == "done":
        return False
    if task.has_no_dates:
        return True
    span = task_span(task, project)
    if is_task_overdue(task, today=today):
        today_in_week = week.contains(normalize_date(today or dt.date.today()))
        return today_in_week or is_range_visible(span, week)
    return is_range_visible(span, week)


def visible_tasks(
    tasks: Iterable[FlowTask],
    week: WeekWindow,
    project: FlowProject,
    *,
    today: dt.date | None = None,
) -> tuple[FlowTask, ...]:
    return tuple(task for task in tasks if is_task_visible(task, week, project, today=today))


def _overlaps(start: dt.date, end: dt.date, week: WeekWindow) -> bool:
    return not (end < week.start or start > week.end)
