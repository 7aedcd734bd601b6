from __future__ import annotations

import datetime as dt
from collections import Counter
from dataclasses import dataclass

from .config import TimelineConfig
from .layout import build_week_layout
from .schema import FlowBoard, Geometry
from .stacking import project_bar_height, task_container_height
from .visibility import task_span
from .week_renderer import render_week_ascii


@dataclass(frozen=True)
class ValidationReport:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_board_integrity(board: FlowBoard) -> ValidationReport:
    errors: list[str] = []
    warnings: list[str] = []

    project_counts = Counter(project.project_id for project in board.projects)
    for project_id, count in sorted(project_counts.items()):
        if count > 1:
            errors.append(f"Project id `{project_id}` is used {count} times")

    task_counts = Counter(task.task_id for task in board.all_tasks())
    for task_id, count in sorted(task_counts.items()):
        if count > 1:
            errors.append(f"Task id `{task_id}` is used {count} times")

    for project in board.projects:
        for task in project.tasks:
            if task.has_no_dates:
                continue
            span = task_span(task, project)
            if span.start < project.start_date:
                warnings.append(
                    f"Task `{task.task_id}` starts before project `{project.project_id}` ({span.start.isoformat()})"
                )
            if project.end_date is not None and span.end is not None and span.end > project.end_date:
                warnings.append(
                    f"Task `{task.task_id}` ends after project `{project.project_id}` ({span.end.isoformat()})"
                )

    return ValidationReport(errors=tuple(errors), warnings=tuple(warnings))


def validate_layout_consistency(
    board: FlowBoard,
    week_start: dt.date,
    *,
    today: dt.date,
    config: TimelineConfig | None = None,
) -> ValidationReport:
    cfg = config or TimelineConfig()
    errors: list[str] = []

    once = build_week_layout(board, week_start, today=today, config=cfg)
    twice = build_week_layout(board, week_start, today=today, config=cfg)
    if once != twice:
        errors.append("Week layout is not deterministic across repeated calls")
    if render_week_ascii(once) != render_week_ascii(twice):
        errors.append("Week renderer output is not deterministic across repeated calls")

    min_width = cfg.layout.min_width_percent
    for bar in once.project_bars:
        project_id = bar.project.project_id
        errors.extend(_geometry_errors(f"Project `{project_id}`", bar.geometry, min_width))
        expected_container = task_container_height(len(bar.task_bars), cfg.stacking)
        if bar.task_container_height != expected_container:
            errors.append(
                f"Project `{project_id}` task container is {bar.task_container_height}px, expected {expected_container}px"
            )
        expected_height = project_bar_height(len(bar.task_bars), cfg.stacking)
        if bar.height_px != expected_height:
            errors.append(f"Project `{project_id}` bar is {bar.height_px}px, expected {expected_height}px")
        seen_overdue = False
        for task_bar in bar.task_bars:
            errors.extend(_geometry_errors(f"Task `{task_bar.task.task_id}`", task_bar.geometry, min_width))
            if task_bar.overdue:
                seen_overdue = True
            elif seen_overdue:
                errors.append(f"Task `{task_bar.task.task_id}` is stacked below an overdue task")

    return ValidationReport(errors=tuple(errors))


def validate_board_suite(
    board: FlowBoard,
    week_start: dt.date,
    *,
    today: dt.date,
    config: TimelineConfig | None = None,
) -> ValidationReport:
    integrity = validate_board_integrity(board)
    layout = validate_layout_consistency(board, week_start, today=today, config=config)
    return ValidationReport(
        errors=tuple(list(integrity.errors) + list(layout.errors)),
        warnings=tuple(list(integrity.warnings) + list(layout.warnings)),
    )


def require_valid_board(
    board: FlowBoard,
    week_start: dt.date,
    *,
    today: dt.date,
    config: TimelineConfig | None = None,
) -> None:
    report = validate_board_suite(board, week_start, today=today, config=config)
    if report.errors:
        joined = "; ".join(report.errors)
        raise ValueError(f"Board validation failed: {joined}")


def _geometry_errors(label: str, geometry: Geometry, min_width: float) -> list[str]:
    errors: list[str] = []
    if geometry.width_percent < min_width:
        errors.append(f"{label} width {geometry.width_percent:.3f}% is below {min_width}%")
    if geometry.left_percent < 0:
        errors.append(f"{label} left offset {geometry.left_percent:.3f}% is negative")
    return errors
