from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Sequence

import numpy as np

from .config import LayoutConfig
from .grid import Column, normalize_date, week_columns
from .schema import Geometry


def flex_column_width(columns: Sequence[Column], config: LayoutConfig | None = None) -> float:
    cfg = config or LayoutConfig()
    weekend_count = sum(1 for column in columns if column.is_weekend)
    workday_count = len(columns) - weekend_count
    if workday_count == 0:
        return 0.0
    return (cfg.container_width - weekend_count * cfg.weekend_column_width) / workday_count


def column_widths(columns: Sequence[Column], config: LayoutConfig | None = None) -> np.ndarray:
    """Pixel width of each column: fixed for weekends, an equal flex share for workdays."""
    cfg = config or LayoutConfig()
    weekend_mask = np.asarray([column.is_weekend for column in columns], dtype=bool)
    flex = flex_column_width(columns, cfg)
    return np.where(weekend_mask, cfg.weekend_column_width, flex).astype(np.float64)


def column_position(
    visual_start: dt.date,
    visual_end: dt.date,
    week_start: dt.date,
    *,
    config: LayoutConfig | None = None,
) -> Geometry:
    cfg = config or LayoutConfig()
    columns = week_columns(week_start, cfg)
    start_index, end_index = _column_span(columns, normalize_date(visual_start), normalize_date(visual_end))

    widths = column_widths(columns, cfg)
    left_px = float(widths[:start_index].sum())
    spanned_px = float(widths[start_index : end_index + 1].sum())

    left_percent = left_px / cfg.container_width * 100.0
    width_percent = spanned_px / cfg.container_width * 100.0
    return Geometry(left_percent=left_percent, width_percent=max(width_percent, cfg.min_width_percent))


def today_column_index(
    week_start: dt.date,
    *,
    today: dt.date | None = None,
    config: LayoutConfig | None = None,
) -> int:
    day = normalize_date(today or dt.date.today())
    for index, column in enumerate(week_columns(week_start, config)):
        if column.day == day:
            return index
    return -1


def today_anchored_position(
    week_start: dt.date,
    *,
    min_columns: int = 2,
    today: dt.date | None = None,
    config: LayoutConfig | None = None,
) -> Geometry:
    """Bar geometry from today's column to the end of the window, for overdue indicators."""
    cfg = config or LayoutConfig()
    index = today_column_index(week_start, today=today, config=cfg)
    if index == -1:
        return Geometry(left_percent=0.0, width_percent=0.0)
    if index == 0:
        return Geometry(left_percent=0.0, width_percent=cfg.today_first_column_width_percent)

    columns = week_columns(week_start, cfg)
    widths = column_widths(columns, cfg)
    left_px = float(widths[:index].sum())
    spanned_px = float(widths[index:].sum())
    spanned_px = max(spanned_px, flex_column_width(columns, cfg) * min_columns)

    left_percent = left_px / cfg.container_width * 100.0
    width_percent = spanned_px / cfg.container_width * 100.0
    return Geometry(
        left_percent=max(0.0, left_percent),
        width_percent=max(cfg.today_min_width_percent, width_percent),
    )


def clamp_for_display(geometry: Geometry, *, floor: float = -100.0) -> Geometry:
    clamped_left = max(floor, geometry.left_percent)
    return Geometry(
        left_percent=clamped_left,
        width_percent=geometry.width_percent + (geometry.left_percent - clamped_left),
    )


def fit_within_container(geometry: Geometry) -> Geometry:
    left = max(0.0, min(100.0, geometry.left_percent))
    return dataclasses.replace(geometry, left_percent=left, width_percent=min(100.0 - left, geometry.width_percent))


def _column_span(columns: Sequence[Column], start: dt.date, end: dt.date) -> tuple[int, int]:
    start_index = -1
    end_index = -1
    for index, column in enumerate(columns):
        if start_index == -1 and column.day >= start:
            start_index = index
        if column.day == end:
            end_index = index
            break
        if column.day > end:
            end_index = max(0, index - 1)
            break

    if start_index == -1:
        start_index = 0
    if end_index == -1:
        end_index = len(columns) - 1
    # A range never spans less than one column.
    return start_index, max(start_index, end_index)
