from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from .config import LayoutConfig
from .schema import WeekWindow, normalize_date

_SATURDAY = 5


@dataclass(frozen=True)
class Column:
    day: dt.date
    is_weekend: bool


def is_weekend_day(day: dt.date) -> bool:
    return normalize_date(day).weekday() >= _SATURDAY


def generate_week_columns(week_start: dt.date, *, day_count: int = 7) -> tuple[Column, ...]:
    if day_count < 1:
        raise ValueError("day_count must be >= 1")
    start = normalize_date(week_start)
    days = (start + dt.timedelta(days=offset) for offset in range(day_count))
    return tuple(Column(day=day, is_weekend=is_weekend_day(day)) for day in days)


def generate_work_dates(week_start: dt.date, *, work_days: int = 5) -> tuple[Column, ...]:
    """Dates from `week_start` until `work_days` workdays are covered, weekends in between included."""
    if work_days < 1:
        raise ValueError("work_days must be >= 1")
    columns: list[Column] = []
    current = normalize_date(week_start)
    added = 0
    while added < work_days:
        weekend = is_weekend_day(current)
        columns.append(Column(day=current, is_weekend=weekend))
        if not weekend:
            added += 1
        current += dt.timedelta(days=1)
    return tuple(columns)


def week_columns(week_start: dt.date, config: LayoutConfig | None = None) -> tuple[Column, ...]:
    cfg = config or LayoutConfig()
    if cfg.grid_mode == "workdays":
        return generate_work_dates(week_start, work_days=cfg.work_days)
    return generate_week_columns(week_start, day_count=cfg.day_count)


def week_window_for(week_start: dt.date, config: LayoutConfig | None = None) -> WeekWindow:
    columns = week_columns(week_start, config)
    return WeekWindow(start=columns[0].day, end=columns[-1].day)


def current_week_monday(today: dt.date | None = None) -> dt.date:
    day = normalize_date(today or dt.date.today())
    return day - dt.timedelta(days=day.weekday())


def add_weeks(day: dt.date, weeks: int) -> dt.date:
    return normalize_date(day) + dt.timedelta(days=7 * weeks)


def week_label(week_start: dt.date, config: LayoutConfig | None = None) -> str:
    window = week_window_for(week_start, config)
    return f"{_month_day(window.start)} - {_month_day(window.end)}, {window.end.year}"


def format_short_date(day: dt.date) -> str:
    return f"{day.strftime('%a')}, {_month_day(day)}"


def format_date_range(start: dt.date, end: dt.date) -> str:
    return f"{format_short_date(start)} - {format_short_date(end)}"


def remaining_days(end: dt.date, today: dt.date) -> int:
    delta = (normalize_date(end) - normalize_date(today)).days
    return max(0, delta)


def _month_day(day: dt.date) -> str:
    return f"{day.strftime('%b')} {day.day}"
