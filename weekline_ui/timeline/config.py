from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
import tomllib
from typing import Any, Mapping

GRID_MODES: tuple[str, ...] = ("calendar", "workdays")


@dataclass(frozen=True)
class LayoutConfig:
    """Column model used to turn dates into left/width percentages.

    `container_width` is an assumed pixel width: the real container is not
    measured at calculation time, so percentages are computed against it.
    """

    container_width: float = 1000.0
    weekend_column_width: float = 48.0
    min_width_percent: float = 0.1
    today_first_column_width_percent: float = 60.0
    today_min_width_percent: float = 20.0
    display_left_floor: float = -100.0
    grid_mode: str = "calendar"
    day_count: int = 7
    work_days: int = 5

    def __post_init__(self) -> None:
        if self.container_width <= 0:
            raise ValueError("container_width must be > 0")
        if self.weekend_column_width < 0:
            raise ValueError("weekend_column_width must be >= 0")
        if self.min_width_percent < 0:
            raise ValueError("min_width_percent must be >= 0")
        if not 0 <= self.today_first_column_width_percent <= 100:
            raise ValueError("today_first_column_width_percent must be within 0..100")
        if not 0 <= self.today_min_width_percent <= 100:
            raise ValueError("today_min_width_percent must be within 0..100")
        if self.display_left_floor > 0:
            raise ValueError("display_left_floor must be <= 0")
        if self.grid_mode not in GRID_MODES:
            raise ValueError(f"Unsupported grid_mode: {self.grid_mode}")
        if self.day_count < 1:
            raise ValueError("day_count must be >= 1")
        if self.work_days < 1:
            raise ValueError("work_days must be >= 1")


@dataclass(frozen=True)
class StackingConfig:
    task_bar_height: int = 32
    task_bar_spacing: int = 2
    task_container_padding: int = 2
    project_header_height: int = 36
    project_padding: int = 2
    project_border: int = 2
    project_gap: int = 1
    max_projects_per_row: int = 10
    empty_row_height: int = 4

    def __post_init__(self) -> None:
        for item in fields(self):
            if getattr(self, item.name) < 0:
                raise ValueError(f"{item.name} must be >= 0")
        if self.task_bar_height < 1:
            raise ValueError("task_bar_height must be >= 1")
        if self.max_projects_per_row < 1:
            raise ValueError("max_projects_per_row must be >= 1")


@dataclass(frozen=True)
class TimelineConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    stacking: StackingConfig = field(default_factory=StackingConfig)


def timeline_config_from_dict(raw: Mapping[str, Any]) -> TimelineConfig:
    layout_raw = raw.get("layout", {})
    stacking_raw = raw.get("stacking", {})
    if not isinstance(layout_raw, Mapping):
        raise TypeError("`layout` must be a table")
    if not isinstance(stacking_raw, Mapping):
        raise TypeError("`stacking` must be a table")
    return TimelineConfig(
        layout=LayoutConfig(**_checked_kwargs(LayoutConfig, layout_raw, "layout")),
        stacking=StackingConfig(**_checked_kwargs(StackingConfig, stacking_raw, "stacking")),
    )


def load_timeline_config(config_path: str | Path) -> TimelineConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"timeline config not found: {path}")
    with path.open("rb") as f:
        raw = tomllib.load(f)
    return timeline_config_from_dict(raw)


def _checked_kwargs(cls: type, raw: Mapping[str, Any], section: str) -> dict[str, Any]:
    known = {item.name for item in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"unknown keys in [{section}]: {', '.join(unknown)}")
    return dict(raw)
