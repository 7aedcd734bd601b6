"""Week-window timeline layout: visibility, column geometry and bar stacking."""

from .columns import (
    clamp_for_display,
    column_position,
    column_widths,
    fit_within_container,
    today_anchored_position,
    today_column_index,
)
from .config import LayoutConfig, StackingConfig, TimelineConfig, load_timeline_config
from .exporters import WeekExportBundle, export_week_bundle, render_week_png
from .grid import (
    Column,
    add_weeks,
    current_week_monday,
    format_date_range,
    format_short_date,
    generate_week_columns,
    generate_work_dates,
    is_weekend_day,
    normalize_date,
    remaining_days,
    week_columns,
    week_label,
    week_window_for,
)
from .interaction import WeekViewState, apply_task_filters, jump_to_week_of, pan_week_window, user_projects
from .layout import ProjectBar, TaskBar, WeekLayout, build_week_layout
from .schema import (
    BOARD_JSON_SCHEMA,
    STATUS_COLORS,
    TASK_STATUSES,
    FlowBoard,
    FlowProject,
    FlowTask,
    Geometry,
    RangeExtensions,
    TimeRange,
    VisualBounds,
    WeekWindow,
    board_from_dict,
    board_json_schema,
    load_board_model,
    parse_date,
)
from .stacking import (
    OverdueSplit,
    ProjectStackingResult,
    TaskSlot,
    calculate_project_stacking,
    project_bar_height,
    separate_overdue_tasks,
    stack_assignment,
    task_container_height,
)
from .validation import (
    ValidationReport,
    require_valid_board,
    validate_board_integrity,
    validate_board_suite,
    validate_layout_consistency,
)
from .visibility import (
    is_project_visible,
    is_range_visible,
    is_task_overdue,
    is_task_visible,
    project_visual_bounds,
    range_extensions,
    task_span,
    visible_tasks,
    visual_bounds,
)
from .week_renderer import WeekRenderConfig, render_week_ascii, render_week_markdown

__all__ = [
    "BOARD_JSON_SCHEMA",
    "Column",
    "FlowBoard",
    "FlowProject",
    "FlowTask",
    "Geometry",
    "LayoutConfig",
    "OverdueSplit",
    "ProjectBar",
    "ProjectStackingResult",
    "RangeExtensions",
    "STATUS_COLORS",
    "StackingConfig",
    "TASK_STATUSES",
    "TaskBar",
    "TaskSlot",
    "TimeRange",
    "TimelineConfig",
    "ValidationReport",
    "VisualBounds",
    "WeekExportBundle",
    "WeekLayout",
    "WeekRenderConfig",
    "WeekViewState",
    "WeekWindow",
    "add_weeks",
    "apply_task_filters",
    "board_from_dict",
    "board_json_schema",
    "build_week_layout",
    "calculate_project_stacking",
    "clamp_for_display",
    "column_position",
    "column_widths",
    "current_week_monday",
    "export_week_bundle",
    "fit_within_container",
    "format_date_range",
    "format_short_date",
    "generate_week_columns",
    "generate_work_dates",
    "is_project_visible",
    "is_range_visible",
    "is_task_overdue",
    "is_task_visible",
    "is_weekend_day",
    "jump_to_week_of",
    "load_board_model",
    "load_timeline_config",
    "normalize_date",
    "pan_week_window",
    "parse_date",
    "project_bar_height",
    "project_visual_bounds",
    "range_extensions",
    "remaining_days",
    "render_week_ascii",
    "render_week_markdown",
    "render_week_png",
    "require_valid_board",
    "separate_overdue_tasks",
    "stack_assignment",
    "task_container_height",
    "task_span",
    "today_anchored_position",
    "today_column_index",
    "user_projects",
    "validate_board_integrity",
    "validate_board_suite",
    "validate_layout_consistency",
    "visible_tasks",
    "visual_bounds",
    "week_columns",
    "week_label",
    "week_window_for",
]
