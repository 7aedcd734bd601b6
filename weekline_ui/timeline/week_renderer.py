from __future__ import annotations

from dataclasses import dataclass

from .grid import format_date_range
from .layout import ProjectBar, TaskBar, WeekLayout
from .schema import STATUS_COLORS, Geometry

TASK_FILL: dict[str, str] = {
    "todo": "-",
    "in-progress": "=",
    "blocked": "x",
}
PROJECT_FILL = "#"
OVERDUE_FILL = "!"


@dataclass(frozen=True)
class WeekRenderConfig:
    chart_width: int = 70
    show_tasks: bool = True
    show_indicators: bool = True

    def __post_init__(self) -> None:
        if self.chart_width < 14:
            raise ValueError("chart_width must be >= 14")


def render_week_ascii(layout: WeekLayout, config: WeekRenderConfig | None = None) -> str:
    cfg = config or WeekRenderConfig()
    rows = _collect_rows(layout, cfg)
    label_width = max([len("Days:")] + [len(label) for label, _, _ in rows])

    lines: list[str] = []
    lines.append(layout.title)
    lines.append(
        f"Week: {format_date_range(layout.window.start, layout.window.end)} | today={layout.today.isoformat()}"
    )
    lines.append("Status colors: " + ", ".join(f"{k}={v}" for k, v in STATUS_COLORS.items() if k in TASK_FILL))
    lines.append(f"{'Days:'.ljust(label_width)} |{_build_day_header(layout, cfg.chart_width)}|")

    if not rows:
        lines.append("")
        lines.append("(no visible projects)")
    for label, cells, suffix in rows:
        lines.append(f"{label.ljust(label_width)} |{cells}| {suffix}".rstrip())
    return "\n".join(lines) + "\n"


def render_week_markdown(layout: WeekLayout) -> str:
    lines: list[str] = []
    lines.append(f"# {layout.title}")
    lines.append("")
    lines.append(f"Week of {format_date_range(layout.window.start, layout.window.end)}")
    lines.append("")
    lines.append("| Bar | Visible | Left % | Width % | Notes |")
    lines.append("|---|---|---|---|---|")
    for bar in layout.project_bars:
        lines.append(
            f"| **{bar.project.project_id}** {bar.project.name} | {_visible_label(bar)} "
            f"| {bar.geometry.left_percent:.1f} | {bar.geometry.width_percent:.1f} | {_project_suffix(bar)} |"
        )
        for task_bar in bar.task_bars:
            lines.append(
                f"| &nbsp;&nbsp;{task_bar.task.task_id} {task_bar.task.name} "
                f"| {task_bar.bounds.visual_start.isoformat()} .. {task_bar.bounds.visual_end.isoformat()} "
                f"| {task_bar.geometry.left_percent:.1f} | {task_bar.geometry.width_percent:.1f} "
                f"| {_task_suffix(task_bar)} |"
            )
    if not layout.project_bars:
        lines.append("")
        lines.append("_No visible projects._")
    lines.append("")
    return "\n".join(lines)


def _collect_rows(layout: WeekLayout, cfg: WeekRenderConfig) -> list[tuple[str, str, str]]:
    rows: list[tuple[str, str, str]] = []
    for bar in layout.project_bars:
        cells = _paint(bar.geometry, cfg.chart_width, PROJECT_FILL)
        cells = _mark_extensions(cells, bar)
        rows.append((f"{bar.project.project_id} {bar.project.name}", cells, _project_suffix(bar)))
        if not cfg.show_tasks:
            continue
        for task_bar in bar.task_bars:
            fill = OVERDUE_FILL if task_bar.overdue else TASK_FILL.get(task_bar.task.status, "-")
            label = f"  {task_bar.task.task_id} {task_bar.task.name}"
            rows.append((label, _paint(task_bar.display_geometry, cfg.chart_width, fill), _task_suffix(task_bar)))
            if cfg.show_indicators and task_bar.overdue_indicator is not None:
                indicator = task_bar.overdue_indicator
                if indicator.width_percent > 0:
                    rows.append(("    overdue from today", _paint(indicator, cfg.chart_width, OVERDUE_FILL), ""))
    return rows


def _paint(geometry: Geometry, width: int, fill: str) -> str:
    start = int(round(max(0.0, geometry.left_percent) / 100.0 * width))
    end = int(round(min(100.0, geometry.right_percent) / 100.0 * width))
    start = min(start, width - 1)
    end = max(end, start + 1)
    end = min(end, width)
    return " " * start + fill * (end - start) + " " * (width - end)


def _mark_extensions(cells: str, bar: ProjectBar) -> str:
    chars = list(cells)
    filled = [i for i, ch in enumerate(chars) if ch != " "]
    if not filled:
        return cells
    if bar.extensions.starts_before_week:
        chars[filled[0]] = "<"
    if bar.extensions.ends_after_week:
        chars[filled[-1]] = ">"
    return "".join(chars)


def _build_day_header(layout: WeekLayout, width: int) -> str:
    widths = layout.column_widths_px
    total = sum(widths) or 1.0
    parts: list[str] = []
    consumed = 0
    running = 0.0
    for column, column_width in zip(layout.columns, widths):
        running += column_width
        edge = int(round(running / total * width))
        span = max(0, edge - consumed)
        label = column.day.strftime("%a %d") if not column.is_weekend else column.day.strftime("%a")[:2]
        parts.append(label[:span].center(span))
        consumed += span
    header = "".join(parts)
    return header[:width].ljust(width)


def _visible_label(bar: ProjectBar) -> str:
    return f"{bar.bounds.visual_start.isoformat()} .. {bar.bounds.visual_end.isoformat()}"


def _project_suffix(bar: ProjectBar) -> str:
    if bar.remaining_days is None:
        return "Ongoing"
    return f"{bar.remaining_days}d left"


def _task_suffix(task_bar: TaskBar) -> str:
    suffix = f"{task_bar.task.status} {task_bar.task.progress}%"
    if task_bar.overdue:
        suffix = f"{suffix} overdue"
    return suffix
