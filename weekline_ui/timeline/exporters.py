from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .layout import WeekLayout
from .schema import STATUS_COLORS, Geometry
from .week_renderer import WeekRenderConfig, render_week_ascii, render_week_markdown

LOGGER = logging.getLogger(__name__)

RGB = tuple[int, int, int]

_BG: RGB = (255, 255, 255)
_WEEKEND_BG: RGB = (241, 245, 249)
_TODAY_BG: RGB = (238, 243, 249)
_GRID: RGB = (203, 213, 225)
_PROJECT_FILL: RGB = (172, 196, 226)
_PROJECT_BORDER: RGB = (11, 59, 107)
_OVERDUE_FILL: RGB = (254, 226, 226)
_TEXT: RGB = (15, 23, 42)


@dataclass(frozen=True)
class WeekExportBundle:
    ascii_week: Path
    markdown_week: Path
    png_week: Path

    def as_dict(self) -> dict[str, str]:
        return {
            "ascii_week": str(self.ascii_week),
            "markdown_week": str(self.markdown_week),
            "png_week": str(self.png_week),
        }


def export_week_bundle(
    layout: WeekLayout,
    *,
    out_dir: str | Path,
    prefix: str = "weekline",
    render_config: WeekRenderConfig | None = None,
) -> WeekExportBundle:
    root = Path(out_dir)
    root.mkdir(parents=True, exist_ok=True)

    path_ascii = root / f"{prefix}_week.txt"
    path_markdown = root / f"{prefix}_week.md"
    path_png = root / f"{prefix}_week.png"

    path_ascii.write_text(render_week_ascii(layout, render_config), encoding="utf-8")
    path_markdown.write_text(render_week_markdown(layout), encoding="utf-8")
    render_week_png(layout, out_path=path_png)
    LOGGER.info("exported week %s to %s", layout.window.start.isoformat(), root)

    return WeekExportBundle(ascii_week=path_ascii, markdown_week=path_markdown, png_week=path_png)


def render_week_png(
    layout: WeekLayout,
    *,
    out_path: str | Path,
    chart_width: int = 1000,
    header_height: int = 28,
    label_width: int = 220,
    padding: int = 12,
) -> Path:
    """Rasterize the week layout: project bars at their pixel rows, tasks nested inside."""
    body_height = max(layout.row_height, 40)
    height = padding * 2 + header_height + body_height
    width = padding * 2 + label_width + chart_width
    canvas = _new_canvas(width, height, _BG)

    x0 = padding + label_width
    y0 = padding + header_height
    total = sum(layout.column_widths_px) or 1.0
    running = 0.0
    column_edges: list[tuple[int, int]] = []
    for column, column_width in zip(layout.columns, layout.column_widths_px):
        left = x0 + int(round(running / total * chart_width))
        running += column_width
        right = x0 + int(round(running / total * chart_width))
        column_edges.append((left, right))
        if column.day == layout.today:
            _fill_rect(canvas, left, padding, right, height - padding, _TODAY_BG)
        elif column.is_weekend:
            _fill_rect(canvas, left, padding, right, height - padding, _WEEKEND_BG)
        _fill_rect(canvas, right - 1, padding, right, height - padding, _GRID)

    for bar in layout.project_bars:
        top = y0 + bar.top_px
        bx0, bx1 = _span_px(bar.display_geometry, x0, chart_width)
        _fill_rect(canvas, bx0, top, bx1, top + bar.height_px, _PROJECT_BORDER)
        _fill_rect(canvas, bx0 + 2, top + 2, bx1 - 2, top + bar.height_px - 2, _PROJECT_FILL)
        task_top = top + bar.height_px - bar.task_container_height
        for task_bar in bar.task_bars:
            tx0, tx1 = _span_px(task_bar.display_geometry, x0, chart_width)
            color = _OVERDUE_FILL if task_bar.overdue else _hex_to_rgb(STATUS_COLORS[task_bar.task.status])
            ty = task_top + task_bar.top_px
            _fill_rect(canvas, tx0 + 4, ty, tx1 - 4, ty + 28, color)

    image = Image.fromarray(canvas)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()
    for column, (left, _right) in zip(layout.columns, column_edges):
        draw.text((left + 4, padding + 6), column.day.strftime("%a %d"), fill=_TEXT, font=font)
    for bar in layout.project_bars:
        draw.text((padding, y0 + bar.top_px + 6), f"{bar.project.project_id} {bar.project.name}"[:32], fill=_TEXT, font=font)

    path = Path(out_path)
    image.save(path)
    return path


def _new_canvas(width: int, height: int, color: RGB) -> np.ndarray:
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    canvas[:, :] = color
    return canvas


def _fill_rect(canvas: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGB) -> None:
    xa = max(0, min(x0, x1))
    xb = min(canvas.shape[1], max(x0, x1))
    ya = max(0, min(y0, y1))
    yb = min(canvas.shape[0], max(y0, y1))
    if xa >= xb or ya >= yb:
        return
    canvas[ya:yb, xa:xb] = color


def _span_px(geometry: Geometry, x0: int, chart_width: int) -> tuple[int, int]:
    left = max(0.0, geometry.left_percent)
    right = min(100.0, geometry.right_percent)
    start = x0 + int(round(left / 100.0 * chart_width))
    end = x0 + int(round(right / 100.0 * chart_width))
    return start, max(end, start + 2)


def _hex_to_rgb(value: str) -> RGB:
    text = value.lstrip("#")
    return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
