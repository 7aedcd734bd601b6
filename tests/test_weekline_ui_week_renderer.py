from __future__ import annotations

import datetime as dt
import unittest

from weekline_ui.timeline.layout import build_week_layout
from weekline_ui.timeline.schema import FlowBoard, FlowProject, FlowTask
from weekline_ui.timeline.week_renderer import WeekRenderConfig, render_week_ascii, render_week_markdown

MONDAY = dt.date(2024, 1, 1)
TODAY = dt.date(2024, 1, 3)


def _board() -> FlowBoard:
    return FlowBoard(
        title="Renderer Test",
        projects=(
            FlowProject(
                project_id="P-1",
                name="Relaunch",
                start_date=dt.date(2024, 1, 1),
                end_date=dt.date(2024, 1, 20),
                tasks=(
                    FlowTask(
                        task_id="T-1",
                        project_id="P-1",
                        name="Copy",
                        status="in-progress",
                        start_date=dt.date(2024, 1, 2),
                        end_date=dt.date(2024, 1, 3),
                        progress=50,
                    ),
                    FlowTask(
                        task_id="T-2",
                        project_id="P-1",
                        name="Late assets",
                        start_date=dt.date(2023, 12, 27),
                        end_date=dt.date(2023, 12, 29),
                    ),
                ),
            ),
            FlowProject(
                project_id="P-2",
                name="Support",
                start_date=dt.date(2023, 12, 1),
                tasks=(FlowTask(task_id="T-3", project_id="P-2", name="Triage", status="blocked"),),
            ),
        ),
    )


class WeekRendererTests(unittest.TestCase):
    def test_ascii_contains_header_and_rows(self) -> None:
        text = render_week_ascii(build_week_layout(_board(), MONDAY, today=TODAY))
        self.assertIn("Renderer Test", text)
        self.assertIn("Week: Mon, Jan 1 - Sun, Jan 7 | today=2024-01-03", text)
        self.assertIn("Status colors:", text)
        self.assertIn("Days:", text)
        self.assertIn("Mon 01", text)
        self.assertIn("P-1 Relaunch", text)
        self.assertIn("17d left", text)
        self.assertIn("Ongoing", text)
        self.assertIn("in-progress 50%", text)
        self.assertIn("todo 0% overdue", text)
        self.assertIn("overdue from today", text)

    def test_ascii_marks_ranges_extending_past_window(self) -> None:
        text = render_week_ascii(build_week_layout(_board(), MONDAY, today=TODAY))
        support_row = next(line for line in text.splitlines() if line.startswith("P-2 Support"))
        self.assertIn("|<", support_row)
        self.assertIn(">|", support_row)

    def test_ascii_without_tasks(self) -> None:
        text = render_week_ascii(
            build_week_layout(_board(), MONDAY, today=TODAY),
            WeekRenderConfig(show_tasks=False),
        )
        self.assertIn("P-1 Relaunch", text)
        self.assertNotIn("T-1 Copy", text)

    def test_ascii_is_deterministic(self) -> None:
        layout = build_week_layout(_board(), MONDAY, today=TODAY)
        self.assertEqual(render_week_ascii(layout), render_week_ascii(layout))

    def test_empty_layout(self) -> None:
        layout = build_week_layout(FlowBoard(title="Empty"), MONDAY, today=TODAY)
        self.assertIn("(no visible projects)", render_week_ascii(layout))
        self.assertIn("_No visible projects._", render_week_markdown(layout))

    def test_markdown_table(self) -> None:
        text = render_week_markdown(build_week_layout(_board(), MONDAY, today=TODAY))
        self.assertTrue(text.startswith("# Renderer Test"))
        self.assertIn("| Bar | Visible | Left % | Width % | Notes |", text)
        self.assertIn("**P-1** Relaunch", text)
        self.assertIn("| 0.0 | 100.0 |", text)
        self.assertIn("T-2 Late assets", text)

    def test_render_config_validation(self) -> None:
        with self.assertRaises(ValueError):
            WeekRenderConfig(chart_width=5)


if __name__ == "__main__":
    unittest.main()
