from __future__ import annotations

import datetime as dt
import unittest

from weekline_ui.timeline.schema import FlowProject, FlowTask, TimeRange, VisualBounds, WeekWindow
from weekline_ui.timeline.visibility import (
    is_project_visible,
    is_range_visible,
    is_task_overdue,
    is_task_visible,
    range_extensions,
    task_span,
    visible_tasks,
    visual_bounds,
)

WEEK = WeekWindow(start=dt.date(2024, 1, 1), end=dt.date(2024, 1, 7))
TODAY = dt.date(2024, 1, 3)


def _project(**overrides: object) -> FlowProject:
    values: dict[str, object] = {
        "project_id": "P-1",
        "name": "Relaunch",
        "start_date": dt.date(2024, 1, 1),
        "end_date": dt.date(2024, 1, 20),
    }
    values.update(overrides)
    return FlowProject(**values)  # type: ignore[arg-type]


def _task(task_id: str = "T-1", **overrides: object) -> FlowTask:
    values: dict[str, object] = {"task_id": task_id, "project_id": "P-1", "name": task_id}
    values.update(overrides)
    return FlowTask(**values)  # type: ignore[arg-type]


class RangeVisibilityTests(unittest.TestCase):
    def test_overlap_law(self) -> None:
        base = dt.date(2023, 12, 25)
        for start_offset in range(0, 21, 3):
            for length in (0, 1, 4, 9):
                start = base + dt.timedelta(days=start_offset)
                end = start + dt.timedelta(days=length)
                expected = not (end < WEEK.start or start > WEEK.end)
                self.assertEqual(is_range_visible(TimeRange(start, end), WEEK), expected, (start, end))

    def test_ongoing_range_visible_once_started(self) -> None:
        self.assertTrue(is_range_visible(TimeRange(dt.date(2023, 12, 1)), WEEK))
        self.assertTrue(is_range_visible(TimeRange(dt.date(2024, 1, 7)), WEEK))
        self.assertFalse(is_range_visible(TimeRange(dt.date(2024, 1, 8)), WEEK))

    def test_widening_window_never_hides_visible_range(self) -> None:
        wide = WeekWindow(start=dt.date(2023, 12, 25), end=dt.date(2024, 1, 14))
        base = dt.date(2023, 12, 20)
        for start_offset in range(0, 28, 2):
            for length in (0, 2, 6):
                start = base + dt.timedelta(days=start_offset)
                for span in (TimeRange(start, start + dt.timedelta(days=length)), TimeRange(start)):
                    if is_range_visible(span, WEEK):
                        self.assertTrue(is_range_visible(span, wide), span)

    def test_datetime_window_compares_by_calendar_day(self) -> None:
        window = WeekWindow(start=dt.datetime(2024, 1, 1, 9, 0), end=dt.datetime(2024, 1, 7, 18, 0))
        self.assertEqual(window.start, dt.date(2024, 1, 1))
        self.assertEqual(window.end, dt.date(2024, 1, 7))
        self.assertTrue(is_range_visible(TimeRange(dt.date(2024, 1, 7)), window))
        self.assertEqual(
            visual_bounds(TimeRange(dt.datetime(2023, 12, 30, 23, 0), dt.datetime(2024, 1, 2, 1, 0)), window),
            VisualBounds(dt.date(2024, 1, 1), dt.date(2024, 1, 2)),
        )
        self.assertTrue(window.contains(dt.datetime(2024, 1, 7, 23, 59)))

    def test_range_extensions(self) -> None:
        ongoing = range_extensions(TimeRange(dt.date(2024, 1, 3)), WEEK)
        self.assertFalse(ongoing.starts_before_week)
        self.assertTrue(ongoing.ends_after_week)

        early = range_extensions(TimeRange(dt.date(2023, 12, 28), dt.date(2024, 1, 3)), WEEK)
        self.assertTrue(early.starts_before_week)
        self.assertFalse(early.ends_after_week)

    def test_visual_bounds_clip_to_window(self) -> None:
        self.assertEqual(
            visual_bounds(TimeRange(dt.date(2023, 12, 28), dt.date(2024, 1, 3)), WEEK),
            VisualBounds(dt.date(2024, 1, 1), dt.date(2024, 1, 3)),
        )
        self.assertEqual(
            visual_bounds(TimeRange(dt.date(2024, 1, 4)), WEEK),
            VisualBounds(dt.date(2024, 1, 4), dt.date(2024, 1, 7)),
        )

    def test_visual_bounds_never_inverted(self) -> None:
        bounds = visual_bounds(TimeRange(dt.date(2023, 12, 1), dt.date(2023, 12, 5)), WEEK)
        self.assertLessEqual(bounds.visual_start, bounds.visual_end)
        self.assertEqual(bounds.visual_start, WEEK.start)

    def test_project_visibility(self) -> None:
        self.assertTrue(is_project_visible(_project(), WEEK))
        self.assertTrue(is_project_visible(_project(start_date=dt.date(2023, 6, 1), end_date=None), WEEK))
        self.assertFalse(
            is_project_visible(_project(start_date=dt.date(2023, 11, 1), end_date=dt.date(2023, 11, 30)), WEEK)
        )


class TaskVisibilityTests(unittest.TestCase):
    def test_done_tasks_never_visible(self) -> None:
        for dates in ({}, {"start_date": dt.date(2024, 1, 2), "end_date": dt.date(2024, 1, 4)}):
            task = _task(status="done", **dates)
            self.assertFalse(is_task_visible(task, WEEK, _project(), today=TODAY))

    def test_undated_task_always_visible(self) -> None:
        far_week = WeekWindow(start=dt.date(2025, 6, 2), end=dt.date(2025, 6, 8))
        self.assertTrue(is_task_visible(_task(), far_week, _project(), today=TODAY))

    def test_overdue_task_visible_while_today_in_window(self) -> None:
        task = _task(start_date=dt.date(2023, 12, 20), end_date=dt.date(2023, 12, 29))
        self.assertTrue(is_task_overdue(task, today=TODAY))
        self.assertTrue(is_task_visible(task, WEEK, _project(), today=TODAY))
        self.assertFalse(is_task_visible(task, WEEK, _project(), today=dt.date(2024, 1, 10)))

    def test_overdue_task_visible_while_its_range_overlaps(self) -> None:
        task = _task(start_date=dt.date(2024, 1, 2), end_date=dt.date(2024, 1, 4))
        later = dt.date(2024, 1, 10)
        self.assertTrue(is_task_overdue(task, today=later))
        self.assertFalse(WEEK.contains(later))
        self.assertTrue(is_task_visible(task, WEEK, _project(), today=later))

    def test_overdue_rules(self) -> None:
        self.assertTrue(is_task_overdue(_task(end_date=dt.date(2024, 1, 2)), today=TODAY))
        self.assertFalse(is_task_overdue(_task(end_date=TODAY), today=TODAY))
        self.assertFalse(is_task_overdue(_task(status="done", end_date=dt.date(2024, 1, 2)), today=TODAY))
        self.assertFalse(is_task_overdue(_task(start_date=dt.date(2023, 12, 1)), today=TODAY))

    def test_task_span_inherits_missing_dates_from_project(self) -> None:
        project = _project()
        self.assertEqual(
            task_span(_task(start_date=dt.date(2024, 1, 2)), project),
            TimeRange(dt.date(2024, 1, 2), dt.date(2024, 1, 20)),
        )
        ongoing = _project(end_date=None)
        self.assertTrue(task_span(_task(start_date=dt.date(2024, 1, 2)), ongoing).is_ongoing)

    def test_task_span_never_inverted(self) -> None:
        span = task_span(_task(end_date=dt.date(2023, 12, 1)), _project())
        self.assertEqual(span, TimeRange(dt.date(2024, 1, 1), dt.date(2024, 1, 1)))

    def test_visible_tasks_keeps_input_order(self) -> None:
        tasks = (
            _task("T-1", start_date=dt.date(2024, 1, 5), end_date=dt.date(2024, 1, 6)),
            _task("T-2", status="done"),
            _task("T-3", start_date=dt.date(2024, 2, 1), end_date=dt.date(2024, 2, 2)),
            _task("T-4"),
        )
        shown = visible_tasks(tasks, WEEK, _project(), today=TODAY)
        self.assertEqual([t.task_id for t in shown], ["T-1", "T-4"])


if __name__ == "__main__":
    unittest.main()
