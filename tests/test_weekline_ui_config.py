from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from weekline_ui.timeline.config import (
    LayoutConfig,
    StackingConfig,
    TimelineConfig,
    load_timeline_config,
    timeline_config_from_dict,
)


class TimelineConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = TimelineConfig()
        self.assertEqual(config.layout.container_width, 1000.0)
        self.assertEqual(config.layout.weekend_column_width, 48.0)
        self.assertEqual(config.layout.grid_mode, "calendar")
        self.assertEqual(config.stacking.task_bar_height, 32)
        self.assertEqual(config.stacking.max_projects_per_row, 10)

    def test_load_from_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "weekline.toml"
            path.write_text(
                "[layout]\ngrid_mode = \"workdays\"\ncontainer_width = 800.0\n\n[stacking]\nproject_gap = 4\n",
                encoding="utf-8",
            )
            config = load_timeline_config(path)
        self.assertEqual(config.layout.grid_mode, "workdays")
        self.assertEqual(config.layout.container_width, 800.0)
        self.assertEqual(config.stacking.project_gap, 4)
        self.assertEqual(config.stacking.task_bar_height, 32)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_timeline_config("/nonexistent/weekline.toml")

    def test_unknown_keys_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "column_count"):
            timeline_config_from_dict({"layout": {"column_count": 7}})
        with self.assertRaises(TypeError):
            timeline_config_from_dict({"stacking": 3})

    def test_value_validation(self) -> None:
        with self.assertRaises(ValueError):
            LayoutConfig(grid_mode="fortnight")
        with self.assertRaises(ValueError):
            LayoutConfig(container_width=0)
        with self.assertRaises(ValueError):
            StackingConfig(project_gap=-1)
        with self.assertRaises(ValueError):
            StackingConfig(max_projects_per_row=0)
        with self.assertRaises(ValueError):
            LayoutConfig(today_first_column_width_percent=-5.0)
        with self.assertRaises(ValueError):
            LayoutConfig(today_min_width_percent=120.0)
        with self.assertRaises(ValueError):
            LayoutConfig(display_left_floor=10.0)


if __name__ == "__main__":
    unittest.main()
