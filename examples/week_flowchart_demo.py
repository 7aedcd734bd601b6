from __future__ import annotations

import argparse
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from weekline_ui.timeline import (
    build_week_layout,
    export_week_bundle,
    load_board_model,
    load_timeline_config,
    parse_date,
    require_valid_board,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Week flow chart demo renderer.")
    parser.add_argument("--board", default="examples/boards/sample_board.json")
    parser.add_argument("--config", default="examples/boards/weekline.toml")
    parser.add_argument("--week", default="2024-01-08")
    parser.add_argument("--today", default="2024-01-10")
    parser.add_argument("--export-dir", default="examples/boards/exports")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    board = load_board_model(args.board)
    config = load_timeline_config(args.config)
    week_start = parse_date(args.week, field_name="--week")
    today = parse_date(args.today, field_name="--today")

    require_valid_board(board, week_start, today=today, config=config)
    layout = build_week_layout(board, week_start, today=today, config=config)
    bundle = export_week_bundle(layout, out_dir=args.export_dir, prefix="sample")

    print(f"{len(layout.project_bars)} project(s) visible, row height {layout.row_height}px")
    print("\n".join(f"- {key}: {value}" for key, value in bundle.as_dict().items()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
