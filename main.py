from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
from pathlib import Path

from weekline_ui.timeline import (
    TimelineConfig,
    WeekRenderConfig,
    build_week_layout,
    current_week_monday,
    export_week_bundle,
    load_board_model,
    load_timeline_config,
    parse_date,
    render_week_ascii,
    render_week_markdown,
    user_projects,
    validate_board_suite,
)


def main() -> None:
    parser = argparse.ArgumentParser(prog="weekline")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render-week", help="Print the week layout for a board JSON file.")
    _add_layout_args(render)
    render.add_argument("--format", choices=["ascii", "markdown"], default="ascii")
    render.add_argument("--chart-width", type=int, default=70)

    export = sub.add_parser("export-week", help="Write ascii/markdown/png artifacts for one week.")
    _add_layout_args(export)
    export.add_argument("--out-dir", type=Path, required=True)
    export.add_argument("--prefix", default="weekline")

    validate = sub.add_parser("validate", help="Check board integrity and layout consistency.")
    _add_layout_args(validate)

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    board = load_board_model(args.board)
    config = load_timeline_config(args.config) if args.config is not None else TimelineConfig()
    today = parse_date(args.today, field_name="--today") if args.today else dt.date.today()
    week_start = parse_date(args.week, field_name="--week") if args.week else current_week_monday(today)

    if args.command == "validate":
        report = validate_board_suite(board, week_start, today=today, config=config)
        print(json.dumps({"ok": report.ok, "errors": report.errors, "warnings": report.warnings}, indent=2))
        if not report.ok:
            raise SystemExit(1)
        return

    projects = user_projects(board, args.user) if args.user else None
    layout = build_week_layout(board, week_start, today=today, config=config, projects=projects)

    if args.command == "render-week":
        if args.format == "markdown":
            print(render_week_markdown(layout), end="")
        else:
            print(render_week_ascii(layout, WeekRenderConfig(chart_width=args.chart_width)), end="")
        return

    if args.command == "export-week":
        bundle = export_week_bundle(layout, out_dir=args.out_dir, prefix=args.prefix)
        print(json.dumps(bundle.as_dict(), indent=2, sort_keys=True))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_layout_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--board", type=Path, required=True)
    parser.add_argument("--week", default=None, help="Any date; the window starts there. Default: this Monday.")
    parser.add_argument("--today", default=None, help="Override today's date (ISO).")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with [layout]/[stacking] tables.")
    parser.add_argument("--user", default=None, help="Only show projects on this user's row.")


if __name__ == "__main__":
    main()
