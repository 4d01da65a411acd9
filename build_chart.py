"""
Static chart export CLI.

Loads a Statistics Netherlands export and writes the sortable bar chart as a
self-contained HTML page (CSS, JS and both sort plans inlined) or as a plain
SVG.

Usage:
    # HTML page next to the data
    python build_chart.py --data data.csv --output chart.html

    # SVG, pre-sorted by amount
    python build_chart.py --data data.csv --output chart.svg --sort amount

    # Only parse and report, write nothing
    python build_chart.py --data data.csv --dry-run
"""

import argparse
import logging
import sys
from pathlib import Path

from chart.render import render_standalone_html, render_svg
from chart.state import ChartState, SortOrder
from pipeline.errors import DataLoadError, ParseError
from pipeline.loader import load_records
from utils.config import ChartConfig, ParseConfig, parse_margin


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export the causes-of-death bar chart as HTML or SVG"
    )
    parser.add_argument(
        "--data", default="data.csv",
        help="Path or URL of the export (default: data.csv)"
    )
    parser.add_argument(
        "--output", type=Path, default=Path("chart.html"),
        help="Output file; .svg writes an SVG, anything else HTML (default: chart.html)"
    )
    parser.add_argument(
        "--sort", choices=[o.value for o in SortOrder], default=None,
        help="Sort order of the rendered bars (default: cause)"
    )
    parser.add_argument(
        "--title", default="Causes of death",
        help="Page title (HTML only)"
    )
    parser.add_argument("--width", type=int, default=960, help="Canvas width (default: 960)")
    parser.add_argument("--height", type=int, default=500, help="Canvas height (default: 500)")
    parser.add_argument(
        "--margin", default="20,20,30,40",
        help="top,right,bottom,left margins (default: 20,20,30,40)"
    )
    parser.add_argument("--anchor", default=None, help="String marking the first data row")
    parser.add_argument("--sentinel", default=None, help="String marking the footer row")
    parser.add_argument(
        "--no-footer-check", action="store_true",
        help="Keep all rows when the footer sentinel is missing instead of failing"
    )
    parser.add_argument(
        "--encoding", default=None,
        help="Text encoding of the export (default: iso-8859-1)"
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="JSON file with ParseConfig settings (CLI flags override it)"
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Parse and print the load summary without writing output"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    """Parse arguments, load the data and write the chart."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )

    try:
        parse_cfg = ParseConfig.load_json(args.config) if args.config else ParseConfig()
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}")
        return 2
    if args.anchor:
        parse_cfg.anchor = args.anchor
    if args.sentinel:
        parse_cfg.sentinel = args.sentinel
    if args.encoding:
        parse_cfg.encoding = args.encoding
    if args.no_footer_check:
        parse_cfg.require_footer = False

    chart_cfg = ChartConfig()
    chart_cfg.width = args.width
    chart_cfg.height = args.height
    try:
        chart_cfg.margin = parse_margin(args.margin)
        chart_cfg.validate()
    except ValueError as e:
        print(f"ERROR: {e}")
        return 2

    try:
        records, report = load_records(args.data, parse_cfg)
    except (DataLoadError, ParseError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"  {report.console_summary()}")
    if args.dry_run:
        for r in records:
            print(f"    {r.amount:>12,.0f}  {r.cause}")
        return 0

    state = ChartState(records, chart_cfg)
    if args.sort:
        state.set_order(SortOrder(args.sort))

    if args.output.suffix.lower() == ".svg":
        content = render_svg(state)
    else:
        content = render_standalone_html(state, title=args.title)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(content, encoding="utf-8")
    print(f"  Wrote {args.output} ({len(records)} bars, order: {state.order.value})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
