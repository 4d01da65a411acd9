"""
Jinja2 rendering of chart layouts.

The web app and the static exporter share the same templates:

    templates/partials/chart_svg.html   axes + bars, no page chrome
    templates/index.html                page with the sort checkbox

render_standalone_html() inlines the CSS and JS and embeds the transition
plans for both sort orders, so the exported file works from disk with no
server behind it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from chart.layout import build_layout
from chart.state import ChartState, SortOrder
from utils.formatting import format_amount

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PROJECT_ROOT / "templates"
STATIC_DIR = PROJECT_ROOT / "static"


def fmt_amount(value) -> str:
    """Jinja filter: amount with thousands separators, "-" for non-numbers."""
    try:
        return format_amount(float(value))
    except (TypeError, ValueError):
        return "-"


def to_script_json(value: Any) -> str:
    """JSON safe to place inside a <script> element."""
    return (
        json.dumps(value, separators=(",", ":"))
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def register_filters(env: Environment) -> None:
    env.filters["fmt_amount"] = fmt_amount
    env.filters["script_json"] = to_script_json


def get_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "svg"]),
    )
    register_filters(env)
    return env


def page_context(state: ChartState, title: str = "Causes of death") -> dict[str, Any]:
    """Template variables shared by the served page and the static export."""
    layout = build_layout(state)
    return {
        "title": title,
        "layout": layout,
        "checked": layout.order == SortOrder.AMOUNT.value,
    }


def render_svg(state: ChartState, env: Environment | None = None) -> str:
    """Standalone SVG document for the current state."""
    env = env or get_environment()
    svg = env.get_template("partials/chart_svg.html").render(
        layout=build_layout(state), standalone=True
    )
    return svg.strip() + "\n"


def render_standalone_html(state: ChartState, title: str = "Causes of death",
                           env: Environment | None = None) -> str:
    """Self-contained HTML page: inline assets, both sort plans embedded."""
    env = env or get_environment()
    plans = {order.value: state.preview(order).to_dict() for order in SortOrder}
    context = page_context(state, title)
    context["inline_assets"] = {
        "css": (STATIC_DIR / "css" / "chart.css").read_text(encoding="utf-8"),
        "js": (STATIC_DIR / "js" / "chart.js").read_text(encoding="utf-8"),
    }
    context["plans"] = plans
    return env.get_template("index.html").render(**context)
