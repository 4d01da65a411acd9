"""
Tests for chart/layout.py and chart/render.py

Layout numbers use the default 960x500 canvas (plot area 900x450) and the
sample export from conftest.py.
"""
import re
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from chart.layout import build_layout
from chart.render import (
    fmt_amount,
    get_environment,
    page_context,
    render_standalone_html,
    render_svg,
    to_script_json,
)
from chart.state import SortOrder


def _bar_transforms(svg: str) -> dict[str, str]:
    return dict(re.findall(r'data-id="(\d+)"[^>]*translateX\(([\d.]+)px\)', svg))


# ── build_layout ──────────────────────────────────────────────────────────────

class TestBuildLayout:
    def test_canvas(self, chart_state):
        layout = build_layout(chart_state)
        assert (layout.width, layout.height) == (960, 500)
        assert (layout.inner_width, layout.inner_height) == (900, 450)
        assert layout.margin == {"top": 20, "right": 20, "bottom": 30, "left": 40}

    def test_bar_geometry(self, chart_state):
        bars = {b.cause: b for b in build_layout(chart_state).bars}
        neo = bars["2 Neoplasms"]
        assert (neo.x, neo.y, neo.width, neo.height) == (371, 0, 158, 450)
        inf = bars["1 Infectious and parasitic diseases"]
        assert (inf.y, inf.height) == (426, 24)
        assert bars["10 Diseases of the circulatory system"].height == 362
        assert bars["3 Diseases of the blood, blood-forming organs"].height == 4

    def test_tiny_amount_zero_height(self, chart_state):
        tb = next(b for b in build_layout(chart_state).bars if b.cause == "Tuberculosis")
        assert tb.height == 0
        assert tb.y == 450

    def test_bar_height_matches_scale(self, chart_state):
        layout = build_layout(chart_state)
        for bar in layout.bars:
            assert bar.y + bar.height == layout.inner_height
            assert bar.height >= 0

    def test_x_ticks_at_band_centres(self, chart_state, cause_order):
        layout = build_layout(chart_state)
        assert [t.label for t in layout.x_ticks] == cause_order
        assert [t.position for t in layout.x_ticks] == [98, 274, 450, 626, 802]

    def test_y_ticks(self, chart_state):
        ticks = build_layout(chart_state).y_ticks
        assert [t.label for t in ticks] == [f"{i * 5}k" for i in range(10)]
        assert ticks[0].position == 450
        assert ticks[1].position == 401
        assert ticks[-1].position == 10
        assert ticks[-1].value == 45000

    def test_follows_sort(self, chart_state, amount_order):
        chart_state.set_order(SortOrder.AMOUNT)
        layout = build_layout(chart_state)
        assert layout.order == "amount"
        assert layout.generation == 1
        assert [b.cause for b in layout.bars] == amount_order
        assert [b.x for b in layout.bars] == [19, 195, 371, 547, 723]

    def test_y_unchanged_by_sort(self, chart_state):
        before = {b.cause: (b.y, b.height) for b in build_layout(chart_state).bars}
        chart_state.set_order(SortOrder.AMOUNT)
        after = {b.cause: (b.y, b.height) for b in build_layout(chart_state).bars}
        assert before == after

    def test_to_dict(self, chart_state):
        d = build_layout(chart_state).to_dict()
        assert d["y_domain"] == [0.0, 46000.0]
        assert d["bars"][0]["cause"] == "1 Infectious and parasitic diseases"
        assert d["x_ticks"][0] == {"label": "1 Infectious and parasitic diseases",
                                   "position": 98, "value": None}


# ── filters ───────────────────────────────────────────────────────────────────

class TestFilters:
    def test_fmt_amount(self):
        assert fmt_amount(46000) == "46,000"
        assert fmt_amount("390") == "390"
        assert fmt_amount(None) == "-"
        assert fmt_amount("x") == "-"

    def test_script_json_escapes_tags(self):
        out = to_script_json({"cause": "</script><b>&"})
        assert "</script>" not in out
        assert "\\u003c/script\\u003e" in out
        assert "\\u0026" in out

    def test_environment_has_filters(self):
        env = get_environment()
        assert "fmt_amount" in env.filters
        assert "script_json" in env.filters


# ── render_svg ────────────────────────────────────────────────────────────────

class TestRenderSvg:
    def test_standalone_document(self, chart_state):
        svg = render_svg(chart_state)
        assert svg.startswith('<svg class="chart" xmlns="http://www.w3.org/2000/svg"')
        assert svg.rstrip().endswith("</svg>")

    def test_one_rect_per_record(self, chart_state):
        assert render_svg(chart_state).count('<rect class="bar"') == 5

    def test_bar_positions(self, chart_state):
        assert _bar_transforms(render_svg(chart_state)) == {
            "1": "19", "5": "195", "3": "371", "4": "547", "2": "723",
        }

    def test_positions_after_sort(self, chart_state):
        chart_state.set_order(SortOrder.AMOUNT)
        assert _bar_transforms(render_svg(chart_state)) == {
            "3": "19", "5": "195", "1": "371", "4": "547", "2": "723",
        }

    def test_labels_escaped(self, chart_state):
        svg = render_svg(chart_state)
        assert "Diseases of the blood, blood-forming organs" in svg
        assert "<title>2 Neoplasms: 46,000</title>" in svg

    def test_y_axis_labels(self, chart_state):
        svg = render_svg(chart_state)
        assert ">45k</text>" in svg
        assert ">0k</text>" in svg

    def test_tick_data_attributes(self, chart_state):
        svg = render_svg(chart_state)
        assert 'data-cause="Tuberculosis"' in svg
        assert "translate(98px, 0px)" in svg


# ── page rendering ────────────────────────────────────────────────────────────

class TestPage:
    def test_page_context(self, chart_state):
        ctx = page_context(chart_state, "Deaths")
        assert ctx["title"] == "Deaths"
        assert ctx["checked"] is False
        chart_state.set_order(SortOrder.AMOUNT)
        assert page_context(chart_state)["checked"] is True

    def test_standalone_html_inlines_assets(self, chart_state):
        html = render_standalone_html(chart_state, title="Deaths 2016")
        assert "<title>Deaths 2016</title>" in html
        assert "/static/" not in html
        assert "<style>" in html
        assert "CHART_PLANS" in html
        assert 'id="sort-toggle"' in html

    def test_standalone_html_embeds_both_plans(self, chart_state):
        html = render_standalone_html(chart_state)
        assert '"amount":{"order":"amount"' in html
        assert '"cause":{"order":"cause"' in html

    def test_standalone_html_leaves_state_alone(self, chart_state, cause_order):
        render_standalone_html(chart_state)
        assert chart_state.causes == cause_order
        assert chart_state.generation == 0
