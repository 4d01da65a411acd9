"""
Frontend HTML routes.

Serves the Jinja2 chart page. The page draws the SVG server-side from the
current ChartState; static/js/chart.js handles the sort checkbox.

Routes:
    GET /            → index.html (chart + sort toggle)
    GET /chart.svg   → standalone SVG of the current order
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from api.state import get_chart_state
from chart.render import page_context, render_svg
from chart.state import ChartState

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised: call set_templates() first")
    return _templates


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request, state: ChartState = Depends(get_chart_state)) -> HTMLResponse:
    """Chart page."""
    return _tmpl().TemplateResponse(request, "index.html", page_context(state))


@router.get("/chart.svg", include_in_schema=False)
def chart_svg(state: ChartState = Depends(get_chart_state)) -> Response:
    """The chart as an SVG document."""
    return Response(render_svg(state, _tmpl().env), media_type="image/svg+xml")
