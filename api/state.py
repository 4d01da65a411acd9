"""
Chart state access for the API.

The app's lifespan stores one ChartState on ``app.state.chart`` after the
data file has loaded. Routes take it through the get_chart_state() dependency
rather than a module global, so tests can hand create_app() a prebuilt state.
"""

from fastapi import HTTPException, Request

from chart.state import ChartState


def get_chart_state(request: Request) -> ChartState:
    """FastAPI dependency: the loaded ChartState, or 503 if none is loaded."""
    state = getattr(request.app.state, "chart", None)
    if state is None:
        raise HTTPException(
            status_code=503,
            detail="Chart data not loaded. Start the app with a readable APP_DATA_SOURCE.",
        )
    return state
