"""
Chart data endpoints.

Routes:
    GET  /api/v1/records      records in the current sort order
    GET  /api/v1/chart        full render model (bars, ticks, geometry)
    POST /api/v1/chart/sort   apply a sort order, returns the transition plan
"""

from fastapi import APIRouter, Depends

from api.models import ChartLayoutOut, ErrorResponse, RecordOut, SortRequest, TransitionPlanOut
from api.state import get_chart_state
from chart.layout import build_layout
from chart.state import ChartState

router = APIRouter(tags=["chart"])

_NOT_LOADED = {503: {"model": ErrorResponse, "description": "Chart data not loaded"}}


@router.get("/records", response_model=list[RecordOut], responses=_NOT_LOADED,
            summary="Records in current order")
def list_records(state: ChartState = Depends(get_chart_state)) -> list[dict]:
    """Return every record in the order the bars are currently drawn."""
    return [r.to_dict() for r in state.records]


@router.get("/chart", response_model=ChartLayoutOut, responses=_NOT_LOADED,
            summary="Chart render model")
def get_chart(state: ChartState = Depends(get_chart_state)) -> dict:
    """Return bar rectangles, axis ticks and canvas geometry for the current order."""
    return build_layout(state).to_dict()


@router.post(
    "/chart/sort",
    response_model=TransitionPlanOut,
    responses={400: {"model": ErrorResponse, "description": "Unknown sort order"}, **_NOT_LOADED},
    summary="Sort the bars",
)
def sort_chart(body: SortRequest, state: ChartState = Depends(get_chart_state)) -> dict:
    """Re-sort the records and return the staggered transition to the new order.

    Amount sorts descending; cause sorts ascending. Each element's delay is
    its rank in the new order times the configured delay step.
    """
    return state.set_order(body.resolved_order()).to_dict()
