"""
Pydantic request/response models for the chart API.

Field() descriptions and examples feed the OpenAPI docs at /docs.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from chart.state import SortOrder


# ── Data models ───────────────────────────────────────────────────────────────

class RecordOut(BaseModel):
    """One (cause, amount) pair from the data file."""
    cause: str = Field(..., description="Category label", examples=["2 Neoplasms"])
    amount: float = Field(..., ge=0, description="Number of deaths", examples=[46000.0])
    line: int = Field(..., description="Line number in the cleaned text; stable bar id", examples=[3])


# ── Layout models ─────────────────────────────────────────────────────────────

class BarOut(BaseModel):
    """Pixel geometry of one bar, relative to the plot area."""
    id: int = Field(..., description="Stable bar id (record line)")
    cause: str
    amount: float
    x: float = Field(..., description="Left edge (band start)")
    y: float = Field(..., description="Top edge")
    width: float = Field(..., description="Band width")
    height: float = Field(..., description="Inner height minus y")


class TickOut(BaseModel):
    """One axis tick."""
    label: str = Field(..., examples=["45k"])
    position: float = Field(..., description="Pixel offset along the axis")
    value: Optional[float] = Field(None, description="Data value (y axis only)")


class ChartLayoutOut(BaseModel):
    """Full render model for the current sort order."""
    width: int = Field(..., examples=[960])
    height: int = Field(..., examples=[500])
    margin: dict[str, int] = Field(..., examples=[{"top": 20, "right": 20, "bottom": 30, "left": 40}])
    inner_width: int
    inner_height: int
    order: SortOrder = Field(..., description="Current sort order")
    generation: int = Field(..., description="Number of sorts applied so far")
    bandwidth: float
    y_domain: list[float] = Field(..., description="[0, max amount]; fixed for the session")
    bars: list[BarOut]
    x_ticks: list[TickOut]
    y_ticks: list[TickOut]


# ── Sort models ───────────────────────────────────────────────────────────────

class SortRequest(BaseModel):
    """Body of POST /api/v1/chart/sort.

    Give either ``order`` or the checkbox state ``checked``
    (checked = by amount).
    """
    order: Optional[SortOrder] = Field(None, examples=["amount"])
    checked: Optional[bool] = Field(None, examples=[True])

    @model_validator(mode="after")
    def _one_of(self) -> "SortRequest":
        if (self.order is None) == (self.checked is None):
            raise ValueError("Provide exactly one of 'order' or 'checked'")
        return self

    def resolved_order(self) -> SortOrder:
        if self.order is not None:
            return self.order
        return SortOrder.from_checked(bool(self.checked))


class BarTransitionOut(BaseModel):
    id: int
    cause: str
    x: float = Field(..., description="New band start")
    rank: int = Field(..., description="Index in the new order")
    delay_ms: int = Field(..., description="rank × delay step")


class TickTransitionOut(BaseModel):
    cause: str
    position: float = Field(..., description="New band centre")
    rank: int
    delay_ms: int


class TransitionPlanOut(BaseModel):
    """Staggered animation to the new sort order."""
    order: SortOrder
    generation: int = Field(..., description="Increases with every sort; clients drop older plans")
    duration_ms: int = Field(..., examples=[250])
    total_ms: int = Field(..., description="Last delay plus duration")
    supersedes: bool = Field(..., description="True if an earlier transition was still running")
    bars: list[BarTransitionOut]
    ticks: list[TickTransitionOut]


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Bad request"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[400])
