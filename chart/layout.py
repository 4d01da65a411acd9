"""
Render model: pixel geometry for the axes and bars of the current chart state.

build_layout() is the only place scale output is turned into rectangles and
tick positions; the SVG template, the JSON API and the static export all
draw from the ChartLayout it returns.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from chart.state import ChartState


@dataclass(frozen=True)
class BarLayout:
    id: int
    cause: str
    amount: float
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TickLayout:
    label: str
    position: float
    value: float | None = None


@dataclass
class ChartLayout:
    width: int
    height: int
    margin: dict[str, int]
    inner_width: int
    inner_height: int
    order: str
    generation: int
    bandwidth: float
    y_domain: tuple[float, float]
    bars: list[BarLayout] = field(default_factory=list)
    x_ticks: list[TickLayout] = field(default_factory=list)
    y_ticks: list[TickLayout] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["y_domain"] = list(self.y_domain)
        return d


def build_layout(state: ChartState) -> ChartLayout:
    """Axes and one bar per record for the state's current order."""
    records, x, y, order, generation = state.snapshot()
    cfg = state.config
    inner_height = cfg.inner_height

    bars = []
    for r in records:
        top = y(r.amount)
        bars.append(BarLayout(
            id=r.line,
            cause=r.cause,
            amount=r.amount,
            x=x(r.cause),
            y=top,
            width=x.bandwidth,
            height=inner_height - top,
        ))

    x_ticks = [TickLayout(label=c, position=x.center(c)) for c in x.domain]
    fmt = y.tick_format(cfg.y_tick_count)
    y_ticks = [
        TickLayout(label=fmt(v), position=y(v), value=v)
        for v in y.ticks(cfg.y_tick_count)
    ]

    return ChartLayout(
        width=cfg.width,
        height=cfg.height,
        margin=dict(cfg.margin),
        inner_width=cfg.inner_width,
        inner_height=inner_height,
        order=order.value,
        generation=generation,
        bandwidth=x.bandwidth,
        y_domain=y.domain,
        bars=bars,
        x_ticks=x_ticks,
        y_ticks=y_ticks,
    )
