"""
Chart state and the sort/animate controller.

ChartState owns everything that changes while a chart is on screen: the
record sequence, the band scale built from its current order, the active
SortOrder and a generation counter for transitions. The amount scale is
built once and never changes.

Toggling the sort produces a TransitionPlan: for every bar and x-axis tick
its new position and a start delay of ``rank × delay_step_ms``, where rank is
the element's index in the new order. Clients apply the plan with CSS
transitions.

Overlapping toggles:
    Every plan carries an increasing ``generation``. A plan requested while
    the previous one is still running (its last delay + duration has not
    elapsed) is flagged ``supersedes=True``; clients retarget elements from
    wherever they are and ignore any plan older than the newest one seen.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Callable, Iterable

from chart.scales import BandScale, LinearScale, build_scales
from pipeline.parsing import Record
from utils.config import ChartConfig

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    CAUSE = "cause"
    AMOUNT = "amount"

    @classmethod
    def from_checked(cls, checked: bool) -> "SortOrder":
        """Map the sort checkbox state to an order (checked = by amount)."""
        return cls.AMOUNT if checked else cls.CAUSE


def sort_records(records: Iterable[Record], order: SortOrder) -> list[Record]:
    """Stable sort: amount descending, or cause ascending by code point."""
    if order is SortOrder.AMOUNT:
        return sorted(records, key=lambda r: -r.amount)
    return sorted(records, key=lambda r: r.cause)


@dataclass(frozen=True)
class BarTransition:
    id: int          # Record.line, stable across re-sorts
    cause: str
    x: float
    rank: int
    delay_ms: int


@dataclass(frozen=True)
class TickTransition:
    cause: str
    position: float  # band centre
    rank: int
    delay_ms: int


@dataclass
class TransitionPlan:
    order: SortOrder
    generation: int
    duration_ms: int
    bars: list[BarTransition] = field(default_factory=list)
    ticks: list[TickTransition] = field(default_factory=list)
    supersedes: bool = False

    @property
    def total_ms(self) -> int:
        """Time from the start of the plan until its last element settles."""
        last_delay = max((b.delay_ms for b in self.bars), default=0)
        return last_delay + self.duration_ms

    def to_dict(self) -> dict:
        return {
            "order": self.order.value,
            "generation": self.generation,
            "duration_ms": self.duration_ms,
            "total_ms": self.total_ms,
            "supersedes": self.supersedes,
            "bars": [asdict(b) for b in self.bars],
            "ticks": [asdict(t) for t in self.ticks],
        }


def build_plan(records: list[Record], x: BandScale, order: SortOrder,
               generation: int, config: ChartConfig) -> TransitionPlan:
    """Transition plan for records already sorted into ``order`` under scale x."""
    step = config.delay_step_ms
    bars = [
        BarTransition(id=r.line, cause=r.cause, x=x(r.cause), rank=i, delay_ms=i * step)
        for i, r in enumerate(records)
    ]
    ticks = [
        TickTransition(cause=c, position=x.center(c), rank=i, delay_ms=i * step)
        for i, c in enumerate(x.domain)
    ]
    return TransitionPlan(order=order, generation=generation,
                          duration_ms=config.duration_ms, bars=bars, ticks=ticks)


class ChartState:
    """Explicit application state for one chart.

    Thread-safe: the web app calls it from a worker thread pool.

    Args:
        records: Records in any order; the first render sorts them by cause.
        config: Canvas geometry and timings
        clock: Monotonic seconds source, injectable for tests
    """

    def __init__(self, records: Iterable[Record], config: ChartConfig | None = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.config = config or ChartConfig()
        self.config.validate()
        self._records = sort_records(records, SortOrder.CAUSE)
        self.x, self.y = build_scales(self._records, self.config)
        self.order = SortOrder.CAUSE
        self.generation = 0
        self._clock = clock
        self._busy_until = 0.0
        self._lock = threading.Lock()

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    @property
    def causes(self) -> list[str]:
        return [r.cause for r in self._records]

    @property
    def max_amount(self) -> float:
        return self.y.domain[1]

    def is_animating(self) -> bool:
        return self._clock() < self._busy_until

    def set_order(self, order: SortOrder) -> TransitionPlan:
        """Re-sort, rebuild the band scale and return the transition plan."""
        order = SortOrder(order)
        with self._lock:
            supersedes = self.is_animating()
            self._records = sort_records(self._records, order)
            self.x = self.x.with_domain(self.causes)
            self.order = order
            self.generation += 1
            plan = build_plan(self._records, self.x, order, self.generation, self.config)
            plan.supersedes = supersedes
            self._busy_until = self._clock() + plan.total_ms / 1000
        if supersedes:
            logger.info("Sort to %s (gen %d) supersedes a running transition",
                        order.value, plan.generation)
        else:
            logger.debug("Sort to %s (gen %d)", order.value, plan.generation)
        return plan

    def toggle(self, checked: bool) -> TransitionPlan:
        """Apply the sort checkbox: checked sorts by amount, unchecked by cause."""
        return self.set_order(SortOrder.from_checked(checked))

    def preview(self, order: SortOrder) -> TransitionPlan:
        """The plan set_order(order) would produce, without changing state."""
        order = SortOrder(order)
        with self._lock:
            records = sort_records(self._records, order)
            x = self.x.with_domain(r.cause for r in records)
            return build_plan(records, x, order, self.generation, self.config)

    def snapshot(self) -> tuple[list[Record], BandScale, LinearScale, SortOrder, int]:
        """Consistent copy of (records, x, y, order, generation) for rendering."""
        with self._lock:
            return list(self._records), self.x, self.y, self.order, self.generation
