"""
Scales mapping data values to pixel positions.

BandScale and LinearScale reproduce d3's ``scaleBand().rangeRound().padding()``
and ``scaleLinear().rangeRound()`` arithmetic, including JavaScript's
round-half-up, so a layout computed here lines up pixel for pixel with the
same chart drawn by d3.
"""

from __future__ import annotations

import math
from typing import Hashable, Iterable, Sequence

from utils.config import ChartConfig
from utils.formatting import si_formatter

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def js_round(x: float) -> int:
    """Round half up, like JavaScript's Math.round (Python's round() is half-even)."""
    return math.floor(x + 0.5)


class BandScale:
    """Maps each distinct category to a band start on [range_[0], range_[1]].

    Domain values are de-duplicated keeping their first occurrence, so a
    repeated category shares one band.
    """

    def __init__(self, domain: Iterable[Hashable], range_: tuple[float, float],
                 padding: float = 0.1, round_: bool = True, align: float = 0.5) -> None:
        self._domain = list(dict.fromkeys(domain))
        self.range = (range_[0], range_[1])
        self.padding_inner = min(1.0, padding)
        self.padding_outer = padding
        self.round = round_
        self.align = align
        self._rescale()

    def _rescale(self) -> None:
        n = len(self._domain)
        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        step = (stop - start) / max(1, n - self.padding_inner + self.padding_outer * 2)
        if self.round:
            step = math.floor(step)
        start += (stop - start - step * (n - self.padding_inner)) * self.align
        bandwidth = step * (1 - self.padding_inner)
        if self.round:
            start = js_round(start)
            bandwidth = js_round(bandwidth)
        values = [start + step * i for i in range(n)]
        if reverse:
            values.reverse()
        self.step = step
        self.bandwidth = bandwidth
        self._positions = dict(zip(self._domain, values))

    @property
    def domain(self) -> list:
        return list(self._domain)

    def __call__(self, value: Hashable) -> float | None:
        """Band start for value, or None if value is not in the domain."""
        return self._positions.get(value)

    def center(self, value: Hashable) -> float | None:
        """Band midpoint; the half-band offset is rounded when the scale rounds."""
        start = self(value)
        if start is None:
            return None
        offset = self.bandwidth / 2
        return start + (js_round(offset) if self.round else offset)

    def with_domain(self, domain: Iterable[Hashable]) -> "BandScale":
        """Copy of this scale over a new domain (same range and padding)."""
        return BandScale(domain, self.range, self.padding_outer, self.round, self.align)


def tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    """d3's tick increment search: returns (i1, i2, inc).

    A negative inc means ticks are ``i / -inc`` (steps below 1), otherwise
    ``i * inc``.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = js_round(start * inc)
        i2 = js_round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = js_round(start / inc)
        i2 = js_round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: int) -> list[float]:
    """Round-number tick values spanning [start, stop] (1, 2 or 5 × 10^k apart)."""
    if not count > 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    i1, i2, inc = tick_spec(stop, start, count) if reverse else tick_spec(start, stop, count)
    if not i2 >= i1:
        return []
    n = i2 - i1 + 1
    if inc < 0:
        values = [(i1 + i) / -inc for i in range(n)]
    else:
        values = [(i1 + i) * inc for i in range(n)]
    if reverse:
        values.reverse()
    return values


def tick_step(start: float, stop: float, count: int) -> float:
    reverse = stop < start
    _, _, inc = tick_spec(stop, start, count) if reverse else tick_spec(start, stop, count)
    step = 1 / -inc if inc < 0 else inc
    return -step if reverse else step


class LinearScale:
    """Maps [d0, d1] linearly onto [r0, r1]."""

    def __init__(self, domain: tuple[float, float], range_: tuple[float, float],
                 round_: bool = True) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (range_[0], range_[1])
        self.round = round_

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (value - d0) / (d1 - d0) if d1 != d0 else 0.5
        y = r0 * (1 - t) + r1 * t
        return js_round(y) if self.round else y

    def ticks(self, count: int = 10) -> list[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: int = 10):
        """SI-prefixed label formatter matching ``axis.ticks(count, "s")``."""
        d0, d1 = self.domain
        return si_formatter(tick_step(d0, d1, count), max(abs(d0), abs(d1)))


def amount_domain(amounts: Sequence[float]) -> tuple[float, float]:
    """[0, max(amounts)]; an all-zero (or empty) series uses [0, 1]."""
    top = max(amounts, default=0.0)
    return (0.0, top if top > 0 else 1.0)


def build_scales(records, config: ChartConfig) -> tuple[BandScale, LinearScale]:
    """Band scale over the records' causes (in current order) and the amount scale."""
    x = BandScale((r.cause for r in records), (0, config.inner_width), config.padding)
    y = LinearScale(amount_domain([r.amount for r in records]), (config.inner_height, 0))
    return x, y
