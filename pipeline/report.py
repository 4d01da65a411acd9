"""
Load reporting: structured accounting of what the load pipeline kept and dropped.

Provides:
  - StageReport: one pipeline stage (clean, tokenize, footer, records) with
    how many items went in and came out.
  - LoadReport: the whole load, with per-stage reports, timing, and the
    facts downstream code cares about (record count, duplicate causes,
    max amount).

Usage inside pipeline.loader::

    report = LoadReport(source="data.csv")
    stage = report.add_stage("clean", items_in=raw.count("\\n") + 1)
    ...
    stage.items_out = cleaned.count("\\n") + 1
    report.finish(records)
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any


@dataclass
class StageReport:
    """What one stage of the load consumed and produced."""

    name: str
    items_in: int = 0
    items_out: int = 0
    detail: str = ""

    @property
    def items_dropped(self) -> int:
        return max(0, self.items_in - self.items_out)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "items_in": self.items_in,
            "items_out": self.items_out,
            "items_dropped": self.items_dropped,
        }
        if self.detail:
            d["detail"] = self.detail
        return d


@dataclass
class LoadReport:
    """Structured summary of one fetch/clean/parse run."""

    source: str
    status: str = "started"                 # started | completed | failed
    elapsed_seconds: float = 0.0
    stages: list[StageReport] = field(default_factory=list)
    record_count: int = 0
    max_amount: float = 0.0
    duplicate_causes: list[str] = field(default_factory=list)
    error: str = ""
    _t0: float = field(default_factory=time.monotonic, repr=False)

    def add_stage(self, name: str, items_in: int = 0) -> StageReport:
        stage = StageReport(name=name, items_in=items_in)
        self.stages.append(stage)
        return stage

    def stage(self, name: str) -> StageReport | None:
        return next((s for s in self.stages if s.name == name), None)

    def finish(self, records) -> None:
        """Mark the run completed and record facts about the final records."""
        self.elapsed_seconds = time.monotonic() - self._t0
        self.status = "completed"
        self.record_count = len(records)
        self.max_amount = max((r.amount for r in records), default=0.0)
        counts = Counter(r.cause for r in records)
        self.duplicate_causes = sorted(c for c, n in counts.items() if n > 1)

    def fail(self, exc: BaseException) -> None:
        self.elapsed_seconds = time.monotonic() - self._t0
        self.status = "failed"
        self.error = str(exc)

    def console_summary(self) -> str:
        """One-line summary suitable for the terminal."""
        if self.status == "failed":
            return f"{self.source}: failed ({self.error})"
        parts = [f"{self.record_count:,} records"]
        for s in self.stages:
            if s.items_dropped:
                parts.append(f"{s.name} dropped {s.items_dropped:,}")
        if self.duplicate_causes:
            parts.append(f"{len(self.duplicate_causes)} duplicate causes")
        parts.append(f"max {self.max_amount:,.0f}")
        parts.append(f"{self.elapsed_seconds:.2f}s")
        return f"{self.source}: " + " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        d = {
            "source": self.source,
            "status": self.status,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "record_count": self.record_count,
            "max_amount": self.max_amount,
            "stages": [s.to_dict() for s in self.stages],
        }
        if self.duplicate_causes:
            d["duplicate_causes"] = self.duplicate_causes
        if self.error:
            d["error"] = self.error
        return d
