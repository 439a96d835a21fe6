from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Optional

from api.responses import LogEntry, TimeRange
from engine.enums import LogLevel


@dataclass
class LevelTotals:
    total: int = 0
    counts: Dict[LogLevel, int] = field(default_factory=lambda: {lvl: 0 for lvl in LogLevel.ordered()})
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start, end=self.end)


def aggregate(entries: Iterable[LogEntry]) -> LevelTotals:
    """Single forward pass: per-level counts and the span of timestamped entries."""
    totals = LevelTotals()
    counts = totals.counts
    for entry in entries:
        totals.total += 1
        counts[entry.level] += 1
        ts = entry.timestamp
        if ts is None:
            continue
        if totals.start is None or ts < totals.start:
            totals.start = ts
        if totals.end is None or ts > totals.end:
            totals.end = ts
    return totals
