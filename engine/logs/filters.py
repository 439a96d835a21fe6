"""
Entry filtering and hour-of-day distribution for browsing parsed logs.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

import numpy as np

from api.responses import LogEntry, as_utc
from engine.enums import LogLevel


def filter_entries(
    entries: Iterable[LogEntry],
    level: Optional[LogLevel] = None,
    keyword: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[LogEntry]:
    """Entries matching every given criterion, in input order.

    ``keyword`` is a case-insensitive substring of message or source.
    ``start``/``end`` are inclusive; when either is given, entries without a
    timestamp are left out. Naive bounds are read as UTC.
    """
    needle = keyword.lower() if keyword else None
    start, end = as_utc(start), as_utc(end)
    bounded = start is not None or end is not None

    out: List[LogEntry] = []
    for entry in entries:
        if level is not None and entry.level is not level:
            continue
        if needle is not None and needle not in entry.message.lower() and (
            entry.source is None or needle not in entry.source.lower()
        ):
            continue
        if bounded:
            ts = entry.timestamp
            if ts is None:
                continue
            if start is not None and ts < start:
                continue
            if end is not None and ts > end:
                continue
        out.append(entry)
    return out


def hourly_distribution(entries: Iterable[LogEntry]) -> List[int]:
    """Count of timestamped entries per UTC hour of day, index 0..23."""
    hours = [e.timestamp.hour for e in entries if e.timestamp is not None]
    return np.bincount(np.asarray(hours, dtype=np.int64), minlength=24).tolist()
