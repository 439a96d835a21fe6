"""
Time series bucketing of log entries into fixed-width, gap-free intervals
whose width adapts to the overall time range.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from api.responses import LogEntry, TimeBucket, TimeRange
from config import settings
from engine.enums import LogLevel

log = logging.getLogger(__name__)

# bucket starts are multiples of the width counted from a Monday midnight,
# so day buckets start at 00:00Z and week buckets on Mondays
_ALIGN_ANCHOR = int(datetime(1970, 1, 5, tzinfo=timezone.utc).timestamp())
_MIN_EPOCH = int(datetime.min.replace(tzinfo=timezone.utc).timestamp())

_LEVELS = LogLevel.ordered()
_LEVEL_CODE = {level: code for code, level in enumerate(_LEVELS)}


def width_for(
    time_range: TimeRange,
    policy: Optional[Sequence[Tuple[int, int]]] = None,
    fallback: Optional[int] = None,
    max_buckets: Optional[int] = None,
) -> timedelta:
    """Bucket width for a time range; the same range always gets the same width.

    Widths never shrink as the span grows. An empty or zero-length range gets
    the narrowest width.
    """
    if policy is None:
        policy = settings.timeseries_width_policy
    if fallback is None:
        fallback = settings.timeseries_fallback_width
    if max_buckets is None:
        max_buckets = settings.timeseries_max_buckets

    span = 0.0
    if not time_range.is_empty:
        span = max(0.0, (time_range.end - time_range.start).total_seconds())

    for max_span, width in policy:
        if span <= max_span:
            return timedelta(seconds=width)

    # misalignment at either end can add up to two buckets beyond span / width
    usable = max(1, max_buckets - 2)
    multiple = max(1, math.ceil(span / (fallback * usable)))
    return timedelta(seconds=fallback * multiple)


def _floor(epoch: int, width: int) -> int:
    return epoch - (epoch - _ALIGN_ANCHOR) % width


def bucket_entries(
    entries: Iterable[LogEntry],
    time_range: TimeRange,
    width: Optional[timedelta] = None,
) -> List[TimeBucket]:
    """Per-level counts for every width-aligned interval covering the range.

    Entries without a timestamp are skipped. An empty range gives no buckets.
    """
    if time_range.is_empty:
        return []
    if width is None:
        width = width_for(time_range)
    step = int(width.total_seconds())
    if step <= 0:
        return []

    # the first aligned start may precede year 1; the grid then starts at the
    # earliest representable instant instead
    first = max(_floor(math.floor(time_range.start.timestamp()), step), _MIN_EPOCH)
    end = math.floor(time_range.end.timestamp())
    if end < first:
        return []
    n = (end - first) // step + 1

    seconds: List[int] = []
    codes: List[int] = []
    for entry in entries:
        if entry.timestamp is None:
            continue
        seconds.append(math.floor(entry.timestamp.timestamp()))
        codes.append(_LEVEL_CODE[entry.level])

    idx = (np.asarray(seconds, dtype=np.int64) - first) // step
    level_codes = np.asarray(codes, dtype=np.int64)
    inside = (idx >= 0) & (idx < n)
    flat = np.bincount(
        level_codes[inside] * n + idx[inside],
        minlength=len(_LEVELS) * n,
    ).reshape(len(_LEVELS), n)

    log.debug("bucketed %d timestamped entries into %d x %ds buckets", int(inside.sum()), n, step)

    error, warn, info, debug, unknown = (flat[_LEVEL_CODE[level]].tolist() for level in _LEVELS)
    return [
        TimeBucket(
            timestamp=datetime.fromtimestamp(first + i * step, tz=timezone.utc),
            error_count=error[i],
            warning_count=warn[i],
            info_count=info[i],
            debug_count=debug[i],
            unknown_count=unknown[i],
        )
        for i in range(n)
    ]
