from __future__ import annotations

import logging
from typing import Sequence

from api.responses import LogAnalysis, LogEntry
from engine.enums import LogLevel
from engine.logs.aggregate import aggregate
from engine.logs.timeseries import bucket_entries, width_for
from engine.logs.top_errors import top_errors

log = logging.getLogger(__name__)


def analyze(entries: Sequence[LogEntry]) -> LogAnalysis:
    """Summarise a parsed entry sequence. Total: an empty sequence gives an all-zero summary."""
    totals = aggregate(entries)
    time_range = totals.time_range()

    bucket_seconds = None
    series = []
    if not time_range.is_empty:
        width = width_for(time_range)
        series = bucket_entries(entries, time_range, width)
        bucket_seconds = int(width.total_seconds())

    counts = totals.counts
    analysis = LogAnalysis(
        total_entries=totals.total,
        error_count=counts[LogLevel.error],
        warning_count=counts[LogLevel.warn],
        info_count=counts[LogLevel.info],
        debug_count=counts[LogLevel.debug],
        unknown_count=counts[LogLevel.unknown],
        time_range=time_range,
        top_errors=top_errors(entries),
        time_series_data=series,
        bucket_seconds=bucket_seconds,
    )
    log.debug(
        "analysed %d entries: %d errors, %d buckets",
        analysis.total_entries, analysis.error_count, len(series),
    )
    return analysis
