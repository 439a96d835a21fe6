from datetime import datetime, timedelta, timezone

from api.responses import LogEntry
from engine.enums import LogLevel
from engine.logs.aggregate import aggregate
from engine.logs.assembler import parse


def test_aggregate_counts_and_range(mixed_log):
    totals = aggregate(parse(mixed_log))
    assert totals.total == 9
    assert totals.counts[LogLevel.error] == 3
    assert totals.counts[LogLevel.warn] == 1
    assert totals.counts[LogLevel.info] == 1
    assert totals.counts[LogLevel.debug] == 2
    assert totals.counts[LogLevel.unknown] == 2
    assert totals.start == datetime(2024, 6, 3, 9, 58, tzinfo=timezone.utc)
    assert totals.end == datetime(2024, 6, 3, 11, 40, tzinfo=timezone.utc)


def test_untimestamped_entries_do_not_touch_range():
    totals = aggregate(parse("ERROR a\nWARN b\n"))
    assert totals.total == 2
    assert totals.time_range().is_empty
    assert totals.start is None and totals.end is None


def test_aggregate_empty():
    totals = aggregate([])
    assert totals.total == 0
    assert all(v == 0 for v in totals.counts.values())
    assert totals.time_range().is_empty


def test_naive_and_offset_timestamps_are_normalised_to_utc(mixed_log):
    entries = parse(mixed_log) + [
        LogEntry(id=9, timestamp=datetime(2024, 6, 3, 12, 0), message="naive", raw_line="naive"),
        LogEntry(
            id=10,
            timestamp=datetime(2024, 6, 3, 9, 0, tzinfo=timezone(timedelta(hours=2))),
            message="offset",
            raw_line="offset",
        ),
    ]
    assert entries[-2].timestamp.tzinfo == timezone.utc
    assert entries[-1].timestamp == datetime(2024, 6, 3, 7, 0, tzinfo=timezone.utc)

    totals = aggregate(entries)
    assert totals.start == datetime(2024, 6, 3, 7, 0, tzinfo=timezone.utc)
    assert totals.end == datetime(2024, 6, 3, 12, 0, tzinfo=timezone.utc)
