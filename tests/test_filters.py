from datetime import datetime, timezone

from engine.enums import LogLevel
from engine.logs import filter_entries, hourly_distribution, parse


def test_filter_by_level_keeps_order(mixed_log):
    entries = parse(mixed_log)
    got = filter_entries(entries, level=LogLevel.error)
    assert [e.id for e in got] == [2, 5, 6]


def test_filter_by_keyword_is_case_insensitive_and_checks_source(mixed_log):
    entries = parse(mixed_log)
    assert [e.id for e in filter_entries(entries, keyword="TIMEOUT")] == [2, 5]
    assert [e.id for e in filter_entries(entries, keyword="api.service")] == [1]


def test_filter_by_time_bounds_is_inclusive(mixed_log):
    entries = parse(mixed_log)
    got = filter_entries(
        entries,
        start=datetime(2024, 6, 3, 10, 2, 11, tzinfo=timezone.utc),
        end=datetime(2024, 6, 3, 10, 47, 2, tzinfo=timezone.utc),
    )
    assert [e.id for e in got] == [2, 3, 5]


def test_naive_bounds_are_utc_and_drop_untimestamped(mixed_log):
    entries = parse(mixed_log)
    got = filter_entries(entries, start=datetime(2024, 6, 3, 11, 0))
    assert [e.id for e in got] == [6, 8]
    assert all(e.timestamp is not None for e in got)


def test_combined_filters(mixed_log):
    entries = parse(mixed_log)
    got = filter_entries(entries, level=LogLevel.error, keyword="disk")
    assert [e.message for e in got] == ["Disk /dev/sda1 is full"]


def test_no_criteria_returns_everything(mixed_log):
    entries = parse(mixed_log)
    assert filter_entries(entries) == entries


def test_hourly_distribution(mixed_log):
    hours = hourly_distribution(parse(mixed_log))
    assert len(hours) == 24
    assert hours[9] == 1
    assert hours[10] == 3
    assert hours[11] == 2
    assert sum(hours) == 6


def test_hourly_distribution_empty():
    assert hourly_distribution([]) == [0] * 24
    assert hourly_distribution(parse("ERROR no time")) == [0] * 24
