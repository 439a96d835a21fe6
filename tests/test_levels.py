import pytest

from engine.enums import LogLevel
from engine.logs.levels import classify, is_level_token


@pytest.mark.parametrize("token,expected", [
    ("ERROR", LogLevel.error),
    ("error", LogLevel.error),
    ("Err", LogLevel.error),
    ("FATAL", LogLevel.error),
    ("critical", LogLevel.error),
    ("WARN", LogLevel.warn),
    ("Warning", LogLevel.warn),
    ("INFO", LogLevel.info),
    ("DEBUG", LogLevel.debug),
    ("trace", LogLevel.debug),
    (" INFO ", LogLevel.info),
])
def test_classify_aliases(token, expected):
    assert classify(token) is expected


@pytest.mark.parametrize("token", [None, "", "NOTICE", "main", "ERRORS", "12"])
def test_classify_unrecognised_is_unknown(token):
    assert classify(token) is LogLevel.unknown
    assert not is_level_token(token)


def test_level_values_are_canonical_names():
    assert [lvl.value for lvl in LogLevel.ordered()] == ["ERROR", "WARN", "INFO", "DEBUG", "UNKNOWN"]
    assert LogLevel("WARN") is LogLevel.warn
