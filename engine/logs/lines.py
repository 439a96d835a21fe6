"""
Line shape recognition: turns one physical line into either the start of a new
log entry or a continuation of the entry before it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple, Union

from config import settings
from engine.logs.levels import is_level_token

_TIMESTAMP = re.compile(
    r"^\[?"
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[Tt ]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:[.,](?P<fraction>\d{1,9}))?"
    r"(?:\s?(?P<tz>[Zz]|[+-]\d{2}:?\d{2}))?"
    r"\]?(?=\s|$)"
)

_LEVEL_AFTER_TIMESTAMP = re.compile(
    r"\s*(?:\[\s*(?P<bracketed>[A-Za-z]+)\s*\]|(?P<bare>[A-Za-z]+)(?=[\s:|\-]|$))"
)

# without a timestamp a bare level must be upper case and start the line,
# so indented trace lines and prose stay continuations. Exception summaries
# such as "Error: bad payload" or "warning: deprecated" inside a stack trace
# would otherwise split the trace into separate entries. Bracketed tokens
# and tokens after a timestamp are matched in any case.
_LEVEL_AT_START = re.compile(
    r"^(?:\[\s*(?P<bracketed>[A-Za-z]+)\s*\]|(?P<bare>[A-Z]+)(?=[\s:|\-]|$))"
)

_SEPARATOR = re.compile(r"\s*[:|\-]?\s*")

_SOURCE_TOKEN = re.compile(
    r"[(\[]?(?P<source>[^\s()\[\]]+\.(?P<ext>[A-Za-z]+):\d+)[)\]]?"
)

_SOURCE_EXTENSIONS = frozenset(ext.lower().lstrip(".") for ext in settings.source_extensions)


@dataclass(frozen=True)
class NewEntryCandidate:
    message: str
    raw_line: str
    timestamp: Optional[datetime] = None
    level_token: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class Continuation:
    text: str


ParsedLine = Union[NewEntryCandidate, Continuation]
LineMatcher = Callable[[str], Optional[NewEntryCandidate]]


def _timestamp_from(match: re.Match) -> Optional[datetime]:
    g = match.groupdict()
    fraction = g["fraction"] or ""
    try:
        ts = datetime(
            int(g["year"]), int(g["month"]), int(g["day"]),
            int(g["hour"]), int(g["minute"]), int(g["second"]),
            int(fraction[:6].ljust(6, "0")) if fraction else 0,
        )
    except ValueError:
        return None

    tz = g["tz"]
    if tz is None or tz in ("Z", "z"):
        return ts.replace(tzinfo=timezone.utc)

    hours, minutes = int(tz[1:3]), int(tz[-2:])
    if hours > 23 or minutes > 59:
        return None
    offset = timedelta(hours=hours, minutes=minutes)
    if tz[0] == "-":
        offset = -offset
    try:
        return ts.replace(tzinfo=timezone(offset)).astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # the UTC instant falls outside years 1..9999
        return None


def _split_source(message: str) -> Tuple[str, Optional[str]]:
    parts = message.rsplit(None, 1)
    if len(parts) != 2:
        return message, None
    head, token = parts
    m = _SOURCE_TOKEN.fullmatch(token)
    if m is None or m.group("ext").lower() not in _SOURCE_EXTENSIONS:
        return message, None
    return head.rstrip(), m.group("source")


def _level_token(match: re.Match) -> str:
    return match.group("bracketed") or match.group("bare")


def match_timestamped(line: str) -> Optional[NewEntryCandidate]:
    m = _TIMESTAMP.match(line)
    if m is None:
        return None
    timestamp = _timestamp_from(m)
    if timestamp is None:
        return None

    rest = line[m.end():]
    level_token = None
    lm = _LEVEL_AFTER_TIMESTAMP.match(rest)
    if lm is not None and is_level_token(_level_token(lm)):
        level_token = _level_token(lm)
        rest = rest[lm.end():]
        rest = rest[_SEPARATOR.match(rest).end():]

    message, source = _split_source(rest.strip())
    return NewEntryCandidate(
        message=message,
        raw_line=line,
        timestamp=timestamp,
        level_token=level_token,
        source=source,
    )


def match_level_only(line: str) -> Optional[NewEntryCandidate]:
    m = _LEVEL_AT_START.match(line)
    if m is None or not is_level_token(_level_token(m)):
        return None
    rest = line[m.end():]
    rest = rest[_SEPARATOR.match(rest).end():]
    message, source = _split_source(rest.strip())
    return NewEntryCandidate(
        message=message,
        raw_line=line,
        level_token=_level_token(m),
        source=source,
    )


# first match wins; anything no matcher claims is a continuation
LINE_MATCHERS: Tuple[LineMatcher, ...] = (
    match_timestamped,
    match_level_only,
)


def parse_line(
    line: str,
    matchers: Tuple[LineMatcher, ...] = LINE_MATCHERS,
) -> Optional[ParsedLine]:
    """Classify one physical line. Blank or whitespace-only lines yield None."""
    if not line or line.isspace():
        return None
    for matcher in matchers:
        candidate = matcher(line)
        if candidate is not None:
            return candidate
    return Continuation(text=line.rstrip())
