"""
Entry assembly: drives the line parser over a whole text buffer, folding
continuation lines (stack traces and the like) into the entry they follow.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, List, Optional, Protocol, Union

from api.responses import LogEntry
from engine.enums import LogLevel
from engine.exceptions import AnalysisCancelled, InputDecodeError
from engine.logs.levels import classify
from engine.logs.lines import Continuation, parse_line

log = logging.getLogger(__name__)

_BOM = "\ufeff"


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


@dataclass
class _OpenEntry:
    timestamp: Optional[datetime]
    level: LogLevel
    source: Optional[str]
    raw_line: str
    parts: List[str]


@dataclass
class _Scan:
    """Accumulator carried through the line scan."""

    open: Optional[_OpenEntry] = None
    entries: List[LogEntry] = field(default_factory=list)


def _as_text(buffer: Union[str, bytes, bytearray, Any]) -> str:
    if isinstance(buffer, str):
        return buffer
    if isinstance(buffer, (bytes, bytearray)):
        try:
            return bytes(buffer).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InputDecodeError(f"input is not valid UTF-8 text: {exc}") from exc
    raise InputDecodeError(f"expected text, got {type(buffer).__name__}")


def iter_lines(text: str) -> Iterator[str]:
    """Yield physical lines without building a list of the whole buffer."""
    start = 0
    if text.startswith(_BOM):
        start = len(_BOM)
    end = len(text)
    while start < end:
        nl = text.find("\n", start)
        if nl == -1:
            nl = end
        line = text[start:nl]
        if line.endswith("\r"):
            line = line[:-1]
        yield line
        start = nl + 1


def _close(scan: _Scan) -> None:
    current = scan.open
    if current is None:
        return
    scan.entries.append(LogEntry(
        id=len(scan.entries),
        timestamp=current.timestamp,
        level=current.level,
        message="\n".join(current.parts),
        source=current.source,
        raw_line=current.raw_line,
    ))
    scan.open = None


def _feed(scan: _Scan, line: str) -> None:
    parsed = parse_line(line)
    if parsed is None:
        return

    if isinstance(parsed, Continuation):
        if scan.open is not None:
            scan.open.parts.append(parsed.text)
            return
        # nothing to attach to yet
        scan.open = _OpenEntry(
            timestamp=None,
            level=LogLevel.unknown,
            source=None,
            raw_line=line,
            parts=[parsed.text],
        )
        return

    _close(scan)
    scan.open = _OpenEntry(
        timestamp=parsed.timestamp,
        level=classify(parsed.level_token),
        source=parsed.source,
        raw_line=parsed.raw_line,
        parts=[parsed.message],
    )


def parse(
    buffer: Union[str, bytes, bytearray],
    cancel: Optional[CancelSignal] = None,
) -> List[LogEntry]:
    """Turn a raw log buffer into ordered entries with dense 0-based ids.

    Never fails on malformed text; worst case every line becomes its own
    UNKNOWN entry. Raises InputDecodeError only for input that is not text,
    and AnalysisCancelled when ``cancel`` is set between lines.
    """
    text = _as_text(buffer)
    scan = _Scan()
    for line in iter_lines(text):
        if cancel is not None and cancel.is_set():
            raise AnalysisCancelled("parse cancelled")
        _feed(scan, line)
    _close(scan)

    log.debug("parsed %d entries from %d chars", len(scan.entries), len(text))
    return scan.entries
