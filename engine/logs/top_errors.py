"""
Top recurring errors: groups ERROR entries whose messages differ only in
embedded identifiers and numbers, and ranks the groups by size.

Fingerprint rule v1, applied to the full message in this order:

1. lower-case
2. UUIDs become ``<uuid>``
3. ``0x``-prefixed hex literals become ``<hex>``
4. each run of digits becomes ``#``
5. each run of whitespace becomes a single space, then strip

Grouping results change whenever this rule does, so any change must bump
``FINGERPRINT_VERSION``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from api.responses import LogEntry, TopError
from config import settings
from engine.enums import LogLevel

FINGERPRINT_VERSION = "v1"

_UUID = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")
_HEX = re.compile(r"0x[0-9a-f]+")
_DIGITS = re.compile(r"\d+")
_WHITESPACE = re.compile(r"\s+")


def fingerprint(message: str) -> str:
    text = message.lower()
    text = _UUID.sub("<uuid>", text)
    text = _HEX.sub("<hex>", text)
    text = _DIGITS.sub("#", text)
    return _WHITESPACE.sub(" ", text).strip()


@dataclass
class ErrorGroup:
    representative: str
    count: int
    first_seen_id: int


def group_errors(entries: Iterable[LogEntry]) -> Dict[str, ErrorGroup]:
    groups: Dict[str, ErrorGroup] = {}
    for entry in entries:
        if entry.level is not LogLevel.error:
            continue
        key = fingerprint(entry.message)
        group = groups.get(key)
        if group is None:
            groups[key] = ErrorGroup(
                representative=entry.message,
                count=1,
                first_seen_id=entry.id,
            )
        else:
            group.count += 1
    return groups


def top_errors(entries: Iterable[LogEntry], limit: Optional[int] = None) -> List[TopError]:
    """Largest error groups first; equal counts keep the earliest group first."""
    if limit is None:
        limit = settings.top_errors_limit
    if limit <= 0:
        return []
    ranked = sorted(
        group_errors(entries).values(),
        key=lambda g: (-g.count, g.first_seen_id),
    )
    return [TopError(message=g.representative, count=g.count) for g in ranked[:limit]]
