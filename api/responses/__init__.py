"""
Response models for API endpoints and the engine's value objects.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer
from pydantic.alias_generators import to_camel

from engine.enums import LogLevel


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):
    """Immutable value object, serialised with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive values are read as UTC; aware values are converted to it."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"timestamp {value.isoformat()} is outside the UTC range") from exc


class LogEntry(NpModel):

    id: int = Field(ge=0)
    timestamp: Optional[datetime] = None
    level: LogLevel = LogLevel.unknown
    message: str
    source: Optional[str] = None
    raw_line: str

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class TimeRange(NpModel):

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @field_validator("start", "end")
    @classmethod
    def _utc_bounds(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @property
    def is_empty(self) -> bool:
        return self.start is None or self.end is None


class TopError(NpModel):

    message: str
    count: int = Field(ge=1)


class TimeBucket(NpModel):

    timestamp: datetime
    error_count: int = Field(default=0, ge=0)
    warning_count: int = Field(default=0, ge=0)
    info_count: int = Field(default=0, ge=0)
    debug_count: int = Field(default=0, ge=0)
    unknown_count: int = Field(default=0, ge=0)


class LogAnalysis(NpModel):

    total_entries: int = Field(default=0, ge=0)
    error_count: int = Field(default=0, ge=0)
    warning_count: int = Field(default=0, ge=0)
    info_count: int = Field(default=0, ge=0)
    debug_count: int = Field(default=0, ge=0)
    unknown_count: int = Field(default=0, ge=0)
    time_range: TimeRange = Field(default_factory=TimeRange)
    top_errors: List[TopError] = Field(default_factory=list)
    time_series_data: List[TimeBucket] = Field(default_factory=list)
    bucket_seconds: Optional[int] = None


class LogReport(NpModel):

    file_name: Optional[str] = None
    analysis: LogAnalysis
    hourly_distribution: List[int] = Field(default_factory=lambda: [0] * 24)
    preview: List[LogEntry] = Field(default_factory=list)


class EntryPage(NpModel):

    total: int = Field(ge=0)
    offset: int = Field(default=0, ge=0)
    entries: List[LogEntry] = Field(default_factory=list)
