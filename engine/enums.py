"""
Enumerations for canonical log levels.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class LogLevel(str, Enum):
    error = "ERROR"
    warn = "WARN"
    info = "INFO"
    debug = "DEBUG"
    unknown = "UNKNOWN"

    @classmethod
    def ordered(cls) -> tuple[LogLevel, ...]:
        # most severe first; also the column order of time series buckets
        return (cls.error, cls.warn, cls.info, cls.debug, cls.unknown)
