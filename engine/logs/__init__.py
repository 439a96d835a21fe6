"""
Log parsing and analysis: turns raw log text into ordered entries and derives
level counts, time range, top recurring errors and a bucketed time series.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.logs.analysis import analyze
from engine.logs.assembler import parse
from engine.logs.filters import filter_entries, hourly_distribution

__all__ = ["parse", "analyze", "filter_entries", "hourly_distribution"]
