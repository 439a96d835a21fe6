"""
Constants and configuration for Logsight.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List, Tuple

from pydantic_settings import BaseSettings


LOGSIGHT_HOST: str = os.getenv("LOGSIGHT_HOST", "0.0.0.0")
LOGSIGHT_PORT: int = int(os.getenv("LOGSIGHT_PORT", "4323"))
LOGSIGHT_MAX_UPLOAD_BYTES: int = int(os.getenv("LOGSIGHT_MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))
LOGSIGHT_ANALYZE_MAX_CONCURRENCY: int = int(os.getenv("LOGSIGHT_ANALYZE_MAX_CONCURRENCY", "4"))

CLIENT_ID_HEADER = "X-Client-Id"
HEALTH_PATH = "/health"

# seconds
MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

# file extensions that make a trailing "name.ext:LINE" token a source reference;
# hostnames such as db.example.com:5432 must not qualify
SOURCE_EXTENSIONS: Tuple[str, ...] = (
    "py", "js", "mjs", "cjs", "ts", "jsx", "tsx", "java", "kt", "scala", "groovy",
    "go", "rb", "php", "c", "cc", "cpp", "cxx", "h", "hpp", "cs", "rs", "swift",
    "m", "mm", "ex", "exs", "erl", "clj", "lua", "pl", "sh", "dart", "vue",
)


class Settings(BaseSettings):
    host: str = LOGSIGHT_HOST
    port: int = LOGSIGHT_PORT

    # upload validation
    max_upload_bytes: int = LOGSIGHT_MAX_UPLOAD_BYTES
    allowed_extensions: List[str] = [".log", ".txt"]

    # line parsing
    source_extensions: List[str] = list(SOURCE_EXTENSIONS)

    # top error extraction
    top_errors_limit: int = 10

    # time series bucketing: (max span seconds, bucket width seconds), first fit wins.
    # spans beyond the last threshold use whole weeks.
    timeseries_width_policy: List[Tuple[int, int]] = [
        (2 * HOUR, 5 * MINUTE),
        (2 * DAY, HOUR),
        (31 * DAY, DAY),
    ]
    timeseries_fallback_width: int = WEEK
    timeseries_max_buckets: int = 200

    # api shaping
    preview_entries: int = 100
    entries_page_limit: int = 1000

    # bounded number of analyses running on worker threads at once
    analyze_max_concurrency: int = LOGSIGHT_ANALYZE_MAX_CONCURRENCY

    model_config = {
        "env_prefix": "LOGSIGHT_",
        "extra": "ignore",
    }


settings = Settings()
