"""
Analyze service: validates uploads, runs parsing and analysis on worker
threads, and discards stale results when a client submits a newer file.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import asyncio
import logging
import os
import threading
import time
from typing import Dict, List, Optional, Tuple

from api.responses import LogAnalysis, LogEntry, LogReport
from config import settings
from engine.exceptions import AnalysisCancelled, InputDecodeError, LogEngineError
from engine.logs import analyze, hourly_distribution, parse

log = logging.getLogger(__name__)

CANNOT_PARSE = "cannot parse file"


class UploadRejected(LogEngineError):
    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def decode_upload(data: bytes, file_name: Optional[str] = None) -> str:
    """Validate an uploaded file and return its text, or raise before any parsing happens."""
    if file_name:
        ext = os.path.splitext(file_name)[1].lower()
        if ext not in settings.allowed_extensions:
            log.warning("rejected upload %r: extension %r not allowed", file_name, ext)
            allowed = ", ".join(settings.allowed_extensions)
            raise UploadRejected(415, f"unsupported file type {ext or '(none)'}; expected one of {allowed}")
    if len(data) > settings.max_upload_bytes:
        log.warning("rejected upload %r: larger than %d bytes", file_name, settings.max_upload_bytes)
        raise UploadRejected(413, f"file exceeds {settings.max_upload_bytes} bytes")
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        log.warning("rejected upload %r: not UTF-8 (%s)", file_name, exc)
        raise InputDecodeError(CANNOT_PARSE) from exc
    if "\x00" in text:
        log.warning("rejected upload %r: binary content", file_name)
        raise InputDecodeError(CANNOT_PARSE)
    return text


def analyze_text(
    text: str,
    cancel: Optional[threading.Event] = None,
) -> Tuple[List[LogEntry], LogAnalysis]:
    entries = parse(text, cancel=cancel)
    if cancel is not None and cancel.is_set():
        raise AnalysisCancelled("analysis cancelled")
    return entries, analyze(entries)


def build_report(
    entries: List[LogEntry],
    analysis: LogAnalysis,
    file_name: Optional[str] = None,
) -> LogReport:
    return LogReport(
        file_name=file_name,
        analysis=analysis,
        hourly_distribution=hourly_distribution(entries),
        preview=entries[: max(0, settings.preview_entries)],
    )


class AnalysisRunner:
    """Runs analyses off the event loop; per client, the last submission wins."""

    def __init__(self, max_concurrency: Optional[int] = None) -> None:
        limit = settings.analyze_max_concurrency if max_concurrency is None else max_concurrency
        self._semaphore = asyncio.Semaphore(max(1, int(limit)))
        self._latest: Dict[str, threading.Event] = {}

    def _claim(self, client_id: Optional[str]) -> threading.Event:
        cancel = threading.Event()
        if client_id:
            previous = self._latest.get(client_id)
            if previous is not None:
                previous.set()
                log.warning("superseding in-flight analysis for client %s", client_id)
            self._latest[client_id] = cancel
        return cancel

    def _release(self, client_id: Optional[str], cancel: threading.Event) -> None:
        if client_id and self._latest.get(client_id) is cancel:
            del self._latest[client_id]

    async def run(
        self,
        text: str,
        client_id: Optional[str] = None,
    ) -> Tuple[List[LogEntry], LogAnalysis]:
        cancel = self._claim(client_id)
        try:
            async with self._semaphore:
                if cancel.is_set():
                    raise AnalysisCancelled("superseded by a newer submission")
                started = time.monotonic()
                entries, analysis = await asyncio.to_thread(analyze_text, text, cancel)
            if cancel.is_set():
                raise AnalysisCancelled("superseded by a newer submission")
            log.info(
                "analysed %d chars into %d entries in %.1f ms",
                len(text), analysis.total_entries, (time.monotonic() - started) * 1000,
            )
            return entries, analysis
        finally:
            self._release(client_id, cancel)


analysis_runner = AnalysisRunner()
