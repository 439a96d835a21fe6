"""
Route-level tests for log analysis endpoints: JSON analyze, multipart
upload, entry browsing and error translation.
"""

from __future__ import annotations

import io

import httpx
import pytest
from fastapi import HTTPException, UploadFile

import main as app_main
from api.requests import EntryQuery, ParseRequest
from api.routes import logs as logs_route
from config import settings
from engine.enums import LogLevel
from engine.exceptions import AnalysisCancelled


@pytest.mark.asyncio
async def test_analyze_route_builds_report(sample_log):
    report = await logs_route.analyze_logs(ParseRequest(text=sample_log, file_name="app.log"), x_client_id=None)
    assert report.file_name == "app.log"
    assert report.analysis.total_entries == 3
    assert len(report.hourly_distribution) == 24
    assert len(report.preview) == 3


@pytest.mark.asyncio
async def test_upload_route_rejects_wrong_extension():
    upload = UploadFile(file=io.BytesIO(b"INFO ok"), filename="image.png")
    with pytest.raises(HTTPException) as exc:
        await logs_route.upload_logs(file=upload, x_client_id=None)
    assert exc.value.status_code == 415


@pytest.mark.asyncio
async def test_upload_route_rejects_binary_as_unparseable():
    upload = UploadFile(file=io.BytesIO(b"\x89PNG\r\n\x1a\n\x00\x00"), filename="app.log")
    with pytest.raises(HTTPException) as exc:
        await logs_route.upload_logs(file=upload, x_client_id=None)
    assert exc.value.status_code == 422
    assert exc.value.detail == "cannot parse file"


@pytest.mark.asyncio
async def test_upload_route_rejects_oversize(monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 4)
    upload = UploadFile(file=io.BytesIO(b"INFO too big"), filename="app.log")
    with pytest.raises(HTTPException) as exc:
        await logs_route.upload_logs(file=upload, x_client_id=None)
    assert exc.value.status_code == 413


@pytest.mark.asyncio
async def test_superseded_analysis_maps_to_conflict(monkeypatch, sample_log):
    async def fake_run(text, client_id=None):
        raise AnalysisCancelled("superseded by a newer submission")

    monkeypatch.setattr(logs_route.analysis_runner, "run", fake_run)
    with pytest.raises(HTTPException) as exc:
        await logs_route.analyze_logs(ParseRequest(text=sample_log), x_client_id="tab-1")
    assert exc.value.status_code == 409


@pytest.mark.asyncio
async def test_entries_route_filters_and_pages(mixed_log):
    page = await logs_route.list_entries(EntryQuery(text=mixed_log, level=LogLevel.error, limit=2))
    assert page.total == 3
    assert page.offset == 0
    assert [e.id for e in page.entries] == [2, 5]

    rest = await logs_route.list_entries(EntryQuery(text=mixed_log, level=LogLevel.error, limit=2, offset=2))
    assert [e.id for e in rest.entries] == [6]


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app_main.app), base_url="http://test")


@pytest.mark.asyncio
async def test_http_upload_returns_camel_case_report(sample_log):
    async with _client() as client:
        resp = await client.post(
            "/api/v1/logs/upload",
            files={"file": ("app.log", sample_log.encode("utf-8"), "text/plain")},
        )
    assert resp.status_code == 200
    body = resp.json()
    assert body["fileName"] == "app.log"
    analysis = body["analysis"]
    assert analysis["totalEntries"] == 3
    assert (analysis["errorCount"], analysis["warningCount"], analysis["infoCount"]) == (1, 1, 1)
    assert analysis["timeRange"]["start"].startswith("2024-06-03T14:30:15")
    assert body["preview"][0]["rawLine"] == "2024-06-03 14:30:25 ERROR Database connection timeout"


@pytest.mark.asyncio
async def test_http_entries_accepts_camel_case_query(mixed_log):
    async with _client() as client:
        resp = await client.post(
            "/api/v1/logs/entries",
            json={"text": mixed_log, "keyword": "timeout", "level": "ERROR"},
        )
    assert resp.status_code == 200
    assert resp.json()["total"] == 2


@pytest.mark.asyncio
async def test_http_health():
    async with _client() as client:
        resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
