import asyncio
from typing import Optional

from fastapi import APIRouter, File, Header, UploadFile

from api.requests import EntryQuery, ParseRequest
from api.responses import EntryPage, LogReport
from api.routes.exception import handle_exceptions
from config import CLIENT_ID_HEADER, settings
from engine.logs import filter_entries, parse
from services.analyze_service import analysis_runner, build_report, decode_upload

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.post("/analyze", response_model=LogReport)
@handle_exceptions
async def analyze_logs(
    req: ParseRequest,
    x_client_id: Optional[str] = Header(default=None, alias=CLIENT_ID_HEADER),
) -> LogReport:
    entries, analysis = await analysis_runner.run(req.text, client_id=x_client_id)
    return build_report(entries, analysis, file_name=req.file_name)


@router.post("/upload", response_model=LogReport)
@handle_exceptions
async def upload_logs(
    file: UploadFile = File(...),
    x_client_id: Optional[str] = Header(default=None, alias=CLIENT_ID_HEADER),
) -> LogReport:
    # one byte past the cap is enough to know it is too large
    data = await file.read(settings.max_upload_bytes + 1)
    text = decode_upload(data, file.filename)
    entries, analysis = await analysis_runner.run(text, client_id=x_client_id)
    return build_report(entries, analysis, file_name=file.filename)


@router.post("/entries", response_model=EntryPage)
@handle_exceptions
async def list_entries(query: EntryQuery) -> EntryPage:
    entries = await asyncio.to_thread(parse, query.text)
    matched = filter_entries(
        entries,
        level=query.level,
        keyword=query.keyword,
        start=query.start,
        end=query.end,
    )
    limit = min(query.limit, settings.entries_page_limit)
    return EntryPage(
        total=len(matched),
        offset=query.offset,
        entries=matched[query.offset: query.offset + limit],
    )
