import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Query
from formapi.models.record import Record, RecordPage
from formapi import storage

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=RecordPage, status_code=200)
async def list_records(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
):
    return await storage.list_records(page=page, per_page=per_page)


@router.get("/{rid}", response_model=Record, status_code=200)
async def get_record(rid: int):
    record = await storage.get_record(rid)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


@router.get("/{rid}/schema", response_model=Dict[str, Any], status_code=200)
async def get_record_schema(rid: int):
    record = await storage.get_record(rid)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return await storage.get_schema(record["schema_id"])
