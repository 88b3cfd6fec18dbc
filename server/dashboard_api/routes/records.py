"""Health record API routes.

Delete confirmation happens in the client before DELETE is sent.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from health_tracker import HealthRecord, RecordDraft, RecordNotFoundError, RecordStore, validate
from health_tracker.config import TrackerSettings

from ..dependencies import get_store, get_tracker_settings
from ..models.records import RecordRow, ValidationErrorResponse

router = APIRouter(prefix="/api/health", tags=["Records"])

_VALIDATION_RESPONSES = {422: {"model": ValidationErrorResponse}}


def _validation_failed(errors: dict) -> JSONResponse:
    return JSONResponse(status_code=422, content={"errors": errors})


@router.get("/records", response_model=list[HealthRecord])
async def list_records(store: RecordStore = Depends(get_store)):
    """Get all health records, newest date first."""
    return store.list()


@router.get("/records/rows", response_model=list[RecordRow])
async def list_record_rows(
    store: RecordStore = Depends(get_store),
    tracker: TrackerSettings = Depends(get_tracker_settings),
):
    """Get records formatted for the records table, with heart-rate badges."""
    zones = tracker.summary_options().heart_rate_zones
    return [RecordRow.from_record(record, zones) for record in store.list()]


@router.get("/records/{record_id}", response_model=HealthRecord)
async def get_record(record_id: int, store: RecordStore = Depends(get_store)):
    """Get a single health record."""
    try:
        return store.get(record_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/records",
    response_model=HealthRecord,
    status_code=201,
    responses=_VALIDATION_RESPONSES,
)
async def create_record(
    draft: RecordDraft,
    today: Optional[date] = Query(default=None, description="Client's local date"),
    store: RecordStore = Depends(get_store),
    tracker: TrackerSettings = Depends(get_tracker_settings),
):
    """Validate a form draft and store it as a new record."""
    result = validate(draft, today or date.today(), tracker.validation_policy())
    if not result.ok:
        return _validation_failed(result.errors)
    return store.create(result.record)


@router.put("/records/{record_id}", response_model=HealthRecord, responses=_VALIDATION_RESPONSES)
async def update_record(
    record_id: int,
    draft: RecordDraft,
    today: Optional[date] = Query(default=None, description="Client's local date"),
    store: RecordStore = Depends(get_store),
    tracker: TrackerSettings = Depends(get_tracker_settings),
):
    """Validate a form draft and replace an existing record's fields."""
    if record_id not in store:
        raise HTTPException(status_code=404, detail=f"No health record with id {record_id}")
    result = validate(draft, today or date.today(), tracker.validation_policy())
    if not result.ok:
        return _validation_failed(result.errors)
    try:
        return store.update(record_id, result.record)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/records/{record_id}", status_code=204)
async def delete_record(record_id: int, store: RecordStore = Depends(get_store)):
    """Delete a health record."""
    try:
        store.delete(record_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
