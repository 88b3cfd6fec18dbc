"""Health summary API routes."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from health_tracker import RecordStore, summarize
from health_tracker.config import TrackerSettings

from ..dependencies import get_store, get_tracker_settings
from ..models.summary import DashboardSummary, SummaryDisplay

router = APIRouter(prefix="/api/health", tags=["Health Summary"])


@router.get("/summary", response_model=DashboardSummary, response_model_by_alias=True)
async def get_health_summary(
    today: Optional[date] = Query(default=None, description="Last day of the weekly series"),
    store: RecordStore = Depends(get_store),
    tracker: TrackerSettings = Depends(get_tracker_settings),
):
    """
    Get aggregated statistics over all records.
    Includes totals, averages, goal progress and the trailing weekly series.
    """
    summary = summarize(store.list(), today or date.today(), tracker.summary_options())
    return DashboardSummary(summary=summary, display=SummaryDisplay.from_summary(summary))
