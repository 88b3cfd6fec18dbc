"""Pydantic models for dashboard API responses."""
from .records import RecordRow, ValidationErrorResponse
from .summary import DashboardSummary, SummaryDisplay

__all__ = [
    "RecordRow",
    "ValidationErrorResponse",
    "DashboardSummary",
    "SummaryDisplay",
]
