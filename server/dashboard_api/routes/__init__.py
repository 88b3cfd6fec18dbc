"""API route modules."""
from .records import router as records_router
from .summary import router as summary_router

__all__ = [
    "records_router",
    "summary_router",
]
