"""Health Dashboard API - FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from health_tracker import PersistenceConflictError, RecordStore, RecordValidationError
from health_tracker.config import TrackerSettings, get_settings as get_tracker_settings

from .config import DashboardSettings, get_settings
from .routes import records, summary

log = logging.getLogger(__name__)


def create_app(
    store: Optional[RecordStore] = None,
    tracker_settings: Optional[TrackerSettings] = None,
    dashboard_settings: Optional[DashboardSettings] = None,
) -> FastAPI:
    """
    Build the dashboard application.

    Args:
        store: Record store to serve. When omitted, one is opened from the
            configured storage at startup.
        tracker_settings: Validation and summary configuration
        dashboard_settings: CORS configuration for the browser client
    """
    dashboard = dashboard_settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            tracker = app.state.tracker_settings
            app.state.store = RecordStore.open(
                tracker.persistence_bridge(),
                today=date.today(),
                seed_sample_data=tracker.seed_sample_data,
                policy=tracker.validation_policy(),
            )
            log.info(f"Opened record store at {tracker.storage_path} ({len(app.state.store)} records)")
        yield

    app = FastAPI(
        title="Health Dashboard API",
        description="Daily health records and summary statistics",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.tracker_settings = tracker_settings or get_tracker_settings()

    # Configure CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=dashboard.cors_origins,
        allow_credentials=True,
        allow_methods=dashboard.cors_methods,
        allow_headers=["*"],
    )

    @app.exception_handler(PersistenceConflictError)
    async def conflict_handler(request: Request, exc: PersistenceConflictError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    # The store re-checks bounds against the server's own date.
    @app.exception_handler(RecordValidationError)
    async def bounds_handler(request: Request, exc: RecordValidationError):
        return JSONResponse(status_code=422, content={"errors": exc.errors})

    # Include routers
    app.include_router(summary.router)
    app.include_router(records.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for the API."""
        return {"status": "healthy", "service": "dashboard-api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "server.dashboard_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level,
    )
