"""Request dependencies giving routes a handle on the app's record store."""
from fastapi import Request

from health_tracker import RecordStore
from health_tracker.config import TrackerSettings


def get_store(request: Request) -> RecordStore:
    """Record store attached to the running application."""
    return request.app.state.store


def get_tracker_settings(request: Request) -> TrackerSettings:
    """Tracker settings the store was opened with."""
    return request.app.state.tracker_settings
