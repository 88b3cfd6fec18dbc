"""Dashboard server settings, read from DASHBOARD_* environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class DashboardSettings(BaseSettings):
    """Where the dashboard listens and which browser origins may call it."""

    host: str = "127.0.0.1"
    port: int = 8082
    reload: bool = False
    log_level: str = "info"

    # The record form needs write methods on top of GET.
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    cors_methods: list[str] = ["GET", "POST", "PUT", "DELETE"]

    class Config:
        env_prefix = "DASHBOARD_"


@lru_cache
def get_settings() -> DashboardSettings:
    return DashboardSettings()
