"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can start without any configuration; override them via the
environment in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Service Dashboard API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite file backing the document store.  Relative
    # paths are resolved against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "service_dashboard.db")

    # IANA timezone used to place transaction timestamps into day, week
    # and month buckets.  Timezone-aware timestamps are converted to it;
    # naive ones are assumed to already be in it.
    dashboard_timezone: str = os.getenv("DASHBOARD_TIMEZONE", "UTC")

    # The only role value allowed to delete services.  Compared exactly,
    # so "Admin" or "admin " are refused.
    admin_role: str = os.getenv("ADMIN_ROLE", "admin")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
