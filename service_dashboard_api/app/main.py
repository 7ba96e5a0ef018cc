"""
Main entrypoint for the Service Dashboard API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app``, so
it can be served directly::

    uvicorn service_dashboard_api.app.main:app --reload
"""

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .core.db import init_db
from .services.dashboard_service import DashboardView


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, mounts the v1 routers under ``/api/v1`` and
    attaches a fresh ``DashboardView`` to ``app.state``.  The database
    is migrated on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.include_router(v1_router, prefix="/api/v1")
    app.state.dashboard = DashboardView()

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    return app


app = create_app()
