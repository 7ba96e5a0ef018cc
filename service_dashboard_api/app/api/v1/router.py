"""
Top‑level router for version 1 of the API.

Aggregates the domain routers under a unified prefix.  Include new
domain routers here.
"""

from fastapi import APIRouter

from .endpoints import dashboard, services

router = APIRouter()

router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
