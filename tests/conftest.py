"""Shared fixtures: an isolated SQLite document store per test and an API client."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable

import pytest
from fastapi.testclient import TestClient

from service_dashboard_api.app.core.config import settings
from service_dashboard_api.app.core.db import init_db
from service_dashboard_api.app.main import create_app
from service_dashboard_api.app.services.record_service import RecordService


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh database file and migrate it."""
    db_path = tmp_path / "dashboard.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def seed(database):
    """Insert records into a collection and return their ids."""

    def _seed(collection: str, records: Iterable[Dict[str, Any]]) -> list[str]:
        async def _insert() -> list[str]:
            return [await RecordService.add_record(collection, r) for r in records]

        return asyncio.run(_insert())

    return _seed


@pytest.fixture
def client(database):
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
