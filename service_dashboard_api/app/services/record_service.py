"""
Access to the document collections.

``RecordService`` reads and writes JSON documents grouped into
collections.  The dashboard only ever pulls whole collections (no
filtering, pagination or ordering beyond insertion order), so
``list_records`` is the main read path.  ``fetch_snapshot`` gathers
everything the dashboard needs in one immutable ``DashboardSnapshot``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from service_dashboard_api.app.core.db import get_connection

SERVICES = "services"
TRANSACTIONS = "transactions"
EXPENSES = "expenses"
COLLECTIONS = (SERVICES, TRANSACTIONS, EXPENSES)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Records fetched for one dashboard view.

    A snapshot is never modified; a refresh produces a new one.
    """

    services: Tuple[Dict[str, Any], ...] = ()
    transactions: Tuple[Dict[str, Any], ...] = ()
    expenses: Tuple[Dict[str, Any], ...] = ()


class RecordService:
    """Read and write documents in the named collections."""

    @staticmethod
    def _read_collection(collection: str) -> List[Dict[str, Any]]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, data FROM documents WHERE collection = ? ORDER BY rowid",
                (collection,),
            ).fetchall()
            return [{**json.loads(row["data"]), "id": row["id"]} for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_records(cls, collection: str) -> List[Dict[str, Any]]:
        """Return every document of ``collection`` with its ``id`` merged in."""
        return await asyncio.to_thread(cls._read_collection, collection)

    @classmethod
    async def get_record(cls, collection: str, record_id: str) -> Dict[str, Any]:
        """Return a single document.  Raises ``ValueError`` if it does not exist."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, data FROM documents WHERE collection = ? AND id = ?",
                (collection, record_id),
            ).fetchone()
            if not row:
                raise ValueError(f"Record {record_id} not found in {collection}")
            return {**json.loads(row["data"]), "id": row["id"]}
        finally:
            conn.close()

    @classmethod
    async def add_record(cls, collection: str, data: Dict[str, Any]) -> str:
        """Insert a new document and return its generated id.

        An ``id`` key inside ``data`` is ignored; ids are assigned by
        the store.  Values that JSON cannot encode (datetimes) are
        stored as strings.
        """
        record_id = uuid.uuid4().hex
        body = {k: v for k, v in data.items() if k != "id"}
        conn = get_connection()
        try:
            conn.execute(
                "INSERT INTO documents (collection, id, data) VALUES (?, ?, ?)",
                (collection, record_id, json.dumps(body, default=str)),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Added record %s to %s", record_id, collection)
        return record_id

    @classmethod
    async def update_record(
        cls, collection: str, record_id: str, updates: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Merge ``updates`` into an existing document and return the result.

        Raises ``ValueError`` if the document does not exist.
        """
        current = await cls.get_record(collection, record_id)
        current.pop("id", None)
        current.update({k: v for k, v in updates.items() if k != "id"})
        conn = get_connection()
        try:
            conn.execute(
                "UPDATE documents SET data = ?, updated_at = CURRENT_TIMESTAMP "
                "WHERE collection = ? AND id = ?",
                (json.dumps(current, default=str), collection, record_id),
            )
            conn.commit()
        finally:
            conn.close()
        return {**current, "id": record_id}

    @classmethod
    async def delete_record(cls, collection: str, record_id: str) -> None:
        """Remove a document.  Raises ``ValueError`` if it does not exist."""
        conn = get_connection()
        try:
            cursor = conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, record_id),
            )
            if cursor.rowcount == 0:
                raise ValueError(f"Record {record_id} not found in {collection}")
            conn.commit()
        finally:
            conn.close()

    @classmethod
    async def fetch_snapshot(cls) -> DashboardSnapshot:
        """Fetch services, transactions and expenses for the dashboard.

        The service catalog and the ledger (transactions + expenses) are
        read concurrently; the snapshot is only built once both reads
        have completed.  Read errors propagate to the caller.
        """

        async def _ledger() -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
            transactions = await cls.list_records(TRANSACTIONS)
            expenses = await cls.list_records(EXPENSES)
            return transactions, expenses

        services, (transactions, expenses) = await asyncio.gather(
            cls.list_records(SERVICES), _ledger()
        )
        logger.debug(
            "Fetched %d services, %d transactions, %d expenses",
            len(services),
            len(transactions),
            len(expenses),
        )
        return DashboardSnapshot(
            services=tuple(services),
            transactions=tuple(transactions),
            expenses=tuple(expenses),
        )
