"""
Business logic for the service catalog.

Services live in the ``services`` collection.  Documents may have been
written by other tools, so reads normalise them: missing text becomes
``""``, prices go through ``to_number`` and availability through
``bool``.  Missing services raise ``ValueError``; the API layer turns
that into a 404.
"""

import logging
from typing import Any, Dict, List

from ..schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from .record_service import SERVICES, RecordService
from .statistics_service import to_number


class CatalogService:
    """Create, list, edit and delete catalog services."""

    @staticmethod
    def _to_read(doc: Dict[str, Any]) -> ServiceRead:
        return ServiceRead(
            id=doc["id"],
            title=str(doc.get("title") or ""),
            details=str(doc.get("details") or ""),
            price=to_number(doc.get("price")),
            available=bool(doc.get("available")),
        )

    @classmethod
    async def create_service(cls, data: ServiceCreate) -> ServiceRead:
        """Store a new service and return it with its generated id."""
        logger = logging.getLogger(__name__)
        body = data.model_dump()
        service_id = await RecordService.add_record(SERVICES, body)
        logger.info("Service %s created: '%s'", service_id, data.title)
        return ServiceRead(id=service_id, **body)

    @classmethod
    async def list_services(cls) -> List[ServiceRead]:
        """Return the whole catalog in insertion order."""
        docs = await RecordService.list_records(SERVICES)
        return [cls._to_read(doc) for doc in docs]

    @classmethod
    async def get_service(cls, service_id: str) -> ServiceRead:
        return cls._to_read(await RecordService.get_record(SERVICES, service_id))

    @classmethod
    async def update_service(cls, service_id: str, data: ServiceUpdate) -> ServiceRead:
        """Replace title, details, price and availability of a service."""
        logger = logging.getLogger(__name__)
        doc = await RecordService.update_record(SERVICES, service_id, data.model_dump())
        logger.info("Service %s updated", service_id)
        return cls._to_read(doc)

    @classmethod
    async def toggle_availability(cls, service_id: str) -> ServiceRead:
        """Flip the stored ``available`` flag of a service."""
        logger = logging.getLogger(__name__)
        current = await RecordService.get_record(SERVICES, service_id)
        available = not bool(current.get("available"))
        doc = await RecordService.update_record(SERVICES, service_id, {"available": available})
        logger.info("Service %s marked %s", service_id, "available" if available else "unavailable")
        return cls._to_read(doc)

    @classmethod
    async def delete_service(cls, service_id: str) -> None:
        """Remove a service.  Role checks happen in the API layer."""
        logger = logging.getLogger(__name__)
        await RecordService.delete_record(SERVICES, service_id)
        logger.info("Service %s deleted", service_id)
