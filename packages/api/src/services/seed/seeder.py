# This project was developed with assistance from AI tools.
"""Service-type catalog seeding.

Upserts by service key, so re-running only adds what is missing. With
``force=True`` each service's requirement list is replaced wholesale.
"""

import logging

from db import DocumentRequirement, ServiceType
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .fixtures import OPTIONAL_DOCUMENTS, SERVICE_TYPES, compute_config_hash

logger = logging.getLogger(__name__)


async def _existing_services(session: AsyncSession) -> dict[str, ServiceType]:
    result = await session.execute(
        select(ServiceType).options(selectinload(ServiceType.requirements))
    )
    return {s.key: s for s in result.scalars().all()}


async def seed_service_catalog(session: AsyncSession, force: bool = False) -> dict:
    """Load service types and their requirements. Returns a summary dict."""
    existing = await _existing_services(session)

    created_services = 0
    created_requirements = 0

    for service_def in SERVICE_TYPES:
        service = existing.get(service_def["key"])
        if service is None:
            service = ServiceType(
                key=service_def["key"],
                name=service_def["name"],
                description=service_def["description"],
            )
            session.add(service)
            await session.flush()  # Get service.id
            known_names: set[str] = set()
            created_services += 1
        elif force:
            await session.execute(
                delete(DocumentRequirement).where(DocumentRequirement.service_id == service.id)
            )
            service.name = service_def["name"]
            service.description = service_def["description"]
            known_names = set()
        else:
            known_names = {r.document_name for r in service.requirements}

        for document_name in service_def["documents"]:
            if document_name in known_names:
                continue
            session.add(
                DocumentRequirement(
                    service_id=service.id,
                    document_name=document_name,
                    is_optional=document_name in OPTIONAL_DOCUMENTS,
                )
            )
            created_requirements += 1

    await session.commit()

    summary = {
        "status": "seeded" if (created_services or created_requirements) else "already_seeded",
        "config_hash": compute_config_hash(),
        "service_types": created_services,
        "requirements": created_requirements,
    }
    logger.info("Service catalog seed: %s", summary)
    return summary
