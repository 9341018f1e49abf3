# This project was developed with assistance from AI tools.
"""Per-service document checklist.

Each service type (Work Visa, Tourist Visa, ...) carries its own list of
named requirements. The checklist for an applicant is picked by matching
the applicant's free-text ``visa_type`` against the service key or name,
and a requirement counts as covered by any document whose category key
contains the requirement name.

This list is independent of the global catalog the progress timeline
measures against (``services.catalog``); the two are not reconciled.
"""

import logging
import re
from collections.abc import Iterable

from db import Document, DocumentRequirement, ServiceType
from db.enums import DocumentStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..schemas.auth import UserContext
from ..schemas.requirements import (
    ChecklistItem,
    ChecklistResponse,
    ChecklistState,
    DocumentRequirementResponse,
)
from ..services.applicant import get_applicant
from ..services.document import list_all_documents

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def service_key_for_visa_type(visa_type: str | None) -> str:
    """'Work Visa' -> 'work_visa'.

    Surrounding whitespace is trimmed before inner runs become underscores,
    so free-text visa types typed with stray spaces still map to a key.
    """
    if not visa_type:
        return ""
    return _WHITESPACE.sub("_", visa_type.strip().lower())


def requirements_for_visa_type(
    requirements: Iterable[DocumentRequirement],
    visa_type: str | None,
) -> list[DocumentRequirement]:
    """Requirements whose service key or name matches the visa type.

    Both comparisons ignore case and surrounding whitespace.
    """
    if not visa_type:
        return []
    key = service_key_for_visa_type(visa_type)
    name = visa_type.strip().lower()
    matched = []
    for req in requirements:
        service = req.service
        if service is None:
            continue
        if service.key == key or (service.name or "").lower() == name:
            matched.append(req)
    return matched


def _matching_documents(requirement: DocumentRequirement, documents: Iterable[Document]):
    needle = requirement.document_name.lower()
    return [
        doc
        for doc in documents
        if needle in str(getattr(doc.document_type, "value", doc.document_type)).lower()
    ]


def checklist_state(requirement: DocumentRequirement, documents: list[Document]) -> ChecklistState:
    """approved > uploaded > optional > pending."""
    if any(doc.status == DocumentStatus.APPROVED for doc in documents):
        return "approved"
    if documents:
        return "uploaded"
    if requirement.is_optional:
        return "optional"
    return "pending"


def build_checklist(
    applicant_id: int,
    visa_type: str | None,
    requirements: Iterable[DocumentRequirement],
    documents: list[Document],
) -> ChecklistResponse:
    items = []
    for req in requirements_for_visa_type(requirements, visa_type):
        matched = _matching_documents(req, documents)
        items.append(
            ChecklistItem(
                requirement_id=req.id,
                document_name=req.document_name,
                is_optional=bool(req.is_optional),
                state=checklist_state(req, matched),
                document_ids=[doc.id for doc in matched],
            )
        )

    mandatory = [item for item in items if not item.is_optional]
    approved = [item for item in mandatory if item.state == "approved"]
    return ChecklistResponse(
        applicant_id=applicant_id,
        visa_type=visa_type,
        service_key=service_key_for_visa_type(visa_type) or None,
        items=items,
        approved_count=len(approved),
        required_count=len(mandatory),
        is_complete=bool(items) and len(approved) == len(mandatory),
    )


async def _load_requirements(session: AsyncSession, service_key: str | None = None):
    stmt = (
        select(DocumentRequirement)
        .options(joinedload(DocumentRequirement.service))
        .order_by(DocumentRequirement.service_id, DocumentRequirement.id)
    )
    if service_key:
        stmt = stmt.join(ServiceType).where(ServiceType.key == service_key)
    result = await session.execute(stmt)
    return result.unique().scalars().all()


async def get_applicant_checklist(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
) -> ChecklistResponse | None:
    """Checklist for the applicant's visa type. None if not found / out of scope."""
    applicant = await get_applicant(session, user, applicant_id)
    if applicant is None:
        return None

    requirements = await _load_requirements(session)
    documents = await list_all_documents(session, user, applicant_id)
    checklist = build_checklist(applicant_id, applicant.visa_type, requirements, documents)
    if not checklist.items and applicant.visa_type:
        logger.debug(
            "No requirements configured for visa type %r (applicant %s)",
            applicant.visa_type,
            applicant_id,
        )
    return checklist


async def list_service_types(session: AsyncSession) -> list[ServiceType]:
    result = await session.execute(select(ServiceType).order_by(ServiceType.name))
    return result.scalars().all()


async def list_requirements(
    session: AsyncSession,
    service_key: str | None = None,
) -> list[DocumentRequirementResponse]:
    """Requirements, optionally for a single service, with service info inlined."""
    requirements = await _load_requirements(session, service_key)
    return [
        DocumentRequirementResponse(
            id=req.id,
            service_id=req.service_id,
            service_key=req.service.key if req.service else None,
            service_name=req.service.name if req.service else None,
            document_name=req.document_name,
            is_optional=bool(req.is_optional),
        )
        for req in requirements
    ]
