# This project was developed with assistance from AI tools.
"""Applicant progress service.

Loads one snapshot of the applicant and one of its documents, then runs
the progress resolver against the global document catalog. The two reads
are not transactional; a stale pairing self-corrects on the next request.
"""

import logging

from db.enums import ApplicantStatus
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from ..schemas.progress import ApplicantProgressResponse
from ..services.applicant import get_applicant
from ..services.catalog import required_categories
from ..services.document import list_all_documents
from ..services.progress import (
    NO_CATALOG,
    build_timeline,
    document_stage_index,
    progress_percent,
    resolve_stage_index,
    stage_label,
    status_stage_index,
    summarize_categories,
)

logger = logging.getLogger(__name__)


async def get_applicant_progress(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
) -> ApplicantProgressResponse | None:
    """Resolve the timeline stage for an applicant.

    Returns None if the applicant is not found or not accessible.
    """
    applicant = await get_applicant(session, user, applicant_id)
    if applicant is None:
        return None

    documents = await list_all_documents(session, user, applicant_id)
    categories = required_categories()
    status = applicant.status or ApplicantStatus.NEW

    doc_stage = document_stage_index(documents, categories)
    stage = resolve_stage_index(status, documents, categories)

    logger.debug(
        "Applicant %s progress: status=%s docs=%d stage=%d",
        applicant_id,
        getattr(status, "value", status),
        len(documents),
        stage,
    )

    return ApplicantProgressResponse(
        applicant_id=applicant_id,
        status=status,
        stage_index=stage,
        stage_label=stage_label(stage),
        status_stage_index=status_stage_index(status),
        document_stage_index=None if doc_stage == NO_CATALOG else doc_stage,
        progress_percent=progress_percent(stage),
        categories=summarize_categories(documents, categories),
        timeline=build_timeline(stage),
    )
