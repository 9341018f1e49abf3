# This project was developed with assistance from AI tools.
"""Applicant CRUD, status and progress routes with RBAC enforcement."""

import logging

from db import Applicant, get_db
from db.enums import ApplicantStatus, UserRole
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser, require_roles
from ..schemas import Pagination
from ..schemas.applicant import (
    ApplicantCreate,
    ApplicantListResponse,
    ApplicantResponse,
    ApplicantStatusUpdate,
    ApplicantUpdate,
    StatusCountsResponse,
)
from ..schemas.document import DeleteResponse
from ..schemas.progress import ApplicantProgressResponse
from ..schemas.requirements import ChecklistResponse
from ..services import applicant as applicant_service
from ..services import document as doc_service
from ..services.requirements import get_applicant_checklist
from ..services.status import get_applicant_progress

logger = logging.getLogger(__name__)

router = APIRouter()

_ALL_AUTHENTICATED = (
    UserRole.ADMIN,
    UserRole.TEAM_MEMBER,
    UserRole.PARTNER,
    UserRole.APPLICANT,
)

_MANAGE_ROLES = (
    UserRole.ADMIN,
    UserRole.TEAM_MEMBER,
    UserRole.PARTNER,
)

_STAFF_ROLES = tuple(UserRole.staff_roles())


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Applicant not found",
    )


def _build_response(applicant: Applicant) -> ApplicantResponse:
    return ApplicantResponse.model_validate(applicant)


@router.get(
    "/",
    response_model=ApplicantListResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def list_applicants(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    filter_status: ApplicantStatus | None = None,
    search: str | None = Query(default=None, max_length=100),
    active_only: bool = False,
) -> ApplicantListResponse:
    """List applicants visible to the current user's role and data scope."""
    applicants, total = await applicant_service.list_applicants(
        session,
        user,
        offset=offset,
        limit=limit,
        filter_status=filter_status,
        search=search,
        active_only=active_only,
    )
    return ApplicantListResponse(
        data=[_build_response(a) for a in applicants],
        pagination=Pagination(
            total=total,
            offset=offset,
            limit=limit,
            has_more=(offset + limit < total),
        ),
    )


@router.post(
    "/",
    response_model=ApplicantResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*_MANAGE_ROLES))],
)
async def create_applicant(
    body: ApplicantCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicantResponse:
    """Register an applicant. New applicants always start in status ``new``."""
    applicant = await applicant_service.create_applicant(session, user, **body.model_dump())
    return _build_response(applicant)


@router.get(
    "/stats",
    response_model=StatusCountsResponse,
    dependencies=[Depends(require_roles(*_MANAGE_ROLES))],
)
async def applicant_stats(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> StatusCountsResponse:
    """Visible applicants per status and documents awaiting review."""
    counts = await applicant_service.get_status_counts(session, user)
    pending = await doc_service.count_pending_documents(session, user)
    return StatusCountsResponse(
        total=sum(counts.values()),
        by_status=counts,
        pending_documents=pending,
    )


@router.get(
    "/{applicant_id}",
    response_model=ApplicantResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def get_applicant(
    applicant_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicantResponse:
    """Get a single applicant. Returns 404 for out-of-scope resources."""
    applicant = await applicant_service.get_applicant(session, user, applicant_id)
    if applicant is None:
        raise _not_found()
    return _build_response(applicant)


@router.patch(
    "/{applicant_id}",
    response_model=ApplicantResponse,
    dependencies=[Depends(require_roles(*_MANAGE_ROLES))],
)
async def update_applicant(
    applicant_id: int,
    body: ApplicantUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicantResponse:
    """Update profile fields. Status changes go through ``/status``."""
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )
    applicant = await applicant_service.update_applicant(session, user, applicant_id, **updates)
    if applicant is None:
        raise _not_found()
    return _build_response(applicant)


@router.patch(
    "/{applicant_id}/status",
    response_model=ApplicantResponse,
    dependencies=[Depends(require_roles(*_STAFF_ROLES))],
)
async def update_applicant_status(
    applicant_id: int,
    body: ApplicantStatusUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicantResponse:
    """Set the applicant's lifecycle status. Staff only."""
    applicant = await applicant_service.update_status(session, user, applicant_id, body.status)
    if applicant is None:
        raise _not_found()
    return _build_response(applicant)


@router.delete(
    "/{applicant_id}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def delete_applicant(
    applicant_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    """Delete an applicant and its documents. Admin only."""
    if not await applicant_service.delete_applicant(session, user, applicant_id):
        raise _not_found()
    return DeleteResponse()


@router.get(
    "/{applicant_id}/progress",
    response_model=ApplicantProgressResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def get_progress(
    applicant_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicantProgressResponse:
    """Resolved progress stage and timeline for an applicant."""
    result = await get_applicant_progress(session, user, applicant_id)
    if result is None:
        raise _not_found()
    return result


@router.get(
    "/{applicant_id}/checklist",
    response_model=ChecklistResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def get_checklist(
    applicant_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ChecklistResponse:
    """Requirement checklist for the applicant's visa type."""
    result = await get_applicant_checklist(session, user, applicant_id)
    if result is None:
        raise _not_found()
    return result
