# This project was developed with assistance from AI tools.
"""Applicant service with role-based data scope filtering.

Every query is filtered through the caller's DataScope so that partners
see only the applicants they referred, applicants see only their own
record, and staff see all. Out-of-scope rows come back as None, which
routes map to 404 rather than 403 to avoid leaking existence.
"""

import logging
from typing import Any

from db import Applicant, Document
from db.enums import ApplicantStatus, UserRole
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from ..services.document import discard_stored_files
from ..services.scope import apply_data_scope

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {
    "full_name",
    "email",
    "phone",
    "passport_number",
    "passport_expiry_date",
    "nationality",
    "visa_type",
    "date_of_birth",
    "destination_country",
    "marital_status",
    "notes",
    "extra_data",
}


def _apply_filters(
    stmt,
    filter_status: ApplicantStatus | None,
    search: str | None,
    active_only: bool = False,
):
    if filter_status is not None:
        stmt = stmt.where(Applicant.status == filter_status)
    if active_only:
        stmt = stmt.where(Applicant.status.not_in(sorted(ApplicantStatus.terminal_statuses())))
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                Applicant.full_name.ilike(pattern),
                Applicant.email.ilike(pattern),
                Applicant.passport_number.ilike(pattern),
            )
        )
    return stmt


async def list_applicants(
    session: AsyncSession,
    user: UserContext,
    *,
    offset: int = 0,
    limit: int = 20,
    filter_status: ApplicantStatus | None = None,
    search: str | None = None,
    active_only: bool = False,
) -> tuple[list[Applicant], int]:
    """Return applicants visible to the current user, newest first.

    ``active_only`` drops applicants in a terminal status (rejected, completed).
    """
    count_stmt = select(func.count(Applicant.id))
    count_stmt = apply_data_scope(count_stmt, user.data_scope)
    count_stmt = _apply_filters(count_stmt, filter_status, search, active_only)
    total = (await session.execute(count_stmt)).scalar() or 0

    stmt = select(Applicant).order_by(Applicant.created_at.desc()).offset(offset).limit(limit)
    stmt = apply_data_scope(stmt, user.data_scope)
    stmt = _apply_filters(stmt, filter_status, search, active_only)
    result = await session.execute(stmt)
    applicants = result.unique().scalars().all()

    return applicants, total


async def get_applicant(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
) -> Applicant | None:
    """Return a single applicant if visible to the current user."""
    stmt = select(Applicant).where(Applicant.id == applicant_id)
    stmt = apply_data_scope(stmt, user.data_scope)
    result = await session.execute(stmt)
    return result.unique().scalar_one_or_none()


async def create_applicant(
    session: AsyncSession,
    user: UserContext,
    **fields: Any,
) -> Applicant:
    """Create an applicant in status ``new``.

    Partners always become the referring partner of applicants they create.
    """
    partner_id = fields.pop("partner_id", None)
    user_id = fields.pop("user_id", None)
    if user.role == UserRole.PARTNER:
        partner_id = user.user_id

    applicant = Applicant(
        **{k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS},
        partner_id=partner_id,
        user_id=user_id,
        status=ApplicantStatus.NEW,
    )
    session.add(applicant)
    await session.commit()
    await session.refresh(applicant)

    logger.info(
        "Applicant %s created by %s (partner=%s)", applicant.id, user.user_id, partner_id
    )
    return applicant


async def update_applicant(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
    **updates: Any,
) -> Applicant | None:
    """Update profile fields. Unknown fields (including ``status``) are ignored."""
    applicant = await get_applicant(session, user, applicant_id)
    if applicant is None:
        return None

    for field, value in updates.items():
        if field not in _UPDATABLE_FIELDS:
            continue
        setattr(applicant, field, value)

    await session.commit()
    await session.refresh(applicant)
    return applicant


async def update_status(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
    new_status: ApplicantStatus,
) -> Applicant | None:
    """Set the applicant's status.

    Any of the six statuses may be assigned from any other; staff drive the
    lifecycle by hand and no transition graph is enforced.
    """
    applicant = await get_applicant(session, user, applicant_id)
    if applicant is None:
        return None

    old_status = applicant.status
    applicant.status = new_status
    await session.commit()
    await session.refresh(applicant)

    logger.info(
        "Applicant %s status %s -> %s by %s",
        applicant_id,
        getattr(old_status, "value", old_status),
        new_status.value,
        user.user_id,
    )
    return applicant


async def delete_applicant(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
) -> bool:
    """Delete an applicant and (via cascade) its documents. False if not visible.

    Stored files of the cascaded documents are removed after the commit.
    """
    applicant = await get_applicant(session, user, applicant_id)
    if applicant is None:
        return False

    paths_stmt = select(Document.file_path).where(
        Document.applicant_id == applicant_id,
        Document.file_path.is_not(None),
    )
    file_paths = list((await session.execute(paths_stmt)).scalars().all())

    await session.delete(applicant)
    await session.commit()

    removed = await discard_stored_files(file_paths)
    logger.info(
        "Applicant %s deleted by %s (%d of %d stored files removed)",
        applicant_id,
        user.user_id,
        removed,
        len(file_paths),
    )
    return True


async def get_status_counts(
    session: AsyncSession,
    user: UserContext,
) -> dict[ApplicantStatus, int]:
    """Count visible applicants per status; every status is present."""
    stmt = select(Applicant.status, func.count(Applicant.id)).group_by(Applicant.status)
    stmt = apply_data_scope(stmt, user.data_scope)
    result = await session.execute(stmt)

    counts = {s: 0 for s in ApplicantStatus}
    for status, count in result.all():
        counts[ApplicantStatus(getattr(status, "value", status))] = count
    return counts
