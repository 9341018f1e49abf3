# This project was developed with assistance from AI tools.
"""Document store: upload, listing and staff review.

Access to a document is always decided through its applicant, so the same
DataScope rules as ``services.applicant`` apply. Each document's review
status moves independently of every other document.
"""

import logging

from db import Applicant, Document
from db.enums import DocumentStatus, DocumentType
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..schemas.auth import UserContext
from ..services.catalog import ALLOWED_CONTENT_TYPES
from ..services.scope import apply_data_scope
from ..services.storage import StorageUnavailableError, get_storage_service

logger = logging.getLogger(__name__)


class DocumentUploadError(Exception):
    """Raised when an upload fails validation."""


class UnsupportedContentType(DocumentUploadError):
    pass


class FileTooLarge(DocumentUploadError):
    pass


def _scoped_documents(user: UserContext):
    stmt = select(Document)
    return apply_data_scope(stmt, user.data_scope, join_to_applicant=Document.applicant)


async def list_documents(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
    *,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[Document], int]:
    """Return one page of an applicant's documents, newest first."""
    count_stmt = select(func.count(Document.id)).where(Document.applicant_id == applicant_id)
    count_stmt = apply_data_scope(
        count_stmt, user.data_scope, join_to_applicant=Document.applicant
    )
    total = (await session.execute(count_stmt)).scalar() or 0

    stmt = (
        _scoped_documents(user)
        .where(Document.applicant_id == applicant_id)
        .order_by(Document.uploaded_at.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.unique().scalars().all(), total


async def list_all_documents(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
) -> list[Document]:
    """Every document of an applicant (unpaginated snapshot for progress)."""
    stmt = _scoped_documents(user).where(Document.applicant_id == applicant_id)
    result = await session.execute(stmt)
    return result.unique().scalars().all()


async def list_documents_for_review(
    session: AsyncSession,
    user: UserContext,
    *,
    applicant_id: int | None = None,
    document_type: DocumentType | None = None,
    status: DocumentStatus | None = None,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[Document], int]:
    """Documents across every visible applicant, oldest upload first.

    Staff use this as the review queue, typically with ``status=pending``.
    """
    filters = []
    if applicant_id is not None:
        filters.append(Document.applicant_id == applicant_id)
    if document_type is not None:
        filters.append(Document.document_type == document_type)
    if status is not None:
        filters.append(Document.status == status)

    count_stmt = apply_data_scope(
        select(func.count(Document.id)).where(*filters),
        user.data_scope,
        join_to_applicant=Document.applicant,
    )
    total = (await session.execute(count_stmt)).scalar() or 0

    stmt = (
        _scoped_documents(user)
        .where(*filters)
        .order_by(Document.uploaded_at.asc(), Document.id.asc())
        .offset(offset)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.unique().scalars().all(), total


async def count_pending_documents(session: AsyncSession, user: UserContext) -> int:
    """Visible documents still awaiting a staff verdict."""
    stmt = apply_data_scope(
        select(func.count(Document.id)).where(Document.status == DocumentStatus.PENDING),
        user.data_scope,
        join_to_applicant=Document.applicant,
    )
    return (await session.execute(stmt)).scalar() or 0


async def get_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
) -> Document | None:
    """Return a single document if its applicant is visible to the current user."""
    stmt = _scoped_documents(user).where(Document.id == document_id)
    result = await session.execute(stmt)
    return result.unique().scalar_one_or_none()


def validate_upload(content_type: str, size: int) -> None:
    """Raise a DocumentUploadError subclass when the file is not acceptable."""
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedContentType(
            f"Unsupported file type: {content_type or 'unknown'}. "
            f"Allowed: {', '.join(sorted(ALLOWED_CONTENT_TYPES))}"
        )
    max_bytes = settings.UPLOAD_MAX_SIZE_MB * 1024 * 1024
    if size > max_bytes:
        raise FileTooLarge(
            f"File size {size} exceeds maximum of {settings.UPLOAD_MAX_SIZE_MB}MB"
        )


async def upload_document(
    session: AsyncSession,
    user: UserContext,
    applicant_id: int,
    document_type: DocumentType,
    filename: str,
    content_type: str,
    file_data: bytes,
) -> Document | None:
    """Store the file and create a ``pending`` Document row.

    Returns None when the applicant is not visible to the caller.
    """
    validate_upload(content_type, len(file_data))

    app_stmt = apply_data_scope(
        select(Applicant).where(Applicant.id == applicant_id), user.data_scope
    )
    result = await session.execute(app_stmt)
    if result.unique().scalar_one_or_none() is None:
        return None

    doc = Document(
        applicant_id=applicant_id,
        document_type=document_type,
        original_filename=filename,
        content_type=content_type,
        status=DocumentStatus.PENDING,
        uploaded_by=user.user_id,
    )
    session.add(doc)
    await session.flush()  # Assign doc.id for the object key

    storage = get_storage_service()
    object_key = storage.build_object_key(applicant_id, doc.id, filename)
    doc.file_path = await storage.upload_file(file_data, object_key, content_type)
    await session.commit()
    await session.refresh(doc)

    logger.info(
        "Document %s (%s) uploaded for applicant %s by %s",
        doc.id,
        document_type.value,
        applicant_id,
        user.user_id,
    )
    return doc


async def review_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
    status: DocumentStatus,
    notes: str | None = None,
) -> Document | None:
    """Record a staff verdict on one document."""
    doc = await get_document(session, user, document_id)
    if doc is None:
        return None

    doc.status = status
    if notes is not None:
        doc.notes = notes
    doc.reviewed_by = user.user_id
    await session.commit()
    await session.refresh(doc)

    logger.info("Document %s marked %s by %s", document_id, status.value, user.user_id)
    return doc


async def delete_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
) -> bool:
    """Delete the row and its stored file. False when not visible."""
    doc = await get_document(session, user, document_id)
    if doc is None:
        return False

    file_path = doc.file_path
    await session.delete(doc)
    await session.commit()

    if file_path:
        await discard_stored_files([file_path])
    logger.info("Document %s deleted by %s", document_id, user.user_id)
    return True


async def discard_stored_files(file_paths: list[str]) -> int:
    """Remove stored objects whose rows are already gone.

    Storage failures are logged and skipped; the database is the source of
    truth and an orphaned object is harmless. Returns how many were removed.
    """
    removed = 0
    for file_path in file_paths:
        try:
            await get_storage_service().delete_file(file_path)
        except StorageUnavailableError as exc:
            logger.warning("Could not remove stored file %s: %s", file_path, exc)
            continue
        removed += 1
    return removed


async def get_download_url(document: Document) -> str | None:
    """Presigned URL for the stored file, or None if nothing was stored."""
    if not document.file_path:
        return None
    storage = get_storage_service()
    return await storage.get_download_url(document.file_path, expires_in=settings.DOWNLOAD_URL_TTL)
