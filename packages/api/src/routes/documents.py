# This project was developed with assistance from AI tools.
"""Document upload, listing, review and download routes."""

import logging

from db import get_db
from db.enums import DocumentStatus, DocumentType, UserRole
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..middleware.auth import CurrentUser, require_roles
from ..schemas.document import (
    DeleteResponse,
    DocumentDownloadResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentReviewRequest,
)
from ..services import document as doc_service
from ..services.storage import StorageUnavailableError

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


def _document_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Document not found",
    )


def _storage_unavailable(exc: StorageUnavailableError) -> HTTPException:
    logger.error("Document storage unavailable: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Document storage unavailable",
    )


@router.post(
    "/applicants/{applicant_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def upload_document(
    applicant_id: int,
    user: CurrentUser,
    file: UploadFile = File(...),
    document_type: DocumentType = Form(...),
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    """Upload a file into one document category. The new document is ``pending``."""
    file_data = await file.read()
    try:
        doc = await doc_service.upload_document(
            session,
            user,
            applicant_id,
            document_type=document_type,
            filename=file.filename or "",
            content_type=file.content_type or "",
            file_data=file_data,
        )
    except doc_service.UnsupportedContentType as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except doc_service.FileTooLarge as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except StorageUnavailableError as exc:
        raise _storage_unavailable(exc) from exc

    if doc is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Applicant not found",
        )
    return DocumentResponse.model_validate(doc)


@router.get(
    "/applicants/{applicant_id}/documents",
    response_model=DocumentListResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def list_documents(
    applicant_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> DocumentListResponse:
    """List documents for an applicant. Out-of-scope applicants yield an empty list."""
    documents, total = await doc_service.list_documents(
        session,
        user,
        applicant_id,
        offset=offset,
        limit=limit,
    )
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=total,
    )


@router.get(
    "/documents",
    response_model=DocumentListResponse,
    dependencies=[Depends(require_roles(*_STAFF_ROLES))],
)
async def list_documents_for_review(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    applicant_id: int | None = Query(default=None),
    document_type: DocumentType | None = Query(default=None),
    filter_status: DocumentStatus | None = Query(default=None, alias="status"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> DocumentListResponse:
    """Documents across all applicants, oldest first. Staff only."""
    documents, total = await doc_service.list_documents_for_review(
        session,
        user,
        applicant_id=applicant_id,
        document_type=document_type,
        status=filter_status,
        offset=offset,
        limit=limit,
    )
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=total,
    )


@router.get(
    "/documents/{document_id}",
    response_model=DocumentResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def get_document(
    document_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    """Get document metadata."""
    doc = await doc_service.get_document(session, user, document_id)
    if doc is None:
        raise _document_not_found()
    return DocumentResponse.model_validate(doc)


@router.patch(
    "/documents/{document_id}/review",
    response_model=DocumentResponse,
    dependencies=[Depends(require_roles(*_STAFF_ROLES))],
)
async def review_document(
    document_id: int,
    body: DocumentReviewRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    """Approve, reject or reset a single document. Staff only."""
    doc = await doc_service.review_document(
        session,
        user,
        document_id,
        body.status,
        notes=body.notes,
    )
    if doc is None:
        raise _document_not_found()
    return DocumentResponse.model_validate(doc)


@router.get(
    "/documents/{document_id}/download",
    response_model=DocumentDownloadResponse,
    dependencies=[Depends(require_roles(*_ALL_AUTHENTICATED))],
)
async def download_document(
    document_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentDownloadResponse:
    """Short-lived presigned URL for the stored file."""
    doc = await doc_service.get_document(session, user, document_id)
    if doc is None:
        raise _document_not_found()
    try:
        url = await doc_service.get_download_url(doc)
    except StorageUnavailableError as exc:
        raise _storage_unavailable(exc) from exc
    if url is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document file not found",
        )
    return DocumentDownloadResponse(url=url, expires_in=settings.DOWNLOAD_URL_TTL)


@router.delete(
    "/documents/{document_id}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_roles(*_MANAGE_ROLES))],
)
async def delete_document(
    document_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    """Delete a document. A storage failure after the commit is logged, not raised."""
    deleted = await doc_service.delete_document(session, user, document_id)
    if not deleted:
        raise _document_not_found()
    return DeleteResponse()
