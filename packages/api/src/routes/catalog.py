# This project was developed with assistance from AI tools.
"""Read-only catalog routes: document categories, stages and service types."""

from db import get_db
from db.enums import DocumentType
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..middleware.auth import CurrentUser
from ..schemas.document import DocumentTypeCatalogResponse, DocumentTypeOption
from ..schemas.progress import StageLabel
from ..schemas.requirements import DocumentRequirementResponse, ServiceTypeResponse
from ..services.catalog import ALLOWED_CONTENT_TYPES, document_type_label
from ..services.progress import STAGE_LABELS
from ..services.requirements import list_requirements, list_service_types

router = APIRouter()


@router.get("/document-types", response_model=DocumentTypeCatalogResponse)
async def get_document_types(user: CurrentUser) -> DocumentTypeCatalogResponse:
    """The global document categories, in catalog order."""
    return DocumentTypeCatalogResponse(
        data=[
            DocumentTypeOption(value=doc_type, label=document_type_label(doc_type.value))
            for doc_type in DocumentType
        ],
        allowed_content_types=sorted(ALLOWED_CONTENT_TYPES),
        max_upload_mb=settings.UPLOAD_MAX_SIZE_MB,
    )


@router.get("/stages", response_model=list[StageLabel])
async def get_stages(user: CurrentUser) -> list[StageLabel]:
    return [StageLabel(index=i, label=label) for i, label in enumerate(STAGE_LABELS)]


@router.get("/service-types", response_model=list[ServiceTypeResponse])
async def get_service_types(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> list[ServiceTypeResponse]:
    service_types = await list_service_types(session)
    return [ServiceTypeResponse.model_validate(s) for s in service_types]


@router.get("/requirements", response_model=list[DocumentRequirementResponse])
async def get_requirements(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    service_key: str | None = Query(default=None, max_length=100),
) -> list[DocumentRequirementResponse]:
    """Document requirements, optionally restricted to one service type."""
    requirements = await list_requirements(session, service_key)
    if service_key and not requirements:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service type not found",
        )
    return requirements
