# This project was developed with assistance from AI tools.
"""Document request/response schemas."""

from datetime import datetime
from typing import Literal

from db.enums import DocumentStatus, DocumentType
from pydantic import BaseModel, ConfigDict, Field


class DocumentResponse(BaseModel):
    """Document metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    applicant_id: int
    document_type: DocumentType
    original_filename: str | None = None
    content_type: str | None = None
    status: DocumentStatus
    notes: str | None = None
    uploaded_by: str | None = None
    reviewed_by: str | None = None
    uploaded_at: datetime
    updated_at: datetime | None = None


class DocumentListResponse(BaseModel):
    """Paginated list of documents."""

    data: list[DocumentResponse]
    count: int


class DocumentReviewRequest(BaseModel):
    """Staff verdict on a single document."""

    status: DocumentStatus
    notes: str | None = Field(default=None, max_length=2000)


class DocumentDownloadResponse(BaseModel):
    url: str
    expires_in: int


class DocumentTypeOption(BaseModel):
    value: DocumentType
    label: str


class DocumentTypeCatalogResponse(BaseModel):
    """The global category list and upload constraints."""

    data: list[DocumentTypeOption]
    allowed_content_types: list[str]
    max_upload_mb: int


class DeleteResponse(BaseModel):
    deleted: Literal[True] = True
