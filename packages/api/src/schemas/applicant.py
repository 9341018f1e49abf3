# This project was developed with assistance from AI tools.
"""Applicant request/response schemas."""

from datetime import date, datetime
from typing import Any

from db.enums import ApplicantStatus
from pydantic import BaseModel, ConfigDict, Field

from . import Pagination


class ApplicantCreate(BaseModel):
    """Register a new applicant."""

    full_name: str = Field(min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = None
    passport_number: str | None = None
    passport_expiry_date: date | None = None
    nationality: str | None = None
    visa_type: str | None = None
    date_of_birth: date | None = None
    destination_country: str | None = None
    marital_status: str | None = None
    notes: str | None = None
    extra_data: dict[str, Any] = Field(default_factory=dict)
    partner_id: str | None = Field(
        default=None,
        description="Referring partner. Ignored for partner callers (always themselves).",
    )
    user_id: str | None = Field(
        default=None,
        description="Identity-provider subject of the applicant's own login, if any.",
    )


class ApplicantUpdate(BaseModel):
    """Partial update to an applicant's profile (status has its own endpoint)."""

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = None
    passport_number: str | None = None
    passport_expiry_date: date | None = None
    nationality: str | None = None
    visa_type: str | None = None
    date_of_birth: date | None = None
    destination_country: str | None = None
    marital_status: str | None = None
    notes: str | None = None
    extra_data: dict[str, Any] | None = None


class ApplicantStatusUpdate(BaseModel):
    status: ApplicantStatus


class ApplicantResponse(BaseModel):
    """Single applicant response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str | None = None
    phone: str | None = None
    passport_number: str | None = None
    passport_expiry_date: date | None = None
    nationality: str | None = None
    visa_type: str | None = None
    date_of_birth: date | None = None
    destination_country: str | None = None
    marital_status: str | None = None
    status: ApplicantStatus
    notes: str | None = None
    extra_data: dict[str, Any] | None = None
    partner_id: str | None = None
    user_id: str | None = None
    created_at: datetime
    updated_at: datetime


class ApplicantListResponse(BaseModel):
    """Paginated list of applicants."""

    data: list[ApplicantResponse]
    pagination: Pagination


class StatusCountsResponse(BaseModel):
    """Visible applicants per status, zero-filled."""

    total: int
    by_status: dict[ApplicantStatus, int]
    pending_documents: int = 0
