# This project was developed with assistance from AI tools.
"""Service-type catalog and per-service checklist schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

ChecklistState = Literal["approved", "uploaded", "optional", "pending"]


class ServiceTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    name: str
    description: str | None = None


class DocumentRequirementResponse(BaseModel):
    """A document one service type asks for."""

    id: int
    service_id: int
    service_key: str | None = None
    service_name: str | None = None
    document_name: str
    is_optional: bool = False


class ChecklistItem(BaseModel):
    """One requirement with its fulfillment state."""

    requirement_id: int
    document_name: str
    is_optional: bool
    state: ChecklistState
    document_ids: list[int] = []


class ChecklistResponse(BaseModel):
    """Requirement checklist scoped to the applicant's visa type."""

    applicant_id: int
    visa_type: str | None = None
    service_key: str | None = None
    items: list[ChecklistItem]
    approved_count: int
    required_count: int
    is_complete: bool
