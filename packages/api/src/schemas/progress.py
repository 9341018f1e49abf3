# This project was developed with assistance from AI tools.
"""Applicant progress timeline schemas."""

from typing import Literal

from db.enums import ApplicantStatus
from pydantic import BaseModel


class CategorySummary(BaseModel):
    """Per-category document tallies feeding the document-derived stage.

    The counts are independent tests, not a partition: one category can be
    both uploaded and approved.
    """

    total_required: int = 0
    uploaded: int = 0
    approved: int = 0
    rejected: int = 0
    pending_only: int = 0


class TimelineStep(BaseModel):
    """One labelled step of the progress timeline."""

    index: int
    label: str
    state: Literal["completed", "current", "upcoming"]


class StageLabel(BaseModel):
    index: int
    label: str


class ApplicantProgressResponse(BaseModel):
    """Resolved progress stage for an applicant."""

    applicant_id: int
    status: ApplicantStatus
    stage_index: int
    stage_label: str
    status_stage_index: int
    document_stage_index: int | None = None
    progress_percent: int
    categories: CategorySummary
    timeline: list[TimelineStep]
