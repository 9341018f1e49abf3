# This project was developed with assistance from AI tools.
"""Progress stage resolution.

Turns two independent signals into the single stage index that drives the
applicant progress timeline:

* the backend ``status`` set by staff, mapped through a fixed table, and
* observed document completeness across the catalog categories, mapped
  through a priority cascade on the approved ratio.

The final index is ``max(status-derived, document-derived)``, so document
progress can run ahead of a stale status while a later status always
floors the display. ``rejected`` maps to 7, above anything the documents
can produce, so a rejection is never masked.

Everything here is pure and never raises: unknown statuses map to 0 and
unreadable documents are ignored.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from db.enums import ApplicantStatus, DocumentStatus

from ..schemas.progress import CategorySummary, TimelineStep

STAGE_LABELS: tuple[str, ...] = (
    "New",
    "Documents Pending",
    "Documents Received",
    "Under Review",
    "Processing",
    "Final Documents",
    "Approved",
    "Rejected",
)

MAX_STAGE_INDEX = len(STAGE_LABELS) - 1

STATUS_STAGE_INDEX: dict[str, int] = {
    ApplicantStatus.NEW.value: 0,
    ApplicantStatus.DOCS_PENDING.value: 1,
    ApplicantStatus.PROCESSING.value: 4,
    ApplicantStatus.APPROVED.value: 6,
    ApplicantStatus.COMPLETED.value: 6,
    ApplicantStatus.REJECTED.value: 7,
}

# Returned by document_stage_index() when there is no catalog to measure against.
NO_CATALOG = -1

# Strict lower bounds on the approved ratio.
FINAL_DOCUMENTS_RATIO = 0.9
PROCESSING_RATIO = 0.5


def _key(value: Any) -> Any:
    """Unwrap str enums to their value; leave everything else untouched."""
    return getattr(value, "value", value)


def _document_fields(document: Any) -> tuple[Any, Any]:
    """Read (document_type, status) from an ORM row, schema, mapping or pair."""
    if isinstance(document, Mapping):
        return _key(document.get("document_type")), _key(document.get("status"))
    if isinstance(document, tuple) and len(document) == 2:
        return _key(document[0]), _key(document[1])
    return (
        _key(getattr(document, "document_type", None)),
        _key(getattr(document, "status", None)),
    )


def status_stage_index(status: Any) -> int:
    """Stage index implied by the backend status alone (unknown -> 0)."""
    key = _key(status)
    if not isinstance(key, str):
        return 0
    return STATUS_STAGE_INDEX.get(key, 0)


def summarize_categories(documents: Iterable[Any] | None, categories: Iterable[Any]) -> CategorySummary:
    """Tally uploaded/approved/rejected/pending-only categories.

    A category with no documents only contributes to ``total_required``.
    """
    fields = [_document_fields(doc) for doc in (documents or ())]
    summary = CategorySummary()

    for category in categories:
        category = _key(category)
        statuses = [doc_status for doc_type, doc_status in fields if doc_type == category]
        summary.total_required += 1
        if not statuses:
            continue
        summary.uploaded += 1
        if DocumentStatus.APPROVED.value in statuses:
            summary.approved += 1
        if DocumentStatus.REJECTED.value in statuses:
            summary.rejected += 1
        if all(s == DocumentStatus.PENDING.value for s in statuses):
            summary.pending_only += 1

    return summary


def _stage_from_summary(summary: CategorySummary) -> int:
    total = summary.total_required
    approved_ratio = summary.approved / total

    if summary.approved == total:
        return 6
    if approved_ratio > FINAL_DOCUMENTS_RATIO:
        return 5
    if approved_ratio > PROCESSING_RATIO:
        return 4
    if summary.approved > 0 or summary.rejected > 0:
        return 3
    if summary.uploaded == total:
        return 2
    if summary.uploaded > 0 and summary.pending_only == summary.uploaded:
        return 1
    return 0


def document_stage_index(documents: Iterable[Any] | None, categories: Iterable[Any] | None) -> int:
    """Stage index implied by document completeness, or NO_CATALOG."""
    categories = list(categories or ())
    if not categories:
        return NO_CATALOG
    return _stage_from_summary(summarize_categories(documents, categories))


def resolve_stage_index(
    status: Any,
    documents: Iterable[Any] | None,
    categories: Iterable[Any] | None,
) -> int:
    """Combine status and documents into the displayed stage index."""
    backend_stage = status_stage_index(status)
    doc_stage = document_stage_index(documents, categories)
    if doc_stage == NO_CATALOG:
        stage = backend_stage
    else:
        stage = max(backend_stage, doc_stage)
    return min(stage, MAX_STAGE_INDEX)


def stage_label(stage_index: int) -> str:
    return STAGE_LABELS[max(0, min(stage_index, MAX_STAGE_INDEX))]


def progress_percent(stage_index: int) -> int:
    """Width of the timeline bar for ``stage_index``, 0-100."""
    stage_index = max(0, min(stage_index, MAX_STAGE_INDEX))
    return round(stage_index / MAX_STAGE_INDEX * 100)


def build_timeline(stage_index: int) -> list[TimelineStep]:
    """Label every stage as completed, current or upcoming."""
    steps = []
    for idx, label in enumerate(STAGE_LABELS):
        if idx < stage_index:
            state = "completed"
        elif idx == stage_index:
            state = "current"
        else:
            state = "upcoming"
        steps.append(TimelineStep(index=idx, label=label, state=state))
    return steps
