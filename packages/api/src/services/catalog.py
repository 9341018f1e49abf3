# This project was developed with assistance from AI tools.
"""Document Type Catalog.

The flat, global list of document categories the backend accepts. The
progress resolver treats every category here as required; per-service
checklists live in ``services.requirements`` and are not consulted.
"""

from db.enums import DocumentType

DOCUMENT_TYPE_LABELS: dict[DocumentType, str] = {
    DocumentType.PASSPORT: "Passport Scan",
    DocumentType.PHOTO: "Passport Photo",
    DocumentType.BANK_STATEMENT: "Bank Statement",
    DocumentType.TICKET: "Flight Ticket",
    DocumentType.INSURANCE: "Travel Insurance",
    DocumentType.OTHER: "Other",
}

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def required_categories() -> list[str]:
    """Ordered category keys counted toward document completeness."""
    return [doc_type.value for doc_type in DocumentType]


def document_type_label(value: str) -> str:
    """Human-readable label for a category key; unknown keys echo back."""
    try:
        return DOCUMENT_TYPE_LABELS[DocumentType(value)]
    except ValueError:
        return value
