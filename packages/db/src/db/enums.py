# This project was developed with assistance from AI tools.
"""
Domain enums for the applicant lifecycle.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class ApplicantStatus(str, enum.Enum):
    NEW = "new"
    DOCS_PENDING = "docs_pending"
    PROCESSING = "processing"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"

    @classmethod
    def terminal_statuses(cls) -> frozenset["ApplicantStatus"]:
        """Statuses where an applicant is no longer in progress."""
        return frozenset({cls.REJECTED, cls.COMPLETED})


class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentType(str, enum.Enum):
    """Backend document categories, in catalog order."""

    PASSPORT = "passport"
    PHOTO = "photo"
    BANK_STATEMENT = "bank_statement"
    TICKET = "ticket"
    INSURANCE = "insurance"
    OTHER = "other"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    TEAM_MEMBER = "team_member"
    PARTNER = "partner"
    APPLICANT = "applicant"

    @classmethod
    def staff_roles(cls) -> frozenset["UserRole"]:
        """Roles allowed to review documents and set applicant status."""
        return frozenset({cls.ADMIN, cls.TEAM_MEMBER})
