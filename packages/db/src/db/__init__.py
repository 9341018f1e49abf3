# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, SessionLocal, get_db, get_db_service
from .enums import ApplicantStatus, DocumentStatus, DocumentType, UserRole
from .models import Applicant, Document, DocumentRequirement, ServiceType

__all__ = [
    "Base",
    "DatabaseService",
    "SessionLocal",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "ApplicantStatus",
    "DocumentStatus",
    "DocumentType",
    "UserRole",
    # Models
    "Applicant",
    "Document",
    "DocumentRequirement",
    "ServiceType",
]
