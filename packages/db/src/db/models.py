# This project was developed with assistance from AI tools.
"""
Meridian Partner Portal -- domain models

Applicants referred by partners, their uploaded documents, and the
per-service document requirement catalog.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import ApplicantStatus, DocumentStatus, DocumentType


def _enum_values(enum_cls):
    """Persist enum values ('docs_pending') rather than member names."""
    return [member.value for member in enum_cls]


class Applicant(Base):
    """Visa/immigration-services client tracked through the review lifecycle."""

    __tablename__ = "applicants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    passport_number = Column(String(50), nullable=True, index=True)
    passport_expiry_date = Column(Date, nullable=True)
    nationality = Column(String(100), nullable=True)
    visa_type = Column(String(100), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    destination_country = Column(String(100), nullable=True)
    marital_status = Column(String(50), nullable=True)
    status = Column(
        Enum(ApplicantStatus, name="applicant_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=ApplicantStatus.NEW,
    )
    notes = Column(Text, nullable=True)
    extra_data = Column(JSON, nullable=True)
    partner_id = Column(String(255), nullable=True, index=True)
    user_id = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    documents = relationship(
        "Document", back_populates="applicant", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Applicant(id={self.id}, status='{self.status}')>"


class Document(Base):
    """File uploaded against one document category for an applicant."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    applicant_id = Column(
        Integer, ForeignKey("applicants.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    document_type = Column(
        Enum(DocumentType, name="document_type", native_enum=False, values_callable=_enum_values),
        nullable=False,
    )
    file_path = Column(String(500), nullable=True)
    original_filename = Column(String(255), nullable=True)
    content_type = Column(String(150), nullable=True)
    status = Column(
        Enum(DocumentStatus, name="document_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=DocumentStatus.PENDING,
    )
    notes = Column(Text, nullable=True)
    uploaded_by = Column(String(255), nullable=True)
    reviewed_by = Column(String(255), nullable=True)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    applicant = relationship("Applicant", back_populates="documents")

    def __repr__(self):
        return f"<Document(id={self.id}, type='{self.document_type}', status='{self.status}')>"


class ServiceType(Base):
    """A visa/service offering (e.g. Work Visa) with its own checklist."""

    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    requirements = relationship(
        "DocumentRequirement", back_populates="service", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<ServiceType(id={self.id}, key='{self.key}')>"


class DocumentRequirement(Base):
    """One document a service type asks for."""

    __tablename__ = "document_requirements"
    __table_args__ = (
        UniqueConstraint("service_id", "document_name", name="uq_requirement_service_document"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(
        Integer, ForeignKey("service_types.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    document_name = Column(String(255), nullable=False)
    is_optional = Column(Boolean, nullable=False, default=False)

    service = relationship("ServiceType", back_populates="requirements")

    def __repr__(self):
        return f"<DocumentRequirement(id={self.id}, document='{self.document_name}')>"
