# This project was developed with assistance from AI tools.
"""
SQLAdmin configuration for database administration UI

Access the admin panel at: http://localhost:8000/admin

When AUTH_DISABLED=false, requires admin credentials via login form.
When AUTH_DISABLED=true, admin panel is open (dev mode).
"""

from db import Applicant, Document, DocumentRequirement, ServiceType
from db.database import engine
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request
from starlette.responses import Response

from .core.config import settings


class AdminAuth(AuthenticationBackend):
    """Session-based auth gate for SQLAdmin.

    When AUTH_DISABLED=true, authenticate() always returns True (dev mode).
    Otherwise, requires login with SQLADMIN_USER / SQLADMIN_PASSWORD.
    """

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")
        if username == settings.SQLADMIN_USER and password == settings.SQLADMIN_PASSWORD:
            request.session.update({"admin_authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> Response | bool:
        if settings.AUTH_DISABLED:
            return True
        return request.session.get("admin_authenticated", False)


class ApplicantAdmin(ModelView, model=Applicant):
    column_list = [
        Applicant.id,
        Applicant.full_name,
        Applicant.email,
        Applicant.visa_type,
        Applicant.destination_country,
        Applicant.status,
        Applicant.partner_id,
        Applicant.created_at,
    ]
    column_searchable_list = [Applicant.full_name, Applicant.email, Applicant.passport_number]
    column_sortable_list = [Applicant.id, Applicant.full_name, Applicant.status, Applicant.created_at]
    column_default_sort = [(Applicant.created_at, True)]
    name = "Applicant"
    name_plural = "Applicants"
    icon = "fa-solid fa-user"


class DocumentAdmin(ModelView, model=Document):
    column_list = [
        Document.id,
        Document.applicant_id,
        Document.document_type,
        Document.status,
        Document.original_filename,
        Document.uploaded_by,
        Document.uploaded_at,
    ]
    column_searchable_list = [Document.original_filename, Document.uploaded_by]
    column_sortable_list = [Document.id, Document.document_type, Document.status]
    column_default_sort = [(Document.uploaded_at, True)]
    name = "Document"
    name_plural = "Documents"
    icon = "fa-solid fa-file-upload"


class ServiceTypeAdmin(ModelView, model=ServiceType):
    column_list = [ServiceType.id, ServiceType.key, ServiceType.name]
    column_searchable_list = [ServiceType.name]
    name = "Service Type"
    name_plural = "Service Types"
    icon = "fa-solid fa-passport"


class DocumentRequirementAdmin(ModelView, model=DocumentRequirement):
    column_list = [
        DocumentRequirement.id,
        DocumentRequirement.service_id,
        DocumentRequirement.document_name,
        DocumentRequirement.is_optional,
    ]
    column_sortable_list = [DocumentRequirement.service_id, DocumentRequirement.document_name]
    name = "Requirement"
    name_plural = "Requirements"
    icon = "fa-solid fa-clipboard-check"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    auth_backend = AdminAuth(
        secret_key=settings.SQLADMIN_SECRET_KEY,
    )
    admin = Admin(app, engine, title="Meridian Portal Admin", authentication_backend=auth_backend)

    admin.add_view(ApplicantAdmin)
    admin.add_view(DocumentAdmin)
    admin.add_view(ServiceTypeAdmin)
    admin.add_view(DocumentRequirementAdmin)

    return admin
