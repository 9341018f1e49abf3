# This project was developed with assistance from AI tools.
"""Tests for the document type catalog and catalog routes."""

from unittest.mock import AsyncMock, MagicMock

from db import get_db
from db.enums import DocumentType, UserRole
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.middleware.auth import get_current_user
from src.routes.catalog import router
from src.services.catalog import (
    ALLOWED_CONTENT_TYPES,
    DOCUMENT_TYPE_LABELS,
    document_type_label,
    required_categories,
)

from .factories import make_mock_requirement, make_mock_service, make_user


def _make_app(session=None):
    app = FastAPI()
    app.include_router(router, prefix="/api/catalog")
    user = make_user(UserRole.APPLICANT, "applicant-1")

    async def fake_user():
        return user

    async def fake_db():
        yield session or AsyncMock()

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    return app


def test_required_categories_in_catalog_order():
    assert required_categories() == [
        "passport",
        "photo",
        "bank_statement",
        "ticket",
        "insurance",
        "other",
    ]


def test_every_category_has_a_label():
    assert set(DOCUMENT_TYPE_LABELS) == set(DocumentType)
    assert document_type_label("passport") == "Passport Scan"
    assert document_type_label("ticket") == "Flight Ticket"


def test_unknown_label_falls_back_to_key():
    assert document_type_label("visa_stamp") == "visa_stamp"


def test_allowed_content_types():
    assert "application/pdf" in ALLOWED_CONTENT_TYPES
    assert "image/png" in ALLOWED_CONTENT_TYPES
    assert "text/plain" not in ALLOWED_CONTENT_TYPES


def test_document_types_endpoint():
    client = TestClient(_make_app())
    resp = client.get("/api/catalog/document-types")
    assert resp.status_code == 200
    body = resp.json()
    assert [d["value"] for d in body["data"]] == required_categories()
    assert body["data"][1]["label"] == "Passport Photo"
    assert body["max_upload_mb"] == 50
    assert body["allowed_content_types"] == sorted(ALLOWED_CONTENT_TYPES)


def test_stages_endpoint():
    client = TestClient(_make_app())
    resp = client.get("/api/catalog/stages")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 8
    assert body[5] == {"index": 5, "label": "Final Documents"}


def test_service_types_endpoint():
    session = AsyncMock()
    result = MagicMock()
    result.scalars.return_value.all.return_value = [
        make_mock_service(1, "tourist_visa", "Tourist Visa"),
        make_mock_service(2, "work_visa", "Work Visa"),
    ]
    session.execute = AsyncMock(return_value=result)

    client = TestClient(_make_app(session))
    resp = client.get("/api/catalog/service-types")
    assert resp.status_code == 200
    assert [s["key"] for s in resp.json()] == ["tourist_visa", "work_visa"]


def test_requirements_endpoint_filters_by_service():
    service = make_mock_service()
    session = AsyncMock()
    result = MagicMock()
    result.unique.return_value.scalars.return_value.all.return_value = [
        make_mock_requirement(1, "Passport Copy", service),
        make_mock_requirement(2, "Other", service, is_optional=True),
    ]
    session.execute = AsyncMock(return_value=result)

    client = TestClient(_make_app(session))
    resp = client.get("/api/catalog/requirements", params={"service_key": "work_visa"})
    assert resp.status_code == 200
    body = resp.json()
    assert [r["document_name"] for r in body] == ["Passport Copy", "Other"]
    assert body[0]["service_key"] == "work_visa"
    assert body[1]["is_optional"] is True


def test_requirements_endpoint_unknown_service_404():
    session = AsyncMock()
    result = MagicMock()
    result.unique.return_value.scalars.return_value.all.return_value = []
    session.execute = AsyncMock(return_value=result)

    client = TestClient(_make_app(session))
    resp = client.get("/api/catalog/requirements", params={"service_key": "space_visa"})
    assert resp.status_code == 404
