# This project was developed with assistance from AI tools.
"""Tests for document upload, review, listing and download."""

from io import BytesIO
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from db import get_db
from db.enums import DocumentStatus, DocumentType, UserRole
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.middleware.auth import get_current_user
from src.routes.documents import router
from src.services import document as doc_service
from src.services.storage import StorageUnavailableError

from .factories import NOW, make_mock_applicant, make_mock_document, make_user

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_session(single=None, items=None):
    session = AsyncMock()
    result = MagicMock()
    result.scalar.return_value = len(items or [])
    result.unique.return_value.scalars.return_value.all.return_value = items or []
    result.unique.return_value.scalar_one_or_none.return_value = single
    session.execute = AsyncMock(return_value=result)

    def track_add(obj):
        obj.id = 501
        obj.uploaded_at = NOW

    session.add = MagicMock(side_effect=track_add)
    return session


def _make_app(user, session):
    app = FastAPI()
    app.include_router(router, prefix="/api")

    async def fake_user():
        return user

    async def fake_db():
        yield session

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    return app


def _mock_storage():
    storage = MagicMock()
    storage.build_object_key.return_value = "applicants/100/501/passport.pdf"
    storage.upload_file = AsyncMock(return_value="applicants/100/501/passport.pdf")
    storage.delete_file = AsyncMock()
    storage.get_download_url = AsyncMock(return_value="http://minio/signed")
    return storage


def _upload(client, content_type="application/pdf", data=b"%PDF-1.4 scan", document_type="passport"):
    return client.post(
        "/api/applicants/100/documents",
        files={"file": ("passport.pdf", BytesIO(data), content_type)},
        data={"document_type": document_type},
    )


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------


@patch("src.services.document.get_storage_service")
def test_upload_creates_pending_document(mock_get_storage):
    storage = _mock_storage()
    mock_get_storage.return_value = storage
    session = _make_session(single=make_mock_applicant(100))
    client = TestClient(_make_app(make_user(UserRole.PARTNER, "partner-1"), session))

    resp = _upload(client)

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 501
    assert body["status"] == "pending"
    assert body["document_type"] == "passport"
    assert body["uploaded_by"] == "partner-1"
    storage.build_object_key.assert_called_once_with(100, 501, "passport.pdf")
    storage.upload_file.assert_awaited_once()
    session.commit.assert_awaited_once()


@patch("src.services.document.get_storage_service")
def test_upload_rejects_unsupported_type(mock_get_storage):
    client = TestClient(_make_app(make_user(), _make_session(single=make_mock_applicant(100))))
    resp = _upload(client, content_type="text/plain")
    assert resp.status_code == 422
    assert "Unsupported file type" in resp.json()["detail"]
    mock_get_storage.assert_not_called()


@patch("src.services.document.get_storage_service")
def test_upload_rejects_oversized_file(mock_get_storage, monkeypatch):
    from src.core.config import settings

    monkeypatch.setattr(settings, "UPLOAD_MAX_SIZE_MB", 0)
    client = TestClient(_make_app(make_user(), _make_session(single=make_mock_applicant(100))))
    resp = _upload(client)
    assert resp.status_code == 413


def test_upload_rejects_unknown_document_type():
    client = TestClient(_make_app(make_user(), _make_session()))
    resp = _upload(client, document_type="visa_stamp")
    assert resp.status_code == 422


@patch("src.services.document.get_storage_service")
def test_upload_to_invisible_applicant_404(mock_get_storage):
    client = TestClient(_make_app(make_user(UserRole.APPLICANT, "a-1"), _make_session(single=None)))
    resp = _upload(client)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Applicant not found"


@patch("src.services.document.get_storage_service")
def test_upload_storage_down_is_503(mock_get_storage):
    storage = _mock_storage()
    storage.upload_file = AsyncMock(side_effect=StorageUnavailableError("connection refused"))
    mock_get_storage.return_value = storage
    client = TestClient(_make_app(make_user(), _make_session(single=make_mock_applicant(100))))
    resp = _upload(client)
    assert resp.status_code == 503


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


def test_review_sets_status_and_reviewer():
    doc = make_mock_document(9)
    session = _make_session(single=doc)
    client = TestClient(_make_app(make_user(UserRole.TEAM_MEMBER, "tm-1"), session))

    resp = client.patch(
        "/api/documents/9/review", json={"status": "rejected", "notes": "Blurry scan"}
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "rejected"
    assert body["notes"] == "Blurry scan"
    assert body["reviewed_by"] == "tm-1"


@pytest.mark.parametrize("role", [UserRole.PARTNER, UserRole.APPLICANT])
def test_review_is_staff_only(role):
    client = TestClient(_make_app(make_user(role), _make_session()))
    resp = client.patch("/api/documents/9/review", json={"status": "approved"})
    assert resp.status_code == 403


def test_review_missing_document_404():
    client = TestClient(_make_app(make_user(), _make_session(single=None)))
    resp = client.patch("/api/documents/9/review", json={"status": "approved"})
    assert resp.status_code == 404


async def test_review_touches_only_one_document():
    passport = make_mock_document(1, status=DocumentStatus.PENDING)
    session = _make_session(single=passport)

    await doc_service.review_document(session, make_user(), 1, DocumentStatus.APPROVED)

    assert passport.status == DocumentStatus.APPROVED
    assert session.execute.await_count == 1


# ---------------------------------------------------------------------------
# Listing, download, delete
# ---------------------------------------------------------------------------


def test_list_documents():
    docs = [
        make_mock_document(1, applicant_id=100),
        make_mock_document(2, applicant_id=100, document_type=DocumentType.PHOTO),
    ]
    client = TestClient(_make_app(make_user(), _make_session(items=docs)))
    resp = client.get("/api/applicants/100/documents")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert [d["document_type"] for d in body["data"]] == ["passport", "photo"]


@patch("src.services.document.get_storage_service")
def test_download_returns_presigned_url(mock_get_storage):
    mock_get_storage.return_value = _mock_storage()
    client = TestClient(_make_app(make_user(), _make_session(single=make_mock_document(3))))
    resp = client.get("/api/documents/3/download")
    assert resp.status_code == 200
    assert resp.json() == {"url": "http://minio/signed", "expires_in": 900}


def test_download_without_stored_file_404():
    client = TestClient(
        _make_app(make_user(), _make_session(single=make_mock_document(3, file_path=None)))
    )
    resp = client.get("/api/documents/3/download")
    assert resp.status_code == 404


@patch("src.services.document.get_storage_service")
def test_delete_removes_stored_file(mock_get_storage):
    storage = _mock_storage()
    mock_get_storage.return_value = storage
    doc = make_mock_document(3, file_path="applicants/1/3/scan.pdf")
    session = _make_session(single=doc)
    client = TestClient(_make_app(make_user(UserRole.PARTNER, "p-1"), session))

    resp = client.delete("/api/documents/3")

    assert resp.status_code == 200
    assert resp.json() == {"deleted": True}
    session.delete.assert_awaited_once_with(doc)
    storage.delete_file.assert_awaited_once_with("applicants/1/3/scan.pdf")


@patch("src.services.document.get_storage_service")
def test_delete_succeeds_when_storage_is_down(mock_get_storage):
    """The row is already committed, so a storage outage must not turn into a 503."""
    storage = _mock_storage()
    storage.delete_file = AsyncMock(side_effect=StorageUnavailableError("minio down"))
    mock_get_storage.return_value = storage
    doc = make_mock_document(3, file_path="applicants/1/3/scan.pdf")
    session = _make_session(single=doc)
    client = TestClient(_make_app(make_user(), session))

    resp = client.delete("/api/documents/3")

    assert resp.status_code == 200
    assert resp.json() == {"deleted": True}
    session.delete.assert_awaited_once_with(doc)
    session.commit.assert_awaited_once()
    storage.delete_file.assert_awaited_once_with("applicants/1/3/scan.pdf")


async def test_discard_stored_files_counts_successes():
    storage = _mock_storage()
    storage.delete_file = AsyncMock(side_effect=[None, StorageUnavailableError("down"), None])
    with patch("src.services.document.get_storage_service", return_value=storage):
        removed = await doc_service.discard_stored_files(["a.pdf", "b.pdf", "c.pdf"])
    assert removed == 2
    assert storage.delete_file.await_count == 3


def test_applicant_cannot_delete_documents():
    client = TestClient(_make_app(make_user(UserRole.APPLICANT), _make_session()))
    assert client.delete("/api/documents/3").status_code == 403


def test_validate_upload_limits():
    doc_service.validate_upload("image/png", 10)
    with pytest.raises(doc_service.UnsupportedContentType):
        doc_service.validate_upload("application/zip", 10)
    with pytest.raises(doc_service.FileTooLarge):
        doc_service.validate_upload("image/png", 51 * 1024 * 1024)


# ---------------------------------------------------------------------------
# Review queue
# ---------------------------------------------------------------------------


def test_review_queue_lists_documents_across_applicants():
    docs = [
        make_mock_document(1, applicant_id=100),
        make_mock_document(2, applicant_id=200, document_type=DocumentType.PHOTO),
    ]
    session = _make_session(items=docs)
    client = TestClient(_make_app(make_user(UserRole.TEAM_MEMBER), session))

    resp = client.get("/api/documents")

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert [d["applicant_id"] for d in body["data"]] == [100, 200]


def test_review_queue_applies_filters():
    session = _make_session(items=[])
    client = TestClient(_make_app(make_user(UserRole.ADMIN), session))

    resp = client.get(
        "/api/documents",
        params={"status": "pending", "document_type": "passport", "applicant_id": 100},
    )

    assert resp.status_code == 200
    stmt = session.execute.call_args_list[1].args[0]
    sql = str(stmt)
    assert "documents.status" in sql
    assert "documents.document_type" in sql
    assert "documents.applicant_id" in sql
    assert "ORDER BY documents.uploaded_at ASC" in sql


def test_review_queue_rejects_unknown_status():
    client = TestClient(_make_app(make_user(UserRole.ADMIN), _make_session(items=[])))
    assert client.get("/api/documents", params={"status": "lost"}).status_code == 422


@pytest.mark.parametrize("role", [UserRole.PARTNER, UserRole.APPLICANT])
def test_review_queue_is_staff_only(role):
    client = TestClient(_make_app(make_user(role), _make_session(items=[])))
    assert client.get("/api/documents").status_code == 403


async def test_count_pending_documents_is_scoped():
    session = _make_session(items=[])
    session.execute.return_value.scalar.return_value = 4

    total = await doc_service.count_pending_documents(
        session, make_user(UserRole.PARTNER, "partner-7")
    )

    assert total == 4
    sql = str(session.execute.call_args.args[0])
    assert "documents.status" in sql
    assert "applicants.partner_id" in sql
