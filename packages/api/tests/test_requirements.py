# This project was developed with assistance from AI tools.
"""Tests for the per-service requirement checklist."""

from unittest.mock import AsyncMock, MagicMock, patch

from db.enums import DocumentStatus, UserRole

from src.services.requirements import (
    build_checklist,
    get_applicant_checklist,
    requirements_for_visa_type,
    service_key_for_visa_type,
)

from .factories import (
    make_mock_applicant,
    make_mock_document,
    make_mock_requirement,
    make_mock_service,
    make_user,
)

_WORK = make_mock_service(1, "work_visa", "Work Visa")
_TOURIST = make_mock_service(2, "tourist_visa", "Tourist Visa")


def _work_requirements():
    return [
        make_mock_requirement(1, "Passport", _WORK),
        make_mock_requirement(2, "Photo", _WORK),
        make_mock_requirement(3, "Other", _WORK, is_optional=True),
    ]


def _all_requirements():
    return [*_work_requirements(), make_mock_requirement(4, "Ticket", _TOURIST)]


def test_service_key_normalization():
    assert service_key_for_visa_type("Work Visa") == "work_visa"
    assert service_key_for_visa_type("  Business   Registration ") == "business_registration"
    assert service_key_for_visa_type(None) == ""


def test_requirements_match_by_key_or_name():
    by_key = requirements_for_visa_type(_all_requirements(), "work visa")
    assert [r.id for r in by_key] == [1, 2, 3]

    by_name = requirements_for_visa_type(_all_requirements(), "TOURIST VISA")
    assert [r.id for r in by_name] == [4]


def test_padded_visa_type_still_matches():
    assert [r.id for r in requirements_for_visa_type(_all_requirements(), "  Work Visa ")] == [1, 2, 3]
    assert [r.id for r in requirements_for_visa_type(_all_requirements(), " tourist_visa")] == [4]


def test_no_visa_type_has_no_requirements():
    assert requirements_for_visa_type(_all_requirements(), None) == []
    assert requirements_for_visa_type(_all_requirements(), "Student Visa") == []


def test_checklist_states():
    docs = [
        make_mock_document(1, document_type="passport", status=DocumentStatus.APPROVED),
        make_mock_document(2, document_type="photo", status=DocumentStatus.PENDING),
    ]
    checklist = build_checklist(1, "Work Visa", _all_requirements(), docs)

    states = {item.document_name: item.state for item in checklist.items}
    assert states == {"Passport": "approved", "Photo": "uploaded", "Other": "optional"}
    assert checklist.required_count == 2
    assert checklist.approved_count == 1
    assert checklist.is_complete is False
    assert checklist.service_key == "work_visa"


def test_missing_required_document_is_pending():
    checklist = build_checklist(1, "Work Visa", _work_requirements(), [])
    assert [item.state for item in checklist.items] == ["pending", "pending", "optional"]


def test_substring_match_is_case_insensitive():
    docs = [make_mock_document(7, document_type="bank_statement")]
    service = make_mock_service(3, "business_visa", "Business Visa")
    reqs = [make_mock_requirement(9, "Bank", service)]
    checklist = build_checklist(1, "Business Visa", reqs, docs)
    assert checklist.items[0].document_ids == [7]
    assert checklist.items[0].state == "uploaded"


def test_complete_when_every_mandatory_item_approved():
    docs = [
        make_mock_document(1, document_type="passport", status=DocumentStatus.APPROVED),
        make_mock_document(2, document_type="photo", status=DocumentStatus.APPROVED),
    ]
    checklist = build_checklist(1, "Work Visa", _work_requirements(), docs)
    assert checklist.is_complete is True


def test_empty_checklist_is_not_complete():
    checklist = build_checklist(1, "Student Visa", _all_requirements(), [])
    assert checklist.items == []
    assert checklist.is_complete is False


@patch("src.services.requirements.list_all_documents", new_callable=AsyncMock)
@patch("src.services.requirements.get_applicant", new_callable=AsyncMock)
async def test_get_applicant_checklist(mock_get_applicant, mock_list_docs):
    mock_get_applicant.return_value = make_mock_applicant(5, visa_type="Work Visa")
    mock_list_docs.return_value = [
        make_mock_document(1, applicant_id=5, document_type="passport", status=DocumentStatus.APPROVED)
    ]
    session = AsyncMock()
    result = MagicMock()
    result.unique.return_value.scalars.return_value.all.return_value = _all_requirements()
    session.execute = AsyncMock(return_value=result)

    checklist = await get_applicant_checklist(session, make_user(UserRole.TEAM_MEMBER), 5)

    assert checklist.applicant_id == 5
    assert [i.state for i in checklist.items] == ["approved", "pending", "optional"]


@patch("src.services.requirements.get_applicant", new_callable=AsyncMock, return_value=None)
async def test_get_applicant_checklist_not_found(mock_get_applicant):
    session = AsyncMock()
    assert await get_applicant_checklist(session, make_user(UserRole.PARTNER), 99) is None
    session.execute.assert_not_called()
