import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from tutor_tracker_backend.database.mapper import StudentFields, LessonFields
from tutor_tracker_backend.common.config import settings
from tutor_tracker_backend.common.exceptions import AirtableNotFoundError, AirtableValidationError
from tests.constants import (
    TEST_STUDENT_ID,
    TEST_STUDENT_NAME,
    TEST_LESSON_ID,
    TEST_MISSING_ID,
)
from tests.database.factories import build_student_record, build_lesson_record


@pytest.mark.anyio
class TestLessonsAPIGET:
    """Test class for GET endpoints of the Lessons API."""

    async def test_requires_authentication(self, client: TestClient):
        assert client.get("/lessons/").status_code == 401

    async def test_list_lessons(self, client: TestClient, auth_headers: dict, stub_tables):
        stub_tables(
            students=[build_student_record(TEST_STUDENT_ID, {StudentFields.NAME: TEST_STUDENT_NAME})],
            lessons=[
                build_lesson_record(fields={LessonFields.DATE: "2024-04-01"}),
                build_lesson_record(fields={LessonFields.DATE: "2024-05-01", LessonFields.IS_PAID: True,
                                            LessonFields.AMOUNT_DUE: 300, LessonFields.AMOUNT_PAID: 300}),
            ],
        )

        response = client.get("/lessons/", headers=auth_headers)

        assert response.status_code == 200, response.json()
        lessons = response.json()
        assert [l["date"] for l in lessons] == ["2024-05-01", "2024-04-01"]
        assert lessons[0]["student"] == {"id": TEST_STUDENT_ID, "name": TEST_STUDENT_NAME}
        assert lessons[0]["payment"]["status"] == "PAID"
        assert lessons[1]["payment"]["status"] == "UNPAID"
        assert Decimal(lessons[1]["payment"]["display_amount"]) == Decimal("300")

    async def test_limit(self, client: TestClient, auth_headers: dict, stub_tables):
        stub_tables(lessons=[build_lesson_record() for _ in range(5)])
        response = client.get("/lessons/", params={"limit": 3}, headers=auth_headers)
        assert response.status_code == 200
        assert len(response.json()) == 3

    async def test_limit_must_be_positive(self, client: TestClient, auth_headers: dict):
        response = client.get("/lessons/", params={"limit": 0}, headers=auth_headers)
        assert response.status_code == 422

    async def test_get_lesson_not_found(self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock):
        mock_airtable.get_record.side_effect = AirtableNotFoundError("NOT_FOUND", status_code=404)
        response = client.get(f"/lessons/{TEST_MISSING_ID}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Lesson not found."


@pytest.mark.anyio
class TestLessonsAPIWrite:
    """Test class for POST, PATCH and DELETE endpoints of the Lessons API."""

    async def test_create_lesson(self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock):
        mock_airtable.create_record.return_value = build_lesson_record(
            record_id=TEST_LESSON_ID,
            fields={LessonFields.DATE: "2024-06-01", LessonFields.DURATION: 90, LessonFields.SUBJECT: "Physics"},
        )
        payload = {
            "student_id": TEST_STUDENT_ID,
            "date": "2024-06-01",
            "duration": 90,
            "subject": "Physics",
            "amount_due": "300",
            "reference": "L-9999",
        }

        response = client.post("/lessons/", json=payload, headers=auth_headers)

        assert response.status_code == 201, response.json()
        assert response.json()["id"] == TEST_LESSON_ID
        _, fields = mock_airtable.create_record.await_args.args
        assert fields[LessonFields.DURATION] == 90
        assert fields[LessonFields.AMOUNT_DUE] == 300.0
        assert LessonFields.REFERENCE not in fields

    @pytest.mark.parametrize("payload", [
        {"date": "2024-06-01", "duration": 60},
        {"student_id": TEST_STUDENT_ID, "date": "not-a-date", "duration": 60},
        {"student_id": TEST_STUDENT_ID, "date": "2024-06-01", "duration": 0},
        {"student_id": TEST_STUDENT_ID, "date": "2024-06-01", "duration": 60, "amount_due": -5},
    ])
    async def test_create_lesson_invalid(self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock, payload):
        response = client.post("/lessons/", json=payload, headers=auth_headers)
        assert response.status_code == 422
        mock_airtable.create_record.assert_not_awaited()

    async def test_mark_lesson_paid(self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock):
        mock_airtable.update_record.return_value = build_lesson_record(
            record_id=TEST_LESSON_ID, fields={LessonFields.IS_PAID: True}
        )

        response = client.patch(f"/lessons/{TEST_LESSON_ID}", json={"is_paid": True}, headers=auth_headers)

        assert response.status_code == 200, response.json()
        mock_airtable.update_record.assert_awaited_once_with(
            settings.LESSONS_TABLE, TEST_LESSON_ID, {LessonFields.IS_PAID: True}
        )

    @pytest.mark.parametrize("payload", [{"student_id": None}, {"date": None}, {"duration": None}])
    async def test_patch_cannot_null_required_field(
        self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock, payload
    ):
        response = client.patch(f"/lessons/{TEST_LESSON_ID}", json=payload, headers=auth_headers)

        assert response.status_code == 422
        mock_airtable.update_record.assert_not_awaited()

    async def test_unknown_student_link_is_client_error(
        self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock
    ):
        mock_airtable.create_record.side_effect = AirtableValidationError(
            "Record ID recNope does not exist", status_code=422, error_type="ROW_DOES_NOT_EXIST"
        )
        payload = {"student_id": "recNope", "date": "2024-06-01", "duration": 60}

        response = client.post("/lessons/", json=payload, headers=auth_headers)

        assert response.status_code == 422
        assert "recNope" in response.json()["detail"]

    async def test_delete_lesson(self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock):
        response = client.delete(f"/lessons/{TEST_LESSON_ID}", headers=auth_headers)
        assert response.status_code == 204
        mock_airtable.delete_record.assert_awaited_once_with(settings.LESSONS_TABLE, TEST_LESSON_ID)
