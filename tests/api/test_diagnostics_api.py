import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from tutor_tracker_backend.common.config import settings
from tutor_tracker_backend.common.exceptions import AirtableAuthError


@pytest.mark.anyio
class TestDiagnosticsAPI:

    async def test_requires_authentication(self, client: TestClient):
        assert client.get("/diagnostics/airtable").status_code == 401

    async def test_reachable(self, client: TestClient, auth_headers: dict):
        response = client.get("/diagnostics/airtable", headers=auth_headers)

        assert response.status_code == 200, response.json()
        body = response.json()
        assert body["ok"] is True
        assert body["base_id"] == settings.AIRTABLE_BASE_ID
        assert {check["table"] for check in body["tables"]} == {settings.STUDENTS_TABLE, settings.LESSONS_TABLE}

    async def test_failures_are_reported_not_raised(
        self, client: TestClient, auth_headers: dict, mock_airtable: MagicMock
    ):
        mock_airtable.check_connection.side_effect = AirtableAuthError("401", status_code=401)

        response = client.get("/diagnostics/airtable", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["ok"] is False
        assert all(check["ok"] is False for check in response.json()["tables"])
