import pytest
from unittest.mock import MagicMock

from tutor_tracker_backend.services.diagnostics_service import DiagnosticsService
from tutor_tracker_backend.common.config import settings
from tutor_tracker_backend.common.exceptions import AirtableNotFoundError, AirtableAuthError


@pytest.mark.anyio
class TestDiagnosticsService:

    async def test_all_tables_reachable(self, diagnostics_service: DiagnosticsService, mock_airtable: MagicMock):
        result = await diagnostics_service.check_airtable()
        assert result.configured is True
        assert result.ok is True
        assert [check.table for check in result.tables] == [settings.STUDENTS_TABLE, settings.LESSONS_TABLE]

    async def test_missing_lessons_table(self, diagnostics_service: DiagnosticsService, mock_airtable: MagicMock):
        async def check_connection(table):
            if table == settings.LESSONS_TABLE:
                raise AirtableNotFoundError("Could not find table", status_code=404)
            return 0

        mock_airtable.check_connection.side_effect = check_connection
        result = await diagnostics_service.check_airtable()

        students_check, lessons_check = result.tables
        assert students_check.ok is True
        assert lessons_check.ok is False
        assert "not found" in lessons_check.error
        assert result.ok is False

    async def test_bad_token(self, diagnostics_service: DiagnosticsService, mock_airtable: MagicMock):
        mock_airtable.check_connection.side_effect = AirtableAuthError("401", status_code=401)
        result = await diagnostics_service.check_airtable()
        assert all("Personal Access Token" in check.error for check in result.tables)

    async def test_unconfigured(self, mocker):
        mocker.patch.object(settings, "AIRTABLE_API_KEY", "your_airtable_personal_access_token_here")
        result = await DiagnosticsService(client=None).check_airtable()
        assert result.configured is False
        assert result.missing_settings == ["AIRTABLE_API_KEY"]
        assert result.tables == []
