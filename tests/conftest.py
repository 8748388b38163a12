'''
Pytest configuration for the FastAPI application.

This file sets up fixtures for:
1. Pointing the settings at fake Airtable credentials and a throwaway session file
   before any application code is imported.
2. Providing a mocked Airtable client so no test talks to the real service.
3. Providing a FastAPI TestClient for endpoint testing.
4. Providing instances of all service classes, pre-injected with the mocked client.
'''

import os
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# --- Environment (must happen before the app is imported) ---
os.environ["AIRTABLE_API_KEY"] = "patTestToken.0123456789"
os.environ["AIRTABLE_BASE_ID"] = "appTestBase0123456"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SESSION_FILE"] = str(Path(tempfile.gettempdir()) / "tutortracker-test-session.json")

# --- FastAPI & Testing Imports ---
from fastapi.testclient import TestClient

# --- Application Imports ---
from tutor_tracker_backend.main import app
from tutor_tracker_backend.common.config import settings
from tutor_tracker_backend.database.airtable import (
    AirtableClient,
    get_airtable_client,
    get_optional_airtable_client,
)
from tutor_tracker_backend.services.session_store import SessionStore, get_session_store
from tutor_tracker_backend.services.security import JWTHandler
from tutor_tracker_backend.services.lesson_service import LessonService
from tutor_tracker_backend.services.student_service import StudentService
from tutor_tracker_backend.services.stats_service import StatsService
from tutor_tracker_backend.services.diagnostics_service import DiagnosticsService

from tests.constants import TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Override the default 'anyio_backend' fixture.
    Forces the backend to 'asyncio' and promotes the scope to 'session'.
    """
    return "asyncio"


# --- 1. Airtable Mock ---

@pytest.fixture(scope="function")
def mock_airtable() -> MagicMock:
    """Provides a mock AirtableClient whose tables start out empty."""
    mock_client = MagicMock(spec=AirtableClient)
    mock_client.list_records = AsyncMock(return_value=[])
    mock_client.get_record = AsyncMock()
    mock_client.create_record = AsyncMock()
    mock_client.update_record = AsyncMock()
    mock_client.delete_record = AsyncMock(return_value={"deleted": True})
    mock_client.check_connection = AsyncMock(return_value=1)
    return mock_client


@pytest.fixture(scope="function")
def stub_tables(mock_airtable: MagicMock):
    """
    Returns a function that makes `list_records` answer per table:
        stub_tables(students=[...], lessons=[...])
    """
    def _stub(students: list[dict] | None = None, lessons: list[dict] | None = None):
        tables = {
            settings.STUDENTS_TABLE: students or [],
            settings.LESSONS_TABLE: lessons or [],
        }

        async def list_records(table: str, **kwargs):
            return tables[table]

        mock_airtable.list_records.side_effect = list_records
        return mock_airtable

    return _stub


# --- 2. Session Fixtures ---

@pytest.fixture(scope="function")
def session_store(tmp_path: Path) -> SessionStore:
    """A fresh, logged-out session store persisted under tmp_path."""
    store = SessionStore(tmp_path / "session.json", TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)
    store.initialize()
    return store


@pytest.fixture(scope="function")
def auth_headers(session_store: SessionStore) -> dict:
    """Logs the admin in and returns bearer headers for the new session."""
    assert session_store.login(TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)
    token = JWTHandler.create_access_token(session_store.current_user)
    return {"Authorization": f"Bearer {token}"}


# --- 3. App Client ---

@pytest.fixture(scope="function")
def client(mock_airtable: MagicMock, session_store: SessionStore) -> TestClient:
    """
    TestClient with the Airtable client and the session store replaced
    by the test doubles above.
    """
    app.dependency_overrides[get_airtable_client] = lambda: mock_airtable
    app.dependency_overrides[get_optional_airtable_client] = lambda: mock_airtable
    app.dependency_overrides[get_session_store] = lambda: session_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# --- 4. Service Fixtures ---

@pytest.fixture(scope="function")
def lesson_service(mock_airtable: MagicMock) -> LessonService:
    return LessonService(client=mock_airtable)

@pytest.fixture(scope="function")
def student_service(mock_airtable: MagicMock, lesson_service: LessonService) -> StudentService:
    return StudentService(client=mock_airtable, lesson_service=lesson_service)

@pytest.fixture(scope="function")
def stats_service(
    mock_airtable: MagicMock,
    student_service: StudentService,
    lesson_service: LessonService
) -> StatsService:
    return StatsService(client=mock_airtable, student_service=student_service, lesson_service=lesson_service)

@pytest.fixture(scope="function")
def diagnostics_service(mock_airtable: MagicMock) -> DiagnosticsService:
    return DiagnosticsService(client=mock_airtable)
