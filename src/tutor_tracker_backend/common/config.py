'''
Holds all the configurations
'''
from pydantic_settings import BaseSettings

# Values copied from the .env.example template count as "not configured".
PLACEHOLDER_MARKERS = ("your_", "here")

class Settings(BaseSettings):
    """
    Manages application configuration using environment variables.
    """
    # Application Metadata
    APP_NAME: str = "TutorTracker Backend"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "The backend API for tracking tutoring students, lessons and payments."

    # Airtable
    AIRTABLE_API_KEY: str | None = None
    AIRTABLE_BASE_ID: str | None = None
    AIRTABLE_ENDPOINT_URL: str = "https://api.airtable.com"
    AIRTABLE_TIMEOUT_SECONDS: float = 30.0
    STUDENTS_TABLE: str = "Students"
    LESSONS_TABLE: str = "Lessons"

    # Single shared admin login
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"
    SESSION_FILE: str = ".tutortracker_session.json"

    # JWT Settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    BACKEND_CORS_ORIGINS: list[str] = []

    @staticmethod
    def _is_placeholder(value: str | None) -> bool:
        return not value or any(marker in value for marker in PLACEHOLDER_MARKERS)

    @property
    def missing_airtable_settings(self) -> list[str]:
        """
        Names of the Airtable variables that are unset or still hold a template value.
        """
        missing = []
        if self._is_placeholder(self.AIRTABLE_API_KEY):
            missing.append("AIRTABLE_API_KEY")
        if self._is_placeholder(self.AIRTABLE_BASE_ID):
            missing.append("AIRTABLE_BASE_ID")
        return missing

    @property
    def airtable_configured(self) -> bool:
        return not self.missing_airtable_settings

    class Config:
        env_file = ".env" # automatically loads the .env
        extra = "ignore"

# Create a single, importable instance of the settings
settings = Settings()
