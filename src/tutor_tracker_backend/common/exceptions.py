"""
This file contains custom, application-specific exceptions.
"""
from typing import Optional


class ConfigurationError(Exception):
    """Raised when the Airtable credentials are missing or still placeholders."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Airtable configuration error: {', '.join(missing)} not set. "
            "Please check your .env file."
        )


class MappingError(Exception):
    """Raised when a fetched record lacks a required field or holds an unusable value."""

    def __init__(
        self,
        record_id: Optional[str],
        field: str,
        reason: str = "is missing",
        entity: Optional[str] = None
    ):
        self.record_id = record_id
        self.field = field
        # "Student" or "Lesson"; None when the caller did not say
        self.entity = entity
        super().__init__(f"Record {record_id or '<unknown>'}: field '{field}' {reason}.")


# --- Airtable errors ---

class AirtableError(Exception):
    """Base class for every failure reported by (or on the way to) Airtable."""

    def __init__(self, message: str, status_code: Optional[int] = None, error_type: Optional[str] = None):
        self.status_code = status_code
        self.error_type = error_type
        super().__init__(message)


class AirtableNotFoundError(AirtableError):
    """The base, the table or the record does not exist."""
    pass


class AirtableAuthError(AirtableError):
    """The access token was rejected or lacks access to the base."""
    pass


class AirtableServiceError(AirtableError):
    """Any other HTTP or network failure."""
    pass


class AirtableValidationError(AirtableError):
    """Airtable refused the values sent (HTTP 422), e.g. a link to an unknown record."""
    pass
