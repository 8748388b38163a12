'''
Shared plumbing for the services that read and write Airtable tables.
'''
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status

from ..database.airtable import AirtableClient, get_airtable_client
from ..common.exceptions import (
    AirtableError,
    AirtableNotFoundError,
    AirtableAuthError,
    AirtableValidationError,
    MappingError,
)
from ..common.logger import log

AUTH_FAILURE_DETAIL = (
    "Airtable authentication failed. Please check that your Personal Access Token is correct, "
    "has the data.records:read and data.records:write scopes, and has access to your base."
)


class AirtableTableService:
    """
    Base class for services bound to one Airtable table.
    Converts Airtable and mapping failures into HTTP errors for the API layer.
    """
    table: str = ""
    entity_name: str = "Record"

    def __init__(
        self,
        client: Annotated[AirtableClient, Depends(get_airtable_client)]
    ):
        self.client = client

    def _http_error(self, error: Exception, record_id: Optional[str] = None) -> HTTPException:
        """Builds the HTTPException matching an Airtable or mapping failure."""
        if isinstance(error, AirtableNotFoundError):
            if record_id:
                return HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"{self.entity_name} not found."
                )
            if not self.table:
                return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
            return HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=(
                    f'Table "{self.table}" not found. Check that the table name is exactly '
                    f'"{self.table}" (case-sensitive), that your Base ID is correct and that '
                    "your token has access to this base."
                )
            )
        if isinstance(error, AirtableAuthError):
            return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=AUTH_FAILURE_DETAIL)
        if isinstance(error, AirtableValidationError):
            # Client-side mistake in the values sent
            return HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Airtable rejected the {self.entity_name.lower()}: {error}"
            )
        if isinstance(error, MappingError):
            entity = (error.entity or self.entity_name).lower()
            log.error(f"Malformed {entity} record from Airtable: {error}")
            return HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Malformed {entity} record: {error}"
            )
        if isinstance(error, AirtableError):
            return HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Airtable request failed: {error}"
            )
        log.error(f"Unexpected error in {type(self).__name__}: {error}", exc_info=True)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal server error occurred."
        )
