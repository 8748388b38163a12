'''

'''
from typing import Annotated
from fastapi import Depends

from ..database.airtable import AirtableClient, get_optional_airtable_client
from ..common.exceptions import AirtableError, AirtableNotFoundError, AirtableAuthError
from ..common.config import settings
from ..common.logger import log
from ..models.diagnostics import AirtableDiagnostics, TableCheck


class DiagnosticsService:
    """
    Checks the Airtable configuration and tries to read one record from each table.
    Never raises for Airtable failures: they are reported in the result.
    """
    def __init__(
        self,
        client: Annotated[AirtableClient | None, Depends(get_optional_airtable_client)]
    ):
        self.client = client

    async def _check_table(self, table: str) -> TableCheck:
        try:
            found = await self.client.check_connection(table)
        except AirtableNotFoundError:
            return TableCheck(
                table=table, ok=False,
                error=f'Table "{table}" not found. The name is case-sensitive and the token needs access to the base.'
            )
        except AirtableAuthError:
            return TableCheck(
                table=table, ok=False,
                error="Authentication failed. Check your Personal Access Token."
            )
        except AirtableError as e:
            return TableCheck(table=table, ok=False, error=str(e))
        log.info(f"Successfully connected to table '{table}' ({found} sample record(s)).")
        return TableCheck(table=table, ok=True, records_found=found)

    async def check_airtable(self) -> AirtableDiagnostics:
        missing = settings.missing_airtable_settings
        log.info(f"Airtable configuration check: API key present={bool(settings.AIRTABLE_API_KEY)}, "
                 f"base id={settings.AIRTABLE_BASE_ID}")
        if missing or self.client is None:
            log.error(f"Airtable not configured properly: {missing}")
            return AirtableDiagnostics(configured=False, missing_settings=missing)

        tables = [
            await self._check_table(settings.STUDENTS_TABLE),
            await self._check_table(settings.LESSONS_TABLE),
        ]
        return AirtableDiagnostics(
            configured=True,
            base_id=settings.AIRTABLE_BASE_ID,
            tables=tables,
        )
