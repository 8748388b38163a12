'''
Airtable client file.
1- AirtableClient: async wrapper over the Airtable REST API (one base, many tables)
2- create_airtable_client / close_airtable_client: called by the app's lifespan
3- get_airtable_client: dependency handing the shared client to services
'''
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..common.config import settings
from ..common.exceptions import (
    ConfigurationError,
    AirtableNotFoundError,
    AirtableAuthError,
    AirtableServiceError,
    AirtableValidationError,
)
from ..common.logger import log

# Airtable refuses page sizes above 100
MAX_PAGE_SIZE = 100


class AirtableClient:
    """
    Thin async client for the record endpoints of a single Airtable base.
    No retries and no caching: every call goes straight to Airtable.
    """
    def __init__(
        self,
        api_key: str,
        base_id: str,
        endpoint_url: str = "https://api.airtable.com",
        timeout: float = 30.0,
    ):
        self.base_id = base_id
        self.http = httpx.AsyncClient(
            base_url=f"{endpoint_url.rstrip('/')}/v0/{base_id}/",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    async def aclose(self):
        await self.http.aclose()

    # --- Error mapping ---

    @staticmethod
    def _error_details(response: httpx.Response) -> tuple[Optional[str], str]:
        """Pulls (type, message) out of an Airtable error body."""
        try:
            body = response.json()
        except ValueError:
            return None, response.text
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            return error.get("type"), error.get("message") or error.get("type") or ""
        if isinstance(error, str):
            return error, error
        return None, response.text

    def _map_status_error(self, response: httpx.Response, table: str, record_id: Optional[str]):
        error_type, message = self._error_details(response)
        status_code = response.status_code
        target = f"{table}/{record_id}" if record_id else table

        if (status_code == 404 or error_type in ("NOT_FOUND", "TABLE_NOT_FOUND", "MODEL_ID_NOT_FOUND")
                or "Could not find table" in (message or "")):
            log.warning(f"Airtable reported {target} as not found: {message}")
            return AirtableNotFoundError(
                f"Airtable resource '{target}' not found: {message}",
                status_code=status_code, error_type=error_type,
            )
        if status_code in (401, 403):
            log.error(f"Airtable rejected credentials for {target} ({status_code}): {message}")
            return AirtableAuthError(
                f"Airtable authentication failed ({status_code}): {message}",
                status_code=status_code, error_type=error_type,
            )
        if status_code == 422:
            log.warning(f"Airtable rejected the values sent to {target}: {message}")
            return AirtableValidationError(
                message or error_type or "Invalid request",
                status_code=status_code, error_type=error_type,
            )
        log.error(f"Airtable returned {status_code} for {target}: {message}")
        return AirtableServiceError(
            f"Airtable returned {status_code}: {message}",
            status_code=status_code, error_type=error_type,
        )

    # --- Transport ---

    async def _request(
        self,
        method: str,
        table: str,
        record_id: Optional[str] = None,
        *,
        params: Any = None,
        json: Optional[dict] = None,
    ) -> dict:
        url = quote(table, safe="")
        if record_id:
            url = f"{url}/{quote(record_id, safe='')}"
        try:
            response = await self.http.request(method, url, params=params, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._map_status_error(e.response, table, record_id) from e
        except httpx.RequestError as e:
            log.error(f"HTTP request to Airtable failed ({method} {url}): {e}", exc_info=True)
            raise AirtableServiceError(f"Could not reach Airtable: {e}") from e
        return response.json()

    # --- Record operations ---

    async def list_records(
        self,
        table: str,
        *,
        filter_by_formula: Optional[str] = None,
        sort: Optional[list[tuple[str, str]]] = None,
        max_records: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> list[dict]:
        """
        Lists every record of a table, following Airtable's `offset` pagination.
        `sort` is a list of (field, "asc"|"desc") pairs.
        """
        params: list[tuple[str, Any]] = []
        if filter_by_formula:
            params.append(("filterByFormula", filter_by_formula))
        if max_records is not None:
            params.append(("maxRecords", max_records))
        if page_size is not None:
            params.append(("pageSize", min(page_size, MAX_PAGE_SIZE)))
        for index, (field, direction) in enumerate(sort or []):
            params.append((f"sort[{index}][field]", field))
            params.append((f"sort[{index}][direction]", direction))

        records: list[dict] = []
        offset = None
        while True:
            page_params = params + ([("offset", offset)] if offset else [])
            data = await self._request("GET", table, params=page_params)
            records.extend(data.get("records", []))
            offset = data.get("offset")
            if not offset:
                break
        log.info(f"Fetched {len(records)} records from Airtable table '{table}'.")
        return records

    async def get_record(self, table: str, record_id: str) -> dict:
        log.info(f"Fetching Airtable record {table}/{record_id}")
        return await self._request("GET", table, record_id)

    async def create_record(self, table: str, fields: dict) -> dict:
        log.info(f"Creating Airtable record in '{table}'")
        return await self._request("POST", table, json={"fields": fields})

    async def update_record(self, table: str, record_id: str, fields: dict) -> dict:
        """PATCH: only the given fields change."""
        log.info(f"Updating Airtable record {table}/{record_id}")
        return await self._request("PATCH", table, record_id, json={"fields": fields})

    async def delete_record(self, table: str, record_id: str) -> dict:
        log.info(f"Deleting Airtable record {table}/{record_id}")
        return await self._request("DELETE", table, record_id)

    async def check_connection(self, table: str) -> int:
        """
        Reads at most one record of `table`. Returns how many came back (0 or 1).
        Raises the usual Airtable errors when the table or token is wrong.
        """
        data = await self._request("GET", table, params={"maxRecords": 1})
        return len(data.get("records", []))


# We define it as None. It will be created by the app's lifespan.
airtable_client: AirtableClient | None = None

def create_airtable_client():
    """
    Creates the shared client. Missing credentials are logged, not fatal:
    the first request that needs Airtable reports them instead.
    """
    global airtable_client

    missing = settings.missing_airtable_settings
    if missing:
        log.warning(f"Airtable is not configured ({', '.join(missing)} missing). Requests needing Airtable will fail.")
        airtable_client = None
        return

    airtable_client = AirtableClient(
        api_key=settings.AIRTABLE_API_KEY,
        base_id=settings.AIRTABLE_BASE_ID,
        endpoint_url=settings.AIRTABLE_ENDPOINT_URL,
        timeout=settings.AIRTABLE_TIMEOUT_SECONDS,
    )
    log.info(f"Airtable client created for base {settings.AIRTABLE_BASE_ID}.")

async def close_airtable_client():
    """Closes the client. Called by the app's lifespan."""
    global airtable_client
    if airtable_client:
        await airtable_client.aclose()
        log.info("Airtable client closed.")
    airtable_client = None

def get_optional_airtable_client() -> AirtableClient | None:
    """Like get_airtable_client, but yields None instead of failing when unconfigured."""
    return airtable_client

def get_airtable_client() -> AirtableClient:
    """
    FastAPI dependency that provides the shared Airtable client.
    """
    missing = settings.missing_airtable_settings
    if missing:
        raise ConfigurationError(missing)
    if airtable_client is None:
        log.error("Airtable client is not initialized. App lifespan may not have run.")
        raise RuntimeError("Airtable client is not available.")
    return airtable_client
