"""Google Sheets REST client for reading ranges and appending rows."""

import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from app.config import config
from app.lib.logger import configure_logger

from .utils import SheetsApiError, SheetsApiTimeoutError, SheetsAuthError

logger = configure_logger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_service_account_credentials() -> service_account.Credentials:
    """Build service account credentials from configuration."""
    if not config.sheets.service_account_email or not config.sheets.private_key:
        raise SheetsAuthError(
            "GOOGLE_SERVICE_ACCOUNT_EMAIL and GOOGLE_PRIVATE_KEY are required"
        )
    try:
        return service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "client_email": config.sheets.service_account_email,
                "private_key": config.sheets.private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=SHEETS_SCOPES,
        )
    except (ValueError, GoogleAuthError) as e:
        raise SheetsAuthError(f"Invalid service account credentials: {e}") from e


class GoogleSheetsApi:
    """Minimal async client for the Sheets v4 `values` resource."""

    DEFAULT_TIMEOUT_SECONDS = 10.0

    def __init__(
        self,
        spreadsheet_id: Optional[str] = None,
        credentials: Optional[Any] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.spreadsheet_id = spreadsheet_id or config.sheets.spreadsheet_id
        self.base_url = (base_url or config.sheets.api_url).rstrip("/")
        self.timeout = timeout_seconds or self.DEFAULT_TIMEOUT_SECONDS
        self._credentials = credentials
        self._transport = transport
        self.logger = configure_logger(self.__class__.__name__)

    async def _access_token(self) -> str:
        if self._credentials is None:
            self._credentials = build_service_account_credentials()
        if not self._credentials.valid:
            self.logger.debug("Refreshing Google access token")
            try:
                await asyncio.to_thread(self._credentials.refresh, Request())
            except GoogleAuthError as e:
                raise SheetsAuthError(f"Token refresh failed: {e}") from e
        return self._credentials.token

    def _values_path(self, range_name: str) -> str:
        return (
            f"/spreadsheets/{self.spreadsheet_id}/values/{quote(range_name, safe='')}"
        )

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if not self.spreadsheet_id:
            raise SheetsApiError("No spreadsheet id configured")

        headers = {
            "Authorization": f"Bearer {await self._access_token()}",
            "Accept": "application/json",
        }
        url = f"{self.base_url}{path}"
        self.logger.debug(
            "Sheets request initiated",
            extra={"request": {"method": method, "path": path}},
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method, url, headers=headers, params=params, json=json
                )
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise SheetsApiTimeoutError(
                f"Sheets request timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            self.logger.error(
                "Sheets request failed with HTTP error",
                extra={
                    "request": {"method": method, "path": path},
                    "response": {"status_code": e.response.status_code},
                },
            )
            raise SheetsApiError(
                f"HTTP error occurred: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise SheetsApiError(f"Request error: {str(e)}") from e

    async def get_values(self, range_name: str) -> List[List[Any]]:
        """Read a range; rows come back without trailing empty cells."""
        data = await self._request("GET", self._values_path(range_name))
        return data.get("values", []) or []

    async def append_values(
        self, range_name: str, values: List[List[Any]]
    ) -> Dict[str, Any]:
        """Append rows after the last non-empty row of the range's table."""
        data = await self._request(
            "POST",
            f"{self._values_path(range_name)}:append",
            params={"valueInputOption": config.sheets.value_input_option},
            json={"values": values},
        )
        updates = data.get("updates", {})
        self.logger.info(
            "Rows appended to sheet",
            extra={
                "range": updates.get("updatedRange", range_name),
                "rows": updates.get("updatedRows", len(values)),
            },
        )
        return data
