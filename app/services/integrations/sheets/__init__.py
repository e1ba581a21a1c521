"""Google Sheets integration module."""

from .sheets_api import GoogleSheetsApi, build_service_account_credentials
from .utils import SheetsApiError, SheetsApiTimeoutError, SheetsAuthError

__all__ = [
    "GoogleSheetsApi",
    "build_service_account_credentials",
    "SheetsApiError",
    "SheetsApiTimeoutError",
    "SheetsAuthError",
]
