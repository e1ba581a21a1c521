"""Error types for Google Sheets integration."""

from typing import Optional


class SheetsApiError(Exception):
    """Base exception for Google Sheets API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SheetsAuthError(SheetsApiError):
    """Service account credentials could not produce an access token."""

    pass


class SheetsApiTimeoutError(SheetsApiError):
    """Exception for timeout errors."""

    pass
