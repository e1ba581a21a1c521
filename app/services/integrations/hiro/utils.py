"""Error types for Hiro API integration."""

from typing import Optional


class HiroApiError(Exception):
    """Base exception for Hiro API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class HiroApiRateLimitError(HiroApiError):
    """Exception for rate limit errors."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class HiroApiTimeoutError(HiroApiError):
    """Exception for timeout errors."""

    pass
