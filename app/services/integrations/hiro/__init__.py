"""Hiro API integration module.

Provides the Stacks node client used for read-only contract queries.
"""

from .hiro_api import HiroApi
from .models import ReadOnlyCall, ReadOnlyCallResult
from .utils import HiroApiError, HiroApiRateLimitError, HiroApiTimeoutError

__all__ = [
    "HiroApi",
    "ReadOnlyCall",
    "ReadOnlyCallResult",
    "HiroApiError",
    "HiroApiRateLimitError",
    "HiroApiTimeoutError",
]
