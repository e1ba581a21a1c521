from typing import Optional

from fastapi import Header, HTTPException

from app.config import config
from app.lib.logger import configure_logger

# Configure logger
logger = configure_logger(__name__)


def _expected_token() -> str:
    token = config.webhook.auth_token
    return token.split(" ", 1)[1] if token.startswith("Bearer ") else token


async def verify_webhook_auth(authorization: Optional[str] = Header(None)) -> None:
    """
    Verify webhook authentication using Bearer token.

    Chainhook sends its configured `authorization_header` verbatim. When no
    CHAINHOOK_WEBHOOK_SECRET is configured the check is skipped.

    Args:
        authorization: The Authorization header value

    Raises:
        HTTPException: If authentication fails
    """
    expected_token = _expected_token()
    if not expected_token:
        return

    if not authorization:
        logger.error("Missing Authorization header for webhook")
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    if not authorization.startswith("Bearer "):
        logger.error("Invalid Authorization header format for webhook")
        raise HTTPException(
            status_code=401, detail="Invalid Authorization format. Use 'Bearer <token>'"
        )

    token = authorization.split(" ", 1)[1]
    if token != expected_token:
        logger.error("Invalid webhook authentication token")
        raise HTTPException(status_code=401, detail="Invalid authentication token")
