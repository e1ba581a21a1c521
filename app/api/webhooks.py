from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.api.dependencies import verify_webhook_auth
from app.lib.logger import configure_logger
from app.services.integrations.webhooks.chainhook import ChainhookService

# Configure logger
logger = configure_logger(__name__)

# Create the router
router = APIRouter()


def get_chainhook_service() -> ChainhookService:
    return ChainhookService()


@router.post("/chainhook")
async def chainhook(
    data: Any = Body(None),
    _: None = Depends(verify_webhook_auth),
    service: ChainhookService = Depends(get_chainhook_service),
) -> Response:
    """Handle a chainhook webhook.

    Reports every PROPOSAL_EXECUTED print event found in the payload.

    Args:
        data: The webhook payload as JSON, bare or wrapped in `payload`;
            any other JSON value parses as an empty payload

    Returns:
        Response: 200 when every report succeeded, 500 with the failures otherwise
    """
    logger.debug("Chainhook webhook received", extra={"event_type": "chainhook_webhook"})
    result = await service.process(data)

    if result.success:
        logger.info(
            "Chainhook processing completed",
            extra={"processed": len(result.processed), "skipped": len(result.skipped)},
        )
        return PlainTextResponse(result.message, status_code=200)

    logger.error("Chainhook processing failed", extra={"error": result.message})
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error during Chainhook processing.",
            "message": result.message,
            "processed": result.processed,
            "failed": [error.model_dump(mode="json") for error in result.failed],
        },
    )
