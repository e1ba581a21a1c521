from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.lib.logger import configure_logger
from app.services.reporting.exceptions import TopicsUnavailableError
from app.services.reporting.factory import get_topics_service
from app.services.reporting.topics import VotingTopicsService

# Configure logger
logger = configure_logger(__name__)

# Create the router
router = APIRouter(prefix="/api")


@router.get("/voting-topics")
async def voting_topics(
    service: VotingTopicsService = Depends(get_topics_service),
) -> JSONResponse:
    """List the active voting topics maintained in the voting spreadsheet."""
    try:
        topics = await service.get_topics()
    except TopicsUnavailableError as e:
        logger.error("Failed to fetch voting topics", extra={"error": e.message})
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch topics from Google Sheets."},
        )

    if not topics:
        return JSONResponse(
            status_code=404, content={"error": "No active voting topics found."}
        )

    return JSONResponse(
        content={"topics": [topic.model_dump(by_alias=True) for topic in topics]}
    )
