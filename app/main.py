from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api import topics, webhooks
from app.config import config
from app.lib.logger import configure_logger, setup_uvicorn_logging
from app.middleware.logging import LoggingMiddleware
from app.services.reporting.factory import close_report_generator

# Configure module logger
logger = configure_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run web server startup and shutdown tasks."""
    setup_uvicorn_logging()
    logger.info(
        "Middleware server starting",
        extra={"chainhook_url": f"http://localhost:{config.server.port}/chainhook"},
    )
    try:
        yield
    finally:
        await close_report_generator()
        logger.info("Middleware server shutdown complete")


# Define app
app = FastAPI(
    title="Proposal Reporting Middleware",
    description="Chainhook receiver that reports executed proposals to Google Sheets",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)


# Simple health check endpoint
@app.get("/")
async def health_check():
    """Simple health check endpoint."""
    return {"status": "healthy"}


# Load API routes
app.include_router(webhooks.router)
app.include_router(topics.router)
