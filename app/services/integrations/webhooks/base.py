"""Base classes for webhook handling."""

from abc import ABC, abstractmethod
from typing import Any

from app.lib.logger import configure_logger
from app.services.reporting.models import PipelineResult


class WebhookParser(ABC):
    """Turns an untrusted request body into a structured payload."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    def parse(self, raw_data: Any) -> Any:
        """Parse the raw webhook data.

        Malformed input should degrade to an empty payload rather than raise.
        """
        pass


class WebhookHandler(ABC):
    """Acts on a parsed payload and reports the per-delivery result."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    async def handle(self, parsed_data: Any) -> PipelineResult:
        pass


class WebhookService:
    """Coordinates parsing and handling for one webhook source."""

    def __init__(self, parser: WebhookParser, handler: WebhookHandler):
        self.parser = parser
        self.handler = handler
        self.logger = configure_logger(self.__class__.__name__)

    async def process(self, raw_data: Any) -> PipelineResult:
        """Parse and handle one delivery.

        Errors are logged and re-raised; subclasses decide whether to fold them
        into a failed PipelineResult.
        """
        try:
            parsed_data = self.parser.parse(raw_data)
            return await self.handler.handle(parsed_data)
        except Exception as e:
            self.logger.error(f"Error processing webhook: {str(e)}", exc_info=True)
            raise
