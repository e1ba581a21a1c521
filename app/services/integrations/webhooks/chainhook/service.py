"""Chainhook webhook service implementation."""

from typing import Any, Optional

from app.lib.logger import configure_logger
from app.services.integrations.webhooks.base import WebhookService
from app.services.integrations.webhooks.chainhook.handler import ChainhookHandler
from app.services.integrations.webhooks.chainhook.parser import ChainhookParser
from app.services.reporting.exceptions import PipelineError
from app.services.reporting.models import PipelineResult
from app.services.reporting.report_generator import ReportGenerator


class ChainhookService(WebhookService):
    """Service for handling Chainhook webhooks.

    Unlike the base service it never raises: any failure is folded into the
    returned PipelineResult.
    """

    def __init__(self, report_generator: Optional[ReportGenerator] = None):
        """Initialize the Chainhook service with parser and handler components."""
        parser = ChainhookParser()
        handler = ChainhookHandler(report_generator=report_generator)
        super().__init__(parser=parser, handler=handler)
        self.logger = configure_logger(self.__class__.__name__)

    async def process(self, raw_data: Any) -> PipelineResult:
        try:
            return await super().process(raw_data)
        except Exception as e:
            error = PipelineError(f"Chainhook processing failed: {e}")
            return PipelineResult(success=False, message=error.message)
