"""Chainhook webhook handler implementation."""

from typing import List, Optional

from app.lib.logger import configure_logger
from app.services.integrations.webhooks.base import WebhookHandler
from app.services.integrations.webhooks.chainhook.extractor import (
    executed_proposal_ids,
)
from app.services.integrations.webhooks.chainhook.models import ChainHookData
from app.services.reporting.factory import get_report_generator
from app.services.reporting.models import (
    PipelineResult,
    ReportError,
    ReportOutcome,
    ReportStage,
)
from app.services.reporting.report_generator import ReportGenerator

SUCCESS_MESSAGE = "Events processed successfully."


class ChainhookHandler(WebhookHandler):
    """Handler for Chainhook webhook events.

    Reports every executed proposal found in the payload, one at a time and in
    payload order. A failed report is recorded and the loop moves on to the
    next proposal; reports that succeeded stay committed either way.
    """

    def __init__(self, report_generator: Optional[ReportGenerator] = None):
        super().__init__()
        self.logger = configure_logger(self.__class__.__name__)
        self.report_generator = report_generator or get_report_generator()

    async def _report(self, proposal_id: int) -> ReportOutcome:
        try:
            return await self.report_generator.generate_report(proposal_id)
        except Exception as e:
            self.logger.error(
                "Unexpected error generating report",
                extra={"proposal_id": proposal_id, "error": str(e)},
                exc_info=True,
            )
            return ReportOutcome(
                proposal_id=proposal_id,
                success=False,
                error=ReportError(
                    proposal_id=proposal_id,
                    stage=ReportStage.REPORT,
                    message=str(e),
                ),
            )

    @staticmethod
    def aggregate(outcomes: List[ReportOutcome]) -> PipelineResult:
        processed = [o.proposal_id for o in outcomes if o.success and not o.skipped]
        skipped = [o.proposal_id for o in outcomes if o.skipped]
        failed = [o.error for o in outcomes if not o.success and o.error is not None]

        if not failed:
            return PipelineResult(
                success=True,
                message=SUCCESS_MESSAGE,
                processed=processed,
                skipped=skipped,
            )
        return PipelineResult(
            success=False,
            message=f"{len(failed)} of {len(outcomes)} proposal reports failed",
            processed=processed,
            skipped=skipped,
            failed=failed,
        )

    async def handle(self, parsed_data: ChainHookData) -> PipelineResult:
        """Report each executed proposal and aggregate the outcomes.

        Args:
            parsed_data: The parsed webhook data

        Returns:
            PipelineResult: success only if every report succeeded
        """
        proposal_ids = executed_proposal_ids(parsed_data)
        self.logger.info(
            f"Processing chainhook webhook with {len(parsed_data.blocks)} blocks",
            extra={"proposals": len(proposal_ids)},
        )

        outcomes = []
        for proposal_id in proposal_ids:
            self.logger.info(
                "Triggering reporting", extra={"proposal_id": proposal_id}
            )
            outcomes.append(await self._report(proposal_id))

        result = self.aggregate(outcomes)
        if result.success:
            self.logger.debug("Finished processing all blocks in webhook")
        else:
            self.logger.warning(
                result.message,
                extra={"failed": [error.proposal_id for error in result.failed]},
            )
        return result
