"""Report generator: ledger read, row shaping and sink append for one proposal."""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional

from app.config import config
from app.lib.logger import configure_logger
from app.services.reporting.exceptions import LedgerReadError, SinkWriteError
from app.services.reporting.ledger import LedgerReader
from app.services.reporting.models import (
    ProposalRecord,
    ReportError,
    ReportOutcome,
    ReportRow,
    ReportStage,
)
from app.services.reporting.sink import RecordSink
from app.services.reporting.store import ReportedProposalStore


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportGenerator:
    """Produces one report row per call.

    Stateless unless a ReportedProposalStore is supplied: without one every call
    reads and appends again, so redelivered or duplicated events yield duplicate
    rows. Failures are returned as outcomes and never retried here.
    """

    def __init__(
        self,
        ledger_reader: LedgerReader,
        record_sink: RecordSink,
        reported_store: Optional[ReportedProposalStore] = None,
        ledger_timeout: Optional[float] = None,
        sink_timeout: Optional[float] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.ledger_reader = ledger_reader
        self.record_sink = record_sink
        self.reported_store = reported_store
        self.ledger_timeout = (
            ledger_timeout
            if ledger_timeout is not None
            else config.reporting.ledger_timeout_seconds
        )
        self.sink_timeout = (
            sink_timeout
            if sink_timeout is not None
            else config.reporting.sink_timeout_seconds
        )
        self.clock = clock
        self.logger = configure_logger(self.__class__.__name__)

    async def _read(self, proposal_id: int) -> ProposalRecord:
        try:
            return await asyncio.wait_for(
                self.ledger_reader.read_proposal(proposal_id),
                timeout=self.ledger_timeout,
            )
        except LedgerReadError:
            raise
        except asyncio.TimeoutError as e:
            raise LedgerReadError(
                proposal_id, f"Ledger read timed out after {self.ledger_timeout}s"
            ) from e
        except Exception as e:
            raise LedgerReadError(proposal_id, f"Ledger read failed: {e}") from e

    async def _append(self, row: ReportRow) -> None:
        try:
            await asyncio.wait_for(
                self.record_sink.append(row), timeout=self.sink_timeout
            )
        except SinkWriteError:
            raise
        except asyncio.TimeoutError as e:
            raise SinkWriteError(
                row.proposal_id, f"Sink append timed out after {self.sink_timeout}s"
            ) from e
        except Exception as e:
            raise SinkWriteError(row.proposal_id, f"Sink append failed: {e}") from e

    def _failure(
        self, proposal_id: int, stage: ReportStage, error: Exception
    ) -> ReportOutcome:
        message = getattr(error, "message", str(error))
        self.logger.error(
            "Report generation failed",
            extra={"proposal_id": proposal_id, "stage": str(stage), "error": message},
        )
        return ReportOutcome(
            proposal_id=proposal_id,
            success=False,
            error=ReportError(proposal_id=proposal_id, stage=stage, message=message),
        )

    async def generate_report(self, proposal_id: int) -> ReportOutcome:
        """Fetch the proposal, shape it into a row and append it.

        The append is only attempted after a successful read; a failed read
        never produces a row.
        """
        if self.reported_store is not None and await self.reported_store.contains(
            proposal_id
        ):
            self.logger.info(
                "Proposal already reported, skipping",
                extra={"proposal_id": proposal_id},
            )
            return ReportOutcome(proposal_id=proposal_id, success=True, skipped=True)

        self.logger.info(
            "Starting final report", extra={"proposal_id": proposal_id}
        )

        try:
            record = await self._read(proposal_id)
        except LedgerReadError as e:
            return self._failure(proposal_id, ReportStage.LEDGER_READ, e)

        row = ReportRow.from_record(record, reported_at=self.clock())

        try:
            await self._append(row)
        except SinkWriteError as e:
            return self._failure(proposal_id, ReportStage.SINK_WRITE, e)

        if self.reported_store is not None:
            await self.reported_store.add(proposal_id)

        self.logger.info("Report completed", extra={"proposal_id": proposal_id})
        return ReportOutcome(proposal_id=proposal_id, success=True, row=row)
