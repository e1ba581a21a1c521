"""Proposal reporting: ledger reads, report rows and their durable sink."""

from app.services.reporting.exceptions import (
    CoercionError,
    LedgerReadError,
    PipelineError,
    ReportingError,
    SinkWriteError,
    TopicsUnavailableError,
)
from app.services.reporting.ledger import LedgerReader, VoteManagerLedgerReader
from app.services.reporting.models import (
    PipelineResult,
    ProposalRecord,
    ReportError,
    ReportOutcome,
    ReportRow,
    ReportStage,
    VotingTopic,
)
from app.services.reporting.report_generator import ReportGenerator
from app.services.reporting.sink import GoogleSheetsRecordSink, RecordSink
from app.services.reporting.store import (
    InMemoryReportedProposalStore,
    ReportedProposalStore,
)
from app.services.reporting.topics import VotingTopicsService

__all__ = [
    "CoercionError",
    "LedgerReadError",
    "PipelineError",
    "ReportingError",
    "SinkWriteError",
    "TopicsUnavailableError",
    "LedgerReader",
    "VoteManagerLedgerReader",
    "PipelineResult",
    "ProposalRecord",
    "ReportError",
    "ReportOutcome",
    "ReportRow",
    "ReportStage",
    "VotingTopic",
    "ReportGenerator",
    "GoogleSheetsRecordSink",
    "RecordSink",
    "InMemoryReportedProposalStore",
    "ReportedProposalStore",
    "VotingTopicsService",
]
