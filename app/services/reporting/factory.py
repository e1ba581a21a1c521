from functools import lru_cache
from typing import Optional

from app.config import config
from app.services.reporting.ledger import VoteManagerLedgerReader
from app.services.reporting.report_generator import ReportGenerator
from app.services.reporting.sink import GoogleSheetsRecordSink
from app.services.reporting.store import (
    InMemoryReportedProposalStore,
    ReportedProposalStore,
)
from app.services.reporting.topics import VotingTopicsService


def get_reported_store() -> Optional[ReportedProposalStore]:
    """Store used for deduplication, or None when reporting is at-least-once."""
    if config.reporting.deduplicate:
        return InMemoryReportedProposalStore()
    return None


@lru_cache(maxsize=None)
def get_report_generator() -> ReportGenerator:
    """Process-wide generator wired to the vote manager contract and the reports sheet."""
    return ReportGenerator(
        ledger_reader=VoteManagerLedgerReader(),
        record_sink=GoogleSheetsRecordSink(),
        reported_store=get_reported_store(),
    )


@lru_cache(maxsize=None)
def get_topics_service() -> VotingTopicsService:
    return VotingTopicsService()


async def close_report_generator() -> None:
    """Close the clients of the process-wide generator, if one was created."""
    if get_report_generator.cache_info().currsize:
        await get_report_generator().ledger_reader.close()
