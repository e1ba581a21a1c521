"""Data models for proposal reporting."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportStage(str, Enum):
    LEDGER_READ = "ledger_read"
    SINK_WRITE = "sink_write"
    # Failure outside the read/append boundaries
    REPORT = "report"

    def __str__(self):
        return self.value


class ProposalRecord(BaseModel):
    """Snapshot of a finalized proposal as read from the vote manager contract."""

    model_config = ConfigDict(frozen=True)

    proposal_id: int
    proposer: str
    yes_votes: int
    no_votes: int


class ReportRow(BaseModel):
    """One durable output row per processed proposal."""

    model_config = ConfigDict(frozen=True)

    proposal_id: int
    proposer: str
    yes_votes: int
    no_votes: int
    reported_at: datetime

    @classmethod
    def from_record(
        cls, record: ProposalRecord, reported_at: Optional[datetime] = None
    ) -> "ReportRow":
        return cls(
            proposal_id=record.proposal_id,
            proposer=record.proposer,
            yes_votes=record.yes_votes,
            no_votes=record.no_votes,
            reported_at=reported_at or datetime.now(timezone.utc),
        )

    def to_values(self) -> List[Any]:
        """Sheet column order: id, proposer, yes, no, ISO-8601 UTC timestamp."""
        reported_at = self.reported_at.astimezone(timezone.utc)
        timestamp = reported_at.isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )
        return [
            self.proposal_id,
            self.proposer,
            self.yes_votes,
            self.no_votes,
            timestamp,
        ]


class ReportError(BaseModel):
    """Structured failure of one proposal's report."""

    proposal_id: int
    stage: ReportStage
    message: str


class ReportOutcome(BaseModel):
    proposal_id: int
    success: bool
    skipped: bool = False
    row: Optional[ReportRow] = None
    error: Optional[ReportError] = None


class PipelineResult(BaseModel):
    """Aggregate result of processing one webhook delivery."""

    success: bool
    message: str
    processed: List[int] = Field(default_factory=list)
    skipped: List[int] = Field(default_factory=list)
    failed: List[ReportError] = Field(default_factory=list)

    @property
    def partial(self) -> bool:
        """Some proposals were reported and some failed."""
        return bool(self.failed) and bool(self.processed or self.skipped)


class VotingTopic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    duration_blocks: Optional[int] = Field(default=None, alias="durationBlocks")
    category: Optional[str] = None
    description: Optional[str] = None
