"""Error taxonomy for proposal reporting."""

from typing import Any, Dict, Optional


class ReportingError(Exception):
    """Base exception for all reporting errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class CoercionError(ReportingError):
    """A matched event's proposal id is not an integer."""

    MAX_PREVIEW = 64

    def __init__(self, raw_value: Any) -> None:
        preview = repr(raw_value)
        if len(preview) > self.MAX_PREVIEW:
            preview = f"{preview[: self.MAX_PREVIEW]}... ({len(preview)} chars)"
        super().__init__(
            f"Cannot coerce proposal id {preview} to an integer",
            {"raw_value": preview},
        )
        self.raw_value = raw_value


class LedgerReadError(ReportingError):
    """The read-only proposal query failed (network, contract error, timeout)."""

    def __init__(self, proposal_id: int, message: str, **details: Any) -> None:
        super().__init__(message, {"proposal_id": proposal_id, **details})
        self.proposal_id = proposal_id


class SinkWriteError(ReportingError):
    """Appending the report row failed after a successful read."""

    def __init__(self, proposal_id: int, message: str, **details: Any) -> None:
        super().__init__(message, {"proposal_id": proposal_id, **details})
        self.proposal_id = proposal_id


class PipelineError(ReportingError):
    """The webhook pipeline could not process the payload at all."""

    pass


class TopicsUnavailableError(ReportingError):
    """Voting topics could not be read from the spreadsheet."""

    pass
