"""Ledger reader: fetches finalized proposal data from the vote manager contract."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from app.config import config
from app.lib.clarity import ClarityDecodeError, deserialize, serialize_uint, unwrap
from app.lib.logger import configure_logger
from app.services.integrations.hiro import HiroApi, HiroApiError
from app.services.reporting.exceptions import LedgerReadError
from app.services.reporting.models import ProposalRecord

PROPOSER_FIELD = "proposer"
YES_VOTES_FIELD = "yes-votes"
NO_VOTES_FIELD = "no-votes"


class LedgerReader(ABC):
    """Side-effect-free source of proposal records."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    async def read_proposal(self, proposal_id: int) -> ProposalRecord:
        """Read one proposal.

        Raises:
            LedgerReadError: If the record cannot be fetched or decoded
        """
        pass

    async def close(self) -> None:
        """Release any client held by the reader."""
        pass


class VoteManagerLedgerReader(LedgerReader):
    """Reads proposals through the `get-proposal-data` read-only function."""

    def __init__(
        self,
        api: Optional[HiroApi] = None,
        contract_address: Optional[str] = None,
        contract_name: Optional[str] = None,
        function_name: Optional[str] = None,
        sender_address: Optional[str] = None,
    ):
        super().__init__()
        self.api = api or HiroApi()
        self.contract_address = contract_address or config.stacks.contract_address
        self.contract_name = contract_name or config.stacks.vote_manager_contract_name
        self.function_name = function_name or config.stacks.proposal_data_function
        self.sender_address = sender_address or config.stacks.sender_address

    async def close(self) -> None:
        await self.api.close()

    async def read_proposal(self, proposal_id: int) -> ProposalRecord:
        if not self.contract_address:
            raise LedgerReadError(proposal_id, "Vote manager address is not configured")

        try:
            result = await self.api.acall_read_only(
                contract_address=self.contract_address,
                contract_name=self.contract_name,
                function_name=self.function_name,
                arguments=[serialize_uint(proposal_id)],
                sender=self.sender_address or self.contract_address,
            )
        except HiroApiError as e:
            raise LedgerReadError(
                proposal_id, f"Read-only call failed: {e}", status_code=e.status_code
            ) from e

        if not result.okay or not result.result:
            raise LedgerReadError(
                proposal_id, f"Read-only call rejected: {result.cause or 'no result'}"
            )

        try:
            value = deserialize(result.result)
        except ClarityDecodeError as e:
            raise LedgerReadError(proposal_id, f"Undecodable result: {e}") from e

        data, present = unwrap(value)
        if not present:
            raise LedgerReadError(proposal_id, f"Proposal not found: {data!r}")

        record = self._to_record(proposal_id, data)
        self.logger.info(
            "Proposal data fetched",
            extra={
                "proposal_id": proposal_id,
                "yes_votes": record.yes_votes,
                "no_votes": record.no_votes,
            },
        )
        return record

    def _to_record(self, proposal_id: int, data: Any) -> ProposalRecord:
        if not isinstance(data, dict):
            raise LedgerReadError(
                proposal_id, f"Expected a tuple, got {type(data).__name__}"
            )
        fields: Dict[str, Any] = data
        proposer = fields.get(PROPOSER_FIELD)
        yes_votes = fields.get(YES_VOTES_FIELD)
        no_votes = fields.get(NO_VOTES_FIELD)

        if not isinstance(proposer, str):
            raise LedgerReadError(proposal_id, "Proposal data has no proposer")
        for name, votes in ((YES_VOTES_FIELD, yes_votes), (NO_VOTES_FIELD, no_votes)):
            if isinstance(votes, bool) or not isinstance(votes, int):
                raise LedgerReadError(proposal_id, f"Proposal data has no {name}")

        return ProposalRecord(
            proposal_id=proposal_id,
            proposer=proposer,
            yes_votes=yes_votes,
            no_votes=no_votes,
        )
