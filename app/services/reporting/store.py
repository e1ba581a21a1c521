"""Already-reported proposal tracking for exactly-once reporting."""

from abc import ABC, abstractmethod
from typing import Set


class ReportedProposalStore(ABC):
    @abstractmethod
    async def contains(self, proposal_id: int) -> bool:
        pass

    @abstractmethod
    async def add(self, proposal_id: int) -> None:
        pass


class InMemoryReportedProposalStore(ReportedProposalStore):
    """Process-local store; forgets everything on restart."""

    def __init__(self):
        self._reported: Set[int] = set()

    async def contains(self, proposal_id: int) -> bool:
        return proposal_id in self._reported

    async def add(self, proposal_id: int) -> None:
        self._reported.add(proposal_id)

    def __len__(self) -> int:
        return len(self._reported)
