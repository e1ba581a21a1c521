"""Chainhook webhook data models."""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class BlockIdentifier:
    """Block identifier with hash and index."""

    hash: Optional[str] = None
    index: Optional[int] = None


@dataclass
class ContractEvent:
    """Payload of a `contract_event`; `value` is application-defined."""

    topic: Optional[str] = None
    value: Any = None
    contract_identifier: Optional[str] = None


@dataclass
class Event:
    """Event emitted by a transaction."""

    type: Optional[str] = None
    contract_event: Optional[ContractEvent] = None


@dataclass
class Transaction:
    events: List[Event] = field(default_factory=list)
    tx_id: Optional[str] = None


@dataclass
class Block:
    transactions: List[Transaction] = field(default_factory=list)
    block_identifier: Optional[BlockIdentifier] = None


@dataclass
class ChainHookData:
    """Top-level data structure for Chainhook webhook payloads."""

    blocks: List[Block] = field(default_factory=list)
    uuid: Optional[str] = None
