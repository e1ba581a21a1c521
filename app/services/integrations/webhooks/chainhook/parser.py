"""Chainhook webhook parser implementation."""

from typing import Any, Dict, List

from app.lib.logger import configure_logger
from app.services.integrations.webhooks.base import WebhookParser
from app.services.integrations.webhooks.chainhook.models import (
    Block,
    BlockIdentifier,
    ChainHookData,
    ContractEvent,
    Event,
    Transaction,
)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any):
    return value if isinstance(value, str) else None


class ChainhookParser(WebhookParser):
    """Parser for Chainhook webhook payloads.

    The payload comes from outside and any level may be missing or of the
    wrong type. Such levels parse as empty instead of raising, so a
    malformed branch simply contributes nothing.
    """

    def __init__(self):
        super().__init__()
        self.logger = configure_logger(self.__class__.__name__)

    def parse(self, raw_data: Any) -> ChainHookData:
        """Parse Chainhook webhook data.

        Accepts either the bare `{"chainhook": ...}` document or one wrapped
        as `{"payload": {"chainhook": ...}}`.

        Args:
            raw_data: The raw webhook payload

        Returns:
            ChainHookData: Structured data from the webhook
        """
        root = _as_dict(raw_data)
        if "chainhook" not in root and isinstance(root.get("payload"), dict):
            root = root["payload"]

        chainhook = _as_dict(root.get("chainhook"))
        blocks = [
            self._parse_block(block)
            for block in _as_list(chainhook.get("blocks"))
            if isinstance(block, dict)
        ]
        self.logger.debug("Parsed chainhook payload", extra={"blocks": len(blocks)})
        return ChainHookData(blocks=blocks, uuid=_as_str(chainhook.get("uuid")))

    def _parse_block(self, block_data: Dict[str, Any]) -> Block:
        block_id = None
        if isinstance(block_data.get("block_identifier"), dict):
            identifier = block_data["block_identifier"]
            index = identifier.get("index")
            block_id = BlockIdentifier(
                hash=_as_str(identifier.get("hash")),
                index=index if isinstance(index, int) else None,
            )

        return Block(
            transactions=[
                self._parse_transaction(tx)
                for tx in _as_list(block_data.get("transactions"))
                if isinstance(tx, dict)
            ],
            block_identifier=block_id,
        )

    def _parse_transaction(self, tx_data: Dict[str, Any]) -> Transaction:
        tx_id = _as_str(_as_dict(tx_data.get("transaction_identifier")).get("hash"))
        return Transaction(
            events=[
                self._parse_event(event)
                for event in _as_list(tx_data.get("events"))
                if isinstance(event, dict)
            ],
            tx_id=tx_id,
        )

    def _parse_event(self, event_data: Dict[str, Any]) -> Event:
        contract_event = None
        if isinstance(event_data.get("contract_event"), dict):
            data = event_data["contract_event"]
            contract_event = ContractEvent(
                topic=_as_str(data.get("topic")),
                value=data.get("value"),
                contract_identifier=_as_str(data.get("contract_identifier")),
            )
        return Event(type=_as_str(event_data.get("type")), contract_event=contract_event)
