"""Detection of executed-proposal print events in chainhook payloads."""

import re
from typing import Any, Iterator, List, Tuple

from app.lib.logger import configure_logger
from app.services.integrations.webhooks.chainhook.models import (
    ChainHookData,
    Event,
    Transaction,
)
from app.services.integrations.webhooks.chainhook.parser import ChainhookParser
from app.services.reporting.exceptions import CoercionError

logger = configure_logger(__name__)

CONTRACT_EVENT_TYPE = "contract_event"
PRINT_TOPIC = "print"
PROPOSAL_EXECUTED = "PROPOSAL_EXECUTED"

_DECIMAL = re.compile(r"^\s*(\d+)\s*$")


def is_proposal_executed(event: Event) -> bool:
    """A print event from a contract whose value is `{event: "PROPOSAL_EXECUTED", ...}`."""
    if event.type != CONTRACT_EVENT_TYPE:
        return False
    contract_event = event.contract_event
    if contract_event is None or contract_event.topic != PRINT_TOPIC:
        return False
    value = contract_event.value
    return isinstance(value, dict) and value.get("event") == PROPOSAL_EXECUTED


def coerce_proposal_id(raw_value: Any) -> int:
    """Non-negative integer from a JSON number or decimal string.

    Raises:
        CoercionError: For anything else, including booleans and negatives
    """
    if isinstance(raw_value, bool):
        raise CoercionError(raw_value)
    if isinstance(raw_value, int):
        if raw_value < 0:
            raise CoercionError(raw_value)
        return raw_value
    if isinstance(raw_value, float) and raw_value.is_integer() and raw_value >= 0:
        return int(raw_value)
    if isinstance(raw_value, str):
        match = _DECIMAL.match(raw_value)
        if match:
            try:
                return int(match.group(1))
            except ValueError as e:
                # Digit strings past the interpreter's int conversion limit
                raise CoercionError(raw_value) from e
    raise CoercionError(raw_value)


def _proposal_id_of(event: Event) -> int:
    id_field = event.contract_event.value.get("id")
    if not isinstance(id_field, dict) or "value" not in id_field:
        raise CoercionError(id_field)
    return coerce_proposal_id(id_field["value"])


def _iter_events(data: ChainHookData) -> Iterator[Tuple[Transaction, Event]]:
    for block in data.blocks:
        for transaction in block.transactions:
            for event in transaction.events:
                yield transaction, event


def executed_proposal_ids(data: ChainHookData) -> List[int]:
    """Proposal ids of every executed-proposal event, in payload order.

    Duplicates are kept. Matches whose id cannot be coerced are logged and
    dropped without affecting the rest of the payload.
    """
    proposal_ids = []
    for transaction, event in _iter_events(data):
        if not is_proposal_executed(event):
            continue
        try:
            proposal_id = _proposal_id_of(event)
        except CoercionError as e:
            logger.warning(
                "Dropping executed-proposal event with invalid id",
                extra={"tx_id": transaction.tx_id, "error": e.message},
            )
            continue
        logger.info(
            f"Proposal {proposal_id} executed",
            extra={"proposal_id": proposal_id, "tx_id": transaction.tx_id},
        )
        proposal_ids.append(proposal_id)
    return proposal_ids


def extract_executed_proposal_ids(payload: Any) -> List[int]:
    """Executed-proposal ids from a raw (possibly malformed) webhook payload."""
    if not isinstance(payload, ChainHookData):
        payload = ChainhookParser().parse(payload)
    return executed_proposal_ids(payload)
