"""Chainhook webhook module.

This module provides components for parsing Chainhook webhook payloads and
reporting the proposals they mark as executed.
"""

from app.services.integrations.webhooks.chainhook.extractor import (
    extract_executed_proposal_ids,
    is_proposal_executed,
)
from app.services.integrations.webhooks.chainhook.handler import ChainhookHandler
from app.services.integrations.webhooks.chainhook.models import ChainHookData
from app.services.integrations.webhooks.chainhook.parser import ChainhookParser
from app.services.integrations.webhooks.chainhook.service import ChainhookService

__all__ = [
    "ChainhookService",
    "ChainhookParser",
    "ChainhookHandler",
    "ChainHookData",
    "extract_executed_proposal_ids",
    "is_proposal_executed",
]
