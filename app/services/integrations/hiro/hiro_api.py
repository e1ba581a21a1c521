"""Hiro API client for read-only contract queries."""

from typing import List, Optional

from app.config import config
from app.lib.logger import configure_logger

from .base import BaseHiroApi
from .models import ReadOnlyCall, ReadOnlyCallResult

logger = configure_logger(__name__)


class HiroApi(BaseHiroApi):
    """Client for the Stacks node RPC exposed by the Hiro API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        super().__init__(
            base_url or config.stacks.api_url,
            api_key=config.stacks.api_key if api_key is None else api_key,
            timeout_seconds=timeout_seconds
            or config.reporting.ledger_timeout_seconds,
        )

    async def acall_read_only(
        self,
        contract_address: str,
        contract_name: str,
        function_name: str,
        arguments: List[str],
        sender: str,
    ) -> ReadOnlyCallResult:
        """Call a read-only contract function.

        Args:
            contract_address: Deployer address of the contract
            contract_name: Contract name
            function_name: Read-only function to call
            arguments: Hex-serialized Clarity arguments
            sender: Address the call is evaluated as

        Returns:
            ReadOnlyCallResult with the hex result or the node's failure cause
        """
        call = ReadOnlyCall(
            contract_address=contract_address,
            contract_name=contract_name,
            function_name=function_name,
            sender=sender,
            arguments=arguments,
        )
        logger.debug(
            "Calling read-only function",
            extra={
                "contract": f"{contract_address}.{contract_name}",
                "function": function_name,
            },
        )
        data = await self._amake_request("POST", call.endpoint, json=call.to_body())
        return ReadOnlyCallResult.from_response(data)
