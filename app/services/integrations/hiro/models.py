"""Hiro API specific data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ReadOnlyCall:
    """A read-only contract function invocation."""

    contract_address: str
    contract_name: str
    function_name: str
    sender: str
    arguments: List[str] = field(default_factory=list)

    @property
    def endpoint(self) -> str:
        return (
            f"/v2/contracts/call-read/{self.contract_address}/"
            f"{self.contract_name}/{self.function_name}"
        )

    def to_body(self) -> Dict[str, Any]:
        return {"sender": self.sender, "arguments": self.arguments}


@dataclass
class ReadOnlyCallResult:
    """Node response to a read-only call."""

    okay: bool
    result: Optional[str] = None
    cause: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "ReadOnlyCallResult":
        """Build from the node's JSON body, tolerating missing keys."""
        if not isinstance(data, dict):
            return cls(okay=False, cause=f"Unexpected response: {data!r}")
        return cls(
            okay=bool(data.get("okay", False)),
            result=data.get("result"),
            cause=data.get("cause"),
        )
