"""Clarity value codec for read-only contract calls.

Read-only calls against a Stacks node take their arguments, and return their
result, as hex strings in the Clarity consensus serialization format. This
module encodes the argument types the service sends and decodes any value a
contract can return into plain Python objects:

- uint / int -> int
- true / false -> bool
- buffer -> bytes
- string-ascii / string-utf8 -> str
- principal -> c32 address string (contract principals as `ADDR.name`)
- tuple -> dict keyed by field name
- list -> list
- optional / response -> ClarityOptional / ClarityResponse wrappers
"""

import hashlib
from dataclasses import dataclass
from typing import Any, Tuple

C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

# Type prefixes from the Clarity consensus serialization
TYPE_INT = 0x00
TYPE_UINT = 0x01
TYPE_BUFFER = 0x02
TYPE_TRUE = 0x03
TYPE_FALSE = 0x04
TYPE_STANDARD_PRINCIPAL = 0x05
TYPE_CONTRACT_PRINCIPAL = 0x06
TYPE_RESPONSE_OK = 0x07
TYPE_RESPONSE_ERR = 0x08
TYPE_NONE = 0x09
TYPE_SOME = 0x0A
TYPE_LIST = 0x0B
TYPE_TUPLE = 0x0C
TYPE_STRING_ASCII = 0x0D
TYPE_STRING_UTF8 = 0x0E

UINT128_MAX = (1 << 128) - 1


class ClarityDecodeError(ValueError):
    """Raised when a hex string is not a well-formed Clarity value."""

    pass


@dataclass(frozen=True)
class ClarityOptional:
    """Decoded `(some v)` or `none`."""

    value: Any = None
    is_some: bool = False


@dataclass(frozen=True)
class ClarityResponse:
    """Decoded `(ok v)` or `(err v)`."""

    value: Any
    is_ok: bool


def serialize_uint(value: int) -> str:
    """Serialize an unsigned 128-bit integer into a 0x-prefixed hex string."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"uint must be an int, got {type(value).__name__}")
    if value < 0 or value > UINT128_MAX:
        raise ValueError(f"uint out of range: {value}")
    return "0x" + (bytes([TYPE_UINT]) + value.to_bytes(16, "big")).hex()


def c32_encode(data: bytes) -> str:
    """Crockford-style base32 used by Stacks addresses; leading zero bytes map to '0'."""
    number = int.from_bytes(data, "big")
    chars = []
    while number > 0:
        number, remainder = divmod(number, 32)
        chars.append(C32_ALPHABET[remainder])
    leading_zero_bytes = len(data) - len(data.lstrip(b"\x00"))
    return C32_ALPHABET[0] * leading_zero_bytes + "".join(reversed(chars))


def c32_address(version: int, hash160: bytes) -> str:
    """Render a (version, hash160) pair as a c32check Stacks address."""
    if not 0 <= version < 32:
        raise ValueError(f"Invalid address version: {version}")
    if len(hash160) != 20:
        raise ValueError("hash160 must be 20 bytes")
    checksum = hashlib.sha256(
        hashlib.sha256(bytes([version]) + hash160).digest()
    ).digest()[:4]
    return "S" + C32_ALPHABET[version] + c32_encode(hash160 + checksum)


class _Reader:
    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ClarityDecodeError(
                f"Unexpected end of data at offset {self.offset} (need {size} bytes)"
            )
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]

    def u32(self) -> int:
        return int.from_bytes(self.take(4), "big")


def _read_principal(reader: _Reader) -> str:
    version = reader.byte()
    return c32_address(version, reader.take(20))


def _read_value(reader: _Reader) -> Any:
    type_id = reader.byte()

    if type_id == TYPE_INT:
        return int.from_bytes(reader.take(16), "big", signed=True)
    if type_id == TYPE_UINT:
        return int.from_bytes(reader.take(16), "big")
    if type_id == TYPE_BUFFER:
        return reader.take(reader.u32())
    if type_id == TYPE_TRUE:
        return True
    if type_id == TYPE_FALSE:
        return False
    if type_id == TYPE_STANDARD_PRINCIPAL:
        return _read_principal(reader)
    if type_id == TYPE_CONTRACT_PRINCIPAL:
        address = _read_principal(reader)
        name = reader.take(reader.byte()).decode("ascii")
        return f"{address}.{name}"
    if type_id in (TYPE_RESPONSE_OK, TYPE_RESPONSE_ERR):
        return ClarityResponse(_read_value(reader), is_ok=type_id == TYPE_RESPONSE_OK)
    if type_id == TYPE_NONE:
        return ClarityOptional()
    if type_id == TYPE_SOME:
        return ClarityOptional(_read_value(reader), is_some=True)
    if type_id == TYPE_LIST:
        return [_read_value(reader) for _ in range(reader.u32())]
    if type_id == TYPE_TUPLE:
        fields = {}
        for _ in range(reader.u32()):
            name = reader.take(reader.byte()).decode("ascii")
            fields[name] = _read_value(reader)
        return fields
    if type_id == TYPE_STRING_ASCII:
        return reader.take(reader.u32()).decode("ascii")
    if type_id == TYPE_STRING_UTF8:
        return reader.take(reader.u32()).decode("utf-8")

    raise ClarityDecodeError(f"Unknown Clarity type prefix 0x{type_id:02x}")


def deserialize(hex_value: str) -> Any:
    """Decode a 0x-prefixed (or bare) hex string into Python values.

    Raises:
        ClarityDecodeError: If the hex is malformed, truncated or has trailing bytes
    """
    if not isinstance(hex_value, str):
        raise ClarityDecodeError(f"Expected hex string, got {type(hex_value).__name__}")
    raw = hex_value[2:] if hex_value.startswith("0x") else hex_value
    try:
        data = bytes.fromhex(raw)
    except ValueError as e:
        raise ClarityDecodeError(f"Invalid hex: {e}") from e

    reader = _Reader(data)
    try:
        value = _read_value(reader)
    except UnicodeDecodeError as e:
        raise ClarityDecodeError(f"Invalid string payload: {e}") from e
    if reader.offset != len(data):
        raise ClarityDecodeError(
            f"Trailing bytes after value ({len(data) - reader.offset} left)"
        )
    return value


def unwrap(value: Any) -> Tuple[Any, bool]:
    """Strip `(ok ...)` and `(some ...)` wrappers.

    Returns:
        Tuple of (inner value, True) or (the err/none value, False)
    """
    while isinstance(value, (ClarityResponse, ClarityOptional)):
        if isinstance(value, ClarityResponse):
            if not value.is_ok:
                return value, False
        elif not value.is_some:
            return value, False
        value = value.value
    return value, True
