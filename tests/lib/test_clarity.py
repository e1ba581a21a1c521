import pytest

from app.lib.clarity import (
    ClarityDecodeError,
    ClarityOptional,
    ClarityResponse,
    c32_address,
    c32_encode,
    deserialize,
    serialize_uint,
    unwrap,
)

ZERO_HASH = bytes(20)


def uint_bytes(value: int) -> bytes:
    return b"\x01" + value.to_bytes(16, "big")


def principal_bytes(version: int, hash160: bytes) -> bytes:
    return b"\x05" + bytes([version]) + hash160


def tuple_bytes(fields) -> bytes:
    out = b"\x0c" + len(fields).to_bytes(4, "big")
    for name, value in fields:
        out += bytes([len(name)]) + name.encode("ascii") + value
    return out


def test_serialize_uint() -> None:
    """Test uint arguments use the 0x01 prefix and 16 big-endian bytes."""
    assert serialize_uint(42) == "0x01" + "00" * 15 + "2a"
    assert serialize_uint(0) == "0x01" + "00" * 16


@pytest.mark.parametrize("value", [-1, 1 << 128, True, "42"])
def test_serialize_uint_rejects_invalid(value) -> None:
    """Test out-of-range and non-int values are rejected."""
    with pytest.raises((ValueError, TypeError)):
        serialize_uint(value)


def test_c32_encode_keeps_leading_zero_bytes() -> None:
    """Test each leading zero byte becomes one '0' character."""
    assert c32_encode(b"\x00\x01") == "01"
    assert c32_encode(bytes([32])) == "10"
    assert c32_encode(b"") == ""


def test_c32_address_known_burn_addresses() -> None:
    """Test the well-known mainnet and testnet burn addresses."""
    assert c32_address(22, ZERO_HASH) == "SP000000000000000000002Q6VF78"
    assert c32_address(26, ZERO_HASH) == "ST000000000000000000002AMW42H"


def test_deserialize_proposal_tuple() -> None:
    """Test decoding an optional tuple as returned by get-proposal-data."""
    data = b"\x0a" + tuple_bytes(
        [
            ("no-votes", uint_bytes(3)),
            ("proposer", principal_bytes(22, ZERO_HASH)),
            ("yes-votes", uint_bytes(10)),
        ]
    )

    value = deserialize("0x" + data.hex())

    assert isinstance(value, ClarityOptional)
    assert value.is_some
    assert value.value == {
        "no-votes": 3,
        "proposer": "SP000000000000000000002Q6VF78",
        "yes-votes": 10,
    }


def test_deserialize_scalars() -> None:
    """Test decoding of booleans, strings, contract principals and lists."""
    assert deserialize("0x03") is True
    assert deserialize("04") is False
    assert deserialize("0x0d00000002" + b"hi".hex()) == "hi"
    contract = b"\x06" + bytes([22]) + ZERO_HASH + bytes([12]) + b"vote-manager"
    assert deserialize(contract.hex()) == "SP000000000000000000002Q6VF78.vote-manager"
    assert deserialize((b"\x0b" + (2).to_bytes(4, "big") + uint_bytes(1) + uint_bytes(2)).hex()) == [1, 2]
    assert deserialize("0x00" + "ff" * 16) == -1


def test_deserialize_response_wrappers() -> None:
    """Test ok/err responses decode to ClarityResponse."""
    ok = deserialize((b"\x07" + uint_bytes(5)).hex())
    err = deserialize((b"\x08" + uint_bytes(404)).hex())

    assert ok == ClarityResponse(5, is_ok=True)
    assert err == ClarityResponse(404, is_ok=False)


@pytest.mark.parametrize(
    "hex_value",
    ["0x01ff", "0xzz", "0x", "0x99", "0x0304", None],
)
def test_deserialize_malformed(hex_value) -> None:
    """Test truncated, non-hex, unknown and trailing data raise ClarityDecodeError."""
    with pytest.raises(ClarityDecodeError):
        deserialize(hex_value)


def test_unwrap() -> None:
    """Test ok/some wrappers are stripped and err/none are reported absent."""
    nested = ClarityResponse(ClarityOptional({"a": 1}, is_some=True), is_ok=True)
    assert unwrap(nested) == ({"a": 1}, True)

    value, present = unwrap(ClarityResponse(ClarityOptional(), is_ok=True))
    assert present is False
    assert value == ClarityOptional()

    assert unwrap(ClarityResponse(7, is_ok=False)) == (ClarityResponse(7, is_ok=False), False)
    assert unwrap(12) == (12, True)
