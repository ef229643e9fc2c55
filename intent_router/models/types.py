"""Shared type definitions for intent and plan models.

Addresses and hashes travel as 0x-prefixed hex strings; amounts are Python
ints validated against the uint256 range.
"""

from typing import Annotated, Any

from eth_utils import to_checksum_address
from pydantic import BeforeValidator, Field

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_BYTES32 = "0x" + "00" * 32
EMPTY_BYTES = "0x"


def validate_uint256(value: Any) -> int:
    """Validate and coerce a value into a uint256 int.

    Accepts ints, decimal strings and 0x-prefixed hex strings. Floats and
    bools are rejected so amounts never lose precision.

    Raises:
        ValueError: If the value is not a non-negative integer within range
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"Uint256 must be an integer, got {type(value).__name__}")

    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text, 16) if text.lower().startswith("0x") else int(text)
        except ValueError as err:
            raise ValueError(f"Uint256 must be an integer string: '{text}'") from err

    if not isinstance(value, int):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return value


def validate_hex_bytes(value: Any) -> str:
    """Normalize hex byte strings to lowercase with a 0x prefix."""
    if isinstance(value, bytes | bytearray):
        return "0x" + bytes(value).hex()
    if not isinstance(value, str):
        raise ValueError(f"Hex bytes must be str or bytes, got {type(value).__name__}")
    text = value if value.startswith(("0x", "0X")) else "0x" + value
    return "0x" + text[2:].lower()


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]

# 32-byte digest
Bytes32 = Annotated[
    str,
    BeforeValidator(validate_hex_bytes),
    Field(pattern=r"^0x[a-f0-9]{64}$"),
]

# Arbitrary hex bytes
HexBytes = Annotated[
    str,
    BeforeValidator(validate_hex_bytes),
    Field(pattern=r"^0x([a-f0-9]{2})*$"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def hex_to_bytes(value: str) -> bytes:
    """Decode a 0x-prefixed hex string."""
    return bytes.fromhex(value[2:] if value.startswith(("0x", "0X")) else value)


def checksum(address: str) -> str:
    """EIP-55 form, accepted by both eth_abi and web3 contract calls."""
    return to_checksum_address(normalize_address(address))
