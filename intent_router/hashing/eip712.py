"""EIP-712 typed-data hashing and signing.

The digest must match what IntentChannel computes on-chain, so encoding
follows the EIP-712 rules exactly:

    digest = keccak256(0x19 0x01 ‖ domainSeparator ‖ hashStruct(message))

Supported member types: atomic (address, bool, uintN, intN, bytesN),
dynamic (bytes, string), nested structs and arrays of any of these.
"""

from __future__ import annotations

import re
from typing import Any, Protocol

from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from intent_router.models.commitment import CommitmentAuthorization
from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.models.plan import MakerQuote
from intent_router.models.types import hex_to_bytes, normalize_address

TypeFields = list[dict[str, str]]
Types = dict[str, TypeFields]

MAKER_DOMAIN_NAME = "MakerFill"

INTENT_TYPES: Types = {
    "TradingIntent": [
        {"name": "trader", "type": "address"},
        {"name": "inputToken", "type": "address"},
        {"name": "outputToken", "type": "address"},
        {"name": "amountIn", "type": "uint256"},
        {"name": "minOut", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
        {"name": "nonce", "type": "uint256"},
        {"name": "sourceChainId", "type": "uint256"},
        {"name": "destChainId", "type": "uint256"},
    ]
}

QUOTE_TYPES: Types = {
    "MakerQuote": [
        {"name": "intentHash", "type": "bytes32"},
        {"name": "inputToken", "type": "address"},
        {"name": "outputToken", "type": "address"},
        {"name": "amountIn", "type": "uint256"},
        {"name": "amountOut", "type": "uint256"},
        {"name": "expiry", "type": "uint256"},
    ]
}

COMMITMENT_AUTH_TYPES: Types = {
    "CommitmentAuthorization": [
        {"name": "commitment", "type": "bytes32"},
        {"name": "trader", "type": "address"},
        {"name": "inputToken", "type": "address"},
        {"name": "amountIn", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
        {"name": "notBefore", "type": "uint256"},
    ]
}

# Domain fields in canonical order; only those present are encoded.
_DOMAIN_FIELDS: TypeFields = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
    {"name": "salt", "type": "bytes32"},
]

_ARRAY_RE = re.compile(r"^(.*)\[(\d*)\]$")


class Eip712Signer(Protocol):
    """Anything able to produce an EIP-712 signature (wallet, HSM, test double)."""

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: Types,
        primary_type: str,
        message: dict[str, Any],
    ) -> str: ...


def _base_type(type_name: str) -> str:
    match = _ARRAY_RE.match(type_name)
    return _base_type(match.group(1)) if match else type_name


def _find_dependencies(primary_type: str, types: Types, found: set[str] | None = None) -> set[str]:
    found = set() if found is None else found
    if primary_type in found or primary_type not in types:
        return found
    found.add(primary_type)
    for field in types[primary_type]:
        _find_dependencies(_base_type(field["type"]), types, found)
    return found


def encode_type(primary_type: str, types: Types) -> str:
    """Encode a struct type with its referenced types sorted by name."""
    deps = _find_dependencies(primary_type, types)
    deps.discard(primary_type)
    encoded = ""
    for name in [primary_type, *sorted(deps)]:
        members = ",".join(f"{field['type']} {field['name']}" for field in types[name])
        encoded += f"{name}({members})"
    return encoded


def type_hash(primary_type: str, types: Types) -> bytes:
    return keccak(text=encode_type(primary_type, types))


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    if isinstance(value, str):
        return hex_to_bytes(value)
    raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")


def _encode_value(type_name: str, value: Any, types: Types) -> bytes:
    """Encode one member into its 32-byte slot."""
    array = _ARRAY_RE.match(type_name)
    if array:
        inner = array.group(1)
        return keccak(b"".join(_encode_value(inner, item, types) for item in value))
    if type_name in types:
        return hash_struct(type_name, types, value)
    if type_name == "string":
        return keccak(text=value)
    if type_name == "bytes":
        return keccak(_to_bytes(value))
    if type_name == "address":
        return encode(["address"], [_to_bytes(normalize_address(value))])
    if type_name.startswith("bytes"):
        return encode([type_name], [_to_bytes(value)])
    if type_name.startswith(("uint", "int")):
        return encode([type_name], [int(value, 0) if isinstance(value, str) else int(value)])
    if type_name == "bool":
        return encode(["bool"], [bool(value)])
    raise ValueError(f"Unsupported EIP-712 type: {type_name}")


def hash_struct(primary_type: str, types: Types, data: dict[str, Any]) -> bytes:
    encoded = type_hash(primary_type, types)
    for field in types[primary_type]:
        encoded += _encode_value(field["type"], data[field["name"]], types)
    return keccak(encoded)


def domain_separator(domain: dict[str, Any]) -> bytes:
    fields = [field for field in _DOMAIN_FIELDS if domain.get(field["name"]) is not None]
    return hash_struct("EIP712Domain", {"EIP712Domain": fields}, domain)


def hash_typed_data(domain: dict[str, Any], types: Types, primary_type: str, message: dict[str, Any]) -> str:
    """Return the EIP-712 digest as a 0x-prefixed hex string."""
    struct_types = {name: fields for name, fields in types.items() if name != "EIP712Domain"}
    digest = keccak(b"\x19\x01" + domain_separator(domain) + hash_struct(primary_type, struct_types, message))
    return "0x" + digest.hex()


def hash_intent(intent: TradingIntent, domain: IntentDomain) -> str:
    """Canonical intent identity; matches IntentChannel's on-chain hash."""
    return hash_typed_data(domain.to_eip712(), INTENT_TYPES, "TradingIntent", intent.to_message())


async def sign_intent(intent: TradingIntent, signer: Eip712Signer, domain: IntentDomain) -> str:
    return await signer.sign_typed_data(domain.to_eip712(), INTENT_TYPES, "TradingIntent", intent.to_message())


def hash_maker_quote(quote: MakerQuote, domain: IntentDomain) -> str:
    maker_domain = domain.with_defaults(MAKER_DOMAIN_NAME)
    return hash_typed_data(maker_domain.to_eip712(), QUOTE_TYPES, "MakerQuote", quote.to_message())


async def sign_maker_quote(quote: MakerQuote, signer: Eip712Signer, domain: IntentDomain) -> str:
    maker_domain = domain.with_defaults(MAKER_DOMAIN_NAME)
    return await signer.sign_typed_data(maker_domain.to_eip712(), QUOTE_TYPES, "MakerQuote", quote.to_message())


def hash_commitment_authorization(authorization: CommitmentAuthorization, domain: IntentDomain) -> str:
    return hash_typed_data(
        domain.to_eip712(),
        COMMITMENT_AUTH_TYPES,
        "CommitmentAuthorization",
        authorization.to_message(),
    )


async def sign_commitment_authorization(
    authorization: CommitmentAuthorization,
    signer: Eip712Signer,
    domain: IntentDomain,
) -> str:
    return await signer.sign_typed_data(
        domain.to_eip712(),
        COMMITMENT_AUTH_TYPES,
        "CommitmentAuthorization",
        authorization.to_message(),
    )


__all__ = [
    "COMMITMENT_AUTH_TYPES",
    "INTENT_TYPES",
    "QUOTE_TYPES",
    "Eip712Signer",
    "domain_separator",
    "encode_type",
    "hash_commitment_authorization",
    "hash_intent",
    "hash_maker_quote",
    "hash_struct",
    "hash_typed_data",
    "sign_commitment_authorization",
    "sign_intent",
    "sign_maker_quote",
    "type_hash",
]
