"""Commit-reveal commitments for private intents.

A commitment hides (intentHash, planHash, notBefore, salt) until reveal:

    commitment = keccak256(abi.encode(
        COMMITMENT_TYPEHASH, intentHash, planHash, notBefore, salt))

The contract recomputes the same digest on reveal, so the encoding must
match byte for byte.
"""

import secrets

import structlog
from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from intent_router.models.commitment import CommitmentRecord
from intent_router.models.types import hex_to_bytes, validate_hex_bytes
from intent_router.privacy.batching import calculate_not_before

logger = structlog.get_logger()

COMMITMENT_TYPE = "Commitment(bytes32 intentHash,bytes32 planHash,uint256 notBefore,bytes32 salt)"
COMMITMENT_TYPEHASH = keccak(text=COMMITMENT_TYPE)

SALT_BYTES = 32


def generate_salt() -> str:
    """Fresh 32-byte salt from the OS CSPRNG, as 0x-prefixed hex."""
    return "0x" + secrets.token_bytes(SALT_BYTES).hex()


def _bytes32(name: str, value: str | bytes) -> bytes:
    raw = hex_to_bytes(validate_hex_bytes(value))
    if len(raw) != 32:
        raise ValueError(f"{name} must be 32 bytes, got {len(raw)}")
    return raw


def hash_commitment(intent_hash: str | bytes, plan_hash: str | bytes, not_before: int, salt: str | bytes) -> str:
    """Return the commitment digest as a 0x-prefixed hex string."""
    encoded = encode(
        ["bytes32", "bytes32", "bytes32", "uint256", "bytes32"],
        [
            COMMITMENT_TYPEHASH,
            _bytes32("intent_hash", intent_hash),
            _bytes32("plan_hash", plan_hash),
            int(not_before),
            _bytes32("salt", salt),
        ],
    )
    return "0x" + keccak(encoded).hex()


def prepare_commitment(
    intent_hash: str,
    plan_hash: str,
    min_delay: int,
    batch_window: int,
    desired_time: int | None = None,
    now: int | None = None,
    salt: str | None = None,
) -> CommitmentRecord:
    """Compute notBefore, salt and commitment for a routed plan.

    Args:
        intent_hash: EIP-712 intent hash
        plan_hash: Execution plan hash
        min_delay: Minimum seconds before reveal
        batch_window: Batch window length in seconds (0 disables batching)
        desired_time: Optional requested reveal time
        now: Current unix time; defaults to the wall clock
        salt: Optional caller-supplied salt; a fresh one is generated otherwise

    Returns:
        A pending CommitmentRecord
    """
    not_before = calculate_not_before(min_delay, batch_window, desired_time=desired_time, now=now)
    salt = salt if salt is not None else generate_salt()
    commitment = hash_commitment(intent_hash, plan_hash, not_before, salt)

    logger.debug("commitment_prepared", commitment=commitment, intent_hash=intent_hash, not_before=not_before)
    return CommitmentRecord(
        commitment=commitment,
        intent_hash=intent_hash,
        plan_hash=plan_hash,
        salt=salt,
        not_before=not_before,
    )


__all__ = [
    "COMMITMENT_TYPE",
    "COMMITMENT_TYPEHASH",
    "generate_salt",
    "hash_commitment",
    "prepare_commitment",
]
