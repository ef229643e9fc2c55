"""Commit-reveal privacy: commitments and reveal batching."""

from intent_router.privacy.batching import align_to_batch_window, calculate_not_before
from intent_router.privacy.commitment import (
    COMMITMENT_TYPE,
    COMMITMENT_TYPEHASH,
    generate_salt,
    hash_commitment,
    prepare_commitment,
)

__all__ = [
    "COMMITMENT_TYPE",
    "COMMITMENT_TYPEHASH",
    "align_to_batch_window",
    "calculate_not_before",
    "generate_salt",
    "hash_commitment",
    "prepare_commitment",
]
