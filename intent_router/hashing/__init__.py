"""Canonical hashing for intents, plans and commitments."""

from intent_router.hashing.eip712 import (
    Eip712Signer,
    hash_commitment_authorization,
    hash_intent,
    hash_maker_quote,
    hash_typed_data,
    sign_commitment_authorization,
    sign_intent,
    sign_maker_quote,
)
from intent_router.hashing.plan import encode_execution_plan, hash_execution_plan

__all__ = [
    "Eip712Signer",
    "encode_execution_plan",
    "hash_commitment_authorization",
    "hash_execution_plan",
    "hash_intent",
    "hash_maker_quote",
    "hash_typed_data",
    "sign_commitment_authorization",
    "sign_intent",
    "sign_maker_quote",
]
