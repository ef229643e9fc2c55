"""Pydantic models for intents, plans and commitments."""

from intent_router.models.commitment import (
    CommitmentAuthorization,
    CommitmentRecord,
    CommitmentStatus,
    InvalidStatusTransition,
)
from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.models.plan import AmmStep, ExecutionPlan, LifiStep, MakerQuote, Quote, RfqStep
from intent_router.models.types import Address, Bytes32, HexBytes, Uint256

__all__ = [
    # Types
    "Address",
    "Bytes32",
    "HexBytes",
    "Uint256",
    # Intent
    "IntentDomain",
    "TradingIntent",
    # Plan
    "AmmStep",
    "ExecutionPlan",
    "LifiStep",
    "MakerQuote",
    "Quote",
    "RfqStep",
    # Commitments
    "CommitmentAuthorization",
    "CommitmentRecord",
    "CommitmentStatus",
    "InvalidStatusTransition",
]
