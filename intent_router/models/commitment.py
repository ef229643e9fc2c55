"""Commitment records for private (commit-reveal) intents."""

from enum import Enum

from pydantic import BaseModel, Field

from intent_router.models.types import Address, Bytes32, Uint256


class CommitmentStatus(str, Enum):
    """Lifecycle of a private commitment, driven by on-chain events."""

    PENDING = "pending"
    REVEALED = "revealed"
    EXECUTED = "executed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = {CommitmentStatus.EXECUTED, CommitmentStatus.CANCELLED, CommitmentStatus.REFUNDED}

# Allowed forward moves; anything else is rejected.
_TRANSITIONS: dict[CommitmentStatus, set[CommitmentStatus]] = {
    CommitmentStatus.PENDING: {
        CommitmentStatus.REVEALED,
        CommitmentStatus.EXECUTED,
        CommitmentStatus.CANCELLED,
        CommitmentStatus.REFUNDED,
    },
    CommitmentStatus.REVEALED: {
        CommitmentStatus.EXECUTED,
        CommitmentStatus.CANCELLED,
        CommitmentStatus.REFUNDED,
    },
    CommitmentStatus.EXECUTED: set(),
    CommitmentStatus.CANCELLED: set(),
    CommitmentStatus.REFUNDED: set(),
}


class InvalidStatusTransition(ValueError):
    """Raised when a commitment would move backwards or leave a terminal state."""


class CommitmentRecord(BaseModel):
    """Local view of a commitment; the settlement contract owns the truth."""

    commitment: Bytes32
    intent_hash: Bytes32 = Field(alias="intentHash")
    plan_hash: Bytes32 = Field(alias="planHash")
    salt: Bytes32
    not_before: Uint256 = Field(alias="notBefore")
    status: CommitmentStatus = CommitmentStatus.PENDING

    model_config = {"populate_by_name": True, "frozen": True}

    def advance(self, status: CommitmentStatus) -> "CommitmentRecord":
        """Return a copy moved to ``status``.

        Re-applying the current status is a no-op so replayed events are harmless.
        """
        if status == self.status:
            return self
        if status not in _TRANSITIONS[self.status]:
            raise InvalidStatusTransition(f"Cannot move commitment from {self.status.value} to {status.value}")
        return self.model_copy(update={"status": status})


class CommitmentAuthorization(BaseModel):
    """Trader authorization for a private commitment, signed as EIP-712."""

    commitment: Bytes32
    trader: Address
    input_token: Address = Field(alias="inputToken")
    amount_in: Uint256 = Field(alias="amountIn")
    deadline: Uint256
    not_before: Uint256 = Field(alias="notBefore")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_message(self) -> dict[str, object]:
        return {
            "commitment": self.commitment,
            "trader": self.trader,
            "inputToken": self.input_token,
            "amountIn": self.amount_in,
            "deadline": self.deadline,
            "notBefore": self.not_before,
        }
