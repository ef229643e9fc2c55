"""Pydantic models for trading intents and their signing domain."""

from pydantic import BaseModel, Field

from intent_router.models.types import Address, Uint256, checksum

DEFAULT_DOMAIN_NAME = "IntentChannel"
DEFAULT_DOMAIN_VERSION = "1"


class TradingIntent(BaseModel):
    """A trader's request to swap input_token for output_token.

    Immutable once signed; its identity is the EIP-712 hash under an
    IntentDomain (see intent_router.hashing.eip712.hash_intent).
    """

    trader: Address
    input_token: Address = Field(alias="inputToken")
    output_token: Address = Field(alias="outputToken")
    amount_in: Uint256 = Field(alias="amountIn")
    min_out: Uint256 = Field(alias="minOut")
    deadline: Uint256 = Field(description="Unix seconds")
    nonce: Uint256
    source_chain_id: Uint256 = Field(alias="sourceChainId")
    dest_chain_id: Uint256 = Field(alias="destChainId")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_cross_chain(self) -> bool:
        return self.source_chain_id != self.dest_chain_id

    def to_message(self) -> dict[str, object]:
        """Typed-data message keyed by the on-chain field names."""
        return {
            "trader": self.trader,
            "inputToken": self.input_token,
            "outputToken": self.output_token,
            "amountIn": self.amount_in,
            "minOut": self.min_out,
            "deadline": self.deadline,
            "nonce": self.nonce,
            "sourceChainId": self.source_chain_id,
            "destChainId": self.dest_chain_id,
        }

    def to_wire(self) -> dict[str, object]:
        """JSON body for external services; integers are sent as decimal strings."""
        return {k: str(v) if isinstance(v, int) else v for k, v in self.to_message().items()}

    def as_abi_tuple(self) -> tuple:
        return (
            checksum(self.trader),
            checksum(self.input_token),
            checksum(self.output_token),
            self.amount_in,
            self.min_out,
            self.deadline,
            self.nonce,
            self.source_chain_id,
            self.dest_chain_id,
        )


class IntentDomain(BaseModel):
    """EIP-712 signing domain for one IntentChannel deployment."""

    chain_id: Uint256 = Field(alias="chainId")
    verifying_contract: Address = Field(alias="verifyingContract")
    name: str = DEFAULT_DOMAIN_NAME
    version: str = DEFAULT_DOMAIN_VERSION

    model_config = {"populate_by_name": True, "frozen": True}

    def with_defaults(self, name: str) -> "IntentDomain":
        """Copy of this domain using another default name (e.g. MakerFill)."""
        if "name" in self.model_fields_set:
            return self
        return self.model_copy(update={"name": name})

    def to_eip712(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }
