"""Pydantic models for quotes and execution plans.

Every plan has the same fixed shape: a primary RFQ step, an AMM fallback
step and a LI.FI bridge step. Paths that were not computed carry a
canonical all-zero sentinel so the plan always hashes the same way.
"""

from pydantic import BaseModel, Field

from intent_router.models.types import (
    EMPTY_BYTES,
    ZERO_ADDRESS,
    ZERO_BYTES32,
    Address,
    Bytes32,
    HexBytes,
    Uint256,
    checksum,
    hex_to_bytes,
)


class Quote(BaseModel):
    """A firm maker quote for one intent. Never persisted."""

    maker: Address
    maker_fill: Address = Field(alias="makerFill")
    amount_out: Uint256 = Field(alias="amountOut")
    expiry: Uint256 = Field(description="Unix seconds")
    maker_sig: HexBytes = Field(alias="makerSig")

    model_config = {"populate_by_name": True, "frozen": True}


class RfqStep(BaseModel):
    """Direct maker fill step."""

    maker_fill: Address = Field(alias="makerFill")
    maker: Address
    amount_out: Uint256 = Field(alias="amountOut")
    expiry: Uint256
    maker_sig: HexBytes = Field(alias="makerSig")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def sentinel(cls) -> "RfqStep":
        return cls(
            maker_fill=ZERO_ADDRESS,
            maker=ZERO_ADDRESS,
            amount_out=0,
            expiry=0,
            maker_sig=ZERO_BYTES32,
        )

    @classmethod
    def from_quote(cls, quote: Quote) -> "RfqStep":
        return cls(
            maker_fill=quote.maker_fill,
            maker=quote.maker,
            amount_out=quote.amount_out,
            expiry=quote.expiry,
            maker_sig=quote.maker_sig,
        )

    def as_abi_tuple(self) -> tuple:
        return (
            checksum(self.maker_fill),
            checksum(self.maker),
            self.amount_out,
            self.expiry,
            hex_to_bytes(self.maker_sig),
        )


class AmmStep(BaseModel):
    """On-chain AMM fallback step (Uniswap v4 adapter)."""

    pool_manager: Address = Field(alias="poolManager")
    adapter: Address
    fallback_data: HexBytes = Field(alias="fallbackData")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def sentinel(cls) -> "AmmStep":
        return cls(pool_manager=ZERO_ADDRESS, adapter=ZERO_ADDRESS, fallback_data=EMPTY_BYTES)

    def as_abi_tuple(self) -> tuple:
        return (checksum(self.pool_manager), checksum(self.adapter), hex_to_bytes(self.fallback_data))


class LifiStep(BaseModel):
    """Cross-chain bridge step built from a LI.FI quote."""

    lifi_diamond: Address = Field(alias="lifiDiamond")
    approval_address: Address = Field(alias="approvalAddress")
    call_data: HexBytes = Field(alias="callData")
    value: Uint256
    min_amount_out: Uint256 = Field(alias="minAmountOut")
    to_chain_id: Uint256 = Field(alias="toChainId")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def sentinel(cls) -> "LifiStep":
        return cls(
            lifi_diamond=ZERO_ADDRESS,
            approval_address=ZERO_ADDRESS,
            call_data=EMPTY_BYTES,
            value=0,
            min_amount_out=0,
            to_chain_id=0,
        )

    def as_abi_tuple(self) -> tuple:
        return (
            checksum(self.lifi_diamond),
            checksum(self.approval_address),
            hex_to_bytes(self.call_data),
            self.value,
            self.min_amount_out,
            self.to_chain_id,
        )


class ExecutionPlan(BaseModel):
    """Ranked settlement alternatives submitted alongside an intent."""

    intent_hash: Bytes32 = Field(alias="intentHash")
    primary: RfqStep
    amm: AmmStep
    lifi: LifiStep
    deadline: Uint256

    model_config = {"populate_by_name": True, "frozen": True}

    def as_abi_tuple(self) -> tuple:
        return (
            hex_to_bytes(self.intent_hash),
            self.primary.as_abi_tuple(),
            self.amm.as_abi_tuple(),
            self.lifi.as_abi_tuple(),
            self.deadline,
        )


class MakerQuote(BaseModel):
    """Typed-data payload a maker signs to back a quote."""

    intent_hash: Bytes32 = Field(alias="intentHash")
    input_token: Address = Field(alias="inputToken")
    output_token: Address = Field(alias="outputToken")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    expiry: Uint256

    model_config = {"populate_by_name": True, "frozen": True}

    def to_message(self) -> dict[str, object]:
        return {
            "intentHash": self.intent_hash,
            "inputToken": self.input_token,
            "outputToken": self.output_token,
            "amountIn": self.amount_in,
            "amountOut": self.amount_out,
            "expiry": self.expiry,
        }
