"""LI.FI quote and status client.

Only the fields the router consumes are modelled; everything else in the
LI.FI payload is ignored. Network errors, non-2xx responses and malformed
bodies all come back as ``Missing`` rather than raising.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError

from intent_router.config import LifiConfig
from intent_router.constants import NATIVE_TOKEN_SENTINELS
from intent_router.models.intent import TradingIntent
from intent_router.models.plan import LifiStep
from intent_router.models.types import ZERO_ADDRESS, Address, HexBytes, Uint256, normalize_address
from intent_router.result import Found, Missing

logger = structlog.get_logger()


class LifiToken(BaseModel):
    address: str | None = None
    chain_id: int | None = Field(default=None, alias="chainId")

    model_config = {"populate_by_name": True}


class LifiCost(BaseModel):
    """One fee or gas line item of a LI.FI estimate."""

    amount: Uint256 | None = None
    token: LifiToken | None = None


class LifiEstimate(BaseModel):
    to_amount_min: Uint256 | None = Field(default=None, alias="toAmountMin")
    approval_address: Address | None = Field(default=None, alias="approvalAddress")
    fee_costs: list[LifiCost] = Field(default_factory=list, alias="feeCosts")
    gas_costs: list[LifiCost] = Field(default_factory=list, alias="gasCosts")

    model_config = {"populate_by_name": True}


class LifiTransactionRequest(BaseModel):
    """Executable payload; without it there is no bridge route."""

    to: Address
    data: HexBytes
    value: Uint256 = 0


class LifiQuote(BaseModel):
    transaction_request: LifiTransactionRequest | None = Field(default=None, alias="transactionRequest")
    estimate: LifiEstimate | None = None

    model_config = {"populate_by_name": True}


class LifiReceiving(BaseModel):
    chain_id: int | None = Field(default=None, alias="chainId")
    tx_hash: str | None = Field(default=None, alias="txHash")

    model_config = {"populate_by_name": True}


class LifiStatus(BaseModel):
    """Subset of the /v1/status response."""

    status: str | None = None
    substatus: str | None = None
    substatus_message: str | None = Field(default=None, alias="substatusMessage")
    receiving: LifiReceiving | None = None

    model_config = {"populate_by_name": True}

    @property
    def normalized_status(self) -> str:
        return (self.status or "").upper()


@dataclass(frozen=True)
class BridgeRoute:
    """A usable cross-chain route, normalized for the plan and fee gate.

    Attributes:
        step: The LifiStep to place in the plan
        fee_total: Sum of eligible fee costs (input token, source chain)
        gas_total: Sum of eligible gas costs (input token, source chain)
    """

    step: LifiStep
    fee_total: int
    gas_total: int

    @property
    def total_cost(self) -> int:
        return self.fee_total + self.gas_total


def is_native_token(address: str) -> bool:
    return normalize_address(address) in NATIVE_TOKEN_SENTINELS


def matches_input_token(token: str, input_token: str) -> bool:
    """Case-insensitive match; native sentinels match a native input token."""
    token_norm = normalize_address(token)
    input_norm = normalize_address(input_token)
    if token_norm == input_norm:
        return True
    return is_native_token(token_norm) and is_native_token(input_norm)


def sum_eligible_costs(costs: Sequence[LifiCost], intent: TradingIntent) -> int:
    """Sum the cost items denominated in the intent's input token on its source chain.

    Items with no amount, no token address, or a token on another chain are
    skipped. A missing chain id is treated as the source chain.
    """
    total = 0
    for cost in costs:
        amount = cost.amount or 0
        if amount == 0:
            continue
        token = cost.token
        if token is None or not token.address:
            continue
        if token.chain_id and token.chain_id != intent.source_chain_id:
            continue
        if matches_input_token(token.address, intent.input_token):
            total += amount
    return total


def build_lifi_step(request: LifiTransactionRequest, estimate: LifiEstimate | None, intent: TradingIntent) -> LifiStep:
    return LifiStep(
        lifi_diamond=request.to,
        approval_address=(estimate.approval_address if estimate else None) or ZERO_ADDRESS,
        call_data=request.data,
        value=request.value,
        min_amount_out=(estimate.to_amount_min if estimate else None) or 0,
        to_chain_id=intent.dest_chain_id,
    )


def route_from_quote(quote: LifiQuote, intent: TradingIntent) -> Found[BridgeRoute] | Missing:
    """Normalize a LI.FI quote; a quote without transactionRequest is no route."""
    if quote.transaction_request is None:
        return Missing("no_payload", "quote has no transactionRequest")

    estimate = quote.estimate
    fee_total = sum_eligible_costs(estimate.fee_costs, intent) if estimate else 0
    gas_total = sum_eligible_costs(estimate.gas_costs, intent) if estimate else 0
    return Found(
        BridgeRoute(
            step=build_lifi_step(quote.transaction_request, estimate, intent),
            fee_total=fee_total,
            gas_total=gas_total,
        )
    )


class LifiClient:
    """Async client for the LI.FI quote and status endpoints.

    Args:
        client: Shared async HTTP client
        config: Base URL, API key and timeout
    """

    def __init__(self, client: httpx.AsyncClient, config: LifiConfig | None = None) -> None:
        self.client = client
        self.config = config or LifiConfig()

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}{path}"

    async def _get_json(self, path: str, params: dict[str, str]) -> Found[object] | Missing:
        url = self._url(path)
        try:
            response = await self.client.get(
                url,
                params=params,
                headers=self.config.headers(),
                timeout=self.config.timeout_seconds,
            )
        except httpx.HTTPError as e:
            logger.warning("lifi_request_error", url=url, error=str(e))
            return Missing("request_error", str(e))

        if not response.is_success:
            logger.warning("lifi_http_status", url=url, status=response.status_code)
            return Missing("http_status", str(response.status_code))

        try:
            return Found(response.json())
        except ValueError as e:
            logger.warning("lifi_invalid_json", url=url, error=str(e))
            return Missing("invalid_json", str(e))

    async def get_quote(self, intent: TradingIntent) -> Found[LifiQuote] | Missing:
        params = {
            "fromChain": str(intent.source_chain_id),
            "toChain": str(intent.dest_chain_id),
            "fromToken": intent.input_token,
            "toToken": intent.output_token,
            "fromAmount": str(intent.amount_in),
            "fromAddress": intent.trader,
            "toAddress": intent.trader,
        }
        logger.debug(
            "lifi_quote_request",
            from_chain=intent.source_chain_id,
            to_chain=intent.dest_chain_id,
            from_token=intent.input_token,
            amount_in=intent.amount_in,
        )
        payload = await self._get_json("/v1/quote", params)
        if isinstance(payload, Missing):
            return payload
        try:
            return Found(LifiQuote.model_validate(payload.value))
        except ValidationError as e:
            logger.warning("lifi_quote_malformed", error=str(e))
            return Missing("malformed", str(e))

    async def get_route(self, intent: TradingIntent) -> Found[BridgeRoute] | Missing:
        quote = await self.get_quote(intent)
        if isinstance(quote, Missing):
            return quote
        return route_from_quote(quote.value, intent)

    async def get_status(self, tx_hash: str, from_chain_id: int) -> Found[LifiStatus] | Missing:
        payload = await self._get_json("/v1/status", {"txHash": tx_hash, "fromChain": str(from_chain_id)})
        if isinstance(payload, Missing):
            return payload
        try:
            return Found(LifiStatus.model_validate(payload.value))
        except ValidationError as e:
            logger.warning("lifi_status_malformed", tx_hash=tx_hash, error=str(e))
            return Missing("malformed", str(e))


__all__ = [
    "BridgeRoute",
    "LifiClient",
    "LifiCost",
    "LifiEstimate",
    "LifiQuote",
    "LifiStatus",
    "LifiToken",
    "LifiTransactionRequest",
    "build_lifi_step",
    "matches_input_token",
    "route_from_quote",
    "sum_eligible_costs",
]
