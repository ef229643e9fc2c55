"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_intent, make_domain

    intent = make_intent(amount_in=1000, dest_chain_id=BASE)
"""

from typing import Any

from intent_router.chain.client import EventLog
from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.models.plan import AmmStep, Quote
from tests.helpers.constants import (
    CHANNEL,
    ETHEREUM,
    LIFI_APPROVAL,
    LIFI_DIAMOND,
    MAKER_FILL,
    NOW,
    POOL_MANAGER,
    TRADER,
    UNISWAP_ADAPTER,
    USDC,
    WETH,
)


def make_intent(
    trader: str = TRADER,
    input_token: str = WETH,
    output_token: str = USDC,
    amount_in: int = 10**18,
    min_out: int = 100,
    deadline: int = NOW + 3600,
    nonce: int = 1,
    source_chain_id: int = ETHEREUM,
    dest_chain_id: int = ETHEREUM,
) -> TradingIntent:
    """Create a trading intent with sensible defaults (same-chain WETH -> USDC)."""
    return TradingIntent(
        trader=trader,
        input_token=input_token,
        output_token=output_token,
        amount_in=amount_in,
        min_out=min_out,
        deadline=deadline,
        nonce=nonce,
        source_chain_id=source_chain_id,
        dest_chain_id=dest_chain_id,
    )


def make_domain(chain_id: int = ETHEREUM, verifying_contract: str = CHANNEL) -> IntentDomain:
    return IntentDomain(chain_id=chain_id, verifying_contract=verifying_contract)


def make_quote(maker: str, amount_out: int, expiry: int = NOW + 60, maker_sig: str = "0x1234") -> Quote:
    return Quote(
        maker=maker,
        maker_fill=MAKER_FILL,
        amount_out=amount_out,
        expiry=expiry,
        maker_sig=maker_sig,
    )


def make_amm_step(fallback_data: str = "0xdeadbeef") -> AmmStep:
    return AmmStep(pool_manager=POOL_MANAGER, adapter=UNISWAP_ADAPTER, fallback_data=fallback_data)


def make_lifi_quote_payload(
    fee: int = 0,
    gas: int = 0,
    token: str = WETH,
    chain_id: int = ETHEREUM,
    with_transaction: bool = True,
    to_amount_min: int = 990,
) -> dict[str, Any]:
    """Build a /v1/quote response body with one fee and one gas line item."""
    payload: dict[str, Any] = {
        "estimate": {
            "toAmountMin": str(to_amount_min),
            "approvalAddress": LIFI_APPROVAL,
            "feeCosts": [{"amount": str(fee), "token": {"address": token, "chainId": chain_id}}],
            "gasCosts": [{"amount": str(gas), "token": {"address": token, "chainId": chain_id}}],
        }
    }
    if with_transaction:
        payload["transactionRequest"] = {"to": LIFI_DIAMOND, "data": "0xabcdef", "value": "0x0"}
    return payload


def make_log(
    event_name: str,
    args: dict[str, Any] | None = None,
    tx_hash: str = "0x" + "ab" * 32,
    log_index: int = 0,
    block_number: int = 100,
) -> EventLog:
    return EventLog(
        event_name=event_name,
        args=args or {},
        block_number=block_number,
        transaction_hash=tx_hash,
        log_index=log_index,
    )
