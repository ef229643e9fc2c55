"""Uniswap v4 fallback step construction.

The adapter contract derives the fallback payload on-chain through a view
call, so the result is deterministic for a given intent and has no side
effects. A failed call aborts routing: a same-chain plan without an
executable fallback is never produced.
"""

from __future__ import annotations

import structlog

from intent_router.chain.abi import UNISWAP_V4_ADAPTER_ABI
from intent_router.chain.client import ChainClient
from intent_router.errors import ConfigurationError, RoutingError, RoutingErrorKind
from intent_router.models.intent import TradingIntent
from intent_router.models.plan import AmmStep
from intent_router.models.types import checksum, hex_to_bytes

logger = structlog.get_logger()

BUILD_FALLBACK_FUNCTION = "buildFallbackData"


class UniswapV4FallbackAdapter:
    """Builds AmmStep values via the adapter's ``buildFallbackData`` view.

    Args:
        client: Chain client used for the read call
        adapter: Uniswap v4 adapter contract address
        pool_manager: Uniswap v4 PoolManager address recorded in the step
    """

    def __init__(self, client: ChainClient | None, adapter: str, pool_manager: str) -> None:
        if client is None:
            raise ConfigurationError("UniswapV4FallbackAdapter requires a chain client")
        self.client = client
        self.adapter = adapter
        self.pool_manager = pool_manager

    async def build_step(self, intent_hash: str, intent: TradingIntent) -> AmmStep:
        """Read the fallback payload for ``intent``.

        Raises:
            RoutingError: AMM_FALLBACK_UNAVAILABLE if the read call fails
        """
        args = [
            hex_to_bytes(intent_hash),
            checksum(intent.input_token),
            checksum(intent.output_token),
            intent.amount_in,
            intent.min_out,
            intent.deadline,
        ]
        try:
            fallback_data = await self.client.read_contract(
                self.adapter, UNISWAP_V4_ADAPTER_ABI, BUILD_FALLBACK_FUNCTION, args
            )
        except Exception as e:
            logger.warning(
                "amm_fallback_read_failed",
                adapter=self.adapter,
                intent_hash=intent_hash,
                error=str(e),
            )
            raise RoutingError(RoutingErrorKind.AMM_FALLBACK_UNAVAILABLE, str(e)) from e

        return AmmStep(pool_manager=self.pool_manager, adapter=self.adapter, fallback_data=fallback_data)


__all__ = ["BUILD_FALLBACK_FUNCTION", "UniswapV4FallbackAdapter"]
