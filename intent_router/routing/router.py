"""Settlement routing for trading intents.

One routing attempt walks a small state machine:

    START -> QUOTING -> FEE_CHECK (cross-chain only) -> PLAN_BUILT
                     \\-> REJECTED

Same-chain intents (source == destination chain):
- maker quotes and the Uniswap v4 fallback are fetched concurrently
- the LI.FI step is the zero sentinel
- a failed fallback read aborts the attempt

Cross-chain intents:
- no maker is asked for a quote
- a LI.FI quote must carry a transactionRequest, else NoBridgeRoute
- eligible fees + gas must not exceed half of amountIn,
  else InsufficientValueForBridgeFees
- the AMM step is the zero sentinel

Rejections are terminal; retries are the caller's decision.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from enum import Enum

import structlog

from intent_router.amm.uniswap_v4 import UniswapV4FallbackAdapter
from intent_router.bridge.lifi import LifiClient
from intent_router.errors import ConfigurationError, RoutingError, RoutingErrorKind
from intent_router.hashing.eip712 import hash_intent
from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.models.plan import AmmStep, Quote
from intent_router.result import Missing
from intent_router.rfq.aggregator import MakerEndpoint, QuoteAggregator
from intent_router.routing.fees import bridge_fees_viable
from intent_router.routing.plan_builder import RoutedPlan, build_routed_plan

logger = structlog.get_logger()


class RoutingStage(str, Enum):
    START = "start"
    QUOTING = "quoting"
    FEE_CHECK = "fee_check"
    PLAN_BUILT = "plan_built"
    REJECTED = "rejected"


class SettlementRouter:
    """Routes intents into execution plans.

    Args:
        aggregator: RFQ quote aggregator (same-chain path)
        lifi: LI.FI client (cross-chain path)
        amm_adapter: Uniswap v4 fallback adapter (same-chain path)
    """

    def __init__(
        self,
        aggregator: QuoteAggregator,
        lifi: LifiClient,
        amm_adapter: UniswapV4FallbackAdapter,
    ) -> None:
        self.aggregator = aggregator
        self.lifi = lifi
        self.amm_adapter = amm_adapter

    async def route_intent(
        self,
        intent: TradingIntent,
        domain: IntentDomain | None,
        makers: Sequence[MakerEndpoint] = (),
    ) -> RoutedPlan:
        """Build the execution plan for ``intent``.

        Raises:
            ConfigurationError: If no signing domain is given
            RoutingError: If a routing policy rejects the intent
        """
        if domain is None:
            raise ConfigurationError("route_intent requires an IntentDomain")

        log = logger.bind(
            trader=intent.trader,
            source_chain_id=intent.source_chain_id,
            dest_chain_id=intent.dest_chain_id,
            amount_in=intent.amount_in,
        )
        log.debug("routing_stage", stage=RoutingStage.START.value, cross_chain=intent.is_cross_chain)

        try:
            if intent.is_cross_chain:
                routed = await self._route_cross_chain(intent, domain, log)
            else:
                routed = await self._route_same_chain(intent, domain, makers, log)
        except RoutingError as e:
            log.warning("routing_stage", stage=RoutingStage.REJECTED.value, kind=e.kind.value, detail=e.detail)
            raise

        log.info(
            "routing_stage",
            stage=RoutingStage.PLAN_BUILT.value,
            intent_hash=routed.intent_hash,
            plan_hash=routed.plan_hash,
            has_rfq=routed.plan.primary.amount_out > 0,
        )
        return routed

    async def _route_same_chain(
        self,
        intent: TradingIntent,
        domain: IntentDomain,
        makers: Sequence[MakerEndpoint],
        log: structlog.typing.FilteringBoundLogger,
    ) -> RoutedPlan:
        log.debug("routing_stage", stage=RoutingStage.QUOTING.value, makers=len(makers))
        intent_hash = hash_intent(intent, domain)

        # Both branches always run to completion before either result is used
        quote_result, amm_result = await asyncio.gather(
            self.aggregator.best_quote(intent, makers),
            self.amm_adapter.build_step(intent_hash, intent),
            return_exceptions=True,
        )

        if isinstance(amm_result, BaseException):
            if isinstance(amm_result, RoutingError):
                raise amm_result
            raise RoutingError(RoutingErrorKind.AMM_FALLBACK_UNAVAILABLE, str(amm_result)) from amm_result

        best: Quote | None = None
        if isinstance(quote_result, BaseException):
            log.warning("rfq_failed", error=repr(quote_result))
        else:
            best = quote_result

        amm: AmmStep = amm_result
        return build_routed_plan(intent, domain, rfq_quote=best, amm=amm)

    async def _route_cross_chain(
        self,
        intent: TradingIntent,
        domain: IntentDomain,
        log: structlog.typing.FilteringBoundLogger,
    ) -> RoutedPlan:
        log.debug("routing_stage", stage=RoutingStage.QUOTING.value, bridge="lifi")
        route = await self.lifi.get_route(intent)
        if isinstance(route, Missing):
            raise RoutingError(RoutingErrorKind.NO_BRIDGE_ROUTE, route.detail or route.reason)

        bridge = route.value
        log.debug(
            "routing_stage",
            stage=RoutingStage.FEE_CHECK.value,
            fee_total=bridge.fee_total,
            gas_total=bridge.gas_total,
        )
        if not bridge_fees_viable(bridge.total_cost, intent.amount_in):
            raise RoutingError(
                RoutingErrorKind.INSUFFICIENT_VALUE_FOR_BRIDGE_FEES,
                f"bridge cost {bridge.total_cost} too high for amountIn {intent.amount_in}",
            )

        return build_routed_plan(intent, domain, lifi=bridge.step)


__all__ = ["RoutingStage", "SettlementRouter"]
