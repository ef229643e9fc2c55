"""Tests for same-chain vs cross-chain routing and the bridge fee gate."""

import pytest

from intent_router.bridge.lifi import BridgeRoute
from intent_router.errors import ConfigurationError, RoutingError, RoutingErrorKind
from intent_router.hashing.eip712 import hash_intent
from intent_router.hashing.plan import hash_execution_plan
from intent_router.models.plan import AmmStep, LifiStep, RfqStep
from intent_router.result import Found, Missing
from intent_router.routing.fees import bridge_fees_viable
from intent_router.routing.router import SettlementRouter
from tests.helpers import (
    BASE,
    MAKER_A,
    FakeAggregator,
    FakeAmmAdapter,
    FakeLifi,
    make_amm_step,
    make_quote,
)
from tests.helpers.constants import LIFI_DIAMOND


def bridge_route(fee: int, gas: int) -> Found[BridgeRoute]:
    step = LifiStep(
        lifi_diamond=LIFI_DIAMOND,
        approval_address=LIFI_DIAMOND,
        call_data="0xabcdef",
        value=0,
        min_amount_out=900,
        to_chain_id=BASE,
    )
    return Found(BridgeRoute(step=step, fee_total=fee, gas_total=gas))


def make_router(aggregator=None, lifi=None, amm=None) -> SettlementRouter:
    return SettlementRouter(
        aggregator=aggregator or FakeAggregator(),
        lifi=lifi or FakeLifi(),
        amm_adapter=amm or FakeAmmAdapter(),
    )  # type: ignore[arg-type]


class TestFeeGate:
    @pytest.mark.parametrize(
        "total,amount_in,viable",
        [
            (0, 1000, True),
            (400, 1000, True),
            (500, 1000, True),
            (501, 1000, False),
            (600, 1000, False),
            (1, 1, False),
        ],
    )
    def test_bridge_fees_viable(self, total, amount_in, viable):
        assert bridge_fees_viable(total, amount_in) is viable


class TestSameChain:
    @pytest.mark.asyncio
    async def test_rfq_and_amm_in_plan(self, domain, same_chain_intent):
        quote = make_quote(MAKER_A, 150)
        aggregator = FakeAggregator(quote=quote)
        amm = FakeAmmAdapter(step=make_amm_step("0xfeed"))
        lifi = FakeLifi()

        routed = await make_router(aggregator, lifi, amm).route_intent(same_chain_intent, domain)

        assert routed.plan.primary == RfqStep.from_quote(quote)
        assert routed.plan.amm.fallback_data == "0xfeed"
        assert routed.plan.lifi == LifiStep.sentinel()
        assert routed.plan.deadline == same_chain_intent.deadline
        assert routed.intent_hash == hash_intent(same_chain_intent, domain)
        assert routed.plan_hash == hash_execution_plan(routed.plan)

    @pytest.mark.asyncio
    async def test_never_requests_bridge_quote(self, domain, same_chain_intent):
        lifi = FakeLifi()
        await make_router(lifi=lifi).route_intent(same_chain_intent, domain)
        assert lifi.route_calls == []

    @pytest.mark.asyncio
    async def test_amm_receives_intent_hash(self, domain, same_chain_intent):
        amm = FakeAmmAdapter()
        await make_router(amm=amm).route_intent(same_chain_intent, domain)
        assert amm.calls == [hash_intent(same_chain_intent, domain)]

    @pytest.mark.asyncio
    async def test_no_quote_uses_rfq_sentinel(self, domain, same_chain_intent):
        routed = await make_router(FakeAggregator(quote=None)).route_intent(same_chain_intent, domain)
        assert routed.plan.primary == RfqStep.sentinel()
        assert routed.plan.amm != AmmStep.sentinel()

    @pytest.mark.asyncio
    async def test_rfq_crash_degrades_to_sentinel(self, domain, same_chain_intent):
        routed = await make_router(FakeAggregator(error=RuntimeError("boom"))).route_intent(same_chain_intent, domain)
        assert routed.plan.primary == RfqStep.sentinel()

    @pytest.mark.asyncio
    async def test_amm_failure_aborts_routing(self, domain, same_chain_intent):
        aggregator = FakeAggregator(quote=make_quote(MAKER_A, 150))
        amm = FakeAmmAdapter(error=RoutingError(RoutingErrorKind.AMM_FALLBACK_UNAVAILABLE, "revert"))

        with pytest.raises(RoutingError) as exc_info:
            await make_router(aggregator, amm=amm).route_intent(same_chain_intent, domain)

        assert exc_info.value.kind == RoutingErrorKind.AMM_FALLBACK_UNAVAILABLE
        assert len(aggregator.calls) == 1

    @pytest.mark.asyncio
    async def test_unexpected_amm_error_is_wrapped(self, domain, same_chain_intent):
        amm = FakeAmmAdapter(error=ConnectionError("rpc down"))
        with pytest.raises(RoutingError) as exc_info:
            await make_router(amm=amm).route_intent(same_chain_intent, domain)
        assert exc_info.value.kind == RoutingErrorKind.AMM_FALLBACK_UNAVAILABLE


class TestCrossChain:
    @pytest.mark.asyncio
    async def test_fee_gate_rejects_expensive_route(self, domain, cross_chain_intent):
        """amountIn=1000, cost 600: 2 * 600 > 1000."""
        lifi = FakeLifi(route=bridge_route(fee=400, gas=200))

        with pytest.raises(RoutingError) as exc_info:
            await make_router(lifi=lifi).route_intent(cross_chain_intent, domain)

        assert exc_info.value.kind == RoutingErrorKind.INSUFFICIENT_VALUE_FOR_BRIDGE_FEES

    @pytest.mark.asyncio
    async def test_fee_gate_accepts_affordable_route(self, domain, cross_chain_intent):
        """amountIn=1000, cost 400: 2 * 400 <= 1000."""
        lifi = FakeLifi(route=bridge_route(fee=300, gas=100))

        routed = await make_router(lifi=lifi).route_intent(cross_chain_intent, domain)

        assert routed.plan.lifi.lifi_diamond == LIFI_DIAMOND
        assert routed.plan.lifi.to_chain_id == BASE
        assert routed.plan.primary == RfqStep.sentinel()
        assert routed.plan.amm == AmmStep.sentinel()

    @pytest.mark.asyncio
    async def test_never_requests_rfq_or_amm(self, domain, cross_chain_intent):
        aggregator = FakeAggregator(quote=make_quote(MAKER_A, 10**6))
        amm = FakeAmmAdapter()
        lifi = FakeLifi(route=bridge_route(fee=0, gas=0))

        await make_router(aggregator, lifi, amm).route_intent(cross_chain_intent, domain)

        assert aggregator.calls == []
        assert amm.calls == []
        assert lifi.route_calls == [cross_chain_intent]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", [Missing("no_payload"), Missing("http_status", "500")])
    async def test_no_route_rejected(self, domain, cross_chain_intent, missing):
        with pytest.raises(RoutingError) as exc_info:
            await make_router(lifi=FakeLifi(route=missing)).route_intent(cross_chain_intent, domain)
        assert exc_info.value.kind == RoutingErrorKind.NO_BRIDGE_ROUTE


class TestConfiguration:
    @pytest.mark.asyncio
    async def test_missing_domain_fails_fast(self, same_chain_intent):
        with pytest.raises(ConfigurationError):
            await make_router().route_intent(same_chain_intent, None)

    @pytest.mark.asyncio
    async def test_routing_is_deterministic(self, domain, same_chain_intent):
        router = make_router(FakeAggregator(quote=make_quote(MAKER_A, 150)))
        first = await router.route_intent(same_chain_intent, domain)
        second = await router.route_intent(same_chain_intent, domain)
        assert first.plan_hash == second.plan_hash
