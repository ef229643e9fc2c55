"""Pytest configuration and fixtures."""

import pytest

from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.routing.router import SettlementRouter
from tests.helpers import (
    BASE,
    FakeAggregator,
    FakeAmmAdapter,
    FakeChainClient,
    FakeLifi,
    make_domain,
    make_intent,
)


@pytest.fixture
def domain() -> IntentDomain:
    """Signing domain for the test IntentChannel on Ethereum."""
    return make_domain()


@pytest.fixture
def same_chain_intent() -> TradingIntent:
    return make_intent()


@pytest.fixture
def cross_chain_intent() -> TradingIntent:
    """Ethereum -> Base intent for 1000 units of WETH."""
    return make_intent(amount_in=1000, min_out=900, dest_chain_id=BASE)


@pytest.fixture
def fake_chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def fake_aggregator() -> FakeAggregator:
    return FakeAggregator()


@pytest.fixture
def fake_amm() -> FakeAmmAdapter:
    return FakeAmmAdapter()


@pytest.fixture
def fake_lifi() -> FakeLifi:
    return FakeLifi()


@pytest.fixture
def settlement_router(fake_aggregator: FakeAggregator, fake_lifi: FakeLifi, fake_amm: FakeAmmAdapter) -> SettlementRouter:
    """A router wired to in-memory collaborators."""
    return SettlementRouter(aggregator=fake_aggregator, lifi=fake_lifi, amm_adapter=fake_amm)  # type: ignore[arg-type]
