"""Test helpers module for shared test utilities.

- constants: Addresses, chain ids and a fixed clock
- factories: Intent, quote and log factory functions
- fakes: In-memory chain client, LI.FI client, aggregator and AMM adapter
"""

from tests.helpers.constants import (
    BASE,
    CHANNEL,
    COMMITTER,
    ETHEREUM,
    MAKER_A,
    MAKER_B,
    MAKER_C,
    MAKER_FILL,
    NOW,
    POOL_MANAGER,
    TRADER,
    UNISWAP_ADAPTER,
    USDC,
    WETH,
)
from tests.helpers.factories import (
    make_amm_step,
    make_domain,
    make_intent,
    make_lifi_quote_payload,
    make_log,
    make_quote,
)
from tests.helpers.fakes import FakeAggregator, FakeAmmAdapter, FakeChainClient, FakeLifi, RecordingMonitor

__all__ = [
    # Constants
    "BASE",
    "CHANNEL",
    "COMMITTER",
    "ETHEREUM",
    "MAKER_A",
    "MAKER_B",
    "MAKER_C",
    "MAKER_FILL",
    "NOW",
    "POOL_MANAGER",
    "TRADER",
    "UNISWAP_ADAPTER",
    "USDC",
    "WETH",
    # Factories
    "make_amm_step",
    "make_domain",
    "make_intent",
    "make_lifi_quote_payload",
    "make_log",
    "make_quote",
    # Fakes
    "FakeAggregator",
    "FakeAmmAdapter",
    "FakeChainClient",
    "FakeLifi",
    "RecordingMonitor",
]
