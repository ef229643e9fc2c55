"""Protocol constants for intent routing.

Centralizes well-known addresses, endpoints and policy parameters.
"""

from intent_router.models.types import ZERO_ADDRESS, is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return an address, failing at import time on typos."""
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# LI.FI uses 0xeee...e for the native asset; some routes report the zero address instead
LIFI_NATIVE_TOKEN = _validate_address("LIFI_NATIVE_TOKEN", "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee")
NATIVE_TOKEN_SENTINELS = frozenset({ZERO_ADDRESS, LIFI_NATIVE_TOKEN})

# A cross-chain intent is rejected when fees + gas exceed half of amountIn.
# Fixed policy, not a tunable.
BRIDGE_FEE_SAFETY_MULTIPLIER = 2

# Endpoints
LIFI_BASE_URL = "https://li.quest"
PYTH_HERMES_URL = "https://hermes.pyth.network"
PYTH_ETH_USD_PRICE_ID = "0xff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace"

# Bridge status polling interval (seconds)
DEFAULT_MONITOR_POLL_SECONDS = 15.0

# Number of (txHash, logIndex) keys the reconciler remembers
DEFAULT_DEDUP_CAPACITY = 10_000

# Bridge status values that stop polling
BRIDGE_STATUS_DONE = "DONE"
BRIDGE_FAILURE_STATUSES = frozenset({"FAILED", "INVALID"})
