"""LI.FI bridge quotes and settlement monitoring."""

from intent_router.bridge.lifi import BridgeRoute, LifiClient, LifiQuote, LifiStatus, sum_eligible_costs
from intent_router.bridge.monitor import BridgeOutcome, BridgeStatusMonitor, MonitorHandle

__all__ = [
    "BridgeOutcome",
    "BridgeRoute",
    "BridgeStatusMonitor",
    "LifiClient",
    "LifiQuote",
    "LifiStatus",
    "MonitorHandle",
    "sum_eligible_costs",
]
