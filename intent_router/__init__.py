"""Intent router: RFQ, AMM fallback and bridge settlement planning."""

__version__ = "0.1.0"

from intent_router.errors import ConfigurationError, IntentRouterError, RoutingError, RoutingErrorKind  # noqa: E402
from intent_router.routing import RoutedPlan, SettlementRouter, build_plan  # noqa: E402

__all__ = [
    "ConfigurationError",
    "IntentRouterError",
    "RoutedPlan",
    "RoutingError",
    "RoutingErrorKind",
    "SettlementRouter",
    "__version__",
    "build_plan",
]
