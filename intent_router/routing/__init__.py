"""Intent routing and plan construction."""

from intent_router.routing.fees import bridge_fees_viable
from intent_router.routing.plan_builder import RoutedPlan, build_plan, build_routed_plan
from intent_router.routing.router import RoutingStage, SettlementRouter

__all__ = [
    "RoutedPlan",
    "RoutingStage",
    "SettlementRouter",
    "bridge_fees_viable",
    "build_plan",
    "build_routed_plan",
]
