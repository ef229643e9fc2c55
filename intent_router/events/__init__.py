"""IntentChannel event reconciliation."""

from intent_router.events.reconciler import (
    EVENT_STATUS,
    ExecutionEvent,
    RecentKeys,
    SettlementEvent,
    SettlementEventReconciler,
    apply_event,
    status_for_event,
)

__all__ = [
    "EVENT_STATUS",
    "ExecutionEvent",
    "RecentKeys",
    "SettlementEvent",
    "SettlementEventReconciler",
    "apply_event",
    "status_for_event",
]
