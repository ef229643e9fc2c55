"""Error classes for intent routing.

Policy rejections are terminal for the routing attempt and are surfaced to
the caller as RoutingError with a named kind. Transient network failures
never reach this layer; adapters degrade them to "no data".
"""

from enum import Enum


class IntentRouterError(Exception):
    """Base error for intent routing operations."""

    pass


class ConfigurationError(IntentRouterError):
    """Required configuration (domain, chain client, addresses) is missing."""

    pass


class RoutingErrorKind(str, Enum):
    """Named policy rejections."""

    NO_BRIDGE_ROUTE = "NoBridgeRoute"
    INSUFFICIENT_VALUE_FOR_BRIDGE_FEES = "InsufficientValueForBridgeFees"
    AMM_FALLBACK_UNAVAILABLE = "AmmFallbackUnavailable"


class RoutingError(IntentRouterError):
    """A routing attempt was rejected.

    Attributes:
        kind: Which policy rejected the intent
        detail: Optional human-readable context
    """

    def __init__(self, kind: RoutingErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)
