"""Result types for optional external data.

External APIs (makers, LI.FI, Pyth) either return usable data or they do
not. Adapters return ``Found(value)`` or ``Missing(reason)`` so callers
branch once on the type instead of threading ``None`` checks through
business logic.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """External data was returned and parsed."""

    value: T


@dataclass(frozen=True)
class Missing:
    """External data was unavailable.

    Attributes:
        reason: Short machine-friendly reason (e.g. "http_status", "no_payload")
        detail: Optional human-readable detail for logs
    """

    reason: str
    detail: str | None = None


Lookup = Found[T] | Missing
