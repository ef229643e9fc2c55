"""RFQ maker quote aggregation."""

from intent_router.rfq.aggregator import (
    MakerEndpoint,
    QuoteAggregator,
    pick_best_quote,
    request_maker_quote,
    request_quotes,
)

__all__ = [
    "MakerEndpoint",
    "QuoteAggregator",
    "pick_best_quote",
    "request_maker_quote",
    "request_quotes",
]
