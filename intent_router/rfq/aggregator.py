"""RFQ quote aggregation across maker endpoints.

Every maker gets an independent request; a failing maker (network error,
non-2xx status, malformed body) simply contributes no quote. All requests
are awaited before selection, there is no early exit on the first
success or failure.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import httpx
import structlog
from pydantic import ValidationError

from intent_router.config import RfqConfig
from intent_router.models.intent import TradingIntent
from intent_router.models.plan import Quote

logger = structlog.get_logger()


@dataclass(frozen=True)
class MakerEndpoint:
    """A market maker's quote endpoint.

    Attributes:
        maker: Maker's signing address
        maker_fill: MakerFill contract that settles this maker's quotes
        url: HTTP endpoint accepting POSTed intents
    """

    maker: str
    maker_fill: str
    url: str


async def request_maker_quote(
    client: httpx.AsyncClient,
    intent: TradingIntent,
    maker: MakerEndpoint,
    timeout: float | None = None,
) -> Quote | None:
    """Ask one maker for a quote.

    Returns:
        The parsed Quote, or None if the request or its body was unusable
    """
    try:
        response = await client.post(maker.url, json={"intent": intent.to_wire()}, timeout=timeout)
        if not response.is_success:
            logger.info("maker_quote_rejected", maker=maker.maker, status=response.status_code)
            return None
        data = response.json()
        return Quote(
            maker=maker.maker,
            maker_fill=maker.maker_fill,
            amount_out=data["amountOut"],
            expiry=data["expiry"],
            maker_sig=data["makerSig"],
        )
    except httpx.HTTPError as e:
        logger.warning("maker_quote_failed", maker=maker.maker, url=maker.url, error=str(e))
        return None
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        logger.warning("maker_quote_malformed", maker=maker.maker, url=maker.url, error=str(e))
        return None


async def request_quotes(
    intent: TradingIntent,
    makers: Sequence[MakerEndpoint],
    client: httpx.AsyncClient,
    config: RfqConfig | None = None,
) -> list[Quote]:
    """Fan out to all makers and collect the quotes that came back.

    Order of the returned list follows the order of ``makers``.
    """
    if not makers:
        return []

    timeout = (config or RfqConfig()).timeout_seconds
    outcomes = await asyncio.gather(
        *(request_maker_quote(client, intent, maker, timeout) for maker in makers),
        return_exceptions=True,
    )

    quotes: list[Quote] = []
    for maker, outcome in zip(makers, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            logger.warning("maker_quote_crashed", maker=maker.maker, error=repr(outcome))
            continue
        if outcome is not None:
            quotes.append(outcome)
    return quotes


def pick_best_quote(intent: TradingIntent, quotes: Sequence[Quote], now: int | None = None) -> Quote | None:
    """Select the best still-valid quote meeting the intent's minimum output.

    A quote qualifies when ``expiry >= now`` and ``amount_out >= min_out``.
    Among qualifying quotes the highest ``amount_out`` wins; on a tie the
    earliest quote in ``quotes`` is kept.
    """
    now = int(time.time()) if now is None else now
    best: Quote | None = None
    for quote in quotes:
        if quote.expiry < now or quote.amount_out < intent.min_out:
            continue
        if best is None or quote.amount_out > best.amount_out:
            best = quote
    return best


class QuoteAggregator:
    """Requests maker quotes for an intent and picks the best one.

    Args:
        client: Shared async HTTP client
        config: Request settings
        clock: Returns the current unix time; injectable for tests
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: RfqConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client
        self.config = config or RfqConfig()
        self.clock = clock

    async def best_quote(self, intent: TradingIntent, makers: Sequence[MakerEndpoint]) -> Quote | None:
        if not makers:
            logger.debug("rfq_skipped_no_makers")
            return None

        quotes = await request_quotes(intent, makers, self.client, self.config)
        best = pick_best_quote(intent, quotes, now=int(self.clock()))
        logger.info(
            "rfq_complete",
            makers=len(makers),
            quotes=len(quotes),
            best_maker=best.maker if best else None,
            best_amount_out=best.amount_out if best else None,
        )
        return best


__all__ = [
    "MakerEndpoint",
    "QuoteAggregator",
    "pick_best_quote",
    "request_maker_quote",
    "request_quotes",
]
