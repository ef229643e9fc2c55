"""Pyth Hermes price lookups.

Hermes returns prices as (price, conf, expo) integers; the real value is
``price * 10**expo``. Decimal keeps the scaling exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError

from intent_router.config import PythConfig
from intent_router.constants import PYTH_ETH_USD_PRICE_ID
from intent_router.result import Found, Missing

logger = structlog.get_logger()


class HermesPrice(BaseModel):
    """Raw (price, conf, expo) triple as returned by Hermes."""

    price: int
    conf: int
    expo: int
    publish_time: int


class HermesPriceUpdate(BaseModel):
    id: str | None = None
    price: HermesPrice


class HermesResponse(BaseModel):
    """Subset of the /v2/updates/price/latest response."""

    parsed: list[HermesPriceUpdate] = Field(default_factory=list)


@dataclass(frozen=True)
class PythPrice:
    price: Decimal
    conf: Decimal
    publish_time: int

    @classmethod
    def from_hermes(cls, data: HermesPrice) -> PythPrice:
        scale = Decimal(10) ** data.expo
        return cls(
            price=Decimal(data.price) * scale,
            conf=Decimal(data.conf) * scale,
            publish_time=data.publish_time,
        )


def parse_price_payload(payload: object) -> PythPrice | None:
    """Extract the first parsed price from a Hermes response body."""
    try:
        response = HermesResponse.model_validate(payload)
    except ValidationError:
        return None
    if not response.parsed:
        return None
    return PythPrice.from_hermes(response.parsed[0].price)


async def fetch_pyth_price(
    client: httpx.AsyncClient,
    price_id: str = PYTH_ETH_USD_PRICE_ID,
    config: PythConfig | None = None,
) -> Found[PythPrice] | Missing:
    """Latest price for ``price_id`` from Hermes.

    Network errors, non-2xx responses and unexpected bodies all return Missing.
    """
    config = config or PythConfig()
    url = f"{config.hermes_url.rstrip('/')}/v2/updates/price/latest"
    try:
        response = await client.get(url, params={"ids[]": price_id}, timeout=config.timeout_seconds)
    except httpx.HTTPError as e:
        logger.warning("pyth_request_failed", price_id=price_id, error=str(e))
        return Missing("request_error", str(e))

    if not response.is_success:
        logger.warning("pyth_bad_status", price_id=price_id, status=response.status_code)
        return Missing("http_status", str(response.status_code))

    try:
        payload = response.json()
    except ValueError as e:
        return Missing("invalid_json", str(e))

    price = parse_price_payload(payload)
    if price is None:
        return Missing("no_price")
    return Found(price)


__all__ = ["HermesResponse", "PythPrice", "fetch_pyth_price", "parse_price_payload"]
