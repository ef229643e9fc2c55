"""Configuration for intent routing components.

Each component takes its own frozen config at construction. Environment
variables are read only by ``Settings.from_env`` at process entry points.
"""

import os
from dataclasses import dataclass, field

from intent_router.constants import (
    DEFAULT_DEDUP_CAPACITY,
    DEFAULT_MONITOR_POLL_SECONDS,
    LIFI_BASE_URL,
    PYTH_HERMES_URL,
)
from intent_router.errors import ConfigurationError
from intent_router.models.types import is_valid_address

LIFI_API_KEY_HEADER = "x-lifi-api-key"


@dataclass(frozen=True)
class LifiConfig:
    """LI.FI quote/status API settings.

    Attributes:
        base_url: API root (default: https://li.quest)
        api_key: Optional key sent as the x-lifi-api-key header
        timeout_seconds: Per-request timeout
    """

    base_url: str = LIFI_BASE_URL
    api_key: str | None = None
    timeout_seconds: float = 12.0

    def headers(self) -> dict[str, str]:
        if self.api_key and self.api_key.strip():
            return {LIFI_API_KEY_HEADER: self.api_key.strip()}
        return {}


@dataclass(frozen=True)
class RfqConfig:
    """Maker quote request settings."""

    timeout_seconds: float = 5.0


@dataclass(frozen=True)
class MonitorConfig:
    """Bridge status monitor settings."""

    poll_interval_seconds: float = DEFAULT_MONITOR_POLL_SECONDS


@dataclass(frozen=True)
class ReconcilerConfig:
    """Settlement event reconciler settings.

    Attributes:
        dedup_capacity: How many recent (txHash, logIndex) keys are remembered
        monitor_bridges: Whether fallback cross-chain fills start a bridge monitor
    """

    dedup_capacity: int = DEFAULT_DEDUP_CAPACITY
    monitor_bridges: bool = True


@dataclass(frozen=True)
class RouterConfig:
    """Addresses the settlement router needs for the AMM fallback path."""

    uniswap_adapter: str
    pool_manager: str

    def __post_init__(self) -> None:
        for name in ("uniswap_adapter", "pool_manager"):
            value = getattr(self, name)
            if not is_valid_address(value):
                raise ConfigurationError(f"RouterConfig.{name} must be an address, got {value!r}")


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = PYTH_HERMES_URL
    timeout_seconds: float = 10.0


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Process-level settings assembled from the environment.

    Environment variables:
    - LIFI_API_KEY / LIFI_BASE_URL: LI.FI access
    - RPC_URL: chain RPC endpoint
    - INTENT_CHANNEL: IntentChannel contract address
    - UNISWAP_ADAPTER / POOL_MANAGER: AMM fallback contracts
    - BRIDGE_POLL_SECONDS: bridge monitor interval
    - ROUTER_HOST / ROUTER_PORT / ROUTER_DEBUG: API server
    - LOG_LEVEL: structlog filtering level
    """

    lifi: LifiConfig = field(default_factory=LifiConfig)
    rfq: RfqConfig = field(default_factory=RfqConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    reconciler: ReconcilerConfig = field(default_factory=ReconcilerConfig)
    pyth: PythConfig = field(default_factory=PythConfig)
    rpc_url: str | None = None
    intent_channel: str | None = None
    uniswap_adapter: str | None = None
    pool_manager: str | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        lifi = LifiConfig(
            base_url=env.get("LIFI_BASE_URL", LIFI_BASE_URL),
            api_key=env.get("LIFI_API_KEY") or None,
        )
        monitor = MonitorConfig(
            poll_interval_seconds=float(env.get("BRIDGE_POLL_SECONDS", str(DEFAULT_MONITOR_POLL_SECONDS))),
        )
        return cls(
            lifi=lifi,
            monitor=monitor,
            rpc_url=env.get("RPC_URL") or None,
            intent_channel=env.get("INTENT_CHANNEL") or None,
            uniswap_adapter=env.get("UNISWAP_ADAPTER") or None,
            pool_manager=env.get("POOL_MANAGER") or None,
            host=env.get("ROUTER_HOST", "0.0.0.0"),
            port=int(env.get("ROUTER_PORT", "8000")),
            debug=_as_bool(env.get("ROUTER_DEBUG")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    def router_config(self) -> RouterConfig:
        if not self.uniswap_adapter or not self.pool_manager:
            raise ConfigurationError("UNISWAP_ADAPTER and POOL_MANAGER must be configured")
        return RouterConfig(uniswap_adapter=self.uniswap_adapter, pool_manager=self.pool_manager)
