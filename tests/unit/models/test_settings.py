"""Tests for configuration dataclasses and environment loading."""

import pytest

from intent_router.config import LifiConfig, RouterConfig, Settings
from intent_router.constants import DEFAULT_MONITOR_POLL_SECONDS, LIFI_BASE_URL
from intent_router.errors import ConfigurationError
from tests.helpers import CHANNEL, POOL_MANAGER, UNISWAP_ADAPTER


class TestLifiConfig:
    def test_api_key_header(self):
        assert LifiConfig(api_key=" key ").headers() == {"x-lifi-api-key": "key"}
        assert LifiConfig().headers() == {}
        assert LifiConfig(api_key="   ").headers() == {}


class TestRouterConfig:
    def test_rejects_bad_addresses(self):
        with pytest.raises(ConfigurationError, match="uniswap_adapter"):
            RouterConfig(uniswap_adapter="adapter", pool_manager=POOL_MANAGER)


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.lifi.base_url == LIFI_BASE_URL
        assert settings.lifi.api_key is None
        assert settings.monitor.poll_interval_seconds == DEFAULT_MONITOR_POLL_SECONDS
        assert settings.port == 8000
        assert not settings.debug
        assert settings.rpc_url is None

    def test_reads_environment(self):
        settings = Settings.from_env(
            {
                "LIFI_API_KEY": "abc",
                "RPC_URL": "http://localhost:8545",
                "INTENT_CHANNEL": CHANNEL,
                "UNISWAP_ADAPTER": UNISWAP_ADAPTER,
                "POOL_MANAGER": POOL_MANAGER,
                "BRIDGE_POLL_SECONDS": "5",
                "ROUTER_PORT": "9000",
                "ROUTER_DEBUG": "true",
                "LOG_LEVEL": "debug",
            }
        )
        assert settings.lifi.api_key == "abc"
        assert settings.monitor.poll_interval_seconds == 5.0
        assert settings.port == 9000
        assert settings.debug
        assert settings.log_level == "DEBUG"
        assert settings.router_config().uniswap_adapter == UNISWAP_ADAPTER

    def test_router_config_requires_addresses(self):
        with pytest.raises(ConfigurationError):
            Settings.from_env({}).router_config()
