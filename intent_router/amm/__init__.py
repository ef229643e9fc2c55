"""On-chain AMM fallback adapters."""

from intent_router.amm.uniswap_v4 import UniswapV4FallbackAdapter

__all__ = ["UniswapV4FallbackAdapter"]
