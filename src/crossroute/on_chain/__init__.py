"""On-chain (single-blockchain) DEX trades."""

from crossroute.on_chain.manager import OnChainManager
from crossroute.on_chain.models import OnChainCalculationOptions, OnChainTradeType
from crossroute.on_chain.trade import OnChainTrade
from crossroute.on_chain.uniswap_v2 import UNISWAP_V2_DEXES, UniswapV2Provider

__all__ = [
    "OnChainCalculationOptions",
    "OnChainManager",
    "OnChainTrade",
    "OnChainTradeType",
    "UNISWAP_V2_DEXES",
    "UniswapV2Provider",
]
