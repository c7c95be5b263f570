"""Cross-chain trades: bridge providers, the proxy facade and the orchestrator."""

from crossroute.cross_chain.manager import CrossChainManager, create_default_providers
from crossroute.cross_chain.models import (
    CalculationResult,
    CrossChainOptions,
    CrossChainTradeType,
    ItType,
)
from crossroute.cross_chain.provider import CrossChainProvider
from crossroute.cross_chain.route_selector import RouteCandidate, select_best_route
from crossroute.cross_chain.trade import CrossChainTrade

__all__ = [
    "CalculationResult",
    "CrossChainManager",
    "CrossChainOptions",
    "CrossChainProvider",
    "CrossChainTrade",
    "CrossChainTradeType",
    "ItType",
    "RouteCandidate",
    "create_default_providers",
    "select_best_route",
]
