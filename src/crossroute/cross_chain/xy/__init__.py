"""XY Finance bridge provider."""

from crossroute.cross_chain.xy.provider import XyProvider
from crossroute.cross_chain.xy.trade import XyTrade

__all__ = ["XyProvider", "XyTrade"]
