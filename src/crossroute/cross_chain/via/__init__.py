"""Via Protocol aggregator-of-aggregators provider."""

from crossroute.cross_chain.via.provider import ViaProvider
from crossroute.cross_chain.via.trade import ViaTrade

__all__ = ["ViaProvider", "ViaTrade"]
