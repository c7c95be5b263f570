"""Stargate (LayerZero) bridge provider."""

from crossroute.cross_chain.stargate.provider import StargateProvider
from crossroute.cross_chain.stargate.trade import StargateTrade

__all__ = ["StargateProvider", "StargateTrade"]
