"""Cross-chain calculation orchestrator."""

import asyncio
import logging
from typing import Optional

from crossroute.core.context import SdkContext
from crossroute.cross_chain.models import CalculationResult, CrossChainOptions
from crossroute.cross_chain.provider import CrossChainProvider
from crossroute.cross_chain.stargate import StargateProvider
from crossroute.cross_chain.trade import CrossChainTrade
from crossroute.cross_chain.via import ViaProvider
from crossroute.cross_chain.xy import XyProvider
from crossroute.errors import parse_error
from crossroute.tokens import Token, TokenAmount

logger = logging.getLogger(__name__)


def create_default_providers(ctx: SdkContext) -> list[CrossChainProvider]:
    """Providers enabled in settings."""
    settings = ctx.settings
    providers: list[CrossChainProvider] = []
    if settings.stargate_enabled:
        providers.append(StargateProvider(ctx))
    if settings.xy_enabled:
        providers.append(XyProvider(ctx))
    if settings.via_enabled:
        providers.append(ViaProvider(ctx))
    return providers


class CrossChainManager:
    """Runs every provider concurrently and ranks their results.

    Knows nothing about provider internals: a provider either yields a
    trade or an error, and one failing provider never hides the others.
    """

    def __init__(self, ctx: SdkContext, providers: Optional[list[CrossChainProvider]] = None):
        self.ctx = ctx
        self.providers = create_default_providers(ctx) if providers is None else providers

    def default_options(self) -> CrossChainOptions:
        return CrossChainOptions(
            slippage_tolerance=self.ctx.settings.default_slippage,
            provider_address=self.ctx.settings.provider_address,
        )

    async def calculate(
        self,
        from_amount: TokenAmount,
        to_token: Token,
        options: Optional[CrossChainOptions] = None,
    ) -> list[CalculationResult]:
        """Results of all providers: trades by output descending, then errors."""
        options = options or self.default_options()
        logger.info(
            f"Calculating cross-chain trades: {from_amount} -> {to_token.symbol} "
            f"({to_token.blockchain.value}) over {len(self.providers)} providers"
        )

        outcomes = await asyncio.gather(
            *(provider.calculate(from_amount, to_token, options) for provider in self.providers),
            return_exceptions=True,
        )

        results = []
        for provider, outcome in zip(self.providers, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(f"{provider.type.value} raised outside calculate: {outcome}")
                outcome = provider.error_result(parse_error(outcome))
            results.append(outcome)

        trades = [r for r in results if r.is_success]
        errors = [r for r in results if not r.is_success]
        trades.sort(key=lambda r: r.trade.to_amount.wei_amount, reverse=True)

        if trades:
            best = trades[0].trade
            logger.info(
                f"Got {len(trades)} trade(s) for {from_amount.symbol}->{to_token.symbol}. "
                f"Best: {best.type.value} ({best.to_amount})"
            )
        else:
            logger.warning(f"No cross-chain trades for {from_amount} -> {to_token.symbol}")
        return trades + errors

    async def get_best_trade(
        self,
        from_amount: TokenAmount,
        to_token: Token,
        options: Optional[CrossChainOptions] = None,
    ) -> Optional[CrossChainTrade]:
        results = await self.calculate(from_amount, to_token, options)
        if not results or not results[0].is_success:
            return None
        return results[0].trade
