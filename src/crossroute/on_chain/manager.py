"""Fan-out over the DEXes of one blockchain."""

import asyncio
import logging
from decimal import Decimal
from typing import Optional

from crossroute.chains import Blockchain
from crossroute.core.context import SdkContext
from crossroute.on_chain.models import OnChainCalculationOptions
from crossroute.on_chain.trade import OnChainTrade
from crossroute.on_chain.uniswap_v2 import UNISWAP_V2_DEXES, DexConfig, UniswapV2Provider
from crossroute.tokens import Token, TokenAmount

logger = logging.getLogger(__name__)


class OnChainManager:
    """Calculates on-chain trades; used for proxy pre-swaps and destination swaps."""

    def __init__(self, ctx: SdkContext, dexes: Optional[dict[Blockchain, list[DexConfig]]] = None):
        self.ctx = ctx
        self.dexes = UNISWAP_V2_DEXES if dexes is None else dexes

    def get_providers(self, blockchain: Blockchain) -> list[UniswapV2Provider]:
        return [UniswapV2Provider(self.ctx, blockchain, dex) for dex in self.dexes.get(blockchain, [])]

    async def calculate(
        self,
        from_amount: TokenAmount,
        to_token: Token,
        options: Optional[OnChainCalculationOptions] = None,
    ) -> list[OnChainTrade]:
        """All successful trades, best output first."""
        providers = self.get_providers(from_amount.blockchain)
        if not providers:
            return []

        results = await asyncio.gather(
            *(provider.calculate(from_amount, to_token, options) for provider in providers),
            return_exceptions=True,
        )

        trades = []
        for provider, result in zip(providers, results):
            if isinstance(result, Exception):
                logger.warning(f"On-chain provider {provider.type.value} failed: {result}")
            elif result is not None:
                trades.append(result)
        return sorted(trades, key=lambda t: t.to_amount.wei_amount, reverse=True)

    async def calculate_best(
        self,
        from_amount: TokenAmount,
        to_token: Token,
        slippage_tolerance: Decimal,
        deadline_minutes: Optional[int] = None,
    ) -> Optional[OnChainTrade]:
        options = OnChainCalculationOptions(
            slippage_tolerance=slippage_tolerance,
            deadline_minutes=deadline_minutes or self.ctx.settings.deadline_minutes,
        )
        trades = await self.calculate(from_amount, to_token, options)
        if not trades:
            return None
        best = trades[0]
        logger.debug(
            f"Best on-chain trade {best.type.value}: {from_amount} -> {best.to_amount}"
        )
        return best
