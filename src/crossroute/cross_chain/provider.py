"""Base class for cross-chain providers."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from crossroute.chains import Blockchain
from crossroute.core.context import SdkContext
from crossroute.cross_chain import proxy
from crossroute.cross_chain.models import CalculationResult, CrossChainOptions, CrossChainTradeType
from crossroute.cross_chain.trade import CrossChainTrade
from crossroute.errors import NotSupportedTokensError, SwapSdkError, parse_error
from crossroute.fees import FeeInfo
from crossroute.tokens import Token, TokenAmount

logger = logging.getLogger(__name__)


class CrossChainProvider(ABC):
    """Quotes one bridge protocol.

    calculate() never raises: every failure comes back as a
    CalculationResult carrying a classified error.
    """

    type: CrossChainTradeType
    supported_blockchains: tuple[Blockchain, ...] = ()

    def __init__(self, ctx: SdkContext):
        self.ctx = ctx

    def is_supported_blockchain(self, blockchain: Blockchain) -> bool:
        return blockchain in self.supported_blockchains

    def are_supported_blockchains(self, from_blockchain: Blockchain, to_blockchain: Blockchain) -> bool:
        return (
            from_blockchain != to_blockchain
            and self.is_supported_blockchain(from_blockchain)
            and self.is_supported_blockchain(to_blockchain)
        )

    async def calculate(
        self,
        from_amount: TokenAmount,
        to_token: Token,
        options: Optional[CrossChainOptions] = None,
    ) -> CalculationResult:
        options = options or CrossChainOptions()
        if not self.are_supported_blockchains(from_amount.blockchain, to_token.blockchain):
            return self.error_result(NotSupportedTokensError())

        try:
            trade = await self.calculate_trade(from_amount, to_token, options)
        except Exception as e:
            error = parse_error(e)
            logger.warning(
                f"{self.type.value} calculation failed for {from_amount} -> "
                f"{to_token.symbol} ({to_token.blockchain.value}): {error.kind.value}: {error.message}"
            )
            return self.error_result(error)

        logger.info(f"{self.type.value} quote: {trade.from_amount} -> {trade.to_amount}")
        return CalculationResult(trade_type=self.type, trade=trade)

    @abstractmethod
    async def calculate_trade(
        self, from_amount: TokenAmount, to_token: Token, options: CrossChainOptions
    ) -> CrossChainTrade:
        """Build a trade or raise; called only for supported blockchain pairs."""

    def error_result(self, error: SwapSdkError) -> CalculationResult:
        return CalculationResult(trade_type=self.type, error=error)

    async def get_fee_info(
        self,
        blockchain: Blockchain,
        provider_address: str,
        percent_fee_token: Token,
        use_proxy: bool,
    ) -> FeeInfo:
        return await proxy.get_fee_info(
            self.ctx, blockchain, provider_address, percent_fee_token, use_proxy
        )

    def get_wallet_address(self) -> Optional[str]:
        return self.ctx.wallet_address
