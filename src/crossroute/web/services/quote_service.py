"""Quote service wrapping the cross-chain orchestrator.

READ-ONLY: calculates trades but never signs or submits them.
"""

import logging
from decimal import Decimal
from typing import Optional

from crossroute.core.context import SdkContext
from crossroute.cross_chain.manager import CrossChainManager
from crossroute.cross_chain.models import CalculationResult, CrossChainOptions
from crossroute.cross_chain.trade import CrossChainTrade
from crossroute.tokens import Token, TokenAmount
from crossroute.web.contracts.quotes import (
    MultiQuoteRequest,
    MultiQuoteResponse,
    QuoteRequest,
    QuoteResponse,
    QuoteToken,
)

logger = logging.getLogger(__name__)


def _to_token(token: QuoteToken) -> Token:
    return Token(
        blockchain=token.blockchain,
        address=token.address,
        symbol=token.symbol,
        decimals=token.decimals,
        price=token.price,
    )


class QuoteService:
    """Service for fetching cross-chain quotes from all providers."""

    def __init__(self, ctx: SdkContext, manager: Optional[CrossChainManager] = None):
        self.ctx = ctx
        self.manager = manager or CrossChainManager(ctx)

    def build_options(self, request: QuoteRequest) -> CrossChainOptions:
        settings = self.ctx.settings
        slippage = (
            request.slippage / 100 if request.slippage is not None else settings.default_slippage
        )
        return CrossChainOptions(
            slippage_tolerance=slippage,
            provider_address=settings.provider_address,
            receiver_address=request.receiver_address,
            use_proxy={provider.type: request.use_proxy for provider in self.manager.providers},
            timeout=settings.http_timeout,
            enable_destination_swap=request.enable_destination_swap,
        )

    def get_manager(self, request: QuoteRequest) -> CrossChainManager:
        if not request.providers:
            return self.manager
        providers = [p for p in self.manager.providers if p.type in request.providers]
        return CrossChainManager(self.ctx, providers)

    async def calculate(self, request: QuoteRequest) -> list[CalculationResult]:
        from_token = _to_token(request.from_token)
        from_amount = TokenAmount.from_token_amount(from_token, request.amount)
        return await self.get_manager(request).calculate(
            from_amount, _to_token(request.to_token), self.build_options(request)
        )

    async def get_quote(self, request: QuoteRequest) -> QuoteResponse:
        """Best quote, or the first provider error when nobody has a trade."""
        results = await self.calculate(request)
        if not results:
            return self._error_response(request, "No providers available")

        best = results[0]
        if best.is_success:
            return self._trade_response(best.trade)
        return self._error_response(
            request,
            f"No quote available for {request.from_token.symbol}/{request.to_token.symbol}: "
            f"{best.error.message}",
            best,
        )

    async def get_multi_quote(self, request: MultiQuoteRequest) -> MultiQuoteResponse:
        results = await self.calculate(request)
        quotes = [
            self._trade_response(result.trade)
            if result.is_success
            else self._error_response(request, result.error.message, result)
            for result in results
        ]
        best = quotes[0] if quotes and quotes[0].success else None
        return MultiQuoteResponse(
            success=best is not None,
            quotes=quotes,
            best_quote=best,
            error=None if best else "No provider returned a trade",
        )

    def _trade_response(self, trade: CrossChainTrade) -> QuoteResponse:
        data = trade.to_dict()
        network_fee = data["network_fee"]
        return QuoteResponse(
            success=True,
            provider=trade.type.value,
            from_blockchain=trade.from_amount.blockchain.value,
            to_blockchain=trade.to_amount.blockchain.value,
            from_symbol=trade.from_amount.symbol,
            to_symbol=trade.to_amount.symbol,
            from_amount=trade.from_amount.token_amount,
            to_amount=trade.to_amount.token_amount,
            to_amount_min=trade.to_token_amount_min.token_amount,
            price_impact=trade.price_impact,
            network_fee=Decimal(network_fee) if network_fee is not None else None,
            fee_info=data["fee_info"],
        )

    def _error_response(
        self,
        request: QuoteRequest,
        message: str,
        result: Optional[CalculationResult] = None,
    ) -> QuoteResponse:
        error = result.error if result else None
        return QuoteResponse(
            success=False,
            provider=result.trade_type.value if result else None,
            from_blockchain=request.from_token.blockchain.value,
            to_blockchain=request.to_token.blockchain.value,
            from_symbol=request.from_token.symbol,
            to_symbol=request.to_token.symbol,
            from_amount=request.amount,
            error=message,
            error_kind=error.kind.value if error else None,
        )
