"""XY Finance provider: quotes come from the XY REST API."""

import logging
from typing import Optional

from crossroute.core.web3_pure import EMPTY_ADDRESS
from crossroute.cross_chain.models import CrossChainOptions, CrossChainTradeType
from crossroute.cross_chain.provider import CrossChainProvider
from crossroute.cross_chain.xy.api import analyze_status_code, build_swap_params, fetch_swap
from crossroute.cross_chain.xy.constants import XY_CONTRACT_ADDRESS, XY_SUPPORTED_BLOCKCHAINS
from crossroute.cross_chain.xy.models import XyTransactionResponse
from crossroute.cross_chain.xy.trade import XyTrade
from crossroute.errors import UnknownError
from crossroute.fees import CryptoFee, get_from_without_fee
from crossroute.tokens import Token, TokenAmount
from crossroute.transactions import GasData

logger = logging.getLogger(__name__)


class XyProvider(CrossChainProvider):
    type = CrossChainTradeType.XY
    supported_blockchains = XY_SUPPORTED_BLOCKCHAINS

    async def calculate_trade(
        self, from_amount: TokenAmount, to_token: Token, options: CrossChainOptions
    ) -> XyTrade:
        from_blockchain = from_amount.blockchain
        use_proxy = options.should_use_proxy(self.type)
        receiver = (
            options.receiver_address
            or options.from_address
            or self.get_wallet_address()
            or EMPTY_ADDRESS
        )

        fee_info = await self.get_fee_info(
            from_blockchain, options.provider_address, from_amount.token, use_proxy
        )
        from_without_fee = get_from_without_fee(from_amount, fee_info.platform_fee_percent)

        params = build_swap_params(from_without_fee, to_token, options.slippage_tolerance, receiver)
        response = await fetch_swap(self.ctx, params, options.timeout)
        analyze_status_code(response.status_code, response.msg)
        if not response.to_token_amount:
            raise UnknownError("XY returned no output amount.")

        to = TokenAmount(token=to_token, wei_amount=int(response.to_token_amount))
        if response.xy_fee and response.xy_fee.amount is not None:
            fee_info = fee_info.with_crypto_fee(
                CryptoFee(amount=response.xy_fee.amount, token_symbol=response.xy_fee.symbol or "")
            )

        gas_data = None
        if options.gas_calculation:
            gas_data = await self.get_gas_data(from_amount, response)

        return XyTrade(
            self.ctx,
            from_amount=from_amount,
            to_amount=to,
            to_token_amount_min=TokenAmount(
                token=to_token, wei_amount=to.wei_amount_minus_slippage(options.slippage_tolerance)
            ),
            fee_info=fee_info,
            provider_address=options.provider_address,
            price_impact=from_amount.calculate_price_impact_percent(to),
            gas_data=gas_data,
            use_proxy=use_proxy,
            transaction_request=params,
            provider_gateway=response.tx.to if response.tx else XY_CONTRACT_ADDRESS[from_blockchain],
        )

    async def get_gas_data(
        self, from_amount: TokenAmount, response: XyTransactionResponse
    ) -> Optional[GasData]:
        """Estimate the quoted transaction from the connected wallet, if any."""
        wallet_address = self.get_wallet_address()
        if not wallet_address or response.tx is None:
            return None

        web3_public = self.ctx.get_web3_public(from_amount.blockchain)
        gas_limit = await web3_public.get_estimated_gas(
            wallet_address, response.tx.to, response.tx.data, response.tx.value
        )
        if not gas_limit:
            return None
        gas_price = await self.ctx.gas_price_api.get_gas_price(from_amount.blockchain)
        return GasData(gas_limit=gas_limit, gas_price=gas_price)
