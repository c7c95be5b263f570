"""Uniswap V2 and its forks (PancakeSwap, QuickSwap, Trader Joe, SushiSwap)."""

import logging
from dataclasses import dataclass
from typing import Optional

from crossroute.chains import Blockchain, get_chain
from crossroute.core.context import SdkContext
from crossroute.core.web3_pure import compare_addresses
from crossroute.on_chain.abi import UNISWAP_V2_ROUTER_ABI
from crossroute.on_chain.models import OnChainCalculationOptions, OnChainTradeType
from crossroute.on_chain.trade import OnChainTrade
from crossroute.tokens import Token, TokenAmount
from crossroute.transactions import GasData

logger = logging.getLogger(__name__)

SUSHI_SWAP_ROUTER = "0x1b02dA8Cb0d097eB8D57A175b88c7D8b47997506"


@dataclass(frozen=True)
class DexConfig:
    trade_type: OnChainTradeType
    router_address: str
    native_method_name: str = "ETH"


UNISWAP_V2_DEXES: dict[Blockchain, list[DexConfig]] = {
    Blockchain.ETHEREUM: [
        DexConfig(OnChainTradeType.UNISWAP_V2, "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"),
        DexConfig(OnChainTradeType.SUSHI_SWAP, "0xd9e1cE17f2641f24aE83637ab66a2cca9C378B9F"),
    ],
    Blockchain.BSC: [
        DexConfig(OnChainTradeType.PANCAKE_SWAP, "0x10ED43C718714eb63d5aA57B78B54704E256024E"),
        DexConfig(OnChainTradeType.SUSHI_SWAP, SUSHI_SWAP_ROUTER),
    ],
    Blockchain.POLYGON: [
        DexConfig(OnChainTradeType.QUICK_SWAP, "0xa5E0829CaCEd8fFDD4De3c43696c57F7D7A678ff"),
        DexConfig(OnChainTradeType.SUSHI_SWAP, SUSHI_SWAP_ROUTER),
    ],
    Blockchain.AVALANCHE: [
        DexConfig(OnChainTradeType.JOE, "0x60aE616a2155Ee3d9A68541Ba4544862310933d4", "AVAX"),
        DexConfig(OnChainTradeType.SUSHI_SWAP, SUSHI_SWAP_ROUTER),
    ],
    Blockchain.ARBITRUM: [
        DexConfig(OnChainTradeType.SUSHI_SWAP, SUSHI_SWAP_ROUTER),
    ],
    Blockchain.FANTOM: [
        DexConfig(OnChainTradeType.SUSHI_SWAP, SUSHI_SWAP_ROUTER),
    ],
}


class UniswapV2Provider:
    """Quotes exact-input swaps through one Uniswap V2 router."""

    def __init__(
        self,
        ctx: SdkContext,
        blockchain: Blockchain,
        dex: DexConfig,
        wrapped_native_address: Optional[str] = None,
    ):
        self.ctx = ctx
        self.blockchain = blockchain
        self.dex = dex
        self.wrapped_native_address = (
            wrapped_native_address or get_chain(blockchain).wrapped_native_address
        )

    @property
    def type(self) -> OnChainTradeType:
        return self.dex.trade_type

    def _router_token_address(self, token: Token) -> str:
        return self.wrapped_native_address if token.is_native else token.address

    def get_candidate_paths(self, from_token: Token, to_token: Token, disable_multihops: bool) -> list[list[str]]:
        """Direct path first, then a hop through the wrapped native token."""
        from_address = self._router_token_address(from_token)
        to_address = self._router_token_address(to_token)
        if compare_addresses(from_address, to_address):
            return []

        paths = [[from_address, to_address]]
        through_wrapped = any(
            compare_addresses(address, self.wrapped_native_address)
            for address in (from_address, to_address)
        )
        if not disable_multihops and not through_wrapped:
            paths.append([from_address, self.wrapped_native_address, to_address])
        return paths

    async def calculate(
        self,
        from_amount: TokenAmount,
        to_token: Token,
        options: Optional[OnChainCalculationOptions] = None,
    ) -> Optional[OnChainTrade]:
        """Best trade over the candidate paths, None when no path has liquidity."""
        options = options or OnChainCalculationOptions()
        if from_amount.blockchain != self.blockchain or to_token.blockchain != self.blockchain:
            return None

        paths = self.get_candidate_paths(from_amount.token, to_token, options.disable_multihops)
        if not paths or from_amount.wei_amount == 0:
            return None

        web3_public = self.ctx.get_web3_public(self.blockchain)
        results = await web3_public.multicall_contract_method(
            self.dex.router_address,
            UNISWAP_V2_ROUTER_ABI,
            "getAmountsOut",
            [[from_amount.wei_amount, path] for path in paths],
        )

        best_path = None
        best_amount = 0
        for path, result in zip(paths, results):
            if not result.success or not result.output:
                continue
            amount_out = int(result.output[-1])
            # Equal output keeps the shorter path found first
            if amount_out > best_amount:
                best_path, best_amount = path, amount_out

        if best_path is None:
            logger.debug(f"{self.type.value}: no liquidity for {from_amount.symbol} -> {to_token.symbol}")
            return None

        trade = OnChainTrade(
            ctx=self.ctx,
            trade_type=self.type,
            from_amount=from_amount,
            to_amount=TokenAmount(token=to_token, wei_amount=best_amount),
            path=best_path,
            router_address=self.dex.router_address,
            slippage_tolerance=options.slippage_tolerance,
            deadline_minutes=options.deadline_minutes,
            native_method_name=self.dex.native_method_name,
        )
        if options.gas_calculation:
            trade.gas_data = await self.get_gas_data(trade)
        return trade

    async def get_gas_data(self, trade: OnChainTrade) -> Optional[GasData]:
        """Gas for the swap from the connected wallet, None without a wallet."""
        wallet_address = self.ctx.wallet_address
        if not wallet_address:
            return None
        tx = trade.encode_direct(wallet_address)
        web3_public = self.ctx.get_web3_public(self.blockchain)
        gas_limit = await web3_public.get_estimated_gas(wallet_address, tx.to, tx.data, tx.value)
        if not gas_limit:
            return None
        gas_price = await self.ctx.gas_price_api.get_gas_price(self.blockchain)
        return GasData(gas_limit=gas_limit, gas_price=gas_price)
