"""Stargate provider: LayerZero bridge pools with optional proxy pre-swap."""

import logging
from decimal import Decimal
from typing import Optional

from crossroute.chains import Blockchain, get_native_token
from crossroute.core.context import SdkContext
from crossroute.core.web3_pure import EMPTY_ADDRESS, from_wei, to_wei
from crossroute.cross_chain.models import CrossChainOptions, CrossChainTradeType
from crossroute.cross_chain.provider import CrossChainProvider
from crossroute.cross_chain.stargate.abi import (
    STARGATE_FACTORY_ABI,
    STARGATE_FEE_LIBRARY_ABI,
    STARGATE_POOL_ABI,
    STARGATE_ROUTER_ABI,
)
from crossroute.cross_chain.stargate.constants import (
    DST_TRANSIT_PREFERENCE,
    M_USDT,
    STARGATE_BLOCKCHAIN_SUPPORTED_POOLS,
    STARGATE_CHAIN_ID,
    STARGATE_FEE_LIBRARY_ADDRESS,
    STARGATE_POOL_DECIMALS,
    STARGATE_POOL_ID,
    STARGATE_POOL_MAPPING,
    STARGATE_ROUTER_ADDRESS,
    STARGATE_SUPPORTED_BLOCKCHAINS,
    TYPE_SWAP_REMOTE,
    USDT,
    is_pool_supported,
)
from crossroute.cross_chain.stargate.trade import StargateTrade, layer_zero_tx_params
from crossroute.errors import MinAmountError, NotSupportedTokensError
from crossroute.fees import CryptoFee, get_from_without_fee, pool_fee
from crossroute.on_chain.manager import OnChainManager
from crossroute.tokens import Token, TokenAmount

logger = logging.getLogger(__name__)

_POOL_SYMBOL = {pool_id: symbol for symbol, pool_id in STARGATE_POOL_ID.items()}


class StargateProvider(CrossChainProvider):
    type = CrossChainTradeType.STARGATE
    supported_blockchains = STARGATE_SUPPORTED_BLOCKCHAINS

    def __init__(self, ctx: SdkContext, on_chain_manager: Optional[OnChainManager] = None):
        super().__init__(ctx)
        self.on_chain_manager = on_chain_manager or OnChainManager(ctx)

    @staticmethod
    def has_direct_route(from_token: Token, to_symbol: str, to_blockchain: Blockchain) -> bool:
        """True when the input token itself is a pool token bridging into `to_symbol`.

        Raises:
            NotSupportedTokensError: destination chain has no pool for `to_symbol`
        """
        if not is_pool_supported(from_token.blockchain, from_token.symbol):
            return False
        if not is_pool_supported(to_blockchain, to_symbol):
            raise NotSupportedTokensError()

        reachable = (
            STARGATE_POOL_MAPPING.get(from_token.blockchain, {})
            .get(from_token.symbol, {})
            .get(to_blockchain, [])
        )
        return to_symbol in reachable

    @staticmethod
    def resolve_dst_symbol(to_token: Token, enable_destination_swap: bool) -> tuple[str, bool]:
        """Pool symbol settled on the destination chain and whether a swap follows it."""
        if is_pool_supported(to_token.blockchain, to_token.symbol):
            return to_token.symbol, False
        if enable_destination_swap:
            for symbol in DST_TRANSIT_PREFERENCE:
                if is_pool_supported(to_token.blockchain, symbol):
                    return symbol, True
        raise NotSupportedTokensError()

    async def calculate_trade(
        self, from_amount: TokenAmount, to_token: Token, options: CrossChainOptions
    ) -> StargateTrade:
        from_blockchain = from_amount.blockchain
        to_blockchain = to_token.blockchain
        use_proxy = options.should_use_proxy(self.type)
        slippage = options.slippage_tolerance

        dst_symbol, needs_dst_swap = self.resolve_dst_symbol(to_token, options.enable_destination_swap)
        direct = self.has_direct_route(from_amount.token, dst_symbol, to_blockchain)
        if not direct and not use_proxy:
            raise NotSupportedTokensError()

        fee_info = await self.get_fee_info(
            from_blockchain, options.provider_address, from_amount.token, use_proxy
        )
        from_without_fee = get_from_without_fee(from_amount, fee_info.platform_fee_percent)

        src_trade = None
        if direct:
            src_symbol = from_amount.symbol
            transit = from_without_fee
            transit_amount = from_without_fee.token_amount
        else:
            src_symbol = await self.select_source_pool(from_without_fee, dst_symbol, to_blockchain)
            transit_token = await self.get_pool_token(STARGATE_POOL_ID[src_symbol], from_blockchain)
            src_trade = await self.on_chain_manager.calculate_best(
                from_without_fee, transit_token, slippage / 2
            )
            if src_trade is None:
                raise NotSupportedTokensError()
            transit = src_trade.to_amount
            transit_amount = src_trade.to_token_amount_min.token_amount

        fee = await self.fetch_pool_fees(
            from_blockchain, src_symbol, to_blockchain, dst_symbol, transit_amount
        )
        amount_out_min = transit_amount - fee
        if amount_out_min <= 0:
            raise MinAmountError(min_amount=fee, token_symbol=src_symbol)

        receiver = options.receiver_address or options.from_address or self.get_wallet_address()
        dst_trade = None
        if needs_dst_swap:
            dst_transit_token = await self.get_pool_token(STARGATE_POOL_ID[dst_symbol], to_blockchain)
            bridged = TokenAmount.from_token_amount(dst_transit_token, amount_out_min)
            dst_trade = await self.on_chain_manager.calculate_best(bridged, to_token, slippage / 2)
            if dst_trade is None:
                raise NotSupportedTokensError()
            to = dst_trade.to_amount
        else:
            to = TokenAmount.from_token_amount(to_token, amount_out_min)

        dst_swap_data = dst_trade.encode_direct(receiver or EMPTY_ADDRESS).data if dst_trade else None
        layer_zero_fee_wei = await self.get_layer_zero_fee(
            from_blockchain, to_blockchain, receiver, dst_swap_data
        )
        native = get_native_token(from_blockchain)
        fee_info = fee_info.with_crypto_fee(
            CryptoFee(amount=from_wei(layer_zero_fee_wei, native.decimals), token_symbol=native.symbol)
        )

        bridge_slippage = slippage / 2 if (src_trade or dst_trade) else slippage
        bridge_amount_min = amount_out_min * (Decimal(1) - bridge_slippage)
        sent = src_trade.to_token_amount_min if src_trade else from_without_fee

        return StargateTrade(
            self.ctx,
            from_amount=from_amount,
            to_amount=to,
            to_token_amount_min=TokenAmount(
                token=to.token, wei_amount=to.wei_amount_minus_slippage(slippage)
            ),
            fee_info=fee_info,
            provider_address=options.provider_address,
            price_impact=transit.calculate_price_impact_percent(to),
            use_proxy=use_proxy,
            src_trade=src_trade,
            dst_trade=dst_trade,
            src_pool_id=STARGATE_POOL_ID[src_symbol],
            dst_pool_id=STARGATE_POOL_ID[dst_symbol],
            transit_amount=sent,
            bridge_amount_min_wei=to_wei(bridge_amount_min, sent.decimals),
            layer_zero_fee_wei=layer_zero_fee_wei,
        )

    async def fetch_pool_fees(
        self,
        from_blockchain: Blockchain,
        src_symbol: str,
        to_blockchain: Blockchain,
        dst_symbol: str,
        transit_amount: Decimal,
    ) -> Decimal:
        """Pool fee for bridging `transit_amount`, in display units of the source pool."""
        src_pool_id = STARGATE_POOL_ID[src_symbol]
        dst_pool_id = STARGATE_POOL_ID[dst_symbol]
        sd_decimals = STARGATE_POOL_DECIMALS[src_symbol]
        amount_sd = to_wei(transit_amount, sd_decimals)

        # USDT and m.USDT share liquidity; the fee library expects m.USDT on both sides
        if dst_pool_id == STARGATE_POOL_ID[M_USDT] and src_pool_id == STARGATE_POOL_ID[USDT]:
            src_pool_id = STARGATE_POOL_ID[M_USDT]
        if src_pool_id == STARGATE_POOL_ID[M_USDT] and dst_pool_id == STARGATE_POOL_ID[USDT]:
            dst_pool_id = STARGATE_POOL_ID[M_USDT]

        web3_public = self.ctx.get_web3_public(from_blockchain)
        try:
            fees = await web3_public.call_contract_method(
                STARGATE_FEE_LIBRARY_ADDRESS[from_blockchain],
                STARGATE_FEE_LIBRARY_ABI,
                "getFees",
                [src_pool_id, dst_pool_id, STARGATE_CHAIN_ID[to_blockchain], EMPTY_ADDRESS, amount_sd],
            )
        except Exception as e:
            logger.debug(f"Stargate getFees failed ({src_pool_id} -> {dst_pool_id}): {e}")
            raise NotSupportedTokensError() from e

        eq_fee, eq_reward, protocol_fee = int(fees[1]), int(fees[2]), int(fees[4])
        return pool_fee(eq_fee, protocol_fee, eq_reward, sd_decimals)

    async def fetch_multiple_pool_fees(
        self,
        from_blockchain: Blockchain,
        src_pool_ids: list[int],
        to_blockchain: Blockchain,
        dst_symbol: str,
        amount: Decimal,
    ) -> list[tuple[Decimal, int]]:
        """(fee, pool id) per source pool, cheapest first; failed probes cost infinity."""
        dst_pool_id = STARGATE_POOL_ID[dst_symbol]
        dst_chain_id = STARGATE_CHAIN_ID[to_blockchain]
        wallet = self.get_wallet_address() or EMPTY_ADDRESS

        web3_public = self.ctx.get_web3_public(from_blockchain)
        responses = await web3_public.multicall_contract_method(
            STARGATE_FEE_LIBRARY_ADDRESS[from_blockchain],
            STARGATE_FEE_LIBRARY_ABI,
            "getFees",
            [
                [
                    pool_id,
                    dst_pool_id,
                    dst_chain_id,
                    wallet,
                    to_wei(amount, STARGATE_POOL_DECIMALS[_POOL_SYMBOL[pool_id]]),
                ]
                for pool_id in src_pool_ids
            ],
        )

        fees = []
        for pool_id, response in zip(src_pool_ids, responses):
            if response.success and response.output:
                decimals = STARGATE_POOL_DECIMALS[_POOL_SYMBOL[pool_id]]
                fee = from_wei(int(response.output[1]) + int(response.output[4]), decimals)
            else:
                fee = Decimal("Infinity")
            fees.append((fee, pool_id))
        return sorted(fees)

    async def select_source_pool(
        self, from_without_fee: TokenAmount, dst_symbol: str, to_blockchain: Blockchain
    ) -> str:
        """Cheapest source pool symbol that bridges into `dst_symbol`."""
        from_blockchain = from_without_fee.blockchain
        directions = STARGATE_POOL_MAPPING.get(from_blockchain, {})
        candidates = [
            pool_id
            for pool_id in STARGATE_BLOCKCHAIN_SUPPORTED_POOLS[from_blockchain]
            if dst_symbol in directions.get(_POOL_SYMBOL[pool_id], {}).get(to_blockchain, [])
        ]
        if not candidates:
            raise NotSupportedTokensError()

        fees = await self.fetch_multiple_pool_fees(
            from_blockchain, candidates, to_blockchain, dst_symbol, from_without_fee.token_amount
        )
        best_fee, best_pool = fees[0]
        if best_fee.is_infinite():
            raise NotSupportedTokensError()
        logger.debug(f"Stargate source pool {best_pool} selected (fee {best_fee})")
        return _POOL_SYMBOL[best_pool]

    async def get_pool_token(self, pool_id: int, blockchain: Blockchain) -> Token:
        """Underlying token of a pool: router.factory() -> getPool(id) -> token()."""
        web3_public = self.ctx.get_web3_public(blockchain)
        factory_address = await web3_public.call_contract_method(
            STARGATE_ROUTER_ADDRESS[blockchain], STARGATE_ROUTER_ABI, "factory"
        )
        pool_address = await web3_public.call_contract_method(
            factory_address, STARGATE_FACTORY_ABI, "getPool", [pool_id]
        )
        token_address = await web3_public.call_contract_method(
            pool_address, STARGATE_POOL_ABI, "token"
        )
        decimals = await web3_public.get_token_decimals(token_address)
        return Token(
            blockchain=blockchain,
            address=token_address,
            symbol=_POOL_SYMBOL[pool_id],
            decimals=decimals,
        )

    async def get_layer_zero_fee(
        self,
        from_blockchain: Blockchain,
        to_blockchain: Blockchain,
        receiver_address: Optional[str],
        dst_swap_data: Optional[str] = None,
    ) -> int:
        """Native messaging fee in wei for one swap."""
        receiver = receiver_address or EMPTY_ADDRESS
        web3_public = self.ctx.get_web3_public(from_blockchain)
        fee = await web3_public.call_contract_method(
            STARGATE_ROUTER_ADDRESS[from_blockchain],
            STARGATE_ROUTER_ABI,
            "quoteLayerZeroFee",
            [
                STARGATE_CHAIN_ID[to_blockchain],
                TYPE_SWAP_REMOTE,
                receiver,
                dst_swap_data or b"",
                layer_zero_tx_params(receiver, to_blockchain, dst_swap_data is not None),
            ],
        )
        return int(fee[0])
