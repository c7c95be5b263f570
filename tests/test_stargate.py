"""Tests for the Stargate provider and trade."""

import time
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from web3.exceptions import ContractLogicError

from crossroute.chains import Blockchain
from crossroute.core.web3_pure import EMPTY_ADDRESS, encode_function_call
from crossroute.cross_chain.models import CrossChainOptions, CrossChainTradeType
from crossroute.cross_chain.proxy import PROXY_ABI, PROXY_CONTRACT_ADDRESS
from crossroute.cross_chain.stargate import StargateProvider, StargateTrade
from crossroute.cross_chain.stargate.abi import STARGATE_ROUTER_ABI
from crossroute.cross_chain.stargate.constants import (
    DST_GAS_FOR_CALL,
    STARGATE_RELAYER_ADDRESS,
    STARGATE_ROUTER_ADDRESS,
    STARGATE_SUPPORTED_BLOCKCHAINS,
)
from crossroute.cross_chain.stargate.trade import layer_zero_tx_params
from crossroute.errors import ErrorKind, NotSupportedTokensError
from crossroute.on_chain.manager import OnChainManager
from crossroute.on_chain.models import OnChainTradeType
from crossroute.on_chain.trade import OnChainTrade
from crossroute.tokens import TokenAmount
from crossroute.transactions import EncodeTransactionOptions

from conftest import USDC_ETH
from fakes import RECEIVER, WALLET

FACTORY = "0x00000000000000000000000000000000000000fA"
POOL = "0x00000000000000000000000000000000000000Fb"
USDC_ARB = "0xaf88d065e77c8cC2239327C5EDb3A432268e5831"
SUSHI = "0x1b02dA8Cb0d097eB8D57A175b88c7D8b47997506"

LZ_FEE_WEI = 10**15


def fee_struct(eq_fee: int = 0, eq_reward: int = 0, protocol_fee: int = 0) -> tuple:
    """getFees output: (amount, eqFee, eqReward, lpFee, protocolFee, lkbRemove)."""
    return (0, eq_fee, eq_reward, 0, protocol_fee, 0)


def fake_dex_trade(ctx, amount_out: Decimal):
    """calculate_best replacement producing a fixed output amount."""

    async def calculate_best(from_amount, to_token, slippage_tolerance, deadline_minutes=None):
        return OnChainTrade(
            ctx=ctx,
            trade_type=OnChainTradeType.UNISWAP_V2,
            from_amount=from_amount,
            to_amount=TokenAmount.from_token_amount(to_token, amount_out),
            path=[from_amount.address, to_token.address],
            router_address=SUSHI,
            slippage_tolerance=slippage_tolerance,
        )

    return calculate_best


@pytest.fixture
def stargate_eth(eth, proxy_fees):
    """ETH side answering the fee library and the LayerZero quote."""
    eth.on("getFees", fee_struct(eq_fee=5_000_000, eq_reward=1_000_000, protocol_fee=2_000_000))
    eth.on("quoteLayerZeroFee", (LZ_FEE_WEI, 0))
    return eth


class TestDirectBridge:
    """Tests for pool-token to pool-token bridging."""

    @pytest.mark.asyncio
    async def test_usdt_eth_to_arbitrum(self, ctx, stargate_eth, usdt_eth, usdt_arb):
        """1000 USDT minus 0.1% platform fee minus a 6 USDT pool fee."""
        provider = StargateProvider(ctx)
        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("1000")), usdt_arb
        )

        assert result.is_success, result.error
        trade = result.trade
        assert isinstance(trade, StargateTrade)
        assert trade.to_amount.token_amount == Decimal("993")
        assert trade.to_token_amount_min.token_amount == Decimal("973.14")
        assert trade.network_fee == Decimal("0.001")
        assert trade.fee_info.platform_fee.percent == Decimal("0.001")
        assert trade.src_pool_id == 2
        assert trade.dst_pool_id == 2
        assert trade.src_trade is None

        (_, args), = stargate_eth.called("getFees")
        assert args == [2, 2, 110, EMPTY_ADDRESS, 999_000_000]

    @pytest.mark.asyncio
    async def test_layer_zero_quote_without_payload(self, ctx, stargate_eth, usdt_eth, usdt_arb):
        """Without a destination swap the message carries no payload."""
        provider = StargateProvider(ctx)
        await provider.calculate(TokenAmount.from_token_amount(usdt_eth, Decimal("1000")), usdt_arb)

        (address, args), = stargate_eth.called("quoteLayerZeroFee")
        assert address == STARGATE_ROUTER_ADDRESS[Blockchain.ETHEREUM]
        assert args == [110, 1, EMPTY_ADDRESS, b"", (0, 0, EMPTY_ADDRESS)]

    @pytest.mark.asyncio
    async def test_calculation_is_repeatable(self, ctx, stargate_eth, usdt_eth, usdt_arb):
        """Same on-chain state gives the same quote."""
        provider = StargateProvider(ctx)
        from_amount = TokenAmount.from_token_amount(usdt_eth, Decimal("1000"))

        first = await provider.calculate(from_amount, usdt_arb)
        second = await provider.calculate(from_amount, usdt_arb)

        assert first.trade.to_amount == second.trade.to_amount
        assert first.trade.to_token_amount_min == second.trade.to_token_amount_min

    @pytest.mark.asyncio
    async def test_pool_fee_above_amount(self, ctx, eth, proxy_fees, usdt_eth, usdt_arb):
        """Fee larger than the transit amount is reported as a minimum amount."""
        eth.on("getFees", fee_struct(eq_fee=2_000_000_000))
        provider = StargateProvider(ctx)

        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("1000")), usdt_arb
        )

        assert not result.is_success
        assert result.error.kind == ErrorKind.MIN_AMOUNT
        assert result.error.min_amount == Decimal("2000")
        assert result.error.token_symbol == "USDT"
        assert eth.called("quoteLayerZeroFee") == []

    @pytest.mark.asyncio
    async def test_fee_library_revert(self, ctx, eth, proxy_fees, usdt_eth, usdt_arb):
        """A reverted getFees means the pair is not bridgeable."""
        eth.on("getFees", ContractLogicError("execution reverted"))
        provider = StargateProvider(ctx)

        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("1000")), usdt_arb
        )

        assert result.error.kind == ErrorKind.NOT_SUPPORTED_TOKENS


class TestUnsupportedPairs:
    """Tests for pairs rejected before any fee lookup."""

    @pytest.mark.asyncio
    async def test_same_blockchain(self, ctx, eth, usdt_eth, usdc_eth):
        """Both tokens on one chain is not a cross-chain trade."""
        provider = StargateProvider(ctx)
        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("10")), usdc_eth
        )

        assert result.error.kind == ErrorKind.NOT_SUPPORTED_TOKENS
        assert result.trade_type == CrossChainTradeType.STARGATE
        assert eth.calls == []

    @pytest.mark.asyncio
    async def test_destination_token_without_pool(self, ctx, eth, usdt_eth, link_arb):
        """A destination token with no pool fails without a LayerZero quote."""
        provider = StargateProvider(ctx)
        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("10")), link_arb
        )

        assert result.error.kind == ErrorKind.NOT_SUPPORTED_TOKENS
        assert eth.called("quoteLayerZeroFee") == []

    @pytest.mark.asyncio
    async def test_pre_swap_needs_proxy(self, ctx, eth, link_eth, usdt_arb):
        """A non-pool input token can only be bridged through the proxy pre-swap."""
        provider = StargateProvider(ctx)
        options = CrossChainOptions(use_proxy={CrossChainTradeType.STARGATE: False})

        result = await provider.calculate(
            TokenAmount.from_token_amount(link_eth, Decimal("10")), usdt_arb, options
        )

        assert result.error.kind == ErrorKind.NOT_SUPPORTED_TOKENS
        assert eth.calls == []

    def test_has_direct_route(self, usdt_eth, link_eth):
        """Direct routes exist only between pool tokens."""
        assert StargateProvider.has_direct_route(usdt_eth, "USDT", Blockchain.ARBITRUM)
        assert StargateProvider.has_direct_route(usdt_eth, "USDC", Blockchain.ARBITRUM)
        assert not StargateProvider.has_direct_route(link_eth, "USDT", Blockchain.ARBITRUM)

        with pytest.raises(NotSupportedTokensError):
            StargateProvider.has_direct_route(usdt_eth, "BUSD", Blockchain.ARBITRUM)


class TestSourcePoolSelection:
    """Tests for picking the cheapest source pool."""

    @pytest.mark.asyncio
    async def test_fees_sorted_with_failed_probe_last(self, ctx, eth):
        """Equal fees keep pool id order; a reverted probe costs infinity."""

        def get_fees(address, args):
            pool_id = args[0]
            if pool_id == 1:
                return fee_struct(eq_fee=3_000_000, protocol_fee=1_000_000)
            if pool_id == 2:
                return fee_struct(eq_fee=2_000_000, protocol_fee=2_000_000)
            return ContractLogicError("execution reverted")

        eth.on("getFees", get_fees)
        provider = StargateProvider(ctx)

        fees = await provider.fetch_multiple_pool_fees(
            Blockchain.ETHEREUM, [3, 2, 1], Blockchain.ARBITRUM, "USDT", Decimal("100")
        )

        assert fees == [(Decimal("4"), 1), (Decimal("4"), 2), (Decimal("Infinity"), 3)]
        probed = {args[0]: args for _, args in eth.called("getFees")}
        assert probed[1] == [1, 2, 110, EMPTY_ADDRESS, 100_000_000]

    @pytest.mark.asyncio
    async def test_all_probes_failing(self, ctx, eth, link_eth):
        """No pool with a finite fee means the pair is not supported."""
        eth.on("getFees", ContractLogicError("execution reverted"))
        provider = StargateProvider(ctx)

        with pytest.raises(NotSupportedTokensError):
            await provider.select_source_pool(
                TokenAmount.from_token_amount(link_eth, Decimal("1")), "USDT", Blockchain.ARBITRUM
            )


class TestProxySwaps:
    """Tests for on-chain swaps around the bridge hop."""

    @pytest.mark.asyncio
    async def test_pre_swap_into_cheapest_pool(self, ctx, eth, proxy_fees, link_eth, usdt_arb):
        """LINK is swapped into USDC, the cheaper pool, before bridging."""

        def get_fees(address, args):
            if args[0] == 1:
                return fee_struct(eq_fee=1_000_000, protocol_fee=500_000)
            return fee_struct(eq_fee=3_000_000)

        eth.on("getFees", get_fees)
        eth.on("factory", FACTORY)
        eth.on("getPool", POOL)
        eth.on("token", USDC_ETH)
        eth.on("decimals", 6)
        eth.on("quoteLayerZeroFee", (LZ_FEE_WEI, 0))

        manager = OnChainManager(ctx)
        manager.calculate_best = AsyncMock(side_effect=fake_dex_trade(ctx, Decimal("150")))
        provider = StargateProvider(ctx, manager)

        result = await provider.calculate(
            TokenAmount.from_token_amount(link_eth, Decimal("10")),
            usdt_arb,
            CrossChainOptions(slippage_tolerance=Decimal("0.02")),
        )

        assert result.is_success, result.error
        trade = result.trade
        assert trade.src_pool_id == 1
        assert trade.it_type.from_type == OnChainTradeType.UNISWAP_V2

        # 150 USDC minus half the slippage, minus the 1.5 USDC pool fee
        assert trade.to_amount.token_amount == Decimal("147")
        assert trade.transit_amount.token_amount == Decimal("148.5")
        assert trade.bridge_amount_min_wei == 145_530_000

        from_amount, transit_token, slippage = manager.calculate_best.call_args.args
        assert from_amount.token_amount == Decimal("9.99")
        assert transit_token.address == USDC_ETH
        assert slippage == Decimal("0.01")

        (_, args), = [call for call in eth.called("getFees") if call[1][4] == 148_500_000]
        assert args == [1, 2, 110, EMPTY_ADDRESS, 148_500_000]

    @pytest.mark.asyncio
    async def test_destination_swap(self, ctx, stargate_eth, arbitrum, usdt_eth, link_arb, monkeypatch):
        """Bridged USDC is swapped into the requested token on arrival."""
        monkeypatch.setattr(time, "time", lambda: 1_700_000_000)
        arbitrum.on("factory", FACTORY)
        arbitrum.on("getPool", POOL)
        arbitrum.on("token", USDC_ARB)
        arbitrum.on("decimals", 6)

        manager = OnChainManager(ctx)
        manager.calculate_best = AsyncMock(side_effect=fake_dex_trade(ctx, Decimal("60")))
        provider = StargateProvider(ctx, manager)

        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("1000")),
            link_arb,
            CrossChainOptions(enable_destination_swap=True),
        )

        assert result.is_success, result.error
        trade = result.trade
        assert trade.dst_pool_id == 1
        assert trade.to_amount.token == link_arb
        assert trade.to_amount.token_amount == Decimal("60")
        assert trade.it_type.to_type == OnChainTradeType.UNISWAP_V2

        bridged = manager.calculate_best.call_args.args[0]
        assert bridged.token_amount == Decimal("993")

        (_, args), = stargate_eth.called("quoteLayerZeroFee")
        assert args[3] != b""
        assert args[4] == (DST_GAS_FOR_CALL, 0, STARGATE_RELAYER_ADDRESS[Blockchain.ARBITRUM])

        relayer = STARGATE_RELAYER_ADDRESS[Blockchain.ARBITRUM]
        provider_call = await trade.get_provider_call(WALLET, RECEIVER)
        assert provider_call.data == encode_function_call(
            STARGATE_ROUTER_ABI,
            "swap",
            [
                110,
                trade.src_pool_id,
                1,
                WALLET,
                trade.transit_amount.wei_amount,
                trade.bridge_amount_min_wei,
                (DST_GAS_FOR_CALL, 0, relayer),
                relayer,
                trade.get_dst_swap_data(RECEIVER),
            ],
        )


class TestStargateTrade:
    """Tests for transaction encoding."""

    @pytest.mark.asyncio
    async def test_encode_through_proxy(self, ctx, stargate_eth, usdt_eth, usdt_arb):
        """Proxy wrapping sends the LayerZero fee as value to the facade."""
        provider = StargateProvider(ctx)
        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("1000")), usdt_arb
        )
        trade = result.trade

        tx = await trade.encode(EncodeTransactionOptions(from_address=WALLET))
        provider_call = await trade.get_provider_call(WALLET, WALLET)

        assert tx.to == PROXY_CONTRACT_ADDRESS
        assert tx.value == LZ_FEE_WEI
        assert provider_call.gateway == STARGATE_ROUTER_ADDRESS[Blockchain.ETHEREUM]
        assert tx.data == encode_function_call(
            PROXY_ABI,
            "routerCall",
            [
                (
                    usdt_eth.address,
                    1_000_000_000,
                    42161,
                    usdt_arb.address,
                    973_140_000,
                    WALLET,
                    EMPTY_ADDRESS,
                    provider_call.gateway,
                ),
                (EMPTY_ADDRESS, EMPTY_ADDRESS, b""),
                provider_call.gateway,
                provider_call.data,
            ],
        )

    @pytest.mark.asyncio
    async def test_encode_direct_to_router(self, ctx, stargate_eth, usdt_eth, usdt_arb):
        """Without the proxy the router is called directly with the full amount."""
        provider = StargateProvider(ctx)
        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("1000")),
            usdt_arb,
            CrossChainOptions(use_proxy={CrossChainTradeType.STARGATE: False}),
        )
        trade = result.trade
        assert trade.fee_info.platform_fee is None
        assert trade.to_amount.token_amount == Decimal("994")
        assert trade.spender == STARGATE_ROUTER_ADDRESS[Blockchain.ETHEREUM]

        tx = await trade.encode(EncodeTransactionOptions(from_address=WALLET))

        assert tx.to == STARGATE_ROUTER_ADDRESS[Blockchain.ETHEREUM]
        assert tx.value == LZ_FEE_WEI
        assert tx.data == encode_function_call(
            STARGATE_ROUTER_ABI,
            "swap",
            [110, 2, 2, WALLET, 1_000_000_000, 974_120_000, (0, 0, WALLET), WALLET, b""],
        )

    def test_layer_zero_tx_params(self):
        """Payload swaps reserve destination gas and target the destination relayer."""
        assert layer_zero_tx_params(WALLET, Blockchain.ARBITRUM, has_payload=False) == (0, 0, WALLET)
        assert layer_zero_tx_params(WALLET, Blockchain.OPTIMISM, has_payload=True) == (
            DST_GAS_FOR_CALL,
            0,
            STARGATE_RELAYER_ADDRESS[Blockchain.OPTIMISM],
        )

    def test_relayer_on_every_chain(self):
        assert set(STARGATE_RELAYER_ADDRESS) == set(STARGATE_SUPPORTED_BLOCKCHAINS)
        assert STARGATE_RELAYER_ADDRESS[Blockchain.ARBITRUM] == PROXY_CONTRACT_ADDRESS

    @pytest.mark.asyncio
    async def test_to_dict(self, ctx, stargate_eth, usdt_eth, usdt_arb):
        provider = StargateProvider(ctx)
        result = await provider.calculate(
            TokenAmount.from_token_amount(usdt_eth, Decimal("1000")), usdt_arb
        )

        data = result.to_dict()
        assert data["trade_type"] == "STARGATE"
        assert data["error"] is None
        assert Decimal(data["trade"]["to_amount"]) == Decimal("993")
        assert Decimal(data["trade"]["network_fee"]) == Decimal("0.001")
        assert data["trade"]["src_pool_id"] == 2
