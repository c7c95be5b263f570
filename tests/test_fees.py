"""Tests for the fee model and the proxy fee reads."""

from decimal import Decimal

import pytest

from crossroute.chains import Blockchain
from crossroute.core.web3_pure import EMPTY_ADDRESS, encode_function_call
from crossroute.cross_chain.proxy import (
    PROXY_ABI,
    PROXY_CONTRACT_ADDRESS,
    PreSwap,
    ProviderCall,
    encode_router_call,
    get_fee_info,
    read_fees,
)
from crossroute.fees import (
    CryptoFee,
    FeeInfo,
    FixedFee,
    PlatformFee,
    get_from_without_fee,
    network_fee,
    pool_fee,
)
from crossroute.tokens import Token, TokenAmount

from fakes import RECEIVER

INTEGRATOR = "0x3333333333333333333333333333333333333333"
GATEWAY = "0x4444444444444444444444444444444444444444"
DEX = "0x5555555555555555555555555555555555555555"


class TestNetworkFee:
    """Tests for summing native fee components."""

    def test_sum(self):
        fee_info = FeeInfo(
            fixed_fee=FixedFee(Decimal("0.001"), "ETH"),
            crypto_fee=CryptoFee(Decimal("0.0025"), "ETH"),
        )

        assert network_fee(fee_info) == Decimal("0.0035")
        assert fee_info.network_fee == Decimal("0.0035")

    def test_full_native_precision(self):
        fee_info = FeeInfo(
            fixed_fee=FixedFee(Decimal("0.123456789012345678"), "ETH"),
            crypto_fee=CryptoFee(Decimal("0.000000000000000001"), "ETH"),
        )

        assert network_fee(fee_info) == Decimal("0.123456789012345679")

    def test_large_fees_keep_wei_digits(self):
        fee_info = FeeInfo(
            fixed_fee=FixedFee(Decimal("123456789.000000000000000001"), "BNB"),
            crypto_fee=CryptoFee(Decimal("0.999999999999999999"), "BNB"),
        )

        assert network_fee(fee_info) == Decimal("123456790")

    def test_empty(self):
        assert network_fee(FeeInfo()) == Decimal("0")

    def test_mixed_denominations(self):
        fee_info = FeeInfo(
            fixed_fee=FixedFee(Decimal("0.001"), "ETH"),
            crypto_fee=CryptoFee(Decimal("1"), "USDT"),
        )

        with pytest.raises(ValueError):
            network_fee(fee_info)

    def test_zero_component_ignored(self):
        """A zero fixed fee does not clash with a fee in another coin."""
        fee_info = FeeInfo(
            fixed_fee=FixedFee(Decimal("0"), "ETH"),
            crypto_fee=CryptoFee(Decimal("1"), "USDT"),
        )

        assert network_fee(fee_info) == Decimal("1")

    def test_platform_fee_not_included(self):
        fee_info = FeeInfo(platform_fee=PlatformFee(Decimal("0.003"), "USDT"))

        assert network_fee(fee_info) == Decimal("0")
        assert fee_info.platform_fee_percent == Decimal("0.003")


class TestFeeComponents:
    def test_platform_fee_range(self):
        with pytest.raises(ValueError):
            PlatformFee(Decimal("1"), "USDT")
        with pytest.raises(ValueError):
            PlatformFee(Decimal("-0.1"), "USDT")

    def test_pool_fee(self):
        assert pool_fee(5_000_000, 2_000_000, 1_000_000, 6) == Decimal("6")

    def test_pool_fee_reward_exceeds_fees(self):
        assert pool_fee(1_000_000, 0, 3_000_000, 6) == Decimal("-2")

    def test_with_crypto_fee_keeps_other_components(self):
        fee_info = FeeInfo(fixed_fee=FixedFee(Decimal("0.001"), "ETH"))

        updated = fee_info.with_crypto_fee(CryptoFee(Decimal("0.002"), "ETH"))

        assert updated.fixed_fee == fee_info.fixed_fee
        assert fee_info.crypto_fee is None
        assert updated.to_dict()["crypto_fee"] == {"amount": "0.002", "token_symbol": "ETH"}

    def test_from_without_fee(self, usdt_eth):
        amount = TokenAmount.from_token_amount(usdt_eth, Decimal("1000"))

        assert get_from_without_fee(amount, Decimal("0.001")).token_amount == Decimal("999")
        assert get_from_without_fee(amount, None) is amount
        assert get_from_without_fee(amount, Decimal("0")) is amount

    def test_from_without_fee_truncates(self, usdt_eth):
        amount = TokenAmount(usdt_eth, 1)

        assert get_from_without_fee(amount, Decimal("0.5")).wei_amount == 0


class TestProxyFees:
    """Tests for fee reads from the proxy contract."""

    @pytest.mark.asyncio
    async def test_platform_defaults(self, eth, proxy_fees):
        proxy_fees(fixed_wei=10**15, platform_ppm=3000)

        assert await read_fees(eth, EMPTY_ADDRESS) == (10**15, 3000)
        assert eth.called("integratorToFeeInfo") == []

    @pytest.mark.asyncio
    async def test_integrator_fees(self, eth, proxy_fees):
        eth.on("integratorToFeeInfo", (True, 2000, 0, 0, 5 * 10**14))

        assert await read_fees(eth, INTEGRATOR) == (5 * 10**14, 2000)
        (address, args), = eth.called("integratorToFeeInfo")
        assert address == PROXY_CONTRACT_ADDRESS
        assert args == [INTEGRATOR]

    @pytest.mark.asyncio
    async def test_unregistered_integrator(self, eth, proxy_fees):
        eth.on("integratorToFeeInfo", (False, 0, 0, 0, 0))

        assert await read_fees(eth, INTEGRATOR) == (0, 1000)

    @pytest.mark.asyncio
    async def test_fee_info(self, ctx, proxy_fees, usdt_eth):
        proxy_fees(fixed_wei=10**15, platform_ppm=2500)

        fee_info = await get_fee_info(ctx, Blockchain.ETHEREUM, EMPTY_ADDRESS, usdt_eth, True)

        assert fee_info.fixed_fee == FixedFee(Decimal("0.001"), "ETH")
        assert fee_info.platform_fee == PlatformFee(Decimal("0.0025"), "USDT")
        assert fee_info.crypto_fee is None

    @pytest.mark.asyncio
    async def test_fee_info_without_proxy(self, ctx, eth, usdt_eth):
        fee_info = await get_fee_info(ctx, Blockchain.ETHEREUM, EMPTY_ADDRESS, usdt_eth, False)

        assert fee_info == FeeInfo()
        assert eth.calls == []


class TestRouterCall:
    """Tests for wrapping provider calls into the proxy."""

    def test_native_input(self, usdt_arb):
        from_amount = TokenAmount.from_token_amount(Token.native(Blockchain.ETHEREUM), Decimal("1"))
        to_min = TokenAmount.from_token_amount(usdt_arb, Decimal("1800"))
        fee_info = FeeInfo(fixed_fee=FixedFee(Decimal("0.001"), "ETH"))
        call = ProviderCall(gateway=GATEWAY, data="0x01", native_fee=300)

        tx = encode_router_call(from_amount, to_min, 42161, RECEIVER, EMPTY_ADDRESS, fee_info, call)

        assert tx.to == PROXY_CONTRACT_ADDRESS
        assert tx.value == 300 + 10**15 + 10**18
        assert tx.data == encode_function_call(
            PROXY_ABI,
            "routerCallNative",
            [
                (EMPTY_ADDRESS, 10**18, 42161, usdt_arb.address, 1_800_000_000, RECEIVER, EMPTY_ADDRESS, GATEWAY),
                (EMPTY_ADDRESS, EMPTY_ADDRESS, b""),
                GATEWAY,
                "0x01",
            ],
        )

    def test_token_input_with_pre_swap(self, link_eth, usdt_arb):
        from_amount = TokenAmount.from_token_amount(link_eth, Decimal("2"))
        to_min = TokenAmount.from_token_amount(usdt_arb, Decimal("25"))
        pre_swap = PreSwap(dex=DEX, transit_token=GATEWAY, dex_data="0xabcd")
        call = ProviderCall(gateway=GATEWAY, data="0x02")

        tx = encode_router_call(
            from_amount, to_min, 42161, RECEIVER, EMPTY_ADDRESS, FeeInfo(), call, pre_swap
        )

        assert tx.value == 0
        assert tx.data == encode_function_call(
            PROXY_ABI,
            "routerCall",
            [
                (link_eth.address, 2 * 10**18, 42161, usdt_arb.address, 25_000_000, RECEIVER, EMPTY_ADDRESS, GATEWAY),
                (DEX, GATEWAY, "0xabcd"),
                GATEWAY,
                "0x02",
            ],
        )
