"""Proxy facade: the platform contract that charges fees and forwards provider calls.

Fee getters return parts per million. A registered integrator gets its own
fee settings, everyone else pays the platform defaults.
"""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from crossroute.chains import Blockchain, get_native_token
from crossroute.core.context import SdkContext
from crossroute.core.web3_public import Web3Public
from crossroute.core.web3_pure import (
    EMPTY_ADDRESS,
    compare_addresses,
    encode_function_call,
    from_wei,
    to_wei,
)
from crossroute.fees import FeeInfo, FixedFee, PlatformFee
from crossroute.tokens import Token, TokenAmount
from crossroute.transactions import TransactionConfig

logger = logging.getLogger(__name__)

PROXY_CONTRACT_ADDRESS = "0x3335733c454805df6a77f825f266e136FB4a3333"

FEE_DENOMINATOR = 1_000_000

_CROSS_CHAIN_PARAMS = {
    "name": "params",
    "type": "tuple",
    "components": [
        {"name": "srcInputToken", "type": "address"},
        {"name": "srcInputAmount", "type": "uint256"},
        {"name": "dstChainID", "type": "uint256"},
        {"name": "dstOutputToken", "type": "address"},
        {"name": "dstMinOutputAmount", "type": "uint256"},
        {"name": "recipient", "type": "address"},
        {"name": "integrator", "type": "address"},
        {"name": "router", "type": "address"},
    ],
}

_PRE_SWAP = {
    "name": "preSwap",
    "type": "tuple",
    "components": [
        {"name": "dex", "type": "address"},
        {"name": "transitToken", "type": "address"},
        {"name": "dexData", "type": "bytes"},
    ],
}


def _router_call(name: str) -> dict:
    return {
        "inputs": [
            _CROSS_CHAIN_PARAMS,
            _PRE_SWAP,
            {"name": "gateway", "type": "address"},
            {"name": "data", "type": "bytes"},
        ],
        "name": name,
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    }


PROXY_ABI = [
    {
        "inputs": [{"name": "", "type": "address"}],
        "name": "integratorToFeeInfo",
        "outputs": [
            {"name": "isIntegrator", "type": "bool"},
            {"name": "tokenFee", "type": "uint32"},
            {"name": "RubicTokenShare", "type": "uint32"},
            {"name": "RubicFixedFeeShare", "type": "uint32"},
            {"name": "fixedFeeAmount", "type": "uint128"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "fixedNativeFee",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "RubicPlatformFee",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    _router_call("routerCall"),
    _router_call("routerCallNative"),
]


@dataclass(frozen=True)
class ProviderCall:
    """Provider contract call, before any proxy wrapping.

    native_fee is the native value the provider needs on top of the
    principal (bridge or relayer fee).
    """

    gateway: str
    data: str
    native_fee: int = 0


@dataclass(frozen=True)
class PreSwap:
    """On-chain swap executed by the proxy before the bridge call."""

    dex: str
    transit_token: str
    dex_data: str


async def read_fees(web3_public: Web3Public, provider_address: str) -> tuple[int, int]:
    """(fixed fee in wei, platform fee in parts per million)."""
    if not compare_addresses(provider_address, EMPTY_ADDRESS):
        info = await web3_public.call_contract_method(
            PROXY_CONTRACT_ADDRESS, PROXY_ABI, "integratorToFeeInfo", [provider_address]
        )
        is_integrator, token_fee, _, _, fixed_fee_amount = info
        if is_integrator:
            return int(fixed_fee_amount), int(token_fee)

    fixed_fee, platform_fee = await asyncio.gather(
        web3_public.call_contract_method(PROXY_CONTRACT_ADDRESS, PROXY_ABI, "fixedNativeFee"),
        web3_public.call_contract_method(PROXY_CONTRACT_ADDRESS, PROXY_ABI, "RubicPlatformFee"),
    )
    return int(fixed_fee), int(platform_fee)


async def get_fee_info(
    ctx: SdkContext,
    blockchain: Blockchain,
    provider_address: str,
    percent_fee_token: Token,
    use_proxy: bool,
) -> FeeInfo:
    """Fixed and platform fees charged by the facade; empty when the proxy is off."""
    if not use_proxy:
        return FeeInfo()

    native = get_native_token(blockchain)
    fixed_fee_wei, fee_ppm = await read_fees(ctx.get_web3_public(blockchain), provider_address)
    logger.debug(
        f"Proxy fees on {blockchain.value}: fixed={fixed_fee_wei} wei, platform={fee_ppm} ppm"
    )
    return FeeInfo(
        fixed_fee=FixedFee(amount=from_wei(fixed_fee_wei, native.decimals), token_symbol=native.symbol),
        platform_fee=PlatformFee(
            percent=Decimal(fee_ppm) / FEE_DENOMINATOR, token_symbol=percent_fee_token.symbol
        ),
    )


def encode_router_call(
    from_amount: TokenAmount,
    to_amount_min: TokenAmount,
    dst_chain_id: int,
    receiver_address: str,
    provider_address: str,
    fee_info: FeeInfo,
    provider_call: ProviderCall,
    pre_swap: Optional[PreSwap] = None,
) -> TransactionConfig:
    """Wrap a provider call into routerCall / routerCallNative of the facade.

    The full input goes to the facade, which takes the platform fee from it.
    """
    fixed_fee_wei = 0
    if fee_info.fixed_fee:
        fixed_fee_wei = to_wei(
            fee_info.fixed_fee.amount, get_native_token(from_amount.blockchain).decimals
        )

    params = (
        from_amount.address,
        from_amount.wei_amount,
        dst_chain_id,
        to_amount_min.address,
        to_amount_min.wei_amount,
        receiver_address,
        provider_address,
        provider_call.gateway,
    )
    swap = (
        (pre_swap.dex, pre_swap.transit_token, pre_swap.dex_data)
        if pre_swap
        else (EMPTY_ADDRESS, EMPTY_ADDRESS, b"")
    )
    method = "routerCallNative" if from_amount.is_native else "routerCall"
    value = provider_call.native_fee + fixed_fee_wei
    if from_amount.is_native:
        value += from_amount.wei_amount

    return TransactionConfig(
        to=PROXY_CONTRACT_ADDRESS,
        data=encode_function_call(
            PROXY_ABI, method, [params, swap, provider_call.gateway, provider_call.data]
        ),
        value=value,
    )
