"""Pre-flight checks and approval helpers shared by cross-chain and on-chain trades.

Every check raises a typed SwapSdkError and runs before any transaction
is built.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from crossroute.chains import Blockchain
from crossroute.core.abi import ERC20_ABI
from crossroute.core.context import SdkContext
from crossroute.core.web3_private import Web3Private
from crossroute.core.web3_pure import MAX_UINT256, calculate_gas_margin, encode_function_call
from crossroute.errors import (
    SwapSdkError,
    WalletNotConnectedError,
    WrongFromAddressError,
    WrongReceiverAddressError,
)
from crossroute.tokens import TokenAmount
from crossroute.transactions import (
    BasicTransactionOptions,
    GasData,
    SwapTransactionOptions,
    TransactionConfig,
)
from crossroute.utils.address import is_address_correct

logger = logging.getLogger(__name__)


class TradeState(str, Enum):
    """Execution lifecycle of a trade. SUBMITTED is terminal."""

    QUOTED = "quoted"
    APPROVING = "approving"
    SWAPPING = "swapping"
    SUBMITTED = "submitted"


def check_wallet_connected(ctx: SdkContext) -> Web3Private:
    if ctx.web3_private is None or not ctx.web3_private.address:
        raise WalletNotConnectedError()
    return ctx.web3_private


async def check_balance(ctx: SdkContext, amount: TokenAmount, wallet_address: str) -> None:
    web3_public = ctx.get_web3_public(amount.blockchain)
    await web3_public.check_balance(amount, wallet_address)


async def check_trade_errors(ctx: SdkContext, from_amount: TokenAmount) -> None:
    """Wallet connected, wallet on the source chain, enough balance."""
    web3_private = check_wallet_connected(ctx)
    await web3_private.check_blockchain_correct(from_amount.blockchain)
    await check_balance(ctx, from_amount, web3_private.address)


def check_from_address(
    from_address: Optional[str], blockchain: Blockchain, is_required: bool = False
) -> None:
    if not from_address:
        if is_required:
            raise SwapSdkError("'from_address' is required option")
        return
    if not is_address_correct(from_address, blockchain):
        raise WrongFromAddressError()


def check_receiver_address(
    receiver_address: Optional[str], blockchain: Blockchain, is_required: bool = False
) -> None:
    if not receiver_address:
        if is_required:
            raise SwapSdkError("'receiver_address' is required option")
        return
    if not is_address_correct(receiver_address, blockchain):
        raise WrongReceiverAddressError()


async def need_approve(ctx: SdkContext, from_amount: TokenAmount, spender: str) -> bool:
    """True when the live allowance is below the trade input."""
    web3_private = check_wallet_connected(ctx)
    if from_amount.is_native:
        return False
    allowance = await ctx.get_web3_public(from_amount.blockchain).get_allowance(
        from_amount.address, web3_private.address, spender
    )
    return from_amount.wei_amount > allowance


def encode_approve(
    token_address: str, spender: str, amount: Optional[int] = None
) -> TransactionConfig:
    """Approve payload; unlimited when amount is None."""
    value = MAX_UINT256 if amount is None else amount
    data = encode_function_call(ERC20_ABI, "approve", [spender, value])
    return TransactionConfig(to=token_address, data=data)


async def get_approve_price(
    ctx: SdkContext, from_amount: TokenAmount, spender: str
) -> Optional[GasData]:
    """Gas needed for an unlimited approve, None if it cannot be estimated."""
    web3_private = check_wallet_connected(ctx)
    web3_public = ctx.get_web3_public(from_amount.blockchain)
    tx = encode_approve(from_amount.address, spender)
    gas_limit, gas_price = await asyncio.gather(
        web3_public.get_estimated_gas(web3_private.address, tx.to, tx.data),
        ctx.gas_price_api.get_gas_price(from_amount.blockchain),
    )
    if not gas_limit:
        return None
    return GasData(gas_limit=calculate_gas_margin(gas_limit), gas_price=gas_price)


async def approve(
    ctx: SdkContext,
    from_amount: TokenAmount,
    spender: str,
    options: Optional[BasicTransactionOptions] = None,
    check_need_approve: bool = True,
) -> Optional[str]:
    """Send an unlimited approve for `spender`.

    Returns the approve hash, or None when the allowance already covers the
    trade and check_need_approve is set.
    """
    if check_need_approve and not await need_approve(ctx, from_amount, spender):
        return None
    web3_private = check_wallet_connected(ctx)
    await web3_private.check_blockchain_correct(from_amount.blockchain)
    return await web3_private.approve_tokens(from_amount.address, spender, options=options)


async def approve_before_swap(
    ctx: SdkContext, from_amount: TokenAmount, spender: str, options: SwapTransactionOptions
) -> Optional[str]:
    """Approve when needed as the first step of a swap; reports through on_approve."""
    tx_hash = None
    if await need_approve(ctx, from_amount, spender):
        tx_hash = await approve(
            ctx,
            from_amount,
            spender,
            BasicTransactionOptions(gas_limit=options.approve_gas_limit, gas_price=options.gas_price),
            check_need_approve=False,
        )
    if options.on_approve:
        options.on_approve(tx_hash)
    return tx_hash
