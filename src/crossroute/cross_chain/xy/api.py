"""XY Finance /swap endpoint: request building and status handling."""

import logging
from decimal import Decimal
from typing import Optional

from crossroute.chains import get_chain_id
from crossroute.core.context import SdkContext
from crossroute.cross_chain.xy.constants import XY_NATIVE_ADDRESS
from crossroute.cross_chain.xy.models import XyStatusCode, XyTransactionResponse
from crossroute.errors import InsufficientLiquidityError, MinAmountError, UnknownError
from crossroute.tokens import Token, TokenAmount

logger = logging.getLogger(__name__)


def xy_token_address(token: Token) -> str:
    return XY_NATIVE_ADDRESS if token.is_native else token.address


def build_swap_params(
    from_amount: TokenAmount,
    to_token: Token,
    slippage_tolerance: Decimal,
    receiver_address: str,
) -> dict:
    """Query parameters for /swap; slippage is sent in percent."""
    slippage_percent = (slippage_tolerance * 100).normalize()
    return {
        "srcChainId": str(get_chain_id(from_amount.blockchain)),
        "fromTokenAddress": xy_token_address(from_amount.token),
        "amount": from_amount.string_wei_amount,
        "slippage": format(slippage_percent, "f"),
        "destChainId": str(get_chain_id(to_token.blockchain)),
        "toTokenAddress": xy_token_address(to_token),
        "receiveAddress": receiver_address,
    }


async def fetch_swap(
    ctx: SdkContext, params: dict, timeout: Optional[float] = None
) -> XyTransactionResponse:
    url = f"{ctx.settings.xy_api_url.rstrip('/')}/swap"
    data = await ctx.http_client.get(url, params=params, timeout=timeout)
    return XyTransactionResponse.model_validate(data)


def analyze_status_code(code: Optional[str], message: str) -> None:
    """Raise the SDK error matching a non-OK status code.

    Min-amount messages end with "... to <amount> <symbol>." and both
    values are parsed out of that tail.
    """
    try:
        status = XyStatusCode(code)
    except ValueError:
        raise UnknownError(f"XY returned unknown status {code!r}: {message}") from None

    if status == XyStatusCode.OK:
        return
    if status in (XyStatusCode.INSUFFICIENT_LIQUIDITY, XyStatusCode.NO_ROUTE):
        raise InsufficientLiquidityError()
    if status == XyStatusCode.MIN_AMOUNT:
        try:
            min_amount, token_symbol = message.split("to ")[1][:-1].split(" ")
            min_amount = Decimal(min_amount)
        except (IndexError, ValueError, ArithmeticError):
            logger.debug(f"Unparseable XY min amount message: {message}")
            raise UnknownError(f"XY minimum amount error: {message}") from None
        raise MinAmountError(min_amount=min_amount, token_symbol=token_symbol)

    raise UnknownError()
