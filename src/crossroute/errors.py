"""Error taxonomy shared by providers, trades and the quote API.

Every provider-facing failure is converted to one of these types by
parse_error() before it leaves a provider's calculate().
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Optional

import httpx
from pydantic import ValidationError
from web3.exceptions import ContractLogicError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Closed set of error classifications."""

    NOT_SUPPORTED_TOKENS = "not_supported_tokens"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    MIN_AMOUNT = "min_amount"
    WALLET_NOT_CONNECTED = "wallet_not_connected"
    WRONG_FROM_ADDRESS = "wrong_from_address"
    WRONG_RECEIVER_ADDRESS = "wrong_receiver_address"
    WRONG_NETWORK = "wrong_network"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN = "unknown"


class SwapSdkError(Exception):
    """Base error for all SDK failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_message = "Unknown error."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class UnknownError(SwapSdkError):
    """Unclassified failure (network, decode, unexpected revert)."""


class NotSupportedTokensError(SwapSdkError):
    kind = ErrorKind.NOT_SUPPORTED_TOKENS
    default_message = "Tokens are not supported."


class InsufficientLiquidityError(SwapSdkError):
    kind = ErrorKind.INSUFFICIENT_LIQUIDITY
    default_message = "Insufficient liquidity."


class MinAmountError(SwapSdkError):
    """Upstream requires a larger input amount."""

    kind = ErrorKind.MIN_AMOUNT

    def __init__(self, min_amount: Decimal, token_symbol: str):
        self.min_amount = min_amount
        self.token_symbol = token_symbol
        super().__init__(f"Minimum amount is {min_amount} {token_symbol}.")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["min_amount"] = str(self.min_amount)
        data["token_symbol"] = self.token_symbol
        return data


class WalletNotConnectedError(SwapSdkError):
    kind = ErrorKind.WALLET_NOT_CONNECTED
    default_message = "Wallet is not connected."


class WrongFromAddressError(SwapSdkError):
    kind = ErrorKind.WRONG_FROM_ADDRESS
    default_message = "Invalid 'from' address."


class WrongReceiverAddressError(SwapSdkError):
    kind = ErrorKind.WRONG_RECEIVER_ADDRESS
    default_message = "Invalid receiver address."


class WrongNetworkError(SwapSdkError):
    """Connected wallet is on a different chain than the trade source."""

    kind = ErrorKind.WRONG_NETWORK

    def __init__(self, required: str, actual: Optional[int] = None):
        self.required = required
        self.actual = actual
        super().__init__(f"Wallet must be connected to {required} (current chain id: {actual}).")


class InsufficientFundsError(SwapSdkError):
    """Wallet balance is lower than the trade input."""

    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, token_symbol: str, balance: Decimal, required: Decimal):
        self.token_symbol = token_symbol
        self.balance = balance
        self.required = required
        super().__init__(
            f"Insufficient {token_symbol} balance: have {balance}, need {required}."
        )


# Revert reasons that indicate a depth problem rather than a generic failure
_LIQUIDITY_MARKERS = (
    "insufficient_liquidity",
    "insufficient liquidity",
    "insufficient_output_amount",
)


def parse_error(err: BaseException) -> SwapSdkError:
    """Classify any exception into an SDK error.

    SDK errors pass through unchanged. Everything else maps to a kind based
    on where it came from: HTTP transport, contract reverts or malformed
    upstream payloads.
    """
    if isinstance(err, SwapSdkError):
        return err

    if isinstance(err, ContractLogicError):
        message = str(err)
        if any(marker in message.lower() for marker in _LIQUIDITY_MARKERS):
            return InsufficientLiquidityError()
        return UnknownError(f"Contract call reverted: {message}")

    if isinstance(err, httpx.HTTPStatusError):
        return UnknownError(f"Fetch failed: HTTP {err.response.status_code}")

    if isinstance(err, httpx.HTTPError):
        return UnknownError(f"Fetch failed: {type(err).__name__}")

    if isinstance(err, ValidationError):
        return UnknownError("Malformed provider response.")

    logger.debug(f"Unclassified error: {type(err).__name__}: {err}")
    return UnknownError(str(err) or UnknownError.default_message)
