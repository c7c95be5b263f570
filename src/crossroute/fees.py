"""Fee model.

Pure computations over fee components. The on-chain reads that feed these
functions live in the proxy facade module and in each provider.
"""

from dataclasses import dataclass, replace
from decimal import Decimal, localcontext
from typing import Optional

from crossroute.core.web3_pure import DECIMAL_PRECISION, from_wei
from crossroute.tokens import TokenAmount


@dataclass(frozen=True)
class FixedFee:
    """Flat fee in the source chain's native coin."""

    amount: Decimal
    token_symbol: str


@dataclass(frozen=True)
class PlatformFee:
    """Percentage fee taken from the input principal (0.001 = 0.1%)."""

    percent: Decimal
    token_symbol: str

    def __post_init__(self):
        if not Decimal(0) <= self.percent < Decimal(1):
            raise ValueError(f"Platform fee percent must be in [0, 1), got {self.percent}")


@dataclass(frozen=True)
class CryptoFee:
    """Bridge/relayer fee paid in native coin to the messaging layer."""

    amount: Decimal
    token_symbol: str


@dataclass(frozen=True)
class FeeInfo:
    """All fee components of a trade. Each one is optional and independent."""

    fixed_fee: Optional[FixedFee] = None
    platform_fee: Optional[PlatformFee] = None
    crypto_fee: Optional[CryptoFee] = None

    @property
    def network_fee(self) -> Decimal:
        return network_fee(self)

    @property
    def platform_fee_percent(self) -> Decimal:
        return self.platform_fee.percent if self.platform_fee else Decimal("0")

    def with_crypto_fee(self, crypto_fee: Optional[CryptoFee]) -> "FeeInfo":
        return replace(self, crypto_fee=crypto_fee)

    def to_dict(self) -> dict:
        def _amount(fee):
            if fee is None:
                return None
            return {"amount": str(fee.amount), "token_symbol": fee.token_symbol}

        return {
            "fixed_fee": _amount(self.fixed_fee),
            "platform_fee": (
                {
                    "percent": str(self.platform_fee.percent),
                    "token_symbol": self.platform_fee.token_symbol,
                }
                if self.platform_fee
                else None
            ),
            "crypto_fee": _amount(self.crypto_fee),
        }


def network_fee(fee_info: FeeInfo) -> Decimal:
    """Sum of fixed and crypto fees.

    Both are native-coin amounts; a zero component does not participate
    in the denomination check.
    """
    parts = [
        fee
        for fee in (fee_info.fixed_fee, fee_info.crypto_fee)
        if fee is not None and fee.amount != 0
    ]
    symbols = {fee.token_symbol for fee in parts}
    if len(symbols) > 1:
        raise ValueError(f"Cannot sum fees in different denominations: {sorted(symbols)}")

    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return sum((fee.amount for fee in parts), Decimal("0"))


def pool_fee(eq_fee: int, protocol_fee: int, eq_reward: int, pool_decimals: int) -> Decimal:
    """Bridge pool fee in display units.

    Fee-library values come in the pool's shared decimals. The result may be
    negative when the equilibrium reward exceeds the fees.
    """
    return from_wei(int(eq_fee) + int(protocol_fee) - int(eq_reward), pool_decimals)


def get_from_without_fee(from_amount: TokenAmount, platform_fee_percent: Optional[Decimal]) -> TokenAmount:
    """Principal that actually reaches the provider after the platform fee."""
    if not platform_fee_percent:
        return from_amount
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        net = from_amount.token_amount * (Decimal(1) - platform_fee_percent)
    return from_amount.with_token_amount(net)
