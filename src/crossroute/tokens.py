"""Token value objects.

Amounts are stored in minimal integer units so that
token_amount * 10**decimals == wei_amount always holds exactly.
"""

from dataclasses import dataclass, replace
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from crossroute.chains import Blockchain, get_native_token
from crossroute.core.web3_pure import (
    DECIMAL_PRECISION,
    compare_addresses,
    from_wei,
    is_native_address,
    to_wei,
)


@dataclass(frozen=True, eq=False)
class Token:
    """A token on a specific blockchain, optionally with a USD unit price."""

    blockchain: Blockchain
    address: str
    symbol: str
    decimals: int
    name: str = ""
    price: Optional[Decimal] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.blockchain == other.blockchain and compare_addresses(
            self.address, other.address
        )

    def __hash__(self) -> int:
        return hash((self.blockchain, self.address.lower()))

    @property
    def is_native(self) -> bool:
        return is_native_address(self.address)

    def with_price(self, price: Optional[Decimal]) -> "Token":
        return replace(self, price=price)

    @classmethod
    def native(cls, blockchain: Blockchain, price: Optional[Decimal] = None) -> "Token":
        """Build the native coin token of a chain."""
        native = get_native_token(blockchain)
        return cls(
            blockchain=blockchain,
            address=native.address,
            symbol=native.symbol,
            decimals=native.decimals,
            name=native.name,
            price=price,
        )


@dataclass(frozen=True)
class TokenAmount:
    """A token together with an amount held in minimal units."""

    token: Token
    wei_amount: int

    def __post_init__(self):
        if self.wei_amount < 0:
            raise ValueError(f"Negative amount for {self.token.symbol}: {self.wei_amount}")

    @classmethod
    def from_token_amount(cls, token: Token, token_amount: Decimal) -> "TokenAmount":
        """Create from human units; digits beyond token decimals are truncated."""
        return cls(token=token, wei_amount=to_wei(token_amount, token.decimals))

    @property
    def token_amount(self) -> Decimal:
        return from_wei(self.wei_amount, self.token.decimals)

    @property
    def string_wei_amount(self) -> str:
        return str(self.wei_amount)

    @property
    def blockchain(self) -> Blockchain:
        return self.token.blockchain

    @property
    def address(self) -> str:
        return self.token.address

    @property
    def symbol(self) -> str:
        return self.token.symbol

    @property
    def decimals(self) -> int:
        return self.token.decimals

    @property
    def price(self) -> Optional[Decimal]:
        return self.token.price

    @property
    def is_native(self) -> bool:
        return self.token.is_native

    @property
    def usd_value(self) -> Optional[Decimal]:
        """Weighted USD value, None if the price is unknown."""
        if self.price is None:
            return None
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            return self.token_amount * self.price

    def with_token_amount(self, token_amount: Decimal) -> "TokenAmount":
        return TokenAmount.from_token_amount(self.token, token_amount)

    def with_price(self, price: Optional[Decimal]) -> "TokenAmount":
        return TokenAmount(token=self.token.with_price(price), wei_amount=self.wei_amount)

    def wei_amount_minus_slippage(self, slippage: Decimal) -> int:
        """Minimal units left after applying a slippage fraction in [0, 1)."""
        if not Decimal(0) <= slippage < Decimal(1):
            raise ValueError(f"Slippage must be in [0, 1), got {slippage}")
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            reduced = Decimal(self.wei_amount) * (Decimal(1) - slippage)
            return int(reduced.to_integral_value(rounding=ROUND_DOWN))

    def token_amount_minus_slippage(self, slippage: Decimal) -> Decimal:
        return from_wei(self.wei_amount_minus_slippage(slippage), self.decimals)

    def calculate_price_impact_percent(self, to: "TokenAmount") -> Optional[Decimal]:
        """Percent of USD value lost between this amount and `to`.

        Returns None when either side has no price; never negative.
        """
        from_usd = self.usd_value
        to_usd = to.usd_value
        if not from_usd or to_usd is None:
            return None
        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION
            impact = ((from_usd - to_usd) / from_usd * 100).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        return impact if impact > 0 else Decimal("0")

    def __str__(self) -> str:
        return f"{self.token_amount} {self.symbol} ({self.blockchain.value})"
