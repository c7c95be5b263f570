"""Transaction payloads and execution options."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from crossroute.core.web3_pure import from_wei


@dataclass(frozen=True)
class TransactionConfig:
    """Raw EVM transaction payload, ready to be signed."""

    to: str
    data: str
    value: int = 0
    gas_limit: Optional[int] = None
    gas_price: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"to": self.to, "data": self.data, "value": str(self.value)}
        if self.gas_limit is not None:
            data["gas"] = str(self.gas_limit)
        if self.gas_price is not None:
            data["gasPrice"] = str(self.gas_price)
        return data


@dataclass(frozen=True)
class GasData:
    """Estimated gas for a transaction."""

    gas_limit: int
    gas_price: int

    @property
    def total_wei(self) -> int:
        return self.gas_limit * self.gas_price

    @property
    def total_native(self) -> Decimal:
        return from_wei(self.total_wei)


@dataclass
class BasicTransactionOptions:
    on_transaction_hash: Optional[Callable[[str], None]] = None
    gas_limit: Optional[int] = None
    gas_price: Optional[int] = None


@dataclass
class SwapTransactionOptions(BasicTransactionOptions):
    """Options for trade.swap().

    on_approve receives the approve transaction hash, or None when no
    approval was needed. on_confirm receives the swap transaction hash.
    """

    on_confirm: Optional[Callable[[str], None]] = None
    on_approve: Optional[Callable[[Optional[str]], None]] = None
    receiver_address: Optional[str] = None
    approve_gas_limit: Optional[int] = None


@dataclass
class EncodeTransactionOptions:
    """Options for trade.encode()."""

    from_address: str
    receiver_address: Optional[str] = None
    gas_limit: Optional[int] = None
    gas_price: Optional[int] = None
