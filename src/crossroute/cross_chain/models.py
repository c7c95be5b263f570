"""Cross-chain trade types, options and calculation results."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from crossroute.core.web3_pure import EMPTY_ADDRESS
from crossroute.errors import SwapSdkError
from crossroute.on_chain.models import OnChainTradeType

if TYPE_CHECKING:
    from crossroute.cross_chain.trade import CrossChainTrade


class CrossChainTradeType(str, Enum):
    STARGATE = "STARGATE"
    XY = "XY"
    VIA = "VIA"


@dataclass(frozen=True)
class CrossChainOptions:
    """Caller options for a cross-chain calculation.

    slippage_tolerance is a fraction (0.02 = 2%). use_proxy maps a trade
    type to whether its calls go through the proxy facade (default: yes).
    """

    slippage_tolerance: Decimal = Decimal("0.02")
    provider_address: str = EMPTY_ADDRESS
    from_address: Optional[str] = None
    receiver_address: Optional[str] = None
    use_proxy: dict = field(default_factory=dict)
    gas_calculation: bool = False
    timeout: Optional[float] = None
    enable_destination_swap: bool = False

    def __post_init__(self):
        if not Decimal(0) <= self.slippage_tolerance < Decimal(1):
            raise ValueError(f"Slippage must be in [0, 1), got {self.slippage_tolerance}")

    def should_use_proxy(self, trade_type: CrossChainTradeType) -> bool:
        return self.use_proxy.get(trade_type, True)


@dataclass(frozen=True)
class ItType:
    """On-chain swaps performed by an intermediate provider around the bridge hop."""

    from_type: Optional[OnChainTradeType] = None
    to_type: Optional[OnChainTradeType] = None


@dataclass(frozen=True)
class CalculationResult:
    """Either a trade or an error for one provider, never both."""

    trade_type: CrossChainTradeType
    trade: Optional["CrossChainTrade"] = None
    error: Optional[SwapSdkError] = None

    def __post_init__(self):
        if (self.trade is None) == (self.error is None):
            raise ValueError("CalculationResult must hold exactly one of trade or error")

    @property
    def is_success(self) -> bool:
        return self.trade is not None

    def to_dict(self) -> dict:
        return {
            "trade_type": self.trade_type.value,
            "trade": self.trade.to_dict() if self.trade else None,
            "error": self.error.to_dict() if self.error else None,
        }
