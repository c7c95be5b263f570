"""On-chain trade types and calculation options."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class OnChainTradeType(str, Enum):
    UNISWAP_V2 = "UNISWAP_V2"
    PANCAKE_SWAP = "PANCAKE_SWAP"
    QUICK_SWAP = "QUICK_SWAP"
    JOE = "JOE"
    SUSHI_SWAP = "SUSHI_SWAP"


@dataclass(frozen=True)
class OnChainCalculationOptions:
    """Options for Uniswap-V2-style calculations.

    slippage_tolerance is a fraction (0.01 = 1%).
    """

    slippage_tolerance: Decimal = Decimal("0.02")
    deadline_minutes: int = 20
    gas_calculation: bool = False
    disable_multihops: bool = False

    def __post_init__(self):
        if not Decimal(0) <= self.slippage_tolerance < Decimal(1):
            raise ValueError(f"Slippage must be in [0, 1), got {self.slippage_tolerance}")
