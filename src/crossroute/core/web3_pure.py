"""Pure unit conversions and address helpers (no network access)."""

from decimal import ROUND_DOWN, Decimal, localcontext
from typing import Sequence, Union

from web3 import Web3

from crossroute.chains import NATIVE_TOKEN_ADDRESS

EMPTY_ADDRESS = "0x0000000000000000000000000000000000000000"

MAX_UINT256 = 2**256 - 1

# Enough digits for any uint256 value plus 18 decimals
DECIMAL_PRECISION = 96

Number = Union[Decimal, int, str]


def to_wei(amount: Number, decimals: int = 18) -> int:
    """Convert human units to minimal integer units, truncating dust."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        scaled = Decimal(amount).scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def from_wei(amount: Number, decimals: int = 18) -> Decimal:
    """Convert minimal integer units to human units."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return Decimal(int(Decimal(amount))).scaleb(-decimals)


def calculate_gas_margin(gas_limit: int, multiplier: Decimal = Decimal("1.2")) -> int:
    """Increase a gas estimate by a safety multiplier."""
    return int((Decimal(gas_limit) * multiplier).to_integral_value(rounding=ROUND_DOWN))


def compare_addresses(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def is_native_address(address: str) -> bool:
    return compare_addresses(address, NATIVE_TOKEN_ADDRESS)


def to_checksum(address: str) -> str:
    return Web3.to_checksum_address(address)


# Offline instance, used only for ABI encoding
_encoder = Web3()


def normalize_address_args(args: Sequence) -> list:
    """Checksum every address argument; web3 rejects lower-case addresses."""
    normalized = []
    for arg in args:
        if isinstance(arg, str) and len(arg) == 42 and Web3.is_address(arg):
            normalized.append(to_checksum(arg))
        elif isinstance(arg, (list, tuple)):
            normalized.append(type(arg)(normalize_address_args(arg)))
        else:
            normalized.append(arg)
    return normalized


def encode_function_call(abi: list, method: str, args: Sequence = ()) -> str:
    """ABI-encode call data for `method`, 0x-prefixed."""
    contract = _encoder.eth.contract(abi=abi)
    return contract.encode_abi(method, args=normalize_address_args(args))
