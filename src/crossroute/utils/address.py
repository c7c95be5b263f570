"""Address format validation."""

import re

from web3 import Web3

from crossroute.chains import Blockchain, ChainType, get_chain

EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def validate_address(address: str, blockchain: Blockchain) -> tuple[bool, str]:
    """Validate address format for a blockchain.

    EVM addresses must be 0x-prefixed 20-byte hex; mixed-case input must
    carry a valid EIP-55 checksum.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not address or not isinstance(address, str):
        return False, "Address is required"

    if get_chain(blockchain).chain_type == ChainType.EVM:
        if not EVM_ADDRESS_RE.match(address):
            return False, f"Invalid {blockchain.value} address format"
        digits = address[2:]
        is_mixed_case = digits != digits.lower() and digits != digits.upper()
        if is_mixed_case and not Web3.is_checksum_address(address):
            return False, f"Invalid {blockchain.value} address checksum"
        return True, ""

    return False, f"Unsupported chain type for {blockchain.value}"


def is_address_correct(address: str, blockchain: Blockchain) -> bool:
    return validate_address(address, blockchain)[0]
