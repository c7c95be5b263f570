"""Blockchain metadata for all supported EVM networks.

Holds chain ids, native coin metadata and wrapped-native addresses.
RPC endpoints live in Settings so they can be overridden per deployment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Blockchain(str, Enum):
    """Supported blockchains."""

    ETHEREUM = "ETH"
    BSC = "BSC"
    POLYGON = "POLYGON"
    AVALANCHE = "AVALANCHE"
    ARBITRUM = "ARBITRUM"
    OPTIMISM = "OPTIMISM"
    FANTOM = "FANTOM"


class ChainType(str, Enum):
    """Address/transaction scheme family of a chain."""

    EVM = "EVM"


# Sentinel address used for native coins across the SDK
NATIVE_TOKEN_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class NativeToken:
    """Native coin of a chain (gas token)."""

    symbol: str
    name: str
    decimals: int = 18
    address: str = NATIVE_TOKEN_ADDRESS


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain."""

    name: str
    blockchain: Blockchain
    chain_id: int
    native_token: NativeToken
    wrapped_native_address: str
    chain_type: ChainType = ChainType.EVM


# ======================
# Chain Configurations
# ======================

CHAINS: dict[Blockchain, ChainConfig] = {
    Blockchain.ETHEREUM: ChainConfig(
        name="Ethereum",
        blockchain=Blockchain.ETHEREUM,
        chain_id=1,
        native_token=NativeToken(symbol="ETH", name="Ethereum"),
        wrapped_native_address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    ),
    Blockchain.BSC: ChainConfig(
        name="BNB Smart Chain",
        blockchain=Blockchain.BSC,
        chain_id=56,
        native_token=NativeToken(symbol="BNB", name="BNB"),
        wrapped_native_address="0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",
    ),
    Blockchain.POLYGON: ChainConfig(
        name="Polygon",
        blockchain=Blockchain.POLYGON,
        chain_id=137,
        native_token=NativeToken(symbol="MATIC", name="Polygon"),
        wrapped_native_address="0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
    ),
    Blockchain.AVALANCHE: ChainConfig(
        name="Avalanche C-Chain",
        blockchain=Blockchain.AVALANCHE,
        chain_id=43114,
        native_token=NativeToken(symbol="AVAX", name="Avalanche"),
        wrapped_native_address="0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7",
    ),
    Blockchain.ARBITRUM: ChainConfig(
        name="Arbitrum One",
        blockchain=Blockchain.ARBITRUM,
        chain_id=42161,
        native_token=NativeToken(symbol="ETH", name="Ethereum"),
        wrapped_native_address="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
    ),
    Blockchain.OPTIMISM: ChainConfig(
        name="Optimism",
        blockchain=Blockchain.OPTIMISM,
        chain_id=10,
        native_token=NativeToken(symbol="ETH", name="Ethereum"),
        wrapped_native_address="0x4200000000000000000000000000000000000006",
    ),
    Blockchain.FANTOM: ChainConfig(
        name="Fantom",
        blockchain=Blockchain.FANTOM,
        chain_id=250,
        native_token=NativeToken(symbol="FTM", name="Fantom"),
        wrapped_native_address="0x21be370D5312f44cB42ce377BC9b8a0cEF1A4C83",
    ),
}


def get_chain(blockchain: Blockchain) -> ChainConfig:
    """Get configuration for a blockchain."""
    return CHAINS[blockchain]


def get_native_token(blockchain: Blockchain) -> NativeToken:
    """Get native coin metadata for a blockchain."""
    return CHAINS[blockchain].native_token


def get_chain_id(blockchain: Blockchain) -> int:
    """Get numeric EVM chain id."""
    return CHAINS[blockchain].chain_id


def get_blockchain_by_chain_id(chain_id: int) -> Optional[Blockchain]:
    """Resolve a blockchain from its numeric chain id."""
    for config in CHAINS.values():
        if config.chain_id == chain_id:
            return config.blockchain
    return None
