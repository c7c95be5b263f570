"""Pytest configuration and fixtures."""

import os
from decimal import Decimal

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"

from crossroute.chains import Blockchain
from crossroute.config import Settings
from crossroute.core.context import SdkContext
from crossroute.core.gas_price import GasPriceApi
from crossroute.core.web3_public import Web3PublicService
from crossroute.tokens import Token

from fakes import FakeHttpClient, FakeWeb3Public

USDT_ETH = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
USDC_ETH = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
LINK_ETH = "0x514910771AF9Ca656af840dff83E8264EcF986CA"
USDT_ARB = "0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9"
LINK_ARB = "0xf97f4df75117a78c1A5a0DBb814Af92458539FB4"
USDT_BSC = "0x55d398326f99059fF775485246999027B3197955"


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def web3_publics() -> dict[Blockchain, FakeWeb3Public]:
    return {blockchain: FakeWeb3Public(blockchain) for blockchain in Blockchain}


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def ctx(settings, http_client, web3_publics) -> SdkContext:
    """SDK session wired to in-memory collaborators."""
    service = Web3PublicService(settings)
    for blockchain, web3_public in web3_publics.items():
        service.set_web3_public(blockchain, web3_public)
    return SdkContext(
        settings=settings,
        http_client=http_client,
        web3_public_service=service,
        gas_price_api=GasPriceApi(service),
    )


@pytest.fixture
def eth(web3_publics) -> FakeWeb3Public:
    return web3_publics[Blockchain.ETHEREUM]


@pytest.fixture
def arbitrum(web3_publics) -> FakeWeb3Public:
    return web3_publics[Blockchain.ARBITRUM]


@pytest.fixture
def usdt_eth() -> Token:
    return Token(Blockchain.ETHEREUM, USDT_ETH, "USDT", 6, price=Decimal("1"))


@pytest.fixture
def usdc_eth() -> Token:
    return Token(Blockchain.ETHEREUM, USDC_ETH, "USDC", 6, price=Decimal("1"))


@pytest.fixture
def link_eth() -> Token:
    return Token(Blockchain.ETHEREUM, LINK_ETH, "LINK", 18, price=Decimal("15"))


@pytest.fixture
def usdt_arb() -> Token:
    return Token(Blockchain.ARBITRUM, USDT_ARB, "USDT", 6, price=Decimal("1"))


@pytest.fixture
def link_arb() -> Token:
    return Token(Blockchain.ARBITRUM, LINK_ARB, "LINK", 18, price=Decimal("15"))


@pytest.fixture
def usdt_bsc() -> Token:
    return Token(Blockchain.BSC, USDT_BSC, "USDT", 18, price=Decimal("1"))


@pytest.fixture
def proxy_fees(web3_publics):
    """Platform defaults on every chain: no fixed fee, 0.1% platform fee."""

    def configure(fixed_wei: int = 0, platform_ppm: int = 1000):
        for web3_public in web3_publics.values():
            web3_public.on("fixedNativeFee", fixed_wei)
            web3_public.on("RubicPlatformFee", platform_ppm)

    configure()
    return configure
