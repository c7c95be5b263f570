"""Per-session collaborators passed into every provider and trade."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from eth_account import Account
from web3 import AsyncWeb3

from crossroute.chains import Blockchain
from crossroute.config import Settings, get_settings
from crossroute.core.gas_price import GasPriceApi
from crossroute.core.http_client import HttpClient, HttpxClient
from crossroute.core.web3_private import EvmWeb3Private, Web3Private
from crossroute.core.web3_public import Web3Public, Web3PublicService

logger = logging.getLogger(__name__)


@dataclass
class SdkContext:
    """Explicit session state: HTTP transport, chain access and the wallet."""

    settings: Settings
    http_client: HttpClient
    web3_public_service: Web3PublicService
    gas_price_api: GasPriceApi
    web3_private: Optional[Web3Private] = field(default=None)

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        private_key: Optional[str] = None,
        wallet_blockchain: Blockchain = Blockchain.ETHEREUM,
    ) -> "SdkContext":
        settings = settings or get_settings()
        web3_public_service = Web3PublicService(settings)
        ctx = cls(
            settings=settings,
            http_client=HttpxClient(timeout=settings.http_timeout),
            web3_public_service=web3_public_service,
            gas_price_api=GasPriceApi(web3_public_service),
        )
        if private_key:
            ctx.connect_wallet(private_key, wallet_blockchain)
        return ctx

    def get_web3_public(self, blockchain: Blockchain) -> Web3Public:
        return self.web3_public_service.get_web3_public(blockchain)

    @property
    def wallet_address(self) -> Optional[str]:
        return self.web3_private.address if self.web3_private else None

    def connect_wallet(self, private_key: str, blockchain: Blockchain) -> Web3Private:
        """Attach a local-key wallet on `blockchain`."""
        account = Account.from_key(private_key)
        w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(self.settings.get_rpc_url(blockchain.value)))
        self.web3_private = EvmWeb3Private(w3, account, blockchain)
        logger.info(f"Wallet {account.address} connected on {blockchain.value}")
        return self.web3_private

    def disconnect_wallet(self) -> None:
        self.web3_private = None

    async def aclose(self) -> None:
        """Release HTTP and RPC connections and drop the wallet."""
        self.disconnect_wallet()
        await self.http_client.aclose()
        await self.web3_public_service.aclose()
