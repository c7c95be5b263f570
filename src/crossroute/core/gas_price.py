"""Gas price oracle."""

import logging
from decimal import Decimal

from crossroute.chains import Blockchain
from crossroute.core.web3_pure import from_wei

logger = logging.getLogger(__name__)


class GasPriceApi:
    """Reads gas prices through the per-chain read services."""

    def __init__(self, web3_public_service):
        self.web3_public_service = web3_public_service

    async def get_gas_price(self, blockchain: Blockchain) -> int:
        """Gas price in wei."""
        web3_public = self.web3_public_service.get_web3_public(blockchain)
        gas_price = await web3_public.get_gas_price()
        logger.debug(f"Gas price on {blockchain.value}: {gas_price} wei")
        return gas_price

    async def get_gas_price_in_eth_units(self, blockchain: Blockchain) -> Decimal:
        return from_wei(await self.get_gas_price(blockchain))
