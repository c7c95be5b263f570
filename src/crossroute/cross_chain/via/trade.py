"""Via cross-chain trade."""

import logging
from typing import Optional

from crossroute.core.web3_pure import compare_addresses
from crossroute.cross_chain.models import CrossChainTradeType
from crossroute.cross_chain.proxy import PROXY_CONTRACT_ADDRESS, ProviderCall
from crossroute.cross_chain.trade import CrossChainTrade
from crossroute.cross_chain.via.client import ViaClient
from crossroute.cross_chain.via.models import ViaRoute
from crossroute.errors import UnknownError
from crossroute.tokens import TokenAmount

logger = logging.getLogger(__name__)


class ViaTrade(CrossChainTrade):
    """Trade over a Via route; the route is rebuilt for the real sender at swap time."""

    type = CrossChainTradeType.VIA

    def __init__(
        self,
        *args,
        route: ViaRoute,
        provider_gateway: str,
        from_without_fee: TokenAmount,
        bridge_type: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.route = route
        self.provider_gateway = provider_gateway
        self.from_without_fee = from_without_fee
        self.bridge_type = bridge_type

    @property
    def provider_contract_address(self) -> str:
        return self.provider_gateway

    async def get_provider_call(self, from_address: str, receiver_address: str) -> ProviderCall:
        sender = PROXY_CONTRACT_ADDRESS if self.use_proxy else from_address
        tx = await ViaClient(self.ctx).build_tx(self.route.route_id, sender, receiver_address)
        if not compare_addresses(tx.to, self.provider_gateway):
            logger.warning(
                f"Via route {self.route.route_id} now targets {tx.to}, quoted {self.provider_gateway}"
            )
            raise UnknownError("Via route target changed since the quote.")

        native_fee = tx.value
        if self.from_amount.is_native:
            native_fee = max(0, native_fee - self.from_without_fee.wei_amount)
        return ProviderCall(gateway=tx.to, data=tx.data, native_fee=native_fee)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["route_id"] = self.route.route_id
        data["bridge_type"] = self.bridge_type
        return data
