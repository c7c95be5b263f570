"""Thin client for the Via router and explorer APIs."""

import logging
from typing import Optional

from crossroute.core.context import SdkContext
from crossroute.cross_chain.via.constants import (
    BUILD_TX_PATH,
    ROUTES_PAGES_PATH,
    ROUTES_PATH,
    TOKEN_PRICE_PATH,
)
from crossroute.cross_chain.via.models import (
    ViaPagesResponse,
    ViaRoute,
    ViaRoutesResponse,
    ViaTransaction,
)

logger = logging.getLogger(__name__)


class ViaClient:
    """Via router API bound to one SDK session."""

    def __init__(self, ctx: SdkContext, timeout: Optional[float] = None):
        self.ctx = ctx
        self.timeout = timeout
        self.api_url = ctx.settings.via_api_url.rstrip("/")
        self.explorer_url = ctx.settings.via_explorer_api_url.rstrip("/")

    async def _get(self, url: str, params: Optional[dict] = None):
        params = dict(params or {})
        if self.ctx.settings.via_api_key:
            params["apiKey"] = self.ctx.settings.via_api_key
        return await self.ctx.http_client.get(url, params=params, timeout=self.timeout)

    async def routes_pages(self) -> int:
        data = await self._get(f"{self.api_url}{ROUTES_PAGES_PATH}")
        return ViaPagesResponse.model_validate(data).pages

    async def get_routes(self, params: dict) -> list[ViaRoute]:
        data = await self._get(f"{self.api_url}{ROUTES_PATH}", params)
        return ViaRoutesResponse.model_validate(data).routes

    async def build_tx(
        self, route_id: str, from_address: str, receive_address: str, num_action: int = 0
    ) -> ViaTransaction:
        data = await self._get(
            f"{self.api_url}{BUILD_TX_PATH}",
            {
                "routeId": route_id,
                "fromAddress": from_address,
                "receiveAddress": receive_address,
                "numAction": num_action,
            },
        )
        return ViaTransaction.model_validate(data)

    async def get_token_prices(self, chain_id: int, addresses: list[str]) -> dict:
        """Raw explorer response: {chain_id: {address: {"USD": price}}}."""
        return await self.ctx.http_client.get(
            f"{self.explorer_url}{TOKEN_PRICE_PATH}",
            params={"chain": chain_id, "tokens_addresses": ",".join(addresses)},
            timeout=self.timeout,
        )
