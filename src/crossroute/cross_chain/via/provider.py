"""Via provider: picks the best whitelisted route among all Via route pages."""

import asyncio
import logging
from decimal import Decimal
from typing import Optional, Sequence

from crossroute.chains import NATIVE_TOKEN_ADDRESS, Blockchain, get_chain_id, get_native_token
from crossroute.core.web3_pure import from_wei
from crossroute.cross_chain.models import CrossChainOptions, CrossChainTradeType, ItType
from crossroute.cross_chain.provider import CrossChainProvider
from crossroute.cross_chain.route_selector import (
    RouteCandidate,
    filter_whitelisted,
    select_best_route,
)
from crossroute.cross_chain.via.client import ViaClient
from crossroute.cross_chain.via.constants import (
    BRIDGES,
    VIA_CONTRACT_ABI,
    VIA_CONTRACT_ADDRESS,
    VIA_SUPPORTED_BLOCKCHAINS,
)
from crossroute.cross_chain.via.models import ViaRoute
from crossroute.cross_chain.via.trade import ViaTrade
from crossroute.errors import NotSupportedTokensError
from crossroute.fees import CryptoFee, get_from_without_fee
from crossroute.on_chain.models import OnChainTradeType
from crossroute.tokens import Token, TokenAmount

logger = logging.getLogger(__name__)

# Tool names that differ from the on-chain trade type names
_TOOL_TRADE_TYPES = {
    "TRADERJOE": OnChainTradeType.JOE,
    "UNISWAP": OnChainTradeType.UNISWAP_V2,
}


def parse_trade_type(tool_name: Optional[str]) -> Optional[OnChainTradeType]:
    if not tool_name:
        return None
    name = tool_name.upper()
    for trade_type in OnChainTradeType:
        if trade_type.value.replace("_", "") == name:
            return trade_type
    return _TOOL_TRADE_TYPES.get(name)


def parse_it_providers(route: ViaRoute) -> ItType:
    """DEXes used by Via before and after the bridge step."""
    steps = route.steps
    if not steps:
        return ItType()

    first = steps[0].tool
    from_type = parse_trade_type(first.name) if first.type == "swap" else None

    to_type = None
    last = steps[-1].tool
    if len(steps) > 1 and last.type == "swap":
        to_type = parse_trade_type(last.name)
    return ItType(from_type=from_type, to_type=to_type)


def parse_bridge_type(route: ViaRoute) -> Optional[str]:
    cross = next((step.tool for step in route.steps if step.tool.type == "cross"), None)
    if not cross or not cross.name:
        return None
    bridge = cross.name.split(" ")[0].lower()
    return bridge if bridge in BRIDGES else None


class ViaProvider(CrossChainProvider):
    type = CrossChainTradeType.VIA
    supported_blockchains = VIA_SUPPORTED_BLOCKCHAINS

    async def calculate_trade(
        self, from_amount: TokenAmount, to_token: Token, options: CrossChainOptions
    ) -> ViaTrade:
        from_blockchain = from_amount.blockchain
        use_proxy = options.should_use_proxy(self.type)
        client = ViaClient(self.ctx, options.timeout)

        fee_info = await self.get_fee_info(
            from_blockchain, options.provider_address, from_amount.token, use_proxy
        )
        from_without_fee = get_from_without_fee(from_amount, fee_info.platform_fee_percent)

        routes = await self.fetch_routes(client, from_without_fee, to_token)
        candidates = await self.get_filtered_routes(client, from_blockchain, routes)
        if not candidates:
            raise NotSupportedTokensError()

        from_price, native_price = await self.get_tokens_price(
            client,
            from_blockchain,
            [(from_amount.address, from_amount.price), (NATIVE_TOKEN_ADDRESS, None)],
        )
        best = await self.get_best_route(
            client, to_token, native_price, candidates, get_native_token(from_blockchain).decimals
        )
        route: ViaRoute = best.route

        from_amount = from_amount.with_price(from_price)
        to = TokenAmount(token=to_token, wei_amount=route.to_token_amount)
        route_slippage = (route.slippage or Decimal(0)) / 100

        native = get_native_token(from_blockchain)
        provider_fee = route.provider_fee
        if provider_fee:
            fee_info = fee_info.with_crypto_fee(
                CryptoFee(
                    amount=from_wei(provider_fee.amount, native.decimals),
                    token_symbol=provider_fee.token.symbol or native.symbol,
                )
            )

        return ViaTrade(
            self.ctx,
            from_amount=from_amount,
            to_amount=to,
            to_token_amount_min=TokenAmount(
                token=to_token, wei_amount=to.wei_amount_minus_slippage(route_slippage)
            ),
            fee_info=fee_info,
            provider_address=options.provider_address,
            price_impact=from_amount.calculate_price_impact_percent(to),
            use_proxy=use_proxy,
            it_type=parse_it_providers(route),
            route=route,
            provider_gateway=best.target,
            from_without_fee=from_without_fee,
            bridge_type=parse_bridge_type(route),
        )

    async def fetch_routes(
        self, client: ViaClient, from_amount: TokenAmount, to_token: Token
    ) -> list[ViaRoute]:
        """Routes from every page, one route per page; failed pages are skipped."""
        pages = await client.routes_pages()
        params = {
            "fromChainId": get_chain_id(from_amount.blockchain),
            "fromTokenAddress": from_amount.address,
            "fromAmount": from_amount.wei_amount,
            "toChainId": get_chain_id(to_token.blockchain),
            "toTokenAddress": to_token.address,
            "fromAddress": VIA_CONTRACT_ADDRESS,
            "multiTx": "false",
            "limit": 1,
        }
        responses = await asyncio.gather(
            *(client.get_routes({**params, "offset": page + 1}) for page in range(pages)),
            return_exceptions=True,
        )

        routes = []
        for page, response in enumerate(responses, start=1):
            if isinstance(response, Exception):
                logger.debug(f"Via routes page {page} failed: {response}")
                continue
            routes.extend(response)
        logger.debug(f"Via returned {len(routes)} routes over {pages} pages")
        return routes

    async def get_filtered_routes(
        self, client: ViaClient, blockchain: Blockchain, routes: Sequence[ViaRoute]
    ) -> list[RouteCandidate]:
        """Candidates whose built transaction targets a router allowed by the Via contract."""
        if not routes:
            return []

        web3_public = self.ctx.get_web3_public(blockchain)
        whitelist = await web3_public.call_contract_method(
            VIA_CONTRACT_ADDRESS, VIA_CONTRACT_ABI, "getAvailableRouters"
        )

        txs = await asyncio.gather(
            *(
                client.build_tx(route.route_id, VIA_CONTRACT_ADDRESS, VIA_CONTRACT_ADDRESS)
                for route in routes
            ),
            return_exceptions=True,
        )

        candidates = []
        for route, tx in zip(routes, txs):
            if isinstance(tx, Exception):
                logger.debug(f"Via buildTx failed for route {route.route_id}: {tx}")
                continue
            fee = route.provider_fee
            candidates.append(
                RouteCandidate(
                    route_id=route.route_id,
                    to_wei_amount=route.to_token_amount,
                    provider_fee_wei=fee.amount if fee else 0,
                    target=tx.to,
                    route=route,
                )
            )
        return filter_whitelisted(candidates, list(whitelist))

    async def get_best_route(
        self,
        client: ViaClient,
        to_token: Token,
        native_price: Optional[Decimal],
        candidates: Sequence[RouteCandidate],
        native_decimals: int = 18,
    ) -> RouteCandidate:
        (to_price,) = await self.get_tokens_price(
            client, to_token.blockchain, [(to_token.address, to_token.price)]
        )
        best = select_best_route(
            candidates,
            to_decimals=to_token.decimals,
            to_price=to_price,
            native_price=native_price,
            native_decimals=native_decimals,
        )
        if best is None:
            raise NotSupportedTokensError()
        return best

    async def get_tokens_price(
        self,
        client: ViaClient,
        blockchain: Blockchain,
        tokens: Sequence[tuple[str, Optional[Decimal]]],
    ) -> list[Optional[Decimal]]:
        """USD prices from the Via explorer; known prices are used when it fails."""
        chain_id = get_chain_id(blockchain)
        try:
            response = await client.get_token_prices(chain_id, [address for address, _ in tokens])
            prices = response[str(chain_id)]
            return [Decimal(str(prices[address]["USD"])) for address, _ in tokens]
        except Exception as e:
            logger.debug(f"Via token prices unavailable on {blockchain.value}: {e}")
            return [price for _, price in tokens]
