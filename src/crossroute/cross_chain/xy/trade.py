"""XY Finance cross-chain trade."""

from crossroute.cross_chain.models import CrossChainTradeType
from crossroute.cross_chain.proxy import ProviderCall
from crossroute.cross_chain.trade import CrossChainTrade
from crossroute.cross_chain.xy.api import analyze_status_code, fetch_swap
from crossroute.errors import UnknownError


class XyTrade(CrossChainTrade):
    """Trade whose calldata is rebuilt by XY for the final receiver at swap time."""

    type = CrossChainTradeType.XY

    def __init__(self, *args, transaction_request: dict, provider_gateway: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.transaction_request = dict(transaction_request)
        self.provider_gateway = provider_gateway

    @property
    def provider_contract_address(self) -> str:
        return self.provider_gateway

    async def get_provider_call(self, from_address: str, receiver_address: str) -> ProviderCall:
        params = {**self.transaction_request, "receiveAddress": receiver_address}
        response = await fetch_swap(self.ctx, params)
        analyze_status_code(response.status_code, response.msg)
        if response.tx is None:
            raise UnknownError("XY returned no transaction data.")

        # tx.value covers the principal for native input; anything above it is XY's fee
        native_fee = response.tx.value
        if self.from_amount.is_native:
            native_fee = max(0, native_fee - int(params["amount"]))
        return ProviderCall(gateway=response.tx.to, data=response.tx.data, native_fee=native_fee)
