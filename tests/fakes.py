"""In-memory collaborators used instead of RPC nodes and HTTP APIs."""

from decimal import Decimal
from typing import Any, Callable, Optional, Sequence, Union

from web3.exceptions import ContractLogicError

from crossroute.chains import Blockchain, get_chain_id
from crossroute.core.http_client import HttpClient
from crossroute.core.web3_private import Web3Private
from crossroute.core.web3_public import Web3Public
from crossroute.core.web3_pure import EMPTY_ADDRESS
from crossroute.cross_chain.models import CrossChainTradeType
from crossroute.cross_chain.provider import CrossChainProvider
from crossroute.cross_chain.proxy import ProviderCall
from crossroute.cross_chain.trade import CrossChainTrade
from crossroute.errors import WrongNetworkError
from crossroute.fees import FeeInfo
from crossroute.tokens import TokenAmount
from crossroute.transactions import BasicTransactionOptions, TransactionConfig

WALLET = "0x1111111111111111111111111111111111111111"
RECEIVER = "0x2222222222222222222222222222222222222222"

Handler = Union[Any, Callable[[str, list], Any]]


class FakeWeb3Public(Web3Public):
    """Contract reads answered by per-method handlers.

    A handler is either a plain value or a callable taking (address, args).
    Returning or raising an exception makes the call fail.
    """

    def __init__(self, blockchain: Blockchain):
        super().__init__(blockchain)
        self.handlers: dict[str, Handler] = {}
        self.calls: list[tuple[str, str, list]] = []
        self.balances: dict[tuple[str, str], int] = {}
        self.gas_price = 10**9
        self.estimated_gas: Optional[int] = 100_000

    def on(self, method: str, handler: Handler) -> None:
        self.handlers[method] = handler

    def called(self, method: str) -> list[tuple[str, list]]:
        return [(address, args) for address, name, args in self.calls if name == method]

    async def call_contract_method(
        self, address: str, abi: list, method: str, args: Sequence = ()
    ) -> Any:
        args = list(args)
        self.calls.append((address, method, args))
        if method not in self.handlers:
            raise ContractLogicError(f"execution reverted: {method} not mocked")
        handler = self.handlers[method]
        result = handler(address, args) if callable(handler) else handler
        if isinstance(result, Exception):
            raise result
        return result

    async def get_balance(self, address: str, token_address: Optional[str] = None) -> int:
        key = (address.lower(), (token_address or EMPTY_ADDRESS).lower())
        return self.balances.get(key, 0)

    async def get_gas_price(self) -> int:
        return self.gas_price

    async def get_estimated_gas(
        self, from_address: str, to: str, data: str, value: int = 0
    ) -> Optional[int]:
        return self.estimated_gas


class FakeHttpClient(HttpClient):
    """GET responses keyed by URL suffix; callables receive the query params."""

    def __init__(self):
        self.routes: dict[str, Any] = {}
        self.requests: list[tuple[str, dict]] = []

    def on(self, url_suffix: str, response: Any) -> None:
        self.routes[url_suffix] = response

    def requested(self, url_suffix: str) -> list[dict]:
        return [params for url, params in self.requests if url.endswith(url_suffix)]

    async def get(
        self,
        url: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        params = dict(params or {})
        self.requests.append((url, params))
        for suffix, response in self.routes.items():
            if url.endswith(suffix):
                result = response(params) if callable(response) else response
                if isinstance(result, Exception):
                    raise result
                return result
        raise AssertionError(f"Unexpected GET {url}")


class FakeWeb3Private(Web3Private):
    """Wallet that records transactions instead of broadcasting them."""

    def __init__(self, blockchain: Blockchain, address: str = WALLET):
        self._blockchain = blockchain
        self._address = address
        self.sent: list[TransactionConfig] = []

    @property
    def address(self) -> str:
        return self._address

    @property
    def blockchain(self) -> Blockchain:
        return self._blockchain

    async def check_blockchain_correct(self, blockchain: Blockchain) -> None:
        if blockchain != self._blockchain:
            raise WrongNetworkError(required=blockchain.value, actual=get_chain_id(self._blockchain))

    async def send_transaction(
        self, tx: TransactionConfig, options: Optional[BasicTransactionOptions] = None
    ) -> str:
        self.sent.append(tx)
        tx_hash = "0x" + f"{len(self.sent):064x}"
        if options and options.on_transaction_hash:
            options.on_transaction_hash(tx_hash)
        return tx_hash


class StaticProvider(CrossChainProvider):
    """Provider returning a prepared trade, or raising a prepared error."""

    supported_blockchains = tuple(Blockchain)

    def __init__(self, ctx, trade_type: CrossChainTradeType, outcome: Any):
        super().__init__(ctx)
        self.type = trade_type
        self.outcome = outcome

    async def calculate_trade(self, from_amount, to_token, options):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class BrokenProvider(StaticProvider):
    """Provider whose calculate() itself raises."""

    async def calculate(self, from_amount, to_token, options=None):
        raise RuntimeError("provider crashed")


class DummyTrade(CrossChainTrade):
    """Cross-chain trade with a fixed provider call."""

    type = CrossChainTradeType.XY
    gateway = "0x9999999999999999999999999999999999999999"
    call_data = "0xdeadbeef"
    native_fee = 100

    @property
    def provider_contract_address(self) -> str:
        return self.gateway

    async def get_provider_call(self, from_address: str, receiver_address: str) -> ProviderCall:
        return ProviderCall(gateway=self.gateway, data=self.call_data, native_fee=self.native_fee)


def make_trade(
    ctx,
    from_token,
    to_token,
    from_amount: Decimal = Decimal("100"),
    to_amount: Decimal = Decimal("99"),
    trade_type: CrossChainTradeType = CrossChainTradeType.XY,
    **kwargs,
) -> DummyTrade:
    """DummyTrade with a 1% minimum-output margin."""
    to = TokenAmount.from_token_amount(to_token, to_amount)
    trade = DummyTrade(
        ctx,
        from_amount=TokenAmount.from_token_amount(from_token, from_amount),
        to_amount=to,
        to_token_amount_min=TokenAmount(
            token=to_token, wei_amount=to.wei_amount_minus_slippage(Decimal("0.01"))
        ),
        fee_info=kwargs.pop("fee_info", FeeInfo()),
        provider_address=EMPTY_ADDRESS,
        **kwargs,
    )
    trade.type = trade_type
    return trade
