"""Base class for cross-chain trades."""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from crossroute import checks
from crossroute.chains import get_chain_id
from crossroute.checks import TradeState
from crossroute.core.context import SdkContext
from crossroute.cross_chain import proxy
from crossroute.cross_chain.models import CrossChainTradeType, ItType
from crossroute.cross_chain.proxy import PreSwap, ProviderCall
from crossroute.fees import FeeInfo
from crossroute.on_chain.trade import OnChainTrade
from crossroute.tokens import TokenAmount
from crossroute.transactions import (
    BasicTransactionOptions,
    EncodeTransactionOptions,
    GasData,
    SwapTransactionOptions,
    TransactionConfig,
)

logger = logging.getLogger(__name__)


class CrossChainTrade(ABC):
    """Accepted cross-chain quote.

    Quote data is fixed at construction. Execution always runs the
    pre-flight checks, then approves when needed, then submits the swap.
    With use_proxy the provider call is wrapped into the proxy facade and
    the facade is the approval spender; otherwise the provider contract is.
    """

    type: CrossChainTradeType

    def __init__(
        self,
        ctx: SdkContext,
        from_amount: TokenAmount,
        to_amount: TokenAmount,
        to_token_amount_min: TokenAmount,
        fee_info: FeeInfo,
        provider_address: str,
        price_impact: Optional[Decimal] = None,
        gas_data: Optional[GasData] = None,
        use_proxy: bool = True,
        src_trade: Optional[OnChainTrade] = None,
        dst_trade: Optional[OnChainTrade] = None,
        it_type: Optional[ItType] = None,
    ):
        if from_amount.blockchain == to_amount.blockchain:
            raise ValueError("Cross-chain trade must change blockchain")
        if to_token_amount_min.token != to_amount.token:
            raise ValueError("Minimum output must be denominated in the output token")
        if to_token_amount_min.wei_amount > to_amount.wei_amount:
            raise ValueError(
                f"Minimum output {to_token_amount_min.token_amount} exceeds output {to_amount.token_amount}"
            )

        self.ctx = ctx
        self.from_amount = from_amount
        self.to_amount = to_amount
        self.to_token_amount_min = to_token_amount_min
        self.fee_info = fee_info
        self.provider_address = provider_address
        self.price_impact = price_impact
        self.gas_data = gas_data
        self.use_proxy = use_proxy
        self.src_trade = src_trade
        self.dst_trade = dst_trade
        self.it_type = it_type or ItType(
            from_type=src_trade.type if src_trade else None,
            to_type=dst_trade.type if dst_trade else None,
        )
        self.state = TradeState.QUOTED

    @property
    @abstractmethod
    def provider_contract_address(self) -> str:
        """Contract that receives the tokens when the proxy is not used."""

    @abstractmethod
    async def get_provider_call(self, from_address: str, receiver_address: str) -> ProviderCall:
        """Provider contract call carrying this trade."""

    @property
    def spender(self) -> str:
        return proxy.PROXY_CONTRACT_ADDRESS if self.use_proxy else self.provider_contract_address

    @property
    def network_fee(self) -> Decimal:
        return self.fee_info.network_fee

    def get_trade_amount_ratio(self, from_usd: Decimal) -> Decimal:
        """USD spent per output token."""
        return from_usd / self.to_amount.token_amount

    async def need_approve(self) -> bool:
        return await checks.need_approve(self.ctx, self.from_amount, self.spender)

    async def approve(
        self, options: Optional[BasicTransactionOptions] = None, check_need_approve: bool = True
    ) -> Optional[str]:
        self.state = TradeState.APPROVING
        return await checks.approve(
            self.ctx, self.from_amount, self.spender, options, check_need_approve
        )

    def encode_approve(self, amount: Optional[int] = None) -> TransactionConfig:
        return checks.encode_approve(self.from_amount.address, self.spender, amount)

    async def get_approve_price(self) -> Optional[GasData]:
        return await checks.get_approve_price(self.ctx, self.from_amount, self.spender)

    async def swap(self, options: Optional[SwapTransactionOptions] = None) -> str:
        """Approve if needed, then submit the swap. Returns the swap hash."""
        options = options or SwapTransactionOptions()
        await checks.check_trade_errors(self.ctx, self.from_amount)
        checks.check_receiver_address(options.receiver_address, self.to_amount.blockchain)

        web3_private = self.ctx.web3_private
        self.state = TradeState.APPROVING
        await checks.approve_before_swap(self.ctx, self.from_amount, self.spender, options)

        self.state = TradeState.SWAPPING
        tx = await self.build_transaction(
            web3_private.address, options.receiver_address or web3_private.address
        )
        tx_hash = await web3_private.send_transaction(
            tx,
            BasicTransactionOptions(
                on_transaction_hash=options.on_confirm,
                gas_limit=options.gas_limit,
                gas_price=options.gas_price,
            ),
        )
        self.state = TradeState.SUBMITTED
        logger.info(
            f"{self.type.value} cross-chain swap submitted: "
            f"{self.from_amount} -> {self.to_amount} ({tx_hash})"
        )
        return tx_hash

    async def encode(self, options: EncodeTransactionOptions) -> TransactionConfig:
        """Raw transaction for this trade, without submitting it."""
        checks.check_from_address(options.from_address, self.from_amount.blockchain, is_required=True)
        checks.check_receiver_address(options.receiver_address, self.to_amount.blockchain)
        tx = await self.build_transaction(
            options.from_address, options.receiver_address or options.from_address
        )
        return TransactionConfig(
            to=tx.to,
            data=tx.data,
            value=tx.value,
            gas_limit=options.gas_limit,
            gas_price=options.gas_price,
        )

    async def build_transaction(self, from_address: str, receiver_address: str) -> TransactionConfig:
        provider_call = await self.get_provider_call(from_address, receiver_address)
        if not self.use_proxy:
            value = provider_call.native_fee
            if self.from_amount.is_native:
                value += self.from_amount.wei_amount
            return TransactionConfig(to=provider_call.gateway, data=provider_call.data, value=value)

        pre_swap = None
        if self.src_trade:
            dex_tx = self.src_trade.encode_direct(proxy.PROXY_CONTRACT_ADDRESS)
            pre_swap = PreSwap(
                dex=self.src_trade.router_address,
                transit_token=self.src_trade.to_amount.address,
                dex_data=dex_tx.data,
            )
        return proxy.encode_router_call(
            from_amount=self.from_amount,
            to_amount_min=self.to_token_amount_min,
            dst_chain_id=get_chain_id(self.to_amount.blockchain),
            receiver_address=receiver_address,
            provider_address=self.provider_address,
            fee_info=self.fee_info,
            provider_call=provider_call,
            pre_swap=pre_swap,
        )

    def to_dict(self) -> dict:
        try:
            network_fee = str(self.network_fee)
        except ValueError:
            # fixed and crypto fees in different coins have no single total
            network_fee = None
        return {
            "type": self.type.value,
            "from_blockchain": self.from_amount.blockchain.value,
            "from_symbol": self.from_amount.symbol,
            "from_amount": str(self.from_amount.token_amount),
            "to_blockchain": self.to_amount.blockchain.value,
            "to_symbol": self.to_amount.symbol,
            "to_amount": str(self.to_amount.token_amount),
            "to_amount_min": str(self.to_token_amount_min.token_amount),
            "price_impact": str(self.price_impact) if self.price_impact is not None else None,
            "fee_info": self.fee_info.to_dict(),
            "network_fee": network_fee,
            "use_proxy": self.use_proxy,
            "it_type": {
                "from": self.it_type.from_type.value if self.it_type.from_type else None,
                "to": self.it_type.to_type.value if self.it_type.to_type else None,
            },
        }
