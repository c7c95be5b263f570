"""Single-chain Uniswap-V2-style trade."""

import logging
import time
from decimal import Decimal
from typing import Optional

from crossroute import checks
from crossroute.checks import TradeState
from crossroute.core.context import SdkContext
from crossroute.core.web3_pure import encode_function_call
from crossroute.on_chain.abi import UNISWAP_V2_ROUTER_ABI
from crossroute.on_chain.models import OnChainTradeType
from crossroute.tokens import TokenAmount
from crossroute.transactions import (
    BasicTransactionOptions,
    EncodeTransactionOptions,
    GasData,
    SwapTransactionOptions,
    TransactionConfig,
)

logger = logging.getLogger(__name__)


class OnChainTrade:
    """Accepted quote for a swap through a Uniswap V2 router.

    `path` holds token addresses as the router sees them, with the native
    coin replaced by its wrapped token.
    """

    def __init__(
        self,
        ctx: SdkContext,
        trade_type: OnChainTradeType,
        from_amount: TokenAmount,
        to_amount: TokenAmount,
        path: list[str],
        router_address: str,
        slippage_tolerance: Decimal,
        deadline_minutes: int = 20,
        gas_data: Optional[GasData] = None,
        native_method_name: str = "ETH",
    ):
        if from_amount.blockchain != to_amount.blockchain:
            raise ValueError("On-chain trade must stay on one blockchain")
        if not Decimal(0) <= slippage_tolerance < Decimal(1):
            raise ValueError(f"Slippage must be in [0, 1), got {slippage_tolerance}")

        self.ctx = ctx
        self.type = trade_type
        self.from_amount = from_amount
        self.to_amount = to_amount
        self.path = list(path)
        self.router_address = router_address
        self.slippage_tolerance = slippage_tolerance
        self.deadline_minutes = deadline_minutes
        self.gas_data = gas_data
        self.native_method_name = native_method_name
        self.state = TradeState.QUOTED

    @property
    def to_token_amount_min(self) -> TokenAmount:
        return TokenAmount(
            token=self.to_amount.token,
            wei_amount=self.to_amount.wei_amount_minus_slippage(self.slippage_tolerance),
        )

    @property
    def price_impact(self) -> Optional[Decimal]:
        return self.from_amount.calculate_price_impact_percent(self.to_amount)

    @property
    def spender(self) -> str:
        return self.router_address

    async def need_approve(self) -> bool:
        return await checks.need_approve(self.ctx, self.from_amount, self.spender)

    async def approve(
        self, options: Optional[BasicTransactionOptions] = None, check_need_approve: bool = True
    ) -> Optional[str]:
        self.state = TradeState.APPROVING
        return await checks.approve(
            self.ctx, self.from_amount, self.spender, options, check_need_approve
        )

    async def swap(self, options: Optional[SwapTransactionOptions] = None) -> str:
        """Approve if needed, then submit the swap. Returns the swap hash."""
        options = options or SwapTransactionOptions()
        await checks.check_trade_errors(self.ctx, self.from_amount)
        checks.check_receiver_address(options.receiver_address, self.to_amount.blockchain)

        web3_private = self.ctx.web3_private
        self.state = TradeState.APPROVING
        await checks.approve_before_swap(self.ctx, self.from_amount, self.spender, options)

        self.state = TradeState.SWAPPING
        tx = self.encode_direct(web3_private.address, options.receiver_address)
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
            f"{self.type.value} swap submitted: {self.from_amount} -> {self.to_amount} ({tx_hash})"
        )
        return tx_hash

    async def encode(self, options: EncodeTransactionOptions) -> TransactionConfig:
        checks.check_from_address(options.from_address, self.from_amount.blockchain, is_required=True)
        checks.check_receiver_address(options.receiver_address, self.to_amount.blockchain)
        tx = self.encode_direct(options.from_address, options.receiver_address)
        return TransactionConfig(
            to=tx.to,
            data=tx.data,
            value=tx.value,
            gas_limit=options.gas_limit,
            gas_price=options.gas_price,
        )

    def encode_direct(
        self, from_address: str, receiver_address: Optional[str] = None
    ) -> TransactionConfig:
        """Router call for this trade, without address validation."""
        receiver = receiver_address or from_address
        deadline = int(time.time()) + self.deadline_minutes * 60
        amount_out_min = self.to_token_amount_min.wei_amount
        native = self.native_method_name

        if self.from_amount.is_native:
            method = f"swapExact{native}ForTokens"
            args = [amount_out_min, self.path, receiver, deadline]
            value = self.from_amount.wei_amount
        else:
            method = (
                f"swapExactTokensFor{native}" if self.to_amount.is_native else "swapExactTokensForTokens"
            )
            args = [self.from_amount.wei_amount, amount_out_min, self.path, receiver, deadline]
            value = 0

        return TransactionConfig(
            to=self.router_address,
            data=encode_function_call(UNISWAP_V2_ROUTER_ABI, method, args),
            value=value,
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "from_amount": str(self.from_amount.token_amount),
            "from_symbol": self.from_amount.symbol,
            "to_amount": str(self.to_amount.token_amount),
            "to_symbol": self.to_amount.symbol,
            "to_amount_min": str(self.to_token_amount_min.token_amount),
            "path": self.path,
            "price_impact": str(self.price_impact) if self.price_impact is not None else None,
        }
