"""Stargate cross-chain trade."""

from typing import Optional

from crossroute.chains import Blockchain
from crossroute.core.web3_pure import encode_function_call
from crossroute.cross_chain.models import CrossChainTradeType
from crossroute.cross_chain.proxy import ProviderCall
from crossroute.cross_chain.stargate.abi import STARGATE_ROUTER_ABI, STARGATE_ROUTER_ETH_ABI
from crossroute.cross_chain.stargate.constants import (
    DST_GAS_FOR_CALL,
    STARGATE_CHAIN_ID,
    STARGATE_RELAYER_ADDRESS,
    STARGATE_ROUTER_ADDRESS,
    STARGATE_ROUTER_ETH_ADDRESS,
)
from crossroute.cross_chain.trade import CrossChainTrade
from crossroute.tokens import TokenAmount


def layer_zero_tx_params(
    receiver_address: str, to_blockchain: Blockchain, has_payload: bool
) -> tuple:
    """(dstGasForCall, dstNativeAmount, dstNativeAddr) for a swap.

    A destination payload is executed by the relayer of the destination
    chain, which needs gas for the call.
    """
    if has_payload:
        return (DST_GAS_FOR_CALL, 0, STARGATE_RELAYER_ADDRESS[to_blockchain])
    return (0, 0, receiver_address)


class StargateTrade(CrossChainTrade):
    """Bridges `transit_amount` from the source pool to the destination pool."""

    type = CrossChainTradeType.STARGATE

    def __init__(
        self,
        *args,
        src_pool_id: int,
        dst_pool_id: int,
        transit_amount: TokenAmount,
        bridge_amount_min_wei: int,
        layer_zero_fee_wei: int,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.src_pool_id = src_pool_id
        self.dst_pool_id = dst_pool_id
        self.transit_amount = transit_amount
        self.bridge_amount_min_wei = bridge_amount_min_wei
        self.layer_zero_fee_wei = layer_zero_fee_wei

    @property
    def is_native_transfer(self) -> bool:
        return self.transit_amount.is_native

    @property
    def provider_contract_address(self) -> str:
        blockchain = self.from_amount.blockchain
        if self.is_native_transfer:
            return STARGATE_ROUTER_ETH_ADDRESS[blockchain]
        return STARGATE_ROUTER_ADDRESS[blockchain]

    def get_dst_swap_data(self, receiver_address: str) -> Optional[str]:
        if not self.dst_trade:
            return None
        return self.dst_trade.encode_direct(receiver_address).data

    async def get_provider_call(self, from_address: str, receiver_address: str) -> ProviderCall:
        to_blockchain = self.to_amount.blockchain
        dst_chain_id = STARGATE_CHAIN_ID[to_blockchain]

        if self.is_native_transfer:
            data = encode_function_call(
                STARGATE_ROUTER_ETH_ABI,
                "swapETH",
                [
                    dst_chain_id,
                    from_address,
                    receiver_address,
                    self.transit_amount.wei_amount,
                    self.bridge_amount_min_wei,
                ],
            )
            return ProviderCall(
                gateway=self.provider_contract_address,
                data=data,
                native_fee=self.layer_zero_fee_wei,
            )

        payload = self.get_dst_swap_data(receiver_address)
        to_address = STARGATE_RELAYER_ADDRESS[to_blockchain] if payload else receiver_address
        data = encode_function_call(
            STARGATE_ROUTER_ABI,
            "swap",
            [
                dst_chain_id,
                self.src_pool_id,
                self.dst_pool_id,
                from_address,
                self.transit_amount.wei_amount,
                self.bridge_amount_min_wei,
                layer_zero_tx_params(receiver_address, to_blockchain, payload is not None),
                to_address,
                payload or b"",
            ],
        )
        return ProviderCall(
            gateway=self.provider_contract_address,
            data=data,
            native_fee=self.layer_zero_fee_wei,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["src_pool_id"] = self.src_pool_id
        data["dst_pool_id"] = self.dst_pool_id
        return data
