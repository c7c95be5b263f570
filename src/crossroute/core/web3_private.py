"""Signing and submitting transactions from the connected wallet."""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3

from crossroute.chains import Blockchain, get_chain_id
from crossroute.core.abi import ERC20_ABI
from crossroute.core.web3_pure import MAX_UINT256, calculate_gas_margin, encode_function_call
from crossroute.errors import WrongNetworkError
from crossroute.transactions import BasicTransactionOptions, TransactionConfig

logger = logging.getLogger(__name__)


class Web3Private(ABC):
    """Write service bound to one wallet on one active blockchain."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Checksummed wallet address."""

    @property
    @abstractmethod
    def blockchain(self) -> Blockchain:
        """Blockchain the wallet is currently connected to."""

    @abstractmethod
    async def check_blockchain_correct(self, blockchain: Blockchain) -> None:
        """Raise WrongNetworkError unless the wallet is on `blockchain`."""

    @abstractmethod
    async def send_transaction(
        self, tx: TransactionConfig, options: Optional[BasicTransactionOptions] = None
    ) -> str:
        """Sign and broadcast; returns the transaction hash."""

    async def execute_contract_method(
        self,
        address: str,
        abi: list,
        method: str,
        args: Sequence,
        options: Optional[BasicTransactionOptions] = None,
        value: int = 0,
    ) -> str:
        data = encode_function_call(abi, method, args)
        return await self.send_transaction(
            TransactionConfig(to=address, data=data, value=value), options
        )

    async def approve_tokens(
        self,
        token_address: str,
        spender: str,
        amount: Optional[int] = None,
        options: Optional[BasicTransactionOptions] = None,
    ) -> str:
        """Approve `spender`; unlimited when amount is None."""
        approve_amount = MAX_UINT256 if amount is None else amount
        logger.info(f"Approving {token_address} for {spender} (amount={approve_amount})")
        return await self.execute_contract_method(
            token_address, ERC20_ABI, "approve", [spender, approve_amount], options
        )


class EvmWeb3Private(Web3Private):
    """Local-key wallet using eth_account for signing."""

    def __init__(self, w3: AsyncWeb3, account: LocalAccount, blockchain: Blockchain):
        self.w3 = w3
        self.account = account
        self._blockchain = blockchain

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def blockchain(self) -> Blockchain:
        return self._blockchain

    async def check_blockchain_correct(self, blockchain: Blockchain) -> None:
        if blockchain != self._blockchain:
            raise WrongNetworkError(required=blockchain.value, actual=get_chain_id(self._blockchain))
        node_chain_id = await self.w3.eth.chain_id
        if node_chain_id != get_chain_id(blockchain):
            raise WrongNetworkError(required=blockchain.value, actual=node_chain_id)

    async def send_transaction(
        self, tx: TransactionConfig, options: Optional[BasicTransactionOptions] = None
    ) -> str:
        options = options or BasicTransactionOptions()
        params = {
            "from": self.address,
            "to": Web3.to_checksum_address(tx.to),
            "data": tx.data,
            "value": tx.value,
            "chainId": get_chain_id(self._blockchain),
            "nonce": await self.w3.eth.get_transaction_count(self.address, "pending"),
        }

        gas_price = options.gas_price or tx.gas_price
        params["gasPrice"] = gas_price if gas_price else await self.w3.eth.gas_price

        gas_limit = options.gas_limit or tx.gas_limit
        if not gas_limit:
            estimate = await self.w3.eth.estimate_gas(
                {k: params[k] for k in ("from", "to", "data", "value")}
            )
            gas_limit = calculate_gas_margin(estimate)
        params["gas"] = gas_limit

        signed = self.account.sign_transaction(params)
        tx_hash = (await self.w3.eth.send_raw_transaction(signed.raw_transaction)).to_0x_hex()
        logger.info(f"Transaction broadcast on {self._blockchain.value}: {tx_hash}")

        if options.on_transaction_hash:
            options.on_transaction_hash(tx_hash)
        return tx_hash
