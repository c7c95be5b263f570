"""Read-only blockchain access."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from web3 import AsyncWeb3, Web3

from crossroute.chains import Blockchain
from crossroute.config import Settings
from crossroute.core.abi import ERC20_ABI
from crossroute.core.web3_pure import from_wei, is_native_address, normalize_address_args
from crossroute.errors import InsufficientFundsError
from crossroute.tokens import TokenAmount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MulticallResult:
    """Outcome of one call inside a batched read."""

    success: bool
    output: Any = None


class Web3Public(ABC):
    """Read service for one blockchain."""

    def __init__(self, blockchain: Blockchain):
        self.blockchain = blockchain

    @abstractmethod
    async def call_contract_method(
        self, address: str, abi: list, method: str, args: Sequence = ()
    ) -> Any:
        """Call a view method and return its decoded output.

        Raises:
            web3.exceptions.ContractLogicError: the call reverted
        """

    @abstractmethod
    async def get_balance(self, address: str, token_address: Optional[str] = None) -> int:
        """Balance in minimal units; native coin when token_address is native or None."""

    @abstractmethod
    async def get_gas_price(self) -> int:
        """Current gas price in wei."""

    @abstractmethod
    async def get_estimated_gas(
        self, from_address: str, to: str, data: str, value: int = 0
    ) -> Optional[int]:
        """Gas estimate, None when the node refuses to estimate."""

    async def multicall_contract_method(
        self, address: str, abi: list, method: str, args_list: Sequence[Sequence]
    ) -> list[MulticallResult]:
        """Call the same method with many argument sets.

        A failing call is reported as unsuccessful, it never fails the batch.
        """
        outputs = await asyncio.gather(
            *(self.call_contract_method(address, abi, method, args) for args in args_list),
            return_exceptions=True,
        )
        results = []
        for args, output in zip(args_list, outputs):
            if isinstance(output, Exception):
                logger.debug(f"Multicall {method}{tuple(args)} failed on {address}: {output}")
                results.append(MulticallResult(success=False))
            else:
                results.append(MulticallResult(success=True, output=output))
        return results

    async def get_allowance(self, token_address: str, owner: str, spender: str) -> int:
        return int(
            await self.call_contract_method(token_address, ERC20_ABI, "allowance", [owner, spender])
        )

    async def get_token_decimals(self, token_address: str) -> int:
        return int(await self.call_contract_method(token_address, ERC20_ABI, "decimals"))

    async def check_balance(self, amount: TokenAmount, address: str) -> None:
        """Raise InsufficientFundsError when `address` holds less than `amount`."""
        balance = await self.get_balance(address, amount.address)
        if balance < amount.wei_amount:
            raise InsufficientFundsError(
                token_symbol=amount.symbol,
                balance=from_wei(balance, amount.decimals),
                required=amount.token_amount,
            )


class EvmWeb3Public(Web3Public):
    """Web3Public backed by an AsyncWeb3 HTTP connection."""

    def __init__(self, w3: AsyncWeb3, blockchain: Blockchain):
        super().__init__(blockchain)
        self.w3 = w3

    async def call_contract_method(
        self, address: str, abi: list, method: str, args: Sequence = ()
    ) -> Any:
        contract = self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        function = getattr(contract.functions, method)
        return await function(*normalize_address_args(args)).call()

    async def get_balance(self, address: str, token_address: Optional[str] = None) -> int:
        if token_address is None or is_native_address(token_address):
            return int(await self.w3.eth.get_balance(Web3.to_checksum_address(address)))
        return int(
            await self.call_contract_method(token_address, ERC20_ABI, "balanceOf", [address])
        )

    async def get_gas_price(self) -> int:
        return int(await self.w3.eth.gas_price)

    async def get_estimated_gas(
        self, from_address: str, to: str, data: str, value: int = 0
    ) -> Optional[int]:
        try:
            return int(
                await self.w3.eth.estimate_gas(
                    {
                        "from": Web3.to_checksum_address(from_address),
                        "to": Web3.to_checksum_address(to),
                        "data": data,
                        "value": value,
                    }
                )
            )
        except Exception as e:
            logger.warning(f"Gas estimation failed on {self.blockchain.value}: {e}")
            return None

    async def aclose(self) -> None:
        await self.w3.provider.disconnect()


class Web3PublicService:
    """Lazily creates one Web3Public per blockchain from Settings RPC URLs."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._instances: dict[Blockchain, Web3Public] = {}

    def get_web3_public(self, blockchain: Blockchain) -> Web3Public:
        if blockchain not in self._instances:
            rpc_url = self.settings.get_rpc_url(blockchain.value)
            if not rpc_url:
                raise ValueError(f"No RPC URL configured for {blockchain.value}")
            w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
            self._instances[blockchain] = EvmWeb3Public(w3, blockchain)
            logger.debug(f"Connected read service for {blockchain.value}: {rpc_url}")
        return self._instances[blockchain]

    def set_web3_public(self, blockchain: Blockchain, web3_public: Web3Public) -> None:
        """Register a custom read service (alternative RPC, test double)."""
        self._instances[blockchain] = web3_public

    async def aclose(self) -> None:
        for web3_public in self._instances.values():
            if isinstance(web3_public, EvmWeb3Public):
                await web3_public.aclose()
        self._instances.clear()
