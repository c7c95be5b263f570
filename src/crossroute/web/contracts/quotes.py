"""Quote request and response contracts."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from crossroute.chains import Blockchain
from crossroute.cross_chain.models import CrossChainTradeType
from crossroute.utils.address import validate_address


class QuoteToken(BaseModel):
    """Token as the client knows it."""

    blockchain: Blockchain = Field(..., description="Blockchain (e.g., ETH, BSC, POLYGON)")
    address: str = Field(..., description="Token contract address, zero address for native coin")
    symbol: str = Field(..., description="Token symbol")
    decimals: int = Field(..., ge=0, le=36, description="Token decimals")
    price: Optional[Decimal] = Field(None, ge=0, description="USD price per token, if known")

    @model_validator(mode="after")
    def check_address(self) -> "QuoteToken":
        valid, error = validate_address(self.address, self.blockchain)
        if not valid:
            raise ValueError(error)
        return self


class QuoteRequest(BaseModel):
    """Request for a cross-chain swap quote."""

    from_token: QuoteToken = Field(..., description="Token to sell")
    to_token: QuoteToken = Field(..., description="Token to receive on the destination chain")
    amount: Decimal = Field(..., gt=0, description="Amount of from_token to swap")
    slippage: Optional[Decimal] = Field(
        default=None,
        ge=0,
        lt=100,
        description="Slippage tolerance in percent (default from settings)",
    )
    receiver_address: Optional[str] = Field(None, description="Receiver on the destination chain")
    use_proxy: bool = Field(True, description="Route through the fee-collecting proxy contract")
    enable_destination_swap: bool = Field(
        False, description="Allow a DEX swap after the bridge when the target is not bridgeable"
    )
    providers: Optional[list[CrossChainTradeType]] = Field(
        None, description="Specific providers to query (None = all)"
    )

    @model_validator(mode="after")
    def check_chains(self) -> "QuoteRequest":
        if self.from_token.blockchain == self.to_token.blockchain:
            raise ValueError("from_token and to_token must be on different blockchains")
        if self.receiver_address:
            valid, error = validate_address(self.receiver_address, self.to_token.blockchain)
            if not valid:
                raise ValueError(error)
        return self


class MultiQuoteRequest(QuoteRequest):
    """Request for quotes from every provider."""


class QuoteResponse(BaseModel):
    """One provider's quote, or the reason it has none."""

    model_config = ConfigDict(json_encoders={Decimal: str})

    success: bool = Field(..., description="Whether the provider produced a trade")
    provider: Optional[str] = Field(None, description="Provider trade type (STARGATE, XY, VIA)")
    from_blockchain: str = Field(..., description="Source blockchain")
    to_blockchain: str = Field(..., description="Destination blockchain")
    from_symbol: str = Field(..., description="Source token symbol")
    to_symbol: str = Field(..., description="Destination token symbol")
    from_amount: Decimal = Field(..., description="Input amount")
    to_amount: Optional[Decimal] = Field(None, description="Expected output amount")
    to_amount_min: Optional[Decimal] = Field(None, description="Guaranteed output after slippage")
    price_impact: Optional[Decimal] = Field(None, description="Price impact in percent")
    network_fee: Optional[Decimal] = Field(None, description="Fixed plus bridge fee in native coin")
    fee_info: Optional[dict] = Field(None, description="Fee breakdown")
    error: Optional[str] = Field(None, description="Error message if failed")
    error_kind: Optional[str] = Field(None, description="Error classification if failed")


class MultiQuoteResponse(BaseModel):
    """Quotes from all providers, best first."""

    model_config = ConfigDict(json_encoders={Decimal: str})

    success: bool
    quotes: list[QuoteResponse] = Field(default_factory=list)
    best_quote: Optional[QuoteResponse] = None
    error: Optional[str] = None
