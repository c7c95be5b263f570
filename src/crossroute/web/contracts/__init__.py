"""Request and response contracts for the quote API."""

from crossroute.web.contracts.quotes import (
    MultiQuoteRequest,
    MultiQuoteResponse,
    QuoteRequest,
    QuoteResponse,
    QuoteToken,
)

__all__ = [
    "MultiQuoteRequest",
    "MultiQuoteResponse",
    "QuoteRequest",
    "QuoteResponse",
    "QuoteToken",
]
