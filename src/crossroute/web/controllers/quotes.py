"""Quote API endpoints."""

from fastapi import APIRouter, Depends, Request

from crossroute.web.contracts.quotes import (
    MultiQuoteRequest,
    MultiQuoteResponse,
    QuoteRequest,
    QuoteResponse,
)
from crossroute.web.services.quote_service import QuoteService

router = APIRouter(prefix="/quotes", tags=["quotes"])


def get_quote_service(request: Request) -> QuoteService:
    """Service bound to the application's SDK session."""
    return request.app.state.quote_service


@router.post("/", response_model=QuoteResponse)
async def get_quote(
    request: QuoteRequest, service: QuoteService = Depends(get_quote_service)
) -> QuoteResponse:
    """Get the best cross-chain quote.

    This is a READ-ONLY operation - no transactions are signed or sent.
    """
    return await service.get_quote(request)


@router.post("/multi", response_model=MultiQuoteResponse)
async def get_multi_quote(
    request: MultiQuoteRequest, service: QuoteService = Depends(get_quote_service)
) -> MultiQuoteResponse:
    """Get quotes from all providers, best first, failed providers last."""
    return await service.get_multi_quote(request)
