"""Services for the quote API.

All services are READ-ONLY and never sign transactions.
"""

from crossroute.web.services.quote_service import QuoteService

__all__ = ["QuoteService"]
