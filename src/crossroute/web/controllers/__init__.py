"""HTTP controllers for the quote API.

These controllers never access private keys or sign transactions.
"""

from crossroute.web.controllers.health import router as health_router
from crossroute.web.controllers.quotes import router as quotes_router

__all__ = ["health_router", "quotes_router"]
