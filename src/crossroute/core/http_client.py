"""HTTP transport used by REST-based providers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class HttpClient(ABC):
    """Narrow JSON-over-HTTP interface consumed by providers."""

    @abstractmethod
    async def get(
        self,
        url: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """GET a URL and return the decoded JSON body.

        Raises:
            httpx.HTTPError: transport failure or non-2xx status
        """

    async def aclose(self) -> None:
        """Release transport resources."""


class HttpxClient(HttpClient):
    """httpx-backed client sharing one connection pool per session."""

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(
            timeout=timeout, headers={"Accept": "application/json"}
        )

    async def get(
        self,
        url: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        logger.debug(f"GET {url} params={params}")
        response = await self._client.get(
            url,
            params=params,
            headers=headers,
            timeout=timeout if timeout is not None else self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()
