"""
HTTP transport for the Free Mobile gateway.

The dispatcher only needs an object with an async ``send_one`` method, so any
HTTP client can stand in for HttpxTransport.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from .config import FREE_MOBILE_ENDPOINT
from .credentials import Credentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayResponse:
    """Gateway answer for one delivered chunk."""
    status_code: int
    body: str = ""
    chunk_index: int = 0
    duration_seconds: float = 0.0


class TransportFailure(Exception):
    """
    A gateway call that did not succeed.

    ``status_code`` is None when no HTTP response was received
    (connection refused, DNS failure, timeout).
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class Transport(Protocol):
    """
    Delivers one chunk per call.

    A failed call either raises TransportFailure or returns a response with a
    non-2xx ``status_code``; the dispatcher treats both as a failed chunk.
    """

    async def send_one(self, credentials: Credentials, chunk: str) -> GatewayResponse:
        ...


class HttpxTransport:
    """Sends one chunk per gateway call with httpx."""

    def __init__(
        self,
        endpoint_url: str = FREE_MOBILE_ENDPOINT,
        method: str = "POST",
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the transport.

        Args:
            endpoint_url: Gateway URL
            method: POST for a JSON body, GET for query parameters
            timeout_seconds: Timeout for each call
            client: Optional shared client; closed by its owner, not here
        """
        self.endpoint_url = endpoint_url
        self.method = method.upper()
        self.timeout_seconds = timeout_seconds
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_seconds)
        return self._client

    async def send_one(self, credentials: Credentials, chunk: str) -> GatewayResponse:
        """
        Deliver one chunk.

        Raises:
            TransportFailure: On a non-2xx response or when no response arrives
        """
        params = dict(credentials.as_params(), msg=chunk)
        client = self._get_client()
        start_time = time.time()

        try:
            if self.method == "GET":
                resp = await client.get(self.endpoint_url, params=params)
            else:
                resp = await client.post(self.endpoint_url, json=params)
        except httpx.RequestError as e:
            raise TransportFailure(f"{type(e).__name__}: {e}") from e

        duration = time.time() - start_time

        if not resp.is_success:
            raise TransportFailure(
                f"Gateway answered {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        logger.debug(f"Gateway answered {resp.status_code} in {duration:.2f}s")
        return GatewayResponse(
            status_code=resp.status_code,
            body=resp.text,
            duration_seconds=duration,
        )

    async def aclose(self):
        """Close the underlying client if this transport created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
