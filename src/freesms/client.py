"""
Free Mobile SMS client.

This module provides FreeMobileClient, the public entry point: it validates
the account at construction, prepares each message (sanitize, chunk) and
hands the chunks to the dispatcher for ordered delivery.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .chunker import chunk_string
from .config import GatewayConfig, config
from .credentials import validate_credentials
from .dispatcher import Dispatcher, DispatchResult
from .exceptions import DispatchError, ErrorKind
from .sanitizer import MessageSanitizer
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


@dataclass
class DispatchMetrics:
    """In-memory counters for one client."""
    total_sends: int = 0
    successful_sends: int = 0
    failed_sends: int = 0
    chunks_delivered: int = 0
    partial_deliveries: int = 0
    last_send_time: Optional[datetime] = None


class FreeMobileClient:
    """
    Client for sending SMS through the Free Mobile gateway.

    ``send`` resolves with a DispatchResult holding the gateway response of
    every chunk in send order, or raises DispatchError.
    """

    def __init__(
        self,
        credentials: Any,
        config_override: Optional[GatewayConfig] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the client.

        Args:
            credentials: Mapping with ``user`` and ``pass`` keys, or Credentials
            config_override: Optional configuration override
            transport: Optional transport; defaults to HttpxTransport

        Raises:
            DispatchError: INVALID_CREDENTIALS, INVALID_USER or INVALID_PASS
        """
        self.credentials = validate_credentials(credentials)
        self.config = config_override or config
        self.sanitizer = MessageSanitizer(self.config.allow_list, self.config.placeholder)
        self.metrics = DispatchMetrics()

        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(
            endpoint_url=self.config.endpoint_url,
            method=self.config.http_method,
            timeout_seconds=self.config.request_timeout_seconds,
        )
        self.dispatcher = Dispatcher(self.transport)

    def _prepare(self, message: Any) -> Tuple[List[str], str, int]:
        if not isinstance(message, str):
            raise DispatchError(
                ErrorKind.INVALID_MESSAGE_TYPE,
                f"Message must be a string, got {type(message).__name__}",
            )

        sanitized, replaced = self.sanitizer.sanitize_with_count(message)

        if not sanitized.strip():
            raise DispatchError(ErrorKind.EMPTY_MESSAGE, "Cannot send an empty SMS")

        if replaced and self.config.append_notice:
            sanitized = f"{sanitized}\n\n{self.config.notice_text}"

        return chunk_string(sanitized, self.config.max_chunk_length), sanitized, replaced

    def prepare(self, message: Any) -> List[str]:
        """
        Validate, sanitize and chunk a message without sending it.

        Args:
            message: Message text

        Returns:
            List[str]: Chunks in send order

        Raises:
            DispatchError: INVALID_MESSAGE_TYPE or EMPTY_MESSAGE
        """
        return self._prepare(message)[0]

    async def send(self, message: Any) -> DispatchResult:
        """
        Send a text message to the account's own phone.

        Args:
            message: Message text; long messages are split into several SMS

        Returns:
            DispatchResult: Ordered responses of every delivered chunk

        Raises:
            DispatchError: Pre-flight or delivery failure. After a delivery
                failure, ``delivered_chunks`` tells what already went out.
        """
        self.metrics.total_sends += 1

        try:
            chunks, sanitized, replaced = self._prepare(message)
        except DispatchError as e:
            self.metrics.failed_sends += 1
            logger.warning(f"Message rejected before sending: {e.kind.value}")
            raise

        if self.config.log_message_content:
            logger.info(f"Sending message in {len(chunks)} chunk(s): {sanitized[:50]}...")
        else:
            logger.info(f"Sending message in {len(chunks)} chunk(s)")

        start_time = time.time()
        try:
            result = await self.dispatcher.dispatch(self.credentials, chunks)
        except DispatchError as e:
            self.metrics.failed_sends += 1
            self.metrics.chunks_delivered += e.delivered_chunks
            if e.is_partial_delivery:
                self.metrics.partial_deliveries += 1
                logger.error(
                    f"Partial delivery: {e.delivered_chunks}/{e.total_chunks} chunks sent "
                    f"before {e.kind.value}"
                )
            raise

        result.sanitized_message = sanitized
        result.replaced_symbols = replaced

        self.metrics.successful_sends += 1
        self.metrics.chunks_delivered += result.chunk_count
        self.metrics.last_send_time = datetime.now()

        logger.info(
            f"Message sent successfully ({result.chunk_count} chunk(s), "
            f"{time.time() - start_time:.2f}s)"
        )
        return result

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get current client metrics.

        Returns:
            Dict containing usage counters
        """
        success_rate = 0.0
        if self.metrics.total_sends > 0:
            success_rate = self.metrics.successful_sends / self.metrics.total_sends

        return {
            'total_sends': self.metrics.total_sends,
            'successful_sends': self.metrics.successful_sends,
            'failed_sends': self.metrics.failed_sends,
            'success_rate': success_rate,
            'chunks_delivered': self.metrics.chunks_delivered,
            'partial_deliveries': self.metrics.partial_deliveries,
            'last_send_time': self.metrics.last_send_time.isoformat() if self.metrics.last_send_time else None,
        }

    def reset_metrics(self):
        """Reset all metrics counters."""
        self.metrics = DispatchMetrics()
        logger.info("Client metrics reset")

    async def aclose(self):
        """Release the default transport's HTTP client."""
        if self._owns_transport and hasattr(self.transport, "aclose"):
            await self.transport.aclose()

    async def __aenter__(self) -> "FreeMobileClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def __repr__(self) -> str:
        return f"FreeMobileClient(user={self.credentials.user!r})"
