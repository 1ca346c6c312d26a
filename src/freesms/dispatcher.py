"""
Ordered, fail-fast delivery of message chunks.

The chunks of one message are reassembled on the handset in arrival order,
so chunk i+1 is never started before chunk i has been accepted.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from .classifier import TRANSPORT_EXCEPTIONS, classify_failure, classify_status
from .credentials import Credentials
from .exceptions import DispatchError
from .transport import GatewayResponse, Transport

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of a fully delivered message."""
    responses: List[GatewayResponse] = field(default_factory=list)
    sanitized_message: str = ""
    replaced_symbols: int = 0

    @property
    def chunk_count(self) -> int:
        return len(self.responses)

    @property
    def last_response(self) -> Optional[GatewayResponse]:
        return self.responses[-1] if self.responses else None


class Dispatcher:
    """Drives chunks one at a time through a transport."""

    def __init__(self, transport: Transport):
        self.transport = transport

    def _log_failure(self, index: int, total: int, error: DispatchError):
        if index:
            logger.error(
                f"Chunk {index + 1}/{total} failed after {index} delivered: "
                f"{error.kind.value}"
            )
        else:
            logger.error(f"Chunk 1/{total} failed: {error.kind.value}")

    async def dispatch(
        self, credentials: Credentials, chunks: Sequence[str]
    ) -> DispatchResult:
        """
        Deliver chunks strictly in order.

        Args:
            credentials: Validated account credentials
            chunks: Ordered chunks of one message

        Returns:
            DispatchResult: Responses of every chunk, in send order

        Raises:
            DispatchError: Classified error of the first failed chunk, with
                the number of chunks delivered before it
        """
        total = len(chunks)
        responses: List[GatewayResponse] = []

        for index, chunk in enumerate(chunks):
            logger.debug(f"Sending chunk {index + 1}/{total} ({len(chunk)} chars)")
            try:
                response = await self.transport.send_one(credentials, chunk)
            except TRANSPORT_EXCEPTIONS as e:
                error = classify_failure(e).with_progress(index, total, responses)
                self._log_failure(index, total, error)
                raise error from e

            status = getattr(response, "status_code", None)
            if status is not None and not 200 <= status < 300:
                error = classify_status(status, (getattr(response, "body", "") or "").strip())
                error = error.with_progress(index, total, responses)
                self._log_failure(index, total, error)
                raise error

            if isinstance(response, GatewayResponse):
                response = replace(response, chunk_index=index)
            responses.append(response)

        return DispatchResult(responses=responses)
