"""
Error types for the freesms package.

Every failure the client reports is a DispatchError carrying an ErrorKind,
so callers match on ``error.kind`` instead of on exception subclasses.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    # Raised at client construction
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_USER = "INVALID_USER"
    INVALID_PASS = "INVALID_PASS"

    # Raised before any network call
    INVALID_MESSAGE_TYPE = "INVALID_MESSAGE_TYPE"
    EMPTY_MESSAGE = "EMPTY_MESSAGE"

    # Raised after a failed chunk delivery
    BAD_REQUEST = "BAD_REQUEST"
    RATE_LIMITED = "RATE_LIMITED"
    ACCESS_DENIED = "ACCESS_DENIED"
    SERVER_ERROR = "SERVER_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


VALIDATION_KINDS = frozenset({
    ErrorKind.INVALID_CREDENTIALS,
    ErrorKind.INVALID_USER,
    ErrorKind.INVALID_PASS,
})

PREFLIGHT_KINDS = frozenset({
    ErrorKind.INVALID_MESSAGE_TYPE,
    ErrorKind.EMPTY_MESSAGE,
})

TRANSPORT_KINDS = frozenset({
    ErrorKind.BAD_REQUEST,
    ErrorKind.RATE_LIMITED,
    ErrorKind.ACCESS_DENIED,
    ErrorKind.SERVER_ERROR,
    ErrorKind.HTTP_ERROR,
    ErrorKind.NETWORK_ERROR,
})


class DispatchError(Exception):
    """
    Raised for every credential, validation and delivery failure.

    When a multi-chunk message fails part way through, ``delivered_chunks``
    tells how many chunks the gateway already accepted. Those chunks are not
    rolled back, so a failed send does not mean nothing was sent.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        http_status: Optional[int] = None,
        delivered_chunks: int = 0,
        total_chunks: int = 0,
        responses: Sequence = (),
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.http_status = http_status
        self.delivered_chunks = delivered_chunks
        self.total_chunks = total_chunks
        self.responses: Tuple = tuple(responses)

    @property
    def is_partial_delivery(self) -> bool:
        """True when some, but not all, chunks reached the gateway."""
        return 0 < self.delivered_chunks < self.total_chunks

    @property
    def is_transport_error(self) -> bool:
        return self.kind in TRANSPORT_KINDS

    def with_progress(
        self, delivered_chunks: int, total_chunks: int, responses: Sequence = ()
    ) -> "DispatchError":
        """Return a copy of this error annotated with delivery progress."""
        error = DispatchError(
            self.kind,
            self.message,
            http_status=self.http_status,
            delivered_chunks=delivered_chunks,
            total_chunks=total_chunks,
            responses=responses,
        )
        error.__cause__ = self.__cause__
        return error

    def __repr__(self) -> str:
        return (
            f"DispatchError(kind={self.kind.value}, http_status={self.http_status}, "
            f"delivered={self.delivered_chunks}/{self.total_chunks}, message={self.message!r})"
        )
