"""
Mapping of gateway failures to ErrorKind.

Pure functions: nothing here retries, logs or touches the network.
"""

import asyncio
from typing import Optional

import httpx

from .exceptions import DispatchError, ErrorKind
from .transport import TransportFailure

# Status codes documented by the Free Mobile SMS notification service
STATUS_KINDS = {
    400: (ErrorKind.BAD_REQUEST, "A required parameter is missing or incorrect"),
    402: (ErrorKind.RATE_LIMITED, "Too many SMS sent in too little time"),
    403: (ErrorKind.ACCESS_DENIED, "SMS notifications are disabled for this account, or the login/key is wrong"),
    500: (ErrorKind.SERVER_ERROR, "Gateway-side error, try again later"),
}

# Exceptions the dispatcher treats as a failed chunk delivery
TRANSPORT_EXCEPTIONS = (
    TransportFailure,
    httpx.HTTPError,
    OSError,
    asyncio.TimeoutError,
)


def classify_status(status: int, detail: str = "") -> DispatchError:
    """
    Classify a non-2xx HTTP status.

    Args:
        status: HTTP status code returned by the gateway
        detail: Optional response body or transport message

    Returns:
        DispatchError: Error carrying the kind and the original status
    """
    kind, description = STATUS_KINDS.get(
        status, (ErrorKind.HTTP_ERROR, f"Unexpected HTTP status {status}")
    )
    message = f"{description} (HTTP {status})"
    if detail:
        message = f"{message}: {detail}"
    return DispatchError(kind, message, http_status=status)


def classify_network(detail: str) -> DispatchError:
    """Classify a failure where no HTTP response was received."""
    return DispatchError(ErrorKind.NETWORK_ERROR, f"Network error: {detail}")


def classify_failure(exc: BaseException) -> DispatchError:
    """
    Classify a transport exception.

    Args:
        exc: One of TRANSPORT_EXCEPTIONS

    Returns:
        DispatchError: The classified error, chained to ``exc``

    Raises:
        TypeError: If ``exc`` is not a transport failure
    """
    status: Optional[int] = None
    detail = str(exc) or type(exc).__name__

    if isinstance(exc, TransportFailure):
        status = exc.status_code
        detail = exc.body.strip() if status is not None else exc.message
    elif isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        detail = exc.response.text.strip()
    elif not isinstance(exc, TRANSPORT_EXCEPTIONS):
        raise TypeError(f"not a transport failure: {type(exc).__name__}")

    if status is None:
        error = classify_network(detail)
    else:
        error = classify_status(status, detail)
    error.__cause__ = exc
    return error
