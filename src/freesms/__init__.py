"""
Free Mobile SMS gateway client.

This package sends text messages to a Free Mobile subscriber's own phone
through the carrier's HTTP notification gateway. It validates credentials,
masks unsupported symbols, splits long messages and delivers the chunks in
order.
"""

from .allowlist import DEFAULT_ALLOW_LIST, load_allow_list
from .chunker import chunk_string
from .classifier import classify_failure, classify_status
from .client import DispatchMetrics, FreeMobileClient
from .config import GatewayConfig, load_config
from .credentials import Credentials, load_credentials, validate_credentials
from .dispatcher import Dispatcher, DispatchResult
from .exceptions import DispatchError, ErrorKind
from .sanitizer import MessageSanitizer
from .transport import GatewayResponse, HttpxTransport, Transport, TransportFailure

__version__ = "0.1.0"

__all__ = [
    # Client
    'FreeMobileClient',
    'DispatchMetrics',

    # Pipeline
    'Credentials',
    'validate_credentials',
    'load_credentials',
    'MessageSanitizer',
    'chunk_string',
    'Dispatcher',
    'DispatchResult',
    'classify_status',
    'classify_failure',

    # Transport
    'Transport',
    'HttpxTransport',
    'GatewayResponse',
    'TransportFailure',

    # Configuration
    'GatewayConfig',
    'load_config',
    'DEFAULT_ALLOW_LIST',
    'load_allow_list',

    # Errors
    'DispatchError',
    'ErrorKind',
]
