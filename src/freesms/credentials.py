"""Account credentials for the Free Mobile SMS gateway."""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .exceptions import DispatchError, ErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Gateway login (``user``) and API key (``pass``)."""
    user: str
    password: str = field(repr=False)

    def as_params(self) -> Dict[str, str]:
        """Gateway parameter names for this account."""
        return {"user": self.user, "pass": self.password}


def validate_credentials(candidate: Any) -> Credentials:
    """
    Validate account identity material.

    Args:
        candidate: A Credentials instance or a mapping with ``user`` and
            ``pass`` keys

    Returns:
        Credentials: Immutable, validated credentials

    Raises:
        DispatchError: INVALID_CREDENTIALS, INVALID_USER or INVALID_PASS
    """
    if isinstance(candidate, Credentials):
        user, password = candidate.user, candidate.password
    elif isinstance(candidate, Mapping):
        user, password = candidate.get("user"), candidate.get("pass")
    else:
        raise DispatchError(
            ErrorKind.INVALID_CREDENTIALS,
            "Credentials must be a mapping with 'user' and 'pass' keys",
        )

    if not isinstance(user, str) or not user:
        raise DispatchError(ErrorKind.INVALID_USER, "'user' must be a non-empty string")

    if not isinstance(password, str) or not password:
        raise DispatchError(ErrorKind.INVALID_PASS, "'pass' must be a non-empty string")

    return candidate if isinstance(candidate, Credentials) else Credentials(user, password)


def load_credentials() -> Dict[str, str]:
    """
    Read credentials from the environment.

    Environment variables supported:
    - FREESMS_USER: Free Mobile account login
    - FREESMS_PASS: SMS notification API key

    Missing variables come back as empty strings so validate_credentials
    reports which one is wrong.
    """
    user = os.getenv("FREESMS_USER", "")
    password = os.getenv("FREESMS_PASS", "")
    if not user or not password:
        logger.warning("FREESMS_USER or FREESMS_PASS is not set")
    return {"user": user, "pass": password}
