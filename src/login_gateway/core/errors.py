"""Authentication error taxonomy and the translator that reports it"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

COMPONENT = "auth"

# Stage tags
BAD_PARAMS = "bad params"
AUTHENTICATE_USER = "authenticateUser"


class AuthError(Exception):
    """Base class for failures raised while authenticating a request"""


class BadParameterError(AuthError):
    """Caller input is missing or has the wrong type"""


class UpstreamError(AuthError):
    """
    A remote collaborator rejected the call or could not be reached.

    Attributes:
        payload: Parsed JSON error body from the remote service, if any
    """

    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.payload = payload


class ProviderExchangeError(UpstreamError):
    """OAuth authorization-code exchange failed for a provider"""

    def __init__(
        self,
        provider: str,
        message: str,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, payload)
        self.provider = provider


class UserLookupError(UpstreamError):
    """The user store could not resolve or authenticate the identity"""


@dataclass(frozen=True)
class ReportableError:
    """Uniform failure envelope returned to callers"""

    error: Any
    type: str
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.error, "type": self.type}
        if self.message is not None:
            body["message"] = self.message
        return body


def translate_error(error: BaseException, stage: str) -> ReportableError:
    """
    Log a failure and convert it into a ReportableError.

    This is the only place authentication failures are logged or
    formatted for the caller.

    Args:
        error: Any exception raised while handling the request
        stage: Stage tag naming where the failure happened

    Returns:
        ReportableError carrying the provider's error code and description
        when the failure wraps an HTTP error response, else the error text
    """
    logger.error(f"[Err] {COMPONENT} - {stage}", exc_info=error)

    payload = _response_payload(error)
    if payload is not None and "error" in payload:
        return ReportableError(
            error=payload["error"],
            message=payload.get("error_description") or str(error),
            type=stage,
        )

    return ReportableError(error=str(error), type=stage)


def _response_payload(error: BaseException) -> Optional[Dict[str, Any]]:
    """Extract a JSON error body attached to an HTTP client failure"""
    payload = getattr(error, "payload", None)
    if isinstance(payload, dict):
        return payload

    if isinstance(error, httpx.HTTPStatusError):
        try:
            body = error.response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body

    return None
