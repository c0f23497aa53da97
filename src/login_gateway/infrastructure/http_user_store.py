"""User store backed by a remote user service over HTTP"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..core.errors import UserLookupError
from ..core.user_store import IUserStore, UserRecord

logger = logging.getLogger(__name__)


class HTTPUserStore(IUserStore):
    """
    User store client for the user service.

    Lookup contract (POST {service_url}/users/lookup):
    - Body ``{"email": ...}`` for identity-only lookup
    - Body ``{"email": ..., "password": ...}`` when a credential is checked
    - 2xx returns the user record as JSON (at least email and customer_id)
    - Any other status is a failed lookup
    """

    def __init__(
        self,
        service_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            service_url: Base URL of the user service (e.g., http://127.0.0.1:8001)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the service)
        """
        self.service_url = service_url.rstrip("/")
        self.lookup_url = f"{self.service_url}/users/lookup"
        self.timeout = timeout
        self._transport = transport

        logger.info(f"Initialized HTTPUserStore with lookup URL: {self.lookup_url}")

    async def get_user(self, email: str, password: Optional[str] = None) -> UserRecord:
        payload: Dict[str, Any] = {"email": email}
        if password is not None:
            payload["password"] = password

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.lookup_url, json=payload)
                response.raise_for_status()
                body = response.json()

        except httpx.HTTPStatusError as e:
            raise UserLookupError(
                _status_message(e.response.status_code),
                _error_payload(e.response),
            ) from e

        except httpx.HTTPError as e:
            raise UserLookupError(f"User store unavailable: {str(e)}") from e

        except ValueError as e:
            raise UserLookupError("User store returned invalid JSON") from e

        try:
            return UserRecord.from_dict(body)
        except (KeyError, TypeError, AttributeError) as e:
            raise UserLookupError(f"User store returned an incomplete record: {str(e)}") from e

    def get_store_name(self) -> str:
        """Return the name of this user store"""
        return "user-service"


def _status_message(status_code: int) -> str:
    if status_code == 404:
        return "User not found"
    if status_code in (401, 403):
        return "Invalid credentials"
    return f"User store returned HTTP {status_code}"


def _error_payload(response: httpx.Response) -> Optional[Dict[str, Any]]:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None
