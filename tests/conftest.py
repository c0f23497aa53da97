"""Pytest configuration and fixtures."""

from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from jose import jwt

from login_gateway.config import AuthConfig, Settings
from login_gateway.core.errors import UserLookupError
from login_gateway.core.user_store import IUserStore, UserRecord

JWT_SECRET = "test-secret"


class FakeUserStore(IUserStore):
    """In-memory user store that records every lookup."""

    def __init__(self, users: Optional[Dict[str, Dict[str, Any]]] = None, fail_with: Optional[Exception] = None):
        self.users = users or {}
        self.fail_with = fail_with
        self.calls: List[Tuple[str, Optional[str]]] = []

    async def get_user(self, email: str, password: Optional[str] = None) -> UserRecord:
        self.calls.append((email, password))
        if self.fail_with is not None:
            raise self.fail_with
        record = self.users.get(email)
        if record is None:
            raise UserLookupError("User not found")
        if password is not None and record.get("password") != password:
            raise UserLookupError("Invalid credentials")
        return UserRecord.from_dict({k: v for k, v in record.items() if k != "password"})

    def get_store_name(self) -> str:
        return "fake"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=JWT_SECRET,
        google_client_id="google-client",
        google_client_secret="google-secret",
        azure_client_id="azure-client",
        azure_client_secret="azure-secret",
    )


@pytest.fixture
def auth_config(settings: Settings) -> AuthConfig:
    return settings.auth_config()


@pytest.fixture
def user_store() -> FakeUserStore:
    return FakeUserStore(
        users={
            "bob@x.com": {"email": "bob@x.com", "customer_id": "C1", "password": "p1"},
            "alice@example.com": {
                "email": "alice@example.com",
                "customer_id": "C2",
                "password": "secret",
                "name": "Alice",
            },
        }
    )


def make_id_token(claims: Dict[str, Any]) -> str:
    """Identity token signed with a key the gateway never sees."""
    return jwt.encode(claims, "provider-signing-key", algorithm="HS256")


class TokenEndpoint:
    """Stub OAuth token endpoint backed by httpx.MockTransport."""

    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self.body = body
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    def form(self, index: int = -1) -> Dict[str, str]:
        return dict(httpx.QueryParams(self.requests[index].content.decode()))


@pytest.fixture
def token_endpoint() -> Callable[..., TokenEndpoint]:
    return TokenEndpoint
