"""Tests for the OAuth authorization-code exchange."""

import httpx
import pytest

from conftest import make_id_token
from login_gateway.core.errors import ProviderExchangeError
from login_gateway.infrastructure.oauth_client import OAuthExchangeClient


class TestGoogleExchange:
    @pytest.mark.asyncio
    async def test_success_returns_email_claim(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(body={"id_token": make_id_token({"email": "dave@gmail.com", "sub": "123"})})
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        assertion = await client.exchange("google", "auth-code", "https://app/cb")

        assert assertion.provider == "google"
        assert assertion.email == "dave@gmail.com"
        assert assertion.claims["sub"] == "123"

    @pytest.mark.asyncio
    async def test_posts_form_encoded_exchange(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(body={"id_token": make_id_token({"email": "dave@gmail.com"})})
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        await client.exchange("google", "auth-code", "https://app/cb")

        request = endpoint.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://accounts.google.com/o/oauth2/token"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert endpoint.form() == {
            "client_id": "google-client",
            "client_secret": "google-secret",
            "redirect_uri": "https://app/cb",
            "grant_type": "authorization_code",
            "code": "auth-code",
        }


class TestAzureExchange:
    @pytest.mark.asyncio
    async def test_success_uses_upn_claim(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(
            body={"id_token": make_id_token({"upn": "erin@corp.onmicrosoft.com", "email": "other@x.com"})}
        )
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        assertion = await client.exchange("azure", "auth-code", "https://app/cb")

        assert assertion.email == "erin@corp.onmicrosoft.com"

    @pytest.mark.asyncio
    async def test_sends_resource_parameter(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(body={"id_token": make_id_token({"upn": "erin@corp.com"})})
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        await client.exchange("azure", "auth-code", "https://app/cb")

        assert str(endpoint.requests[0].url) == "https://login.microsoftonline.com/common/oauth2/token"
        form = endpoint.form()
        assert form["resource"] == "https://graph.windows.net/"
        assert form["client_id"] == "azure-client"
        assert form["client_secret"] == "azure-secret"


class TestExchangeFailures:
    @pytest.mark.asyncio
    async def test_error_response_carries_provider_payload(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(
            status_code=400,
            body={"error": "invalid_grant", "error_description": "Code was already redeemed."},
        )
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        with pytest.raises(ProviderExchangeError) as exc_info:
            await client.exchange("google", "used-code", "https://app/cb")

        assert exc_info.value.provider == "google"
        assert exc_info.value.payload == {
            "error": "invalid_grant",
            "error_description": "Code was already redeemed.",
        }

    @pytest.mark.asyncio
    async def test_transport_failure(self, auth_config) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = OAuthExchangeClient(auth_config, transport=httpx.MockTransport(refuse))

        with pytest.raises(ProviderExchangeError, match="connection refused") as exc_info:
            await client.exchange("azure", "code", "https://app/cb")
        assert exc_info.value.payload is None

    @pytest.mark.asyncio
    async def test_missing_id_token(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(body={"access_token": "at"})
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        with pytest.raises(ProviderExchangeError, match="no id_token"):
            await client.exchange("google", "code", "https://app/cb")

    @pytest.mark.asyncio
    async def test_malformed_id_token(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(body={"id_token": "definitely.not.ajwt"})
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        with pytest.raises(ProviderExchangeError, match="Invalid id_token"):
            await client.exchange("google", "code", "https://app/cb")

    @pytest.mark.asyncio
    async def test_missing_identity_claim(self, auth_config, token_endpoint) -> None:
        endpoint = token_endpoint(body={"id_token": make_id_token({"email": "frank@x.com"})})
        client = OAuthExchangeClient(auth_config, transport=endpoint.transport)

        with pytest.raises(ProviderExchangeError, match="'upn' claim"):
            await client.exchange("azure", "code", "https://app/cb")

    def test_unknown_provider(self, auth_config) -> None:
        with pytest.raises(KeyError):
            OAuthExchangeClient(auth_config).provider("github")
