"""OAuth authorization-code exchange against external identity providers"""

import logging
from typing import Any, Dict, Optional

import httpx
from jose import jwt
from jose.exceptions import JWTError

from ..config.auth_config import AuthConfig, ProviderConfig
from ..core.errors import ProviderExchangeError
from ..core.options import IdentityAssertion

logger = logging.getLogger(__name__)


class OAuthExchangeClient:
    """
    Exchanges authorization codes for identity tokens.

    Trust boundary: the returned ``id_token`` is decoded without verifying
    its signature. Its authenticity rests on the code exchange itself,
    which is made directly against the provider's token endpoint with the
    client secret. Structure is still checked: the identity claim must be
    present.
    """

    def __init__(
        self,
        config: AuthConfig,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: Immutable auth configuration holding provider parameters
            timeout: Timeout in seconds for the token endpoint call
            transport: Optional httpx transport (used to stub providers)
        """
        self.config = config
        self.timeout = timeout
        self._transport = transport

    def provider(self, name: str) -> ProviderConfig:
        return self.config.provider(name)

    async def exchange(self, provider_name: str, code: str, redirect_url: str) -> IdentityAssertion:
        """
        Exchange an authorization code and decode the identity token.

        Args:
            provider_name: Configured provider ("google" or "azure")
            code: Authorization code returned to the client
            redirect_url: Redirect URI used in the authorization request

        Returns:
            IdentityAssertion with the provider's identity claim as email

        Raises:
            ProviderExchangeError: On HTTP failure, missing or malformed id_token,
                or a missing identity claim
        """
        provider = self.provider(provider_name)
        data = await self._request_token(provider, code, redirect_url)
        claims = self._decode_id_token(provider, data.get("id_token"))

        email = claims.get(provider.identity_claim)
        if not isinstance(email, str) or not email:
            raise ProviderExchangeError(
                provider.name,
                f"id_token is missing the '{provider.identity_claim}' claim",
            )

        logger.info(f"Exchanged authorization code with {provider.name} for {email}")
        return IdentityAssertion(provider=provider.name, email=email, claims=claims)

    async def _request_token(
        self,
        provider: ProviderConfig,
        code: str,
        redirect_url: str,
    ) -> Dict[str, Any]:
        form = {
            "client_id": provider.client_id,
            "client_secret": provider.client_secret,
            **dict(provider.extra_params),
            "redirect_uri": redirect_url,
            "grant_type": "authorization_code",
            "code": code,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    provider.token_url,
                    data=form,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
                body = response.json()

        except httpx.HTTPStatusError as e:
            raise ProviderExchangeError(provider.name, str(e), _error_payload(e.response)) from e

        except httpx.HTTPError as e:
            raise ProviderExchangeError(provider.name, f"{provider.name} token request failed: {str(e)}") from e

        except ValueError as e:
            raise ProviderExchangeError(provider.name, f"{provider.name} returned invalid JSON") from e

        if not isinstance(body, dict):
            raise ProviderExchangeError(provider.name, f"{provider.name} returned an unexpected token response")
        return body

    def _decode_id_token(self, provider: ProviderConfig, id_token: Any) -> Dict[str, Any]:
        if not isinstance(id_token, str) or not id_token:
            raise ProviderExchangeError(provider.name, f"{provider.name} response has no id_token")

        try:
            claims = jwt.get_unverified_claims(id_token)
        except JWTError as e:
            raise ProviderExchangeError(provider.name, f"Invalid id_token: {str(e)}") from e

        if not isinstance(claims, dict):
            raise ProviderExchangeError(provider.name, "id_token claims are not an object")
        return claims


def _error_payload(response: httpx.Response) -> Optional[Dict[str, Any]]:
    """Parse a provider's JSON error body ({error, error_description})"""
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None
