"""Authentication entry points"""

from typing import Any, Optional, Union

from . import normalizer
from .errors import (
    AUTHENTICATE_USER,
    BAD_PARAMS,
    AuthError,
    ReportableError,
    translate_error,
)
from .options import PathOptions
from .session_resolver import AuthResult, SessionResolver

AuthOutcome = Union[AuthResult, ReportableError]


class Authenticator:
    """
    Entry points for the four ways of signing in.

    Each entry point validates its own request shape, builds path-specific
    options and hands them to the session resolver. Failures never
    propagate: they are returned as ReportableError values.
    """

    def __init__(self, resolver: SessionResolver, oauth_client):
        """
        Args:
            resolver: Session resolver (user lookup and token decision)
            oauth_client: OAuthExchangeClient for the provider callbacks
        """
        self.resolver = resolver
        self.oauth_client = oauth_client

    async def auth_challenge(self, body: Any, prior_token: Optional[str] = None) -> AuthOutcome:
        """Username/password login"""
        try:
            options = normalizer.password_options(body, prior_token)
        except AuthError as e:
            return translate_error(e, BAD_PARAMS)

        return await self._authenticate(options)

    async def jwt_check(self, claims: Any, token: str) -> AuthOutcome:
        """Re-validate a verified session token; the token is reused as is"""
        try:
            options = normalizer.recheck_options(claims, token)
        except AuthError as e:
            return translate_error(e, BAD_PARAMS)

        return await self._authenticate(options)

    async def google_callback(self, body: Any) -> AuthOutcome:
        """Log in with a Google authorization code"""
        return await self._oauth_callback("google", body)

    async def azure_callback(self, body: Any) -> AuthOutcome:
        """Log in with an Azure (Office365) authorization code"""
        return await self._oauth_callback("azure", body)

    async def _oauth_callback(self, provider_name: str, body: Any) -> AuthOutcome:
        try:
            code, redirect_url = normalizer.oauth_params(body)
        except AuthError as e:
            return translate_error(e, BAD_PARAMS)

        provider = self.oauth_client.provider(provider_name)
        try:
            assertion = await self.oauth_client.exchange(provider.name, code, redirect_url)
        except Exception as e:
            return translate_error(e, provider.error_tag)

        return await self._authenticate(normalizer.oauth_options(assertion, redirect_url))

    async def _authenticate(self, options: PathOptions) -> AuthOutcome:
        try:
            canonical = normalizer.normalize(options)
        except AuthError as e:
            return translate_error(e, BAD_PARAMS)

        try:
            return await self.resolver.resolve(canonical)
        except Exception as e:
            return translate_error(e, AUTHENTICATE_USER)
