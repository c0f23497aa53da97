"""Identity normalizer - maps each entry path's raw input onto canonical options"""

import logging
from typing import Any, Mapping, Optional, Tuple

from .errors import BadParameterError
from .options import (
    AuthenticateOptions,
    IdentityAssertion,
    OAuthOptions,
    PasswordOptions,
    PathOptions,
    RecheckOptions,
)

logger = logging.getLogger(__name__)


def _require_body(body: Any) -> Mapping[str, Any]:
    if not isinstance(body, Mapping):
        raise BadParameterError("jsonBody required")
    return body


def _require_string(params: Mapping[str, Any], name: str, presence: bool = True) -> str:
    if presence and name not in params:
        raise BadParameterError(f"{name} required")
    value = params.get(name)
    if not isinstance(value, str):
        raise BadParameterError(f"{name} must be a string")
    return value


def password_options(body: Any, prior_token: Optional[str] = None) -> PasswordOptions:
    """
    Validate a username/password login body.

    Args:
        body: Parsed JSON body (None if absent or unparseable)
        prior_token: Session token sent alongside the login, if any

    Raises:
        BadParameterError: Naming the first missing or wrong-typed field
    """
    params = _require_body(body)
    username = _require_string(params, "username")
    if not username:
        raise BadParameterError("username required")
    password = _require_string(params, "password")
    return PasswordOptions(username=username, password=password, prior_token=prior_token)


def recheck_options(claims: Any, token: str) -> RecheckOptions:
    """
    Extract identity from an already verified session token payload.

    Args:
        claims: Verified claims of the session token
        token: The session token itself, carried forward unchanged

    Raises:
        BadParameterError: If the payload lacks ``data.uEmail``
    """
    data = claims.get("data") if isinstance(claims, Mapping) else None
    if not isinstance(data, Mapping):
        raise BadParameterError("jwtPayload.data required")
    user_email = data.get("uEmail")
    if not isinstance(user_email, str) or not user_email:
        raise BadParameterError("jwtPayload.data.uEmail must be a string")
    return RecheckOptions(
        user_email=user_email,
        customer_id=data.get("cId"),
        prior_token=token,
    )


def oauth_params(body: Any) -> Tuple[str, str]:
    """
    Validate an OAuth callback body.

    Returns:
        (code, redirect_url)

    Raises:
        BadParameterError: Naming the first missing or wrong-typed field
    """
    params = _require_body(body)
    code = _require_string(params, "code", presence=False)
    redirect_url = _require_string(params, "redirect_url", presence=False)
    return code, redirect_url


def oauth_options(assertion: IdentityAssertion, redirect_url: Optional[str] = None) -> OAuthOptions:
    return OAuthOptions(
        provider=assertion.provider,
        user_email=assertion.email,
        redirect_url=redirect_url,
    )


def normalize(options: PathOptions) -> AuthenticateOptions:
    """
    Collapse path-specific options into the canonical record.

    Password logins always get a fresh token, so a token sent with a
    password login is not carried into canonical options.
    """
    if isinstance(options, PasswordOptions):
        if options.prior_token:
            logger.debug("Ignoring session token presented with password login")
        return AuthenticateOptions(
            user_email=options.username,
            password=options.password,
        )

    if isinstance(options, RecheckOptions):
        return AuthenticateOptions(
            user_email=options.user_email,
            customer_id=options.customer_id,
            prior_token=options.prior_token,
        )

    if isinstance(options, OAuthOptions):
        return AuthenticateOptions(
            user_email=options.user_email,
            redirect_url=options.redirect_url,
        )

    raise TypeError(f"Unsupported authentication options: {type(options).__name__}")
