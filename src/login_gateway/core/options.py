"""Authentication option records for each entry path and their canonical form"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .errors import BadParameterError


@dataclass(frozen=True)
class PasswordOptions:
    """Username/password login"""

    username: str
    password: str
    prior_token: Optional[str] = None


@dataclass(frozen=True)
class RecheckOptions:
    """Re-validation of an already verified session token"""

    user_email: str
    prior_token: str
    customer_id: Optional[Any] = None


@dataclass(frozen=True)
class OAuthOptions:
    """Identity asserted by an OAuth provider after a code exchange"""

    provider: str
    user_email: str
    redirect_url: Optional[str] = None


PathOptions = Union[PasswordOptions, RecheckOptions, OAuthOptions]


@dataclass(frozen=True)
class AuthenticateOptions:
    """
    Canonical input of the session resolver.

    A password (password path), a prior token (recheck path) or neither
    (OAuth path) characterizes the entry path; a password and a prior
    token never appear together.
    """

    user_email: str
    password: Optional[str] = None
    customer_id: Optional[Any] = None
    prior_token: Optional[str] = None
    redirect_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.user_email:
            raise BadParameterError("userEmail required")
        if self.password is not None and self.prior_token is not None:
            raise ValueError("password and prior_token are mutually exclusive")

    @property
    def lookup_email(self) -> str:
        """Case-insensitive identity key used for user store lookups"""
        return self.user_email.lower()


@dataclass(frozen=True)
class IdentityAssertion:
    """
    Claims decoded from a provider's identity token.

    Only ``email`` feeds authentication. ``claims`` holds the full
    unverified claim set for callers of ``OAuthExchangeClient.exchange``
    that need more than the identity (name, tenant, subject).
    """

    provider: str
    email: str
    claims: Dict[str, Any] = field(default_factory=dict)
