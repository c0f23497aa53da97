"""Immutable authentication configuration injected into core components"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class ProviderConfig:
    """Static parameters for one OAuth identity provider"""

    name: str
    token_url: str
    client_id: str
    client_secret: str
    identity_claim: str
    extra_params: Tuple[Tuple[str, str], ...] = ()

    @property
    def error_tag(self) -> str:
        """Stage tag reported when this provider's code exchange fails"""
        return f"{self.name}OauthResponse"


@dataclass(frozen=True)
class AuthConfig:
    """Process-wide authentication configuration, read-only after startup"""

    jwt_secret: str
    jwt_valid_seconds: int
    providers: Mapping[str, ProviderConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the provider mapping too
        object.__setattr__(self, "providers", MappingProxyType(dict(self.providers)))

    def provider(self, name: str) -> ProviderConfig:
        """
        Look up a configured provider.

        Raises:
            KeyError: If no provider with this name is configured
        """
        return self.providers[name]
