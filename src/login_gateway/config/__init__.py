"""Configuration layer - environment settings and injected auth config"""

from .auth_config import AuthConfig, ProviderConfig
from .settings import JWT_VALID_SECONDS, Settings, get_settings

__all__ = [
    "AuthConfig",
    "ProviderConfig",
    "JWT_VALID_SECONDS",
    "Settings",
    "get_settings",
]
