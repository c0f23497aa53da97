"""Infrastructure layer - OAuth provider client and user store implementation"""

from .http_user_store import HTTPUserStore
from .oauth_client import OAuthExchangeClient

__all__ = [
    "HTTPUserStore",
    "OAuthExchangeClient",
]
