"""Session resolver - resolves the user and decides the session token"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config.auth_config import AuthConfig
from .options import AuthenticateOptions
from .session_tokens import SessionTokenSigner
from .user_store import IUserStore, UserRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """Successful authentication response"""

    jwt: str
    user: UserRecord
    serial: Optional[Any] = None
    redirect_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jwt": self.jwt,
            "serial": self.serial,
            "user": self.user.to_dict(),
            "redirectUrl": self.redirect_url,
        }


class SessionResolver:
    """
    Turns canonical options into an AuthResult.

    Flow:
    1. Look the user up by lowercased email (and password, password path only)
    2. Reuse the prior token verbatim when one was supplied, else mint one
    3. Assemble the response

    The resolver never writes to the user store.
    """

    def __init__(self, user_store: IUserStore, config: AuthConfig):
        """
        Args:
            user_store: Backend used to resolve identities
            config: Immutable auth configuration (signing secret, expiry)
        """
        self.user_store = user_store
        self.signer = SessionTokenSigner(config.jwt_secret, config.jwt_valid_seconds)

    async def resolve(self, options: AuthenticateOptions) -> AuthResult:
        """
        Resolve the user and produce the session token.

        Raises:
            UserLookupError: If the store cannot resolve the identity
        """
        user = await self.user_store.get_user(options.lookup_email, options.password)

        if options.prior_token:
            token = options.prior_token
        else:
            token = self.signer.sign({
                "cId": options.customer_id,
                "uEmail": user.email,
                "u_cId": user.customer_id,
            })

        logger.info(
            f"Authenticated {user.email} via {self.user_store.get_store_name()} "
            f"({'reused' if options.prior_token else 'new'} session token)"
        )

        return AuthResult(
            jwt=token,
            serial=options.customer_id,
            user=user,
            redirect_url=options.redirect_url,
        )
