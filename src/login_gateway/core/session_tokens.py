"""Session token signing and verification"""

import time
from typing import Any, Dict

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError


class SessionTokenSigner:
    """
    Issues and verifies HS256 session tokens.

    Tokens carry the resolved identity under a ``data`` claim and are valid
    for a fixed window from issuance. There is no server-side session
    store; validity is entirely cryptographic and time-based.
    """

    def __init__(self, secret: str, valid_seconds: int, algorithm: str = "HS256"):
        """
        Args:
            secret: Shared signing secret
            valid_seconds: Lifetime of newly issued tokens
            algorithm: JWS algorithm (HMAC family)
        """
        self._secret = secret
        self.valid_seconds = valid_seconds
        self.algorithm = algorithm

    def sign(self, data: Dict[str, Any]) -> str:
        """
        Sign a new session token.

        Args:
            data: Identity claims, embedded under ``data``

        Returns:
            Encoded JWT string
        """
        issued_at = int(time.time())
        claims = {
            "data": data,
            "iat": issued_at,
            "exp": issued_at + self.valid_seconds,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry of a session token.

        Args:
            token: Encoded JWT string

        Returns:
            Decoded claims

        Raises:
            ValueError: If the token is expired or invalid
        """
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])

        except ExpiredSignatureError:
            raise ValueError("Token has expired")

        except JWTError as e:
            raise ValueError(f"Invalid token: {str(e)}")
