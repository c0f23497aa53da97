"""Session token verification middleware"""

import logging
from typing import Callable, Iterable, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.session_tokens import SessionTokenSigner

logger = logging.getLogger(__name__)

SESSION_TOKEN_HEADER = "jwt"


def extract_session_token(request: Request) -> Optional[str]:
    """
    Read the session token from the request.

    Checks in order:
    1. ``jwt`` header
    2. ``Authorization: Bearer <token>``

    Raises:
        ValueError: If the Authorization header is malformed
    """
    token = request.headers.get(SESSION_TOKEN_HEADER)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2:
        raise ValueError("Authorization header must be 'Bearer <token>'")

    scheme, token = parts
    if scheme.lower() != "bearer":
        raise ValueError("Authorization scheme must be Bearer")

    return token


class SessionTokenMiddleware(BaseHTTPMiddleware):
    """
    Verifies session tokens on protected endpoints.

    Flow:
    1. Public endpoints pass through untouched
    2. Extract the session token (``jwt`` header or Bearer token)
    3. Verify signature and expiry
    4. Expose claims as ``request.state.jwt_payload`` and the raw token as
       ``request.state.session_token``
    """

    def __init__(self, app, signer: SessionTokenSigner, protected_paths: Iterable[str]):
        """
        Args:
            app: FastAPI application
            signer: Session token signer used for verification
            protected_paths: Paths that require a valid session token
        """
        super().__init__(app)
        self.signer = signer
        self.protected_paths = frozenset(protected_paths)

        logger.info(
            f"Initialized SessionTokenMiddleware for: {sorted(self.protected_paths)}"
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path not in self.protected_paths:
            return await call_next(request)

        try:
            token = extract_session_token(request)
            if not token:
                logger.warning(f"Missing session token for {request.url.path}")
                return JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={
                        "error": "missing_token",
                        "message": "Session token is required",
                    },
                )
            claims = self.signer.verify(token)
        except ValueError as e:
            logger.warning(f"Session token validation failed: {str(e)}")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "error": "invalid_token",
                    "message": str(e),
                },
            )

        request.state.jwt_payload = claims
        request.state.session_token = token
        return await call_next(request)
