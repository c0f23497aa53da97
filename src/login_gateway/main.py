"""
Login Gateway - Main Application

Reconciles four ways of signing in into one session token:
- Username/password login
- Session token re-check
- Google OAuth authorization-code callback
- Azure (Office365) OAuth authorization-code callback
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .core import Authenticator, IUserStore, SessionResolver
from .infrastructure import HTTPUserStore, OAuthExchangeClient
from .api.middleware import SessionTokenMiddleware
from .api.routes import JWT_CHECK_PATH, auth_router, router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager for startup/shutdown events"""
    # Startup
    settings: Settings = app.state.settings
    logger.info("Starting login-gateway v1.0.0")
    logger.info(f"User store: {app.state.authenticator.resolver.user_store.get_store_name()}")
    logger.info(f"Gateway listening on {settings.gateway_host}:{settings.gateway_port}")

    yield

    # Shutdown
    logger.info("Shutting down login-gateway")


def create_app(
    settings: Optional[Settings] = None,
    user_store: Optional[IUserStore] = None,
    oauth_client: Optional[OAuthExchangeClient] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings (defaults to the environment)
        user_store: User store implementation (defaults to HTTPUserStore)
        oauth_client: OAuth exchange client (defaults to one built from settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    auth_config = settings.auth_config()

    if not auth_config.jwt_secret:
        logger.warning("JWT_SECRET is not set; session tokens will be signed with an empty key")

    if user_store is None:
        user_store = HTTPUserStore(
            service_url=settings.user_store_url,
            timeout=settings.http_timeout,
        )
    if oauth_client is None:
        oauth_client = OAuthExchangeClient(auth_config, timeout=settings.http_timeout)

    resolver = SessionResolver(user_store, auth_config)

    app = FastAPI(
        title="Login Gateway",
        description="Password, session re-check, Google and Azure sign-in",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.authenticator = Authenticator(resolver, oauth_client)

    # Verify session tokens before the re-check endpoint runs
    app.add_middleware(
        SessionTokenMiddleware,
        signer=resolver.signer,
        protected_paths=[JWT_CHECK_PATH],
    )

    # Configure CORS; must stay outermost so preflights and 401s carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.include_router(auth_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    # Configure logging level from settings
    logging.getLogger().setLevel(settings.log_level)

    uvicorn.run(
        "login_gateway.main:app",
        host=settings.gateway_host,
        port=settings.gateway_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
