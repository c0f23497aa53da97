"""API layer - Middleware and routing"""

from .middleware import SessionTokenMiddleware
from .routes import auth_router, router

__all__ = ["SessionTokenMiddleware", "auth_router", "router"]
