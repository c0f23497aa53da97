"""API routes for health checks and authentication"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from ..core.authenticator import Authenticator, AuthOutcome
from ..core.errors import AUTHENTICATE_USER, BAD_PARAMS, ReportableError
from .middleware import SESSION_TOKEN_HEADER

AUTH_PREFIX = "/api/v1/auth"
JWT_CHECK_PATH = f"{AUTH_PREFIX}/jwt_check"

router = APIRouter()
auth_router = APIRouter(prefix=AUTH_PREFIX)


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Only verifies the process is running and responsive; the user store
    and OAuth providers are not contacted.
    """
    return {
        "status": "healthy",
        "service": "login-gateway",
        "version": "1.0.0",
    }


def get_authenticator(request: Request) -> Authenticator:
    """Authenticator wired into the application at startup"""
    return request.app.state.authenticator


async def _json_body(request: Request) -> Any:
    """Parsed JSON body, or None when absent or not valid JSON"""
    try:
        return await request.json()
    except ValueError:
        return None


def _respond(outcome: AuthOutcome) -> JSONResponse:
    if isinstance(outcome, ReportableError):
        if outcome.type == BAD_PARAMS:
            status_code = status.HTTP_400_BAD_REQUEST
        elif outcome.type == AUTHENTICATE_USER:
            status_code = status.HTTP_401_UNAUTHORIZED
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
        return JSONResponse(status_code=status_code, content=outcome.to_dict())

    return JSONResponse(status_code=status.HTTP_200_OK, content=outcome.to_dict())


@auth_router.post("")
async def auth_challenge(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> JSONResponse:
    """
    Attempts to authenticate a user with username and password.

    A ``jwt`` header sent with the login is recorded on the options but
    never reused: a password login always receives a newly minted token.
    """
    body = await _json_body(request)
    prior_token = request.headers.get(SESSION_TOKEN_HEADER)
    return _respond(await authenticator.auth_challenge(body, prior_token))


@auth_router.get("/jwt_check")
async def jwt_check(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> JSONResponse:
    """Checks for an authentic session token (usually on load of the UI)"""
    return _respond(
        await authenticator.jwt_check(
            request.state.jwt_payload,
            request.state.session_token,
        )
    )


@auth_router.post("/google_callback")
async def google_callback(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> JSONResponse:
    """Logs in via Google OAuth"""
    return _respond(await authenticator.google_callback(await _json_body(request)))


@auth_router.post("/azure_callback")
async def azure_callback(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> JSONResponse:
    """Logs in via Azure (Office365) OAuth"""
    return _respond(await authenticator.azure_callback(await _json_body(request)))
