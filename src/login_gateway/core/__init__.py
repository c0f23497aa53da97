"""Core domain models, interfaces and the authentication flow"""

from .authenticator import Authenticator
from .errors import ReportableError, translate_error
from .options import AuthenticateOptions, IdentityAssertion
from .session_resolver import AuthResult, SessionResolver
from .session_tokens import SessionTokenSigner
from .user_store import IUserStore, UserRecord

__all__ = [
    "Authenticator",
    "AuthenticateOptions",
    "AuthResult",
    "IdentityAssertion",
    "IUserStore",
    "ReportableError",
    "SessionResolver",
    "SessionTokenSigner",
    "UserRecord",
    "translate_error",
]
