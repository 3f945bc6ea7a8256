"""Administrator authentication: password hashing, bearer tokens and login."""

from .login import LoginOutcome, LoginService, normalize_email
from .passwords import hash_password, verify_password
from .tokens import IssuedToken, TokenService, TokenSubject

__all__ = [
    "IssuedToken",
    "LoginOutcome",
    "LoginService",
    "TokenService",
    "TokenSubject",
    "hash_password",
    "normalize_email",
    "verify_password",
]
