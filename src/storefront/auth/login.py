from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import INVALID_CREDENTIALS, Result, auth_error, validation_error
from ..logging import get_logger
from ..repository import AdminRepository
from .passwords import verify_password
from .tokens import IssuedToken, TokenService, TokenSubject

logger = get_logger("storefront.auth.login")

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True, slots=True)
class LoginOutcome:
    token: IssuedToken
    message: str = "Login successful"


class LoginService:
    """Checks administrator credentials and issues bearer tokens."""

    def __init__(self, admins: AdminRepository, tokens: TokenService) -> None:
        self._admins = admins
        self._tokens = tokens

    def login(self, email: Optional[str], password: Optional[str]) -> Result[LoginOutcome]:
        if not email or not password:
            return Result.failure(validation_error("Email and password are required"))

        normalized = normalize_email(email)
        admin = self._admins.get_by_email(normalized)
        # Unknown email and wrong password share one response
        if admin is None or not verify_password(password, admin.password_hash):
            logger.info("admin_login_rejected")
            return Result.failure(auth_error(INVALID_CREDENTIALS_MESSAGE, INVALID_CREDENTIALS))

        issued = self._tokens.issue(TokenSubject(admin_id=str(admin.id), email=admin.email))
        logger.info("admin_login_succeeded", admin_id=str(admin.id))
        return Result.success(LoginOutcome(token=issued))


__all__ = ["INVALID_CREDENTIALS_MESSAGE", "LoginOutcome", "LoginService", "normalize_email"]
