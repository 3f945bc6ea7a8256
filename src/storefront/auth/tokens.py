"""Signed, time-limited bearer tokens for the storefront administrator.

Tokens are HS256 JWTs carrying ``id``, ``email``, ``iat`` and ``exp``. PyJWT
checks the signature and structure; expiry is evaluated here against an
injectable clock so that ``now >= exp`` is rejected exactly at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from fastapi import status

from ..errors import INVALID_TOKEN, TOKEN_EXPIRED, Result, auth_error
from ..logging import get_logger

logger = get_logger("storefront.auth.tokens")

TOKEN_TTL = timedelta(hours=24)
ALGORITHM = "HS256"

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class TokenSubject:
    admin_id: str
    email: str


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    def __init__(self, secret: str, *, ttl: timedelta = TOKEN_TTL, clock: Clock = utcnow) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, subject: TokenSubject) -> IssuedToken:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        payload = {
            "id": subject.admin_id,
            "email": subject.email,
            "iat": issued_at.timestamp(),
            "exp": expires_at.timestamp(),
        }
        token = jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        return IssuedToken(token=token, issued_at=issued_at, expires_at=expires_at)

    def verify(self, token: str) -> Result[TokenSubject]:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["id", "email", "exp"],
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.info("token_rejected", reason=type(exc).__name__)
            return Result.failure(
                auth_error("Invalid token", INVALID_TOKEN, status.HTTP_403_FORBIDDEN)
            )

        try:
            expires_at = float(payload["exp"])
        except (TypeError, ValueError):
            return Result.failure(
                auth_error("Invalid token", INVALID_TOKEN, status.HTTP_403_FORBIDDEN)
            )
        if self._clock().timestamp() >= expires_at:
            logger.info("token_expired", email=payload.get("email"))
            return Result.failure(
                auth_error("Token expired", TOKEN_EXPIRED, status.HTTP_403_FORBIDDEN)
            )

        return Result.success(TokenSubject(admin_id=str(payload["id"]), email=str(payload["email"])))


__all__ = ["IssuedToken", "TOKEN_TTL", "TokenService", "TokenSubject", "utcnow"]
