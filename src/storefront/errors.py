"""Error kinds and the result type returned by fallible storefront operations.

Services never raise for expected outcomes (missing fields, unknown ids, bad
credentials, provider failures). They return a ``Result`` holding either the
value or a ``ServiceError``; the HTTP layer maps the error's status code onto
the response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from fastapi import status

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    AUTH = "AuthError"
    NOT_FOUND = "NotFound"
    UPSTREAM = "UpstreamError"
    INTERNAL = "InternalError"


# Reason codes refine a kind
MISSING_REQUIRED_FIELD = "MissingRequiredField"
NO_FILE = "NoFile"
INVALID_CREDENTIALS = "InvalidCredentials"
MISSING_TOKEN = "MissingToken"
INVALID_TOKEN = "InvalidToken"
TOKEN_EXPIRED = "TokenExpired"
PRODUCT_NOT_FOUND = "ProductNotFound"
PROVIDER_REJECTED = "ProviderRejected"
PROVIDER_UNREACHABLE = "ProviderUnreachable"


@dataclass(frozen=True, slots=True)
class ServiceError:
    kind: ErrorKind
    reason: str
    message: str
    status_code: int


def validation_error(message: str, reason: str = MISSING_REQUIRED_FIELD) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, reason, message, status.HTTP_400_BAD_REQUEST)


def auth_error(
    message: str,
    reason: str,
    status_code: int = status.HTTP_401_UNAUTHORIZED,
) -> ServiceError:
    return ServiceError(ErrorKind.AUTH, reason, message, status_code)


def not_found(message: str, reason: str = PRODUCT_NOT_FOUND) -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, reason, message, status.HTTP_404_NOT_FOUND)


def upstream_error(message: str, *, remote: bool) -> ServiceError:
    """A provider failure: 502 when the provider answered with an error, 500 otherwise."""

    if remote:
        return ServiceError(
            ErrorKind.UPSTREAM, PROVIDER_REJECTED, message, status.HTTP_502_BAD_GATEWAY
        )
    return ServiceError(
        ErrorKind.UPSTREAM,
        PROVIDER_UNREACHABLE,
        message,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def internal_error(message: str = "Internal server error") -> ServiceError:
    return ServiceError(
        ErrorKind.INTERNAL, "Internal", message, status.HTTP_500_INTERNAL_SERVER_ERROR
    )


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        if self.error is not None:
            raise ValueError(f"{self.error.kind.value}: {self.error.message}")
        return self.value  # type: ignore[return-value]


__all__ = [
    "ErrorKind",
    "Result",
    "ServiceError",
    "auth_error",
    "internal_error",
    "not_found",
    "upstream_error",
    "validation_error",
]
