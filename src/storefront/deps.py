from __future__ import annotations

from typing import TypeVar

from fastapi import Depends, HTTPException, Request

from .auth import TokenSubject
from .context import AppContext
from .errors import MISSING_TOKEN, Result, auth_error
from .services import CatalogService

T = TypeVar("T")


def unwrap_or_raise(result: Result[T]) -> T:
    """Return the result's value or raise the matching HTTP error."""
    if result.error is not None:
        raise HTTPException(status_code=result.error.status_code, detail=result.error.message)
    return result.value  # type: ignore[return-value]


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_catalog(context: AppContext = Depends(get_context)) -> CatalogService:
    return context.catalog


def require_admin(request: Request, context: AppContext = Depends(get_context)) -> TokenSubject:
    header = request.headers.get("Authorization") or ""
    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return unwrap_or_raise(
            Result.failure(auth_error("Access token required", MISSING_TOKEN))
        )
    return unwrap_or_raise(context.tokens.verify(token))


__all__ = ["get_catalog", "get_context", "require_admin", "unwrap_or_raise"]
