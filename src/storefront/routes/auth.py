from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from ..context import AppContext
from ..deps import get_context, unwrap_or_raise
from ..models import LoginRequest, LoginResponse

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login", response_model=LoginResponse)
def admin_login(
    payload: Optional[LoginRequest] = Body(default=None),
    context: AppContext = Depends(get_context),
) -> LoginResponse:
    payload = payload or LoginRequest()
    outcome = unwrap_or_raise(context.login.login(payload.email, payload.password))
    return LoginResponse(token=outcome.token.token, message=outcome.message)


__all__ = ["router"]
