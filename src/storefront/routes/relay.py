"""Contact-form email relay and chat assistant endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from ..context import AppContext
from ..deps import get_context, unwrap_or_raise
from ..models import ChatRequest, ChatResponse, ContactRequest, ContactResponse

router = APIRouter(tags=["relay"])


@router.post("/send-email", response_model=ContactResponse)
def send_email(
    payload: Optional[ContactRequest] = Body(default=None),
    context: AppContext = Depends(get_context),
) -> ContactResponse:
    payload = payload or ContactRequest()
    unwrap_or_raise(
        context.mailer.send_contact(
            name=payload.name,
            email=payload.email,
            message=payload.message,
            phone=payload.phone,
        )
    )
    return ContactResponse(success=True, message="Email sent successfully")


@router.post("/chat", response_model=ChatResponse)
def chat(
    payload: Optional[ChatRequest] = Body(default=None),
    context: AppContext = Depends(get_context),
) -> ChatResponse:
    payload = payload or ChatRequest()
    reply = unwrap_or_raise(context.assistant.reply(payload.message))
    return ChatResponse(reply=reply)


__all__ = ["router"]
