from .contracts import (
    Admin,
    ChatRequest,
    ChatResponse,
    ContactRequest,
    ContactResponse,
    KeyFeaturesInput,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    Product,
    ProductDraft,
    ProductEnvelope,
    ProductSubmission,
)

__all__ = [
    "Admin",
    "ChatRequest",
    "ChatResponse",
    "ContactRequest",
    "ContactResponse",
    "KeyFeaturesInput",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Product",
    "ProductDraft",
    "ProductEnvelope",
    "ProductSubmission",
]
