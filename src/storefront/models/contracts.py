from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# A client may post keyFeatures as a list or as a single (JSON or plain) string
KeyFeaturesInput = Union[str, List[str], None]


class Admin(BaseModel):
    """The single storefront administrator as stored in the credential store."""

    id: UUID
    email: str
    password_hash: str
    created_at: Optional[datetime] = None


class Product(BaseModel):
    """A persisted catalog entry, serialized with the storefront's camelCase names."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str
    description: str
    image: str
    price: float = 0.0
    category: str = "General"
    key_features: List[str] = Field(default_factory=list, alias="keyFeatures")
    material: Optional[str] = None
    compatibility: Optional[str] = None
    best_for: Optional[str] = Field(default=None, alias="bestFor")
    warranty: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class ProductSubmission(BaseModel):
    """Raw product fields as received from a create or update request."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Union[str, float, int, None] = None
    category: Optional[str] = None
    key_features: KeyFeaturesInput = None
    material: Optional[str] = None
    compatibility: Optional[str] = None
    best_for: Optional[str] = None
    warranty: Optional[str] = None


class ProductDraft(BaseModel):
    """Validated, normalized product fields ready for the catalog store."""

    name: str
    description: str
    price: float = 0.0
    category: str = "General"
    key_features: List[str] = Field(default_factory=list)
    material: Optional[str] = None
    compatibility: Optional[str] = None
    best_for: Optional[str] = None
    warranty: Optional[str] = None


class ProductEnvelope(BaseModel):
    message: str
    product: Product


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    message: str = "Login successful"


class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None


class ContactResponse(BaseModel):
    success: bool
    message: str


class ChatRequest(BaseModel):
    message: Optional[str] = None


class ChatResponse(BaseModel):
    reply: str
