from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from ..auth import TokenSubject
from ..deps import get_catalog, require_admin, unwrap_or_raise
from ..models import (
    KeyFeaturesInput,
    MessageResponse,
    Product,
    ProductEnvelope,
    ProductSubmission,
)
from ..services import CatalogService
from ..uploads import IncomingFile

router = APIRouter(prefix="/api/products", tags=["products"])


def product_submission(
    name: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    price: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    key_features: Optional[List[str]] = Form(default=None, alias="keyFeatures"),
    material: Optional[str] = Form(default=None),
    compatibility: Optional[str] = Form(default=None),
    best_for: Optional[str] = Form(default=None, alias="bestFor"),
    warranty: Optional[str] = Form(default=None),
) -> ProductSubmission:
    features: KeyFeaturesInput = key_features
    # A single keyFeatures part is a JSON or newline separated string
    if key_features is not None and len(key_features) == 1:
        features = key_features[0]
    return ProductSubmission(
        name=name,
        description=description,
        price=price,
        category=category,
        key_features=features,
        material=material,
        compatibility=compatibility,
        best_for=best_for,
        warranty=warranty,
    )


def _incoming(image: Optional[UploadFile]) -> Optional[IncomingFile]:
    if image is None or not image.filename:
        return None
    return IncomingFile(filename=image.filename, stream=image.file)


@router.get("", response_model=List[Product])
def list_products(catalog: CatalogService = Depends(get_catalog)) -> List[Product]:
    return unwrap_or_raise(catalog.list_products())


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, catalog: CatalogService = Depends(get_catalog)) -> Product:
    return unwrap_or_raise(catalog.get_product(product_id))


@router.post("", response_model=ProductEnvelope, status_code=status.HTTP_201_CREATED)
def create_product(
    admin: TokenSubject = Depends(require_admin),
    submission: ProductSubmission = Depends(product_submission),
    image: Optional[UploadFile] = File(default=None),
    catalog: CatalogService = Depends(get_catalog),
) -> ProductEnvelope:
    product = unwrap_or_raise(catalog.create_product(admin, submission, _incoming(image)))
    return ProductEnvelope(message="Product uploaded successfully", product=product)


@router.put("/{product_id}", response_model=ProductEnvelope)
def update_product(
    product_id: str,
    admin: TokenSubject = Depends(require_admin),
    submission: ProductSubmission = Depends(product_submission),
    image: Optional[UploadFile] = File(default=None),
    catalog: CatalogService = Depends(get_catalog),
) -> ProductEnvelope:
    product = unwrap_or_raise(
        catalog.update_product(admin, product_id, submission, _incoming(image))
    )
    return ProductEnvelope(message="Product updated successfully", product=product)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    admin: TokenSubject = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog),
) -> MessageResponse:
    unwrap_or_raise(catalog.delete_product(admin, product_id))
    return MessageResponse(message="Product deleted successfully")


__all__ = ["router"]
