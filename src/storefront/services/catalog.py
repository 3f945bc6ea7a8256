from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ..auth.tokens import Clock, TokenSubject, utcnow
from ..errors import NO_FILE, Result, not_found, validation_error
from ..logging import get_logger
from ..models import Product, ProductSubmission
from ..repository import ProductRepository
from ..uploads import IncomingFile, UploadHandler
from .normalizer import build_draft

logger = get_logger("storefront.catalog")

PRODUCT_NOT_FOUND_MESSAGE = "Product not found"


def _parse_product_id(product_id: str | UUID) -> Optional[UUID]:
    if isinstance(product_id, UUID):
        return product_id
    try:
        return UUID(str(product_id))
    except ValueError:
        return None


class CatalogService:
    """Validates catalog requests, stores uploads and mutates the catalog store.

    Mutating operations take the verified token subject of the caller; the
    HTTP layer obtains it from the bearer-token dependency.
    """

    def __init__(
        self,
        products: ProductRepository,
        uploads: UploadHandler,
        *,
        clock: Clock = utcnow,
    ) -> None:
        self._products = products
        self._uploads = uploads
        self._clock = clock

    def list_products(self) -> Result[List[Product]]:
        return Result.success(self._products.list_all())

    def get_product(self, product_id: str | UUID) -> Result[Product]:
        parsed = _parse_product_id(product_id)
        product = self._products.get(parsed) if parsed else None
        if product is None:
            return Result.failure(not_found(PRODUCT_NOT_FOUND_MESSAGE))
        return Result.success(product)

    def create_product(
        self,
        actor: TokenSubject,
        submission: ProductSubmission,
        image: Optional[IncomingFile],
    ) -> Result[Product]:
        draft = build_draft(submission)
        if draft is None:
            return Result.failure(validation_error("Name, description, and image are required"))
        if image is None or not image.filename:
            return Result.failure(
                validation_error("Name, description, and image are required", NO_FILE)
            )

        stored = self._uploads.receive(image)
        if not stored.ok:
            return Result.failure(stored.error)

        product = self._products.create(draft, stored.unwrap().url, self._clock())
        logger.info(
            "product_created",
            product_id=str(product.id),
            image=product.image,
            admin_id=actor.admin_id,
        )
        return Result.success(product)

    def update_product(
        self,
        actor: TokenSubject,
        product_id: str | UUID,
        submission: ProductSubmission,
        image: Optional[IncomingFile] = None,
    ) -> Result[Product]:
        draft = build_draft(submission)
        if draft is None:
            return Result.failure(validation_error("Name and description are required"))

        parsed = _parse_product_id(product_id)
        if parsed is None:
            return Result.failure(not_found(PRODUCT_NOT_FOUND_MESSAGE))

        new_image: Optional[str] = None
        if image is not None and image.filename:
            stored = self._uploads.receive(image)
            if not stored.ok:
                return Result.failure(stored.error)
            new_image = stored.unwrap().url

        product = self._products.update(parsed, draft, new_image, self._clock())
        if product is None:
            return Result.failure(not_found(PRODUCT_NOT_FOUND_MESSAGE))

        logger.info(
            "product_updated",
            product_id=str(product.id),
            image_replaced=new_image is not None,
            admin_id=actor.admin_id,
        )
        return Result.success(product)

    def delete_product(self, actor: TokenSubject, product_id: str | UUID) -> Result[UUID]:
        parsed = _parse_product_id(product_id)
        if parsed is None or not self._products.delete(parsed):
            return Result.failure(not_found(PRODUCT_NOT_FOUND_MESSAGE))

        # The product's image file stays on disk
        logger.info("product_deleted", product_id=str(parsed), admin_id=actor.admin_id)
        return Result.success(parsed)


__all__ = ["CatalogService", "PRODUCT_NOT_FOUND_MESSAGE"]
