from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ..models import Product, ProductDraft


class ProductRepository(ABC):
    """Abstract catalog store. The only component that mutates product records."""

    @abstractmethod
    def list_all(self) -> List[Product]:
        """Return every product, newest first; ties go to the most recent insert."""

    @abstractmethod
    def get(self, product_id: UUID) -> Optional[Product]:
        """Return a single product or ``None``."""

    @abstractmethod
    def create(self, draft: ProductDraft, image: str, now: datetime) -> Product:
        """Insert a new product stamped with ``now`` for both timestamps."""

    @abstractmethod
    def update(
        self,
        product_id: UUID,
        draft: ProductDraft,
        image: Optional[str],
        now: datetime,
    ) -> Optional[Product]:
        """Replace all draft fields; keep the stored image when ``image`` is ``None``.

        Returns ``None`` when no product matches.
        """

    @abstractmethod
    def delete(self, product_id: UUID) -> bool:
        """Remove the record. Returns ``False`` when no product matches."""


__all__ = ["ProductRepository"]
