from __future__ import annotations

import itertools
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from ..models import Admin, Product, ProductDraft
from .admins import AdminRepository
from .products import ProductRepository


class InMemoryProductRepository(ProductRepository):
    """Process-local catalog store used for tests and ``STOREFRONT_STORE=memory``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: Dict[UUID, Tuple[int, Product]] = {}
        self._sequence = itertools.count(1)

    def list_all(self) -> List[Product]:
        with self._lock:
            entries = list(self._records.values())
        entries.sort(key=lambda entry: (entry[1].created_at, entry[0]), reverse=True)
        return [product.model_copy(deep=True) for _, product in entries]

    def get(self, product_id: UUID) -> Optional[Product]:
        with self._lock:
            entry = self._records.get(product_id)
        return entry[1].model_copy(deep=True) if entry else None

    def create(self, draft: ProductDraft, image: str, now: datetime) -> Product:
        product = Product(
            id=uuid4(),
            image=image,
            created_at=now,
            updated_at=now,
            **draft.model_dump(),
        )
        with self._lock:
            self._records[product.id] = (next(self._sequence), product)
        return product.model_copy(deep=True)

    def update(
        self,
        product_id: UUID,
        draft: ProductDraft,
        image: Optional[str],
        now: datetime,
    ) -> Optional[Product]:
        with self._lock:
            entry = self._records.get(product_id)
            if entry is None:
                return None
            seq, current = entry
            product = Product(
                id=current.id,
                image=image or current.image,
                created_at=current.created_at,
                updated_at=now,
                **draft.model_dump(),
            )
            self._records[product_id] = (seq, product)
        return product.model_copy(deep=True)

    def delete(self, product_id: UUID) -> bool:
        with self._lock:
            return self._records.pop(product_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class InMemoryAdminRepository(AdminRepository):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._admins: Dict[str, Admin] = {}

    def get_by_email(self, email: str) -> Optional[Admin]:
        with self._lock:
            return self._admins.get(email)

    def create(self, email: str, password_hash: str) -> Admin:
        admin = Admin(
            id=uuid4(),
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            if email in self._admins:
                raise ValueError(f"Admin already exists for {email}")
            self._admins[email] = admin
        return admin


__all__ = ["InMemoryAdminRepository", "InMemoryProductRepository"]
