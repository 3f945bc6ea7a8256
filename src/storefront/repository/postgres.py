from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from ..db import get_connection
from ..models import Admin, Product, ProductDraft
from .admins import AdminRepository
from .products import ProductRepository

_PRODUCT_COLUMNS = """
    product_id, name, description, image, price, category, key_features,
    material, compatibility, best_for, warranty, created_at, updated_at
"""


def _product_from_row(row: Dict[str, Any]) -> Product:
    return Product(
        id=row["product_id"],
        name=row["name"],
        description=row["description"],
        image=row["image"],
        price=float(row["price"] or 0),
        category=row["category"],
        key_features=list(row.get("key_features") or []),
        material=row.get("material"),
        compatibility=row.get("compatibility"),
        best_for=row.get("best_for"),
        warranty=row.get("warranty"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _admin_from_row(row: Dict[str, Any]) -> Admin:
    return Admin(
        id=row["admin_id"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
    )


def _draft_params(draft: ProductDraft) -> Dict[str, Any]:
    return {
        "name": draft.name,
        "description": draft.description,
        "price": draft.price,
        "category": draft.category,
        "key_features": Jsonb(draft.key_features),
        "material": draft.material,
        "compatibility": draft.compatibility,
        "best_for": draft.best_for,
        "warranty": draft.warranty,
    }


class PostgresProductRepository(ProductRepository):
    """Postgres-backed catalog store; one connection per operation."""

    def __init__(self, database_url: str) -> None:
        self._database_url = database_url

    def list_all(self) -> List[Product]:
        with get_connection(self._database_url) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_PRODUCT_COLUMNS} FROM products ORDER BY created_at DESC, seq DESC"
                )
                return [_product_from_row(row) for row in cur.fetchall()]

    def get(self, product_id: UUID) -> Optional[Product]:
        with get_connection(self._database_url) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_PRODUCT_COLUMNS} FROM products WHERE product_id = %s",
                    (product_id,),
                )
                row = cur.fetchone()
                return _product_from_row(row) if row else None

    def create(self, draft: ProductDraft, image: str, now: datetime) -> Product:
        params = _draft_params(draft)
        params.update({"product_id": uuid4(), "image": image, "now": now})
        with get_connection(self._database_url) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO products (
                        product_id, name, description, image, price, category,
                        key_features, material, compatibility, best_for, warranty,
                        created_at, updated_at
                    ) VALUES (
                        %(product_id)s, %(name)s, %(description)s, %(image)s, %(price)s,
                        %(category)s, %(key_features)s, %(material)s, %(compatibility)s,
                        %(best_for)s, %(warranty)s, %(now)s, %(now)s
                    )
                    RETURNING {_PRODUCT_COLUMNS}
                    """,
                    params,
                )
                return _product_from_row(cur.fetchone())

    def update(
        self,
        product_id: UUID,
        draft: ProductDraft,
        image: Optional[str],
        now: datetime,
    ) -> Optional[Product]:
        params = _draft_params(draft)
        params.update({"product_id": product_id, "image": image, "now": now})
        with get_connection(self._database_url) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE products
                    SET name = %(name)s,
                        description = %(description)s,
                        image = COALESCE(%(image)s, image),
                        price = %(price)s,
                        category = %(category)s,
                        key_features = %(key_features)s,
                        material = %(material)s,
                        compatibility = %(compatibility)s,
                        best_for = %(best_for)s,
                        warranty = %(warranty)s,
                        updated_at = %(now)s
                    WHERE product_id = %(product_id)s
                    RETURNING {_PRODUCT_COLUMNS}
                    """,
                    params,
                )
                row = cur.fetchone()
                return _product_from_row(row) if row else None

    def delete(self, product_id: UUID) -> bool:
        with get_connection(self._database_url) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM products WHERE product_id = %s RETURNING product_id",
                    (product_id,),
                )
                return cur.fetchone() is not None


class PostgresAdminRepository(AdminRepository):
    def __init__(self, database_url: str) -> None:
        self._database_url = database_url

    def get_by_email(self, email: str) -> Optional[Admin]:
        with get_connection(self._database_url) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    "SELECT admin_id, email, password_hash, created_at FROM admins WHERE email = %s",
                    (email,),
                )
                row = cur.fetchone()
                return _admin_from_row(row) if row else None

    def create(self, email: str, password_hash: str) -> Admin:
        with get_connection(self._database_url) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO admins (admin_id, email, password_hash)
                    VALUES (%s, %s, %s)
                    RETURNING admin_id, email, password_hash, created_at
                    """,
                    (uuid4(), email, password_hash),
                )
                return _admin_from_row(cur.fetchone())


__all__ = ["PostgresAdminRepository", "PostgresProductRepository"]
