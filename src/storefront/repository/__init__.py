"""Persistence layer for admins and catalog products."""

from .admins import AdminRepository
from .memory import InMemoryAdminRepository, InMemoryProductRepository
from .postgres import PostgresAdminRepository, PostgresProductRepository
from .products import ProductRepository

__all__ = [
    "AdminRepository",
    "InMemoryAdminRepository",
    "InMemoryProductRepository",
    "PostgresAdminRepository",
    "PostgresProductRepository",
    "ProductRepository",
]
