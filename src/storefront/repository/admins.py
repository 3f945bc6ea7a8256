from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..models import Admin


class AdminRepository(ABC):
    """Credential store holding the storefront administrator."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Admin]:
        """Return the admin with the given (already lower-cased) email, if any."""

    @abstractmethod
    def create(self, email: str, password_hash: str) -> Admin:
        """Persist a new admin. Used only by the bootstrap command."""


__all__ = ["AdminRepository"]
