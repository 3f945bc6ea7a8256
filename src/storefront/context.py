from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .auth import LoginService, TokenService
from .config import ConfigurationError, StorefrontSettings
from .db import check_connection, ensure_schema
from .logging import get_logger
from .repository import (
    AdminRepository,
    InMemoryAdminRepository,
    InMemoryProductRepository,
    PostgresAdminRepository,
    PostgresProductRepository,
    ProductRepository,
)
from .services import AssistantSettings, CatalogService, ChatAssistant, ContactMailer
from .uploads import UploadHandler

logger = get_logger("storefront.context")


@dataclass
class AppContext:
    """Everything a request handler needs, built once at startup."""

    settings: StorefrontSettings
    admins: AdminRepository
    products: ProductRepository
    tokens: TokenService
    login: LoginService
    uploads: UploadHandler
    catalog: CatalogService
    mailer: ContactMailer
    assistant: ChatAssistant


def open_store(settings: StorefrontSettings) -> Tuple[AdminRepository, ProductRepository]:
    """Connect to the configured store and make sure its schema exists."""

    if settings.store_backend == "memory":
        logger.warning("store_in_memory", backend=settings.store_backend)
        return InMemoryAdminRepository(), InMemoryProductRepository()

    if not settings.database_url:
        raise ConfigurationError(["DATABASE_URL"])
    check_connection(settings.database_url)
    ensure_schema(settings.database_url)
    logger.info("store_connected", backend="postgres")
    return (
        PostgresAdminRepository(settings.database_url),
        PostgresProductRepository(settings.database_url),
    )


def build_context(
    settings: StorefrontSettings,
    *,
    admins: AdminRepository | None = None,
    products: ProductRepository | None = None,
) -> AppContext:
    settings.require_complete()
    logger.info("environment_validated", **settings.presence_report())

    if admins is None or products is None:
        admins, products = open_store(settings)

    tokens = TokenService(settings.jwt_secret)
    uploads = UploadHandler(settings.upload_dir)
    return AppContext(
        settings=settings,
        admins=admins,
        products=products,
        tokens=tokens,
        login=LoginService(admins, tokens),
        uploads=uploads,
        catalog=CatalogService(products, uploads),
        mailer=ContactMailer(settings.resend_api_key, settings.email_user),
        assistant=ChatAssistant(
            AssistantSettings(
                api_key=settings.openrouter_api_key,
                base_url=settings.openrouter_base_url,
                model=settings.openrouter_model,
                timeout=settings.openrouter_timeout,
            )
        ),
    )


__all__ = ["AppContext", "build_context", "open_store"]
