from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_OPENROUTER_MODEL = "openai/gpt-4o-mini"

# Environment variable name -> settings attribute
REQUIRED_ENV_VARS = {
    "DATABASE_URL": "database_url",
    "JWT_SECRET": "jwt_secret",
    "RESEND_API_KEY": "resend_api_key",
    "EMAIL_USER": "email_user",
    "OPENROUTER_API_KEY": "openrouter_api_key",
}


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is absent."""

    def __init__(self, missing: List[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            "Missing required environment variables: " + ", ".join(self.missing)
        )


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


class StorefrontSettings(BaseModel):
    """Runtime configuration for the storefront API."""

    database_url: str = Field(default_factory=lambda: _env_str("DATABASE_URL"))
    jwt_secret: str = Field(default_factory=lambda: _env_str("JWT_SECRET"))
    resend_api_key: str = Field(default_factory=lambda: _env_str("RESEND_API_KEY"))
    email_user: str = Field(default_factory=lambda: _env_str("EMAIL_USER"))
    openrouter_api_key: str = Field(default_factory=lambda: _env_str("OPENROUTER_API_KEY"))
    openrouter_base_url: str = Field(
        default_factory=lambda: _env_str("OPENROUTER_BASE_URL", DEFAULT_OPENROUTER_BASE_URL)
    )
    openrouter_model: str = Field(
        default_factory=lambda: _env_str("OPENROUTER_MODEL", DEFAULT_OPENROUTER_MODEL)
    )
    openrouter_timeout: float = Field(
        default_factory=lambda: float(_env_str("OPENROUTER_TIMEOUT", "60.0"))
    )
    upload_dir: Path = Field(default_factory=lambda: Path(_env_str("UPLOAD_DIR", "uploads")))
    port: int = Field(default_factory=lambda: int(_env_str("PORT", "3002")))
    log_level: str = Field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            origin.strip() for origin in _env_str("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]
    )
    store_backend: str = Field(
        default_factory=lambda: _env_str("STOREFRONT_STORE", "postgres").lower()
    )

    def missing_required(self) -> List[str]:
        return [env for env, attr in REQUIRED_ENV_VARS.items() if not getattr(self, attr)]

    def require_complete(self) -> None:
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(missing)

    def presence_report(self) -> dict[str, str]:
        """Which required values are set, without revealing them."""

        report = {
            env: "set" if getattr(self, attr) else "missing"
            for env, attr in REQUIRED_ENV_VARS.items()
        }
        report["OPENROUTER_BASE_URL"] = self.openrouter_base_url
        report["OPENROUTER_MODEL"] = self.openrouter_model
        return report


@lru_cache(maxsize=1)
def get_settings() -> StorefrontSettings:
    return StorefrontSettings()


__all__ = [
    "ConfigurationError",
    "REQUIRED_ENV_VARS",
    "StorefrontSettings",
    "get_settings",
]
