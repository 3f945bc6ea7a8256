from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import ConfigurationError, StorefrontSettings, get_settings
from .context import AppContext, build_context
from .logging import get_logger, setup_logging
from .routes import auth, products, relay
from .uploads import URL_PREFIX

logger = get_logger("storefront.api")


def create_app(
    settings: StorefrontSettings | None = None,
    *,
    context: AppContext | None = None,
) -> FastAPI:
    """Build the storefront API.

    Without an explicit ``context`` the environment is validated and the store
    is opened here, so a misconfigured process fails before serving traffic.
    """

    if context is None:
        settings = settings or get_settings()
        try:
            context = build_context(settings)
        except ConfigurationError as exc:
            logger.error("environment_invalid", missing=exc.missing)
            raise
    settings = context.settings

    app = FastAPI(title="Storefront API", version=__version__)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def on_startup() -> None:
        setup_logging(settings.log_level)
        logger.info(
            "storefront_api_ready",
            upload_dir=str(context.uploads.directory),
            model=settings.openrouter_model,
        )

    @app.exception_handler(RequestValidationError)
    async def request_invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            message = error.get("msg", "invalid value")
            problems.append(f"{location}: {message}" if location else message)
        logger.info("request_rejected", path=request.url.path, problems=problems)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request: " + "; ".join(problems)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_failed", path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.get("/healthz", tags=["system"])
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(relay.router)

    upload_dir = context.uploads.ensure_directory()
    app.mount(URL_PREFIX, StaticFiles(directory=str(upload_dir)), name="uploads")

    return app


__all__ = ["create_app"]
