from __future__ import annotations

from typing import Optional

import orjson
import psycopg
import typer
import uvicorn
from dotenv import load_dotenv

from .auth import hash_password, normalize_email
from .config import ConfigurationError, get_settings
from .context import open_store
from .logging import get_logger, setup_logging

logger = get_logger("storefront.cli")

cli = typer.Typer(help="Storefront API entrypoint and admin tools")


@cli.callback()
def main() -> None:
    """Load a local .env file before any command runs."""
    load_dotenv()


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _store():
    settings = get_settings()
    try:
        return open_store(settings)
    except ConfigurationError as exc:
        _fail(str(exc))
    except psycopg.Error as exc:
        _fail(f"Database connection error: {exc}")


@cli.command()
def serve(host: str = "0.0.0.0", port: Optional[int] = None) -> None:
    """Validate the environment, connect the store and start uvicorn."""

    from .app import create_app

    settings = get_settings()
    setup_logging(settings.log_level)
    try:
        app = create_app(settings)
    except ConfigurationError as exc:
        _fail(str(exc))
    except psycopg.Error as exc:
        logger.error("store_connection_failed", error=str(exc))
        _fail(f"Database connection error: {exc}")
    uvicorn.run(app, host=host, port=port or settings.port, log_level="info", lifespan="on")


@cli.command("create-admin")
def create_admin(
    email: str = typer.Option(..., help="Administrator email address"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Administrator password"
    ),
) -> None:
    """Bootstrap the single administrator account."""

    admins, _ = _store()
    normalized = normalize_email(email)
    if admins.get_by_email(normalized) is not None:
        typer.echo("Admin user already exists")
        return
    admins.create(normalized, hash_password(password))
    typer.echo("Admin user created successfully")
    typer.echo(f"Email: {normalized}")


@cli.command("list-products")
def list_products() -> None:
    """Print one summary line per product, newest first."""

    _, products = _store()
    items = products.list_all()
    typer.echo(f"Found {len(items)} products:")
    for index, product in enumerate(items, start=1):
        typer.echo(f"{index}. ID: {product.id}, Name: {product.name}, Image: {product.image}")


@cli.command("show-products")
def show_products() -> None:
    """Print every product with all fields as JSON."""

    _, products = _store()
    items = products.list_all()
    typer.echo(f"Found {len(items)} products:")
    for index, product in enumerate(items, start=1):
        typer.echo(f"\n--- Product {index} ---")
        document = product.model_dump(mode="json", by_alias=True)
        typer.echo(orjson.dumps(document, option=orjson.OPT_INDENT_2).decode("utf-8"))


if __name__ == "__main__":
    cli()
