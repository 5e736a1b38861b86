"""Command-line interface for ItemVault.

This module provides the CLI commands for running and managing
the ItemVault application.
"""

import asyncio
import json
import sys
from typing import Any, NoReturn

import click

from itemvault.core.config import get_settings
from itemvault.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="ItemVault")
def cli() -> None:
    """ItemVault - schema-validated JSON collections on object storage.

    Settings are read from ITEMVAULT_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Enable auto-reload (defaults to on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Start the ItemVault server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers
    if reload is None:
        reload = settings.is_development

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting ItemVault server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "itemvault.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def init_db() -> None:
    """Create the database tables and the object store bucket."""
    from itemvault.infrastructure.persistence.database import close_database, get_db_manager
    from itemvault.infrastructure.storage import build_object_store

    settings = get_settings()
    configure_logging(settings)

    async def initialize() -> None:
        try:
            await get_db_manager().create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await close_database()

        await build_object_store(settings).ensure_container()
        click.echo(f"Object store ready ({settings.storage_backend}).")

    asyncio.run(initialize())


@cli.command()
def info() -> None:
    """Display ItemVault configuration."""
    settings = get_settings()

    if settings.storage_backend == "s3":
        storage = (
            f"  Endpoint:     {settings.s3_endpoint_url or 'AWS'}\n"
            f"  Bucket:       {settings.s3_bucket}\n"
            f"  Region:       {settings.s3_region}"
        )
    else:
        storage = f"  Path:         {settings.local_storage_path}"

    click.echo(f"""
ItemVault v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Auto Create:  {settings.db_auto_create}

Storage ({settings.storage_backend}):
{storage}
  Key Prefix:   {settings.item_key_prefix}

Search:
  Threshold:    {settings.search_threshold}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


@cli.command()
def tools() -> None:
    """List the available tools."""
    from itemvault.application.services import get_tool_catalog

    for schema in get_tool_catalog().function_schemas():
        click.echo(f"{schema['name']}: {schema['description']}")


@cli.command()
@click.argument("name")
@click.option(
    "--args",
    "raw_arguments",
    default="{}",
    show_default=True,
    help="Tool arguments as a JSON object",
)
def call(name: str, raw_arguments: str) -> None:
    """Execute tool NAME and print its JSON result."""
    from itemvault.application.services import ToolContext, get_tool_catalog
    from itemvault.infrastructure.persistence.database import (
        close_database,
        get_db_manager,
        init_database,
    )
    from itemvault.infrastructure.storage import build_item_store

    try:
        arguments: Any = json.loads(raw_arguments)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--args") from e
    if not isinstance(arguments, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--args")

    settings = get_settings()
    configure_logging(settings)

    async def execute() -> dict[str, Any]:
        try:
            await init_database()
            async with get_db_manager().session() as session:
                context = ToolContext(
                    session=session,
                    item_store=build_item_store(settings),
                    search_threshold=settings.search_threshold,
                )
                result = await get_tool_catalog().execute(name, arguments, context)
        finally:
            await close_database()
        return result.to_dict()

    output = asyncio.run(execute())
    click.echo(json.dumps(output, indent=2, ensure_ascii=False, default=str))
    if not output["success"]:
        sys.exit(1)


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `itemvault` command is run
    or when using `python -m itemvault`.
    """
    cli()


if __name__ == "__main__":
    main()
