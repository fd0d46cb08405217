"""Command-line interface for ResumeBuilder.

This module provides the CLI commands for running and managing
the ResumeBuilder authentication service.
"""

from pathlib import Path
from typing import NoReturn

import click

from resumebuilder import __version__
from resumebuilder.core.config import get_settings
from resumebuilder.core.logging import configure_logging, get_logger

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@click.group()
@click.version_option(version=__version__, prog_name="ResumeBuilder")
def cli() -> None:
    """ResumeBuilder - account registration, email verification and login.

    Settings are read from RESUMEBUILDER_* environment variables or a .env file.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
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
    """Start the ResumeBuilder server."""
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
        "Starting ResumeBuilder server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "resumebuilder.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create the database tables directly from the models.

    Use this only in development. In production, use ``migrate`` instead.
    """
    import asyncio

    from resumebuilder.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production:
        click.echo(
            "ERROR: Running in production mode. Use 'resumebuilder migrate' instead.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option(
    "--revision",
    type=str,
    default="head",
    show_default=True,
    help="Target revision",
)
def migrate(revision: str) -> None:
    """Apply Alembic migrations up to the given revision."""
    from alembic import command
    from alembic.config import Config

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    ini_path = PROJECT_ROOT / "alembic.ini"
    if not ini_path.exists():
        click.echo(f"ERROR: {ini_path} not found.", err=True)
        raise SystemExit(1)

    config = Config(str(ini_path))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", settings.database_url)

    logger.info("Applying migrations", revision=revision)
    command.upgrade(config, revision)
    click.echo(f"Database upgraded to {revision}.")


@cli.command()
def info() -> None:
    """Display ResumeBuilder configuration and system information."""
    settings = get_settings()

    click.echo(f"""
ResumeBuilder v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}
  Base URL:     {settings.app_base_url}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  Verify Link:  {settings.verification_token_expire_hours} hours

Email:
  Provider:     {settings.email_provider}
  From:         {settings.email_from_name} <{settings.email_from_address}>

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `resumebuilder` command is run
    or when using `python -m resumebuilder`.
    """
    cli()


if __name__ == "__main__":
    main()
