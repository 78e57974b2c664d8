"""Typer CLI root application."""

import typer

from observer_api.core.config import get_settings
from observer_api.core.logging import setup_logging

app = typer.Typer(name="observer-api", help="Election observer account management CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from observer_api.cli.db_cmd import db_app
    from observer_api.cli.user_cmd import user_app

    app.add_typer(db_app, name="db", help="Observer account schema migrations (Alembic)")
    app.add_typer(user_app, name="user", help="User management commands")


_register_subcommands()
