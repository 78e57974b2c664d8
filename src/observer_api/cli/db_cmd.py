"""Schema migration commands for the observer account database.

Revision ``001`` creates the account, application and commission tables and
seeds the six general roles, so ``db upgrade`` is all a fresh database needs
before ``user merge`` can run.
"""

import typer
from loguru import logger

db_app = typer.Typer()

_ALEMBIC_INI = "alembic.ini"


def _alembic_config():  # type: ignore[no-untyped-def]
    """Load the Alembic configuration; the database URL comes from Settings in env.py."""
    from alembic.config import Config

    return Config(_ALEMBIC_INI)


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Revision to migrate to (001 creates tables and seeds roles)"),
) -> None:
    """Create or update the observer account schema."""
    from alembic import command

    logger.info(f"Migrating observer account schema to {revision}")
    command.upgrade(_alembic_config(), revision)
    logger.info(f"Observer account schema at {revision}")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Revision to roll back to (base drops every account table)"),
) -> None:
    """Roll the observer account schema back."""
    from alembic import command

    logger.warning(f"Rolling observer account schema back to {revision}")
    command.downgrade(_alembic_config(), revision)
    logger.info(f"Observer account schema rolled back to {revision}")


@db_app.command()
def current() -> None:
    """Print the revision the database is at."""
    from alembic import command

    command.current(_alembic_config(), verbose=True)
