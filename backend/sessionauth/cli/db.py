"""Flask CLI commands that create or drop the user record table."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from sessionauth.core.extensions import db

LOGGER = logging.getLogger(__name__)


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    if str(current_app.config.get("ENV_NAME", "production")).lower() == "production":
        raise click.UsageError("The 'flask drop-db' command is restricted to non-production environments.")


@click.command("init-db")
@with_appcontext
def init_db() -> None:
    """Create missing tables. Existing tables and rows are left untouched."""
    db.create_all()
    LOGGER.info("Database schema ensured: url=%s", current_app.config.get("SQLALCHEMY_DATABASE_URI"))
    click.echo("Database initialized.")


@click.command("drop-db")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@with_appcontext
def drop_db(yes: bool) -> None:
    """Drop every table (development and testing only)."""
    _ensure_non_production()
    if not yes:
        click.confirm("Drop all tables?", abort=True)
    db.drop_all()
    click.echo("Database dropped.")


db_cli = (init_db, drop_db)
