"""Command-line interface registration for the Flask application."""

from __future__ import annotations

from flask import Flask

from .db import db_cli


def init_app(app: Flask) -> None:
    """Register application-specific CLI commands.

    Parameters
    ----------
    app:
        Flask application instance whose CLI registry will receive the
        ``init-db`` and ``drop-db`` commands.
    """
    for command in db_cli:
        app.cli.add_command(command)
