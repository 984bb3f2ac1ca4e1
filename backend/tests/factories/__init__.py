"""Factory Boy helpers wired to the application's SQLAlchemy session."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Hold the session registered by the pytest fixture layer."""

    _session = None

    @classmethod
    def set(cls, session):
        """Register (or clear, with ``None``) the session used by factories."""
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered SQLAlchemy session.

        Raises
        ------
        RuntimeError
            If a factory is used by a test that does not build the app.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Does the test use the 'app' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Base class persisting through the app session.

    Rows are committed so HTTP requests issued by the test client see them.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "commit"
