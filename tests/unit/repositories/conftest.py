"""SQLite-backed fixtures for the repository tests.

The engine comes from ``forum.database`` so the tests run with the same
foreign-key pragma and table set as the application.
"""

from __future__ import annotations

from contextlib import contextmanager

import pytest
from sqlalchemy import event

from forum.database import build_engine, build_session_factory, init_db


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def session(session_factory):
    sess = session_factory()
    yield sess
    sess.close()


@contextmanager
def recorded_statements(engine):
    """Collect the SQL sent to *engine* inside the block.

    ::

        with recorded_statements(engine) as statements:
            rows[0].author.name
        assert statements == []
    """
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    try:
        yield statements
    finally:
        event.remove(engine, "before_cursor_execute", _record)
