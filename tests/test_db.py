"""Tests for the shared database engine accessor."""

import inspect

from fastapi.routing import APIRoute

from app.db import dispose_engine, get_db, get_engine, get_sessionmaker
from app.main import app


class TestEngineSingleton:

    def test_engine_is_shared(self):
        assert get_engine() is get_engine()
        assert get_sessionmaker().kw["bind"] is get_engine()

    def test_dispose_builds_a_fresh_engine_on_next_use(self):
        first = get_engine()
        dispose_engine()
        assert get_engine() is not first


def _uses_db(dependant):
    return any(dep.call is get_db or _uses_db(dep) for dep in dependant.dependencies)


class TestSessionEndpoints:
    """Endpoints holding a synchronous session must run in the thread pool."""

    def test_db_backed_endpoints_are_plain_functions(self):
        db_routes = [r for r in app.routes if isinstance(r, APIRoute) and _uses_db(r.dependant)]
        assert db_routes
        assert [r.path for r in db_routes if inspect.iscoroutinefunction(r.endpoint)] == []
