"""Pytest configuration and fixtures."""

from contextlib import ExitStack

import pymysql
import pytest
from docker.errors import DockerException

from db_config import Settings, db_connection
from mysql_container import mysql_container


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._row = None

    def execute(self, sql, args=None):
        for needle, exc in self.conn.failures.items():
            if needle in sql:
                raise exc
        self.conn.statements.append(sql)
        self._row = self.conn.rows.pop(0) if self.conn.rows else None

    def fetchone(self):
        return self._row

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeConnection:
    """Records executed statements instead of talking to MySQL."""

    def __init__(self):
        self.statements = []
        self.rows = []
        self.failures = {}
        self.commits = 0
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def close(self):
        self.closed = True

    def fail_on(self, needle, exc=None):
        self.failures[needle] = exc or pymysql.err.OperationalError(2013, "Lost connection to MySQL server during query")


@pytest.fixture
def fake_conn():
    return FakeConnection()


@pytest.fixture(scope="session")
def test_settings():
    return Settings(_env_file=None)


@pytest.fixture(scope="session")
def mysql_dsn(test_settings):
    """Start one MySQL container for the test session."""
    stack = ExitStack()
    try:
        dsn = stack.enter_context(mysql_container(settings=test_settings))
    except DockerException as e:
        pytest.skip(f"Docker is not available: {e}")
    with stack:
        yield dsn


@pytest.fixture
def mysql_conn(mysql_dsn):
    with db_connection(mysql_dsn) as conn:
        yield conn
