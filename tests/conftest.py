from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from pgxid.postgres import interface


class PostgresConnectionContextMock:
    def __init__(self, connection):
        self.connection = connection

    async def __aenter__(self, *args, **kwargs):
        return self.connection

    async def __aexit__(self, *args, **kwargs):
        pass


@pytest.fixture
def rows():
    return [("1_YWJj_eHl6", "2024-01-01", "alice", "db1")]


@pytest.fixture
def cursor(rows):
    cursor = Mock()
    cursor.fetchall = Mock(return_value=rows)
    return cursor


@pytest.fixture
def connection(cursor):
    connection = Mock()
    connection.cursor = Mock(return_value=cursor)
    return connection


@pytest.fixture
def async_cursor(rows):
    cursor = Mock()
    cursor.execute = AsyncMock()
    cursor.fetchall = AsyncMock(return_value=rows)
    cursor.close = AsyncMock()
    return cursor


@pytest.fixture
def async_connection(async_cursor):
    connection = Mock()
    connection.cursor = Mock(return_value=async_cursor)
    return connection


@pytest.fixture
def postgres_connection_context(async_connection):
    return Mock(
        return_value=PostgresConnectionContextMock(async_connection)
    )


@pytest.fixture(autouse=True)
def mock_postgres_pool(monkeypatch, postgres_connection_context):
    pool = AsyncMock()
    mock = MagicMock(return_value=pool)
    pool.connection = postgres_connection_context
    monkeypatch.setattr(interface, "AsyncConnectionPool", mock)
    return mock
