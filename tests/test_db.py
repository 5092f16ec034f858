from contextlib import contextmanager
from datetime import datetime, timezone

import psycopg
import pytest

from conftest import make_event
from newstrend.db import articles as articles_module
from newstrend.db import events as events_module
from newstrend.db.articles import ArticleStore
from newstrend.db.connection import DatabaseConfig
from newstrend.db.events import EventStore
from newstrend.errors import StoreUnavailable
from newstrend.models import EventType


class FakeCursor:
    def __init__(self, rows):
        self.rows = rows
        self.executed = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params=None):
        self.executed.append((query, params))

    def executemany(self, query, params_seq):
        self.executed.extend((query, p) for p in params_seq)

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows


class FakeConnection:
    def __init__(self, rows=None):
        self.cursor_obj = FakeCursor(rows or [])
        self.commits = 0

    def cursor(self):
        return self.cursor_obj

    def commit(self):
        self.commits += 1


def connection_factory(conn):
    @contextmanager
    def get_connection(config):
        yield conn

    return get_connection


@contextmanager
def broken_connection(config):
    raise psycopg.OperationalError("connection refused")
    yield


ARTICLE_ROW = {
    "id": "a1",
    "title": "Floods in the valley",
    "description": "",
    "url": "https://example.com/a1",
    "publication_date": datetime(2024, 6, 1, tzinfo=timezone.utc),
    "source_name": "Wire",
    "category": ["national"],
    "relevance_score": 0.7,
    "latitude": 28.6,
    "longitude": 77.2,
    "llm_summary": None,
    "created_at": None,
    "updated_at": None,
}


def test_find_by_ids_maps_rows(monkeypatch):
    conn = FakeConnection([ARTICLE_ROW])
    monkeypatch.setattr(articles_module, "get_connection", connection_factory(conn))

    result = ArticleStore({}).find_by_ids(["a1", "zz"])

    assert [a.id for a in result] == ["a1"]
    assert result[0].category == ["national"]
    query, params = conn.cursor_obj.executed[0]
    assert "ANY" in query
    assert params == (["a1", "zz"],)


def test_find_by_ids_with_no_ids_skips_the_database(monkeypatch):
    monkeypatch.setattr(articles_module, "get_connection", broken_connection)
    assert ArticleStore({}).find_by_ids([]) == []


def test_find_by_id_returns_none_when_missing(monkeypatch):
    monkeypatch.setattr(articles_module, "get_connection", connection_factory(FakeConnection([])))
    assert ArticleStore({}).find_by_id("missing") is None


def test_article_read_failure_is_store_unavailable(monkeypatch):
    monkeypatch.setattr(articles_module, "get_connection", broken_connection)
    with pytest.raises(StoreUnavailable):
        ArticleStore({}).find_recent(5)


def test_insert_returns_event_with_id(monkeypatch):
    conn = FakeConnection([{"id": 17}])
    monkeypatch.setattr(events_module, "get_connection", connection_factory(conn))

    stored = EventStore({}).insert(make_event("a1", EventType.CLICK))

    assert stored.id == 17
    assert conn.commits == 1
    _, params = conn.cursor_obj.executed[0]
    assert params[:2] == ("a1", "click")


def test_insert_batch_writes_all_rows(monkeypatch):
    conn = FakeConnection()
    monkeypatch.setattr(events_module, "get_connection", connection_factory(conn))

    written = EventStore({}).insert_batch([make_event("a1"), make_event("a2")])

    assert written == 2
    assert len(conn.cursor_obj.executed) == 2
    assert conn.commits == 1


def test_find_since_maps_rows(monkeypatch):
    row = {
        "id": 1,
        "article_id": "a1",
        "event_type": "view",
        "latitude": 1.0,
        "longitude": 2.0,
        "created_at": datetime(2024, 6, 1, 12, 0),
    }
    monkeypatch.setattr(events_module, "get_connection", connection_factory(FakeConnection([row])))

    events = EventStore({}).find_since(datetime(2024, 6, 1, tzinfo=timezone.utc))

    assert events[0].event_type is EventType.VIEW
    assert events[0].created_at.tzinfo is not None


def test_event_write_failure_is_store_unavailable(monkeypatch):
    monkeypatch.setattr(events_module, "get_connection", broken_connection)
    with pytest.raises(StoreUnavailable):
        EventStore({}).insert(make_event("a1"))


def test_database_config_reads_password_env(monkeypatch):
    monkeypatch.setenv("TEST_DB_PW", "pw")
    db_config = DatabaseConfig({"user": "u", "database": "d", "password_env": "TEST_DB_PW"})
    assert db_config.connection_string == "postgresql://u:pw@localhost:5432/d"
