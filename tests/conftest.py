"""Shared fixtures: in-memory stores and a controllable clock."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from newstrend.errors import StoreUnavailable
from newstrend.models import Article, EventType, InteractionEvent

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryArticleStore:
    def __init__(self, articles: Optional[List[Article]] = None) -> None:
        self.articles = {a.id: a for a in (articles or [])}
        self.fail = False
        self.calls = 0

    def _check(self) -> None:
        self.calls += 1
        if self.fail:
            raise StoreUnavailable("article store down")

    def find_by_id(self, article_id):
        self._check()
        return self.articles.get(article_id)

    def find_all(self, limit=100):
        self._check()
        articles = list(self.articles.values())
        return articles if limit is None else articles[:limit]

    def find_by_ids(self, article_ids):
        self._check()
        return [self.articles[i] for i in article_ids if i in self.articles]

    def find_recent(self, limit=10):
        self._check()
        ordered = sorted(self.articles.values(), key=lambda a: (a.publication_date, a.id), reverse=True)
        return ordered[:limit]


class InMemoryEventStore:
    def __init__(self, events: Optional[List[InteractionEvent]] = None) -> None:
        self.events = list(events or [])
        self.fail_reads = False
        self.fail_every = 0
        self.attempts = 0

    def insert(self, event):
        self.attempts += 1
        if self.fail_every and self.attempts % self.fail_every == 0:
            raise StoreUnavailable("event store write failed")
        stored = event.model_copy(update={"id": len(self.events) + 1})
        self.events.append(stored)
        return stored

    def insert_batch(self, events):
        for event in events:
            self.insert(event)
        return len(events)

    def find_since(self, since):
        if self.fail_reads:
            raise StoreUnavailable("event store down")
        return [e for e in self.events if e.created_at >= since]


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_article(article_id: str, lat: float = 0.0, lon: float = 0.0, hours_ago: float = 0.0) -> Article:
    return Article(
        id=article_id,
        title=f"Article {article_id}",
        description="",
        publication_date=NOW - timedelta(hours=hours_ago),
        source_name="Test Wire",
        category=["general"],
        relevance_score=0.5,
        latitude=lat,
        longitude=lon,
    )


def make_event(
    article_id: str,
    event_type: EventType = EventType.VIEW,
    lat: float = 0.0,
    lon: float = 0.0,
    minutes_ago: float = 0.0,
) -> InteractionEvent:
    return InteractionEvent(
        article_id=article_id,
        event_type=event_type,
        latitude=lat,
        longitude=lon,
        created_at=NOW - timedelta(minutes=minutes_ago),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def articles():
    return [
        make_article("a1", lat=28.6, lon=77.2, hours_ago=5),
        make_article("a2", lat=19.0, lon=72.8, hours_ago=1),
        make_article("a3", lat=12.9, lon=77.6, hours_ago=3),
        make_article("a4", lat=28.7, lon=77.1, hours_ago=2),
    ]


@pytest.fixture
def article_store(articles):
    return InMemoryArticleStore(articles)


@pytest.fixture
def event_store():
    return InMemoryEventStore()
