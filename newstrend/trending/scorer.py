"""Trending score computation from recent interaction events."""

import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

import pendulum

from ..config import TrendingConfig
from ..errors import InvalidConfiguration
from ..models import Article, EventType, InteractionEvent
from .geo import haversine_distance_km
from .models import TrendingScore

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return pendulum.instance(value, tz="UTC")
    return value


class EventScorer(ABC):
    """Base class for per-event scoring factors."""

    @abstractmethod
    def score(self, event: InteractionEvent, context: Dict) -> float:
        """
        Score one event.

        Args:
            event: Interaction event
            context: Query context with "lat", "lon" and "now"

        Returns:
            Non-negative factor
        """
        pass


class InteractionScorer(EventScorer):
    """Weight by interaction kind; clicks signal more intent than views."""

    def __init__(self, click_weight: float = 2.0, view_weight: float = 1.0) -> None:
        self.weights = {
            EventType.CLICK: click_weight,
            EventType.VIEW: view_weight,
        }

    def score(self, event: InteractionEvent, context: Dict) -> float:
        return self.weights.get(event.event_type, 0.0)


class RecencyScorer(EventScorer):
    """Exponential decay on event age."""

    def __init__(self, half_life_hours: float = 12.0) -> None:
        """
        Initialize recency scorer.

        Args:
            half_life_hours: Decay constant; weight is exp(-age / half_life_hours)
        """
        if not half_life_hours > 0:
            raise InvalidConfiguration(f"half_life_hours must be positive, got {half_life_hours}")
        self.half_life_hours = half_life_hours

    def score(self, event: InteractionEvent, context: Dict) -> float:
        age_hours = (context["now"] - _as_utc(event.created_at)).total_seconds() / 3600
        # Events stamped slightly in the future count as brand new
        age_hours = max(0.0, age_hours)
        return math.exp(-age_hours / self.half_life_hours)


class GeoScorer(EventScorer):
    """Smooth inverse decay on distance between event and query location."""

    def __init__(self, distance_scale_km: float = 100.0) -> None:
        if not distance_scale_km > 0:
            raise InvalidConfiguration(
                f"distance_scale_km must be positive, got {distance_scale_km}"
            )
        self.distance_scale_km = distance_scale_km

    def score(self, event: InteractionEvent, context: Dict) -> float:
        distance = haversine_distance_km(
            context["lat"], context["lon"], event.latitude, event.longitude
        )
        return 1.0 / (1.0 + distance / self.distance_scale_km)


class TrendingScorer:
    """Rank articles by recency- and distance-weighted interaction volume."""

    def __init__(self, article_store, event_store, config: Optional[TrendingConfig] = None) -> None:
        """
        Initialize trending scorer.

        Args:
            article_store: Store providing find_by_ids and find_recent
            event_store: Store providing find_since
            config: Trending configuration
        """
        self.config = config or TrendingConfig()
        if not self.config.recent_window_hours > 0:
            raise InvalidConfiguration(
                f"recent_window_hours must be positive, got {self.config.recent_window_hours}"
            )

        self.article_store = article_store
        self.event_store = event_store
        self.window = timedelta(hours=self.config.recent_window_hours)

        self.interaction_scorer = InteractionScorer(
            click_weight=self.config.click_weight,
            view_weight=self.config.view_weight,
        )
        self.recency_scorer = RecencyScorer(half_life_hours=self.config.half_life_hours)
        self.geo_scorer = GeoScorer(distance_scale_km=self.config.distance_scale_km)

    def score_event(self, event: InteractionEvent, context: Dict) -> float:
        """Combined score of a single event."""
        return (
            self.interaction_scorer.score(event, context)
            * self.recency_scorer.score(event, context)
            * self.geo_scorer.score(event, context)
        )

    def score_events(
        self,
        events: Iterable[InteractionEvent],
        lat: float,
        lon: float,
        now: Optional[datetime] = None,
    ) -> Dict[str, TrendingScore]:
        """Sum event scores per article."""
        context = {
            "lat": lat,
            "lon": lon,
            "now": _as_utc(now) if now is not None else pendulum.now("UTC"),
        }

        totals: Dict[str, TrendingScore] = {}
        for event in events:
            entry = totals.get(event.article_id)
            if entry is None:
                entry = totals[event.article_id] = TrendingScore(article_id=event.article_id)
            entry.score += self.score_event(event, context)
            entry.event_count += 1

        return totals

    def compute_trending(
        self,
        lat: float,
        lon: float,
        limit: int,
        now: Optional[datetime] = None,
    ) -> List[Article]:
        """
        Compute trending articles for a location.

        Falls back to the most recently published articles when no events
        fall inside the recent window.

        Args:
            lat: Query latitude
            lon: Query longitude
            limit: Maximum number of articles to return
            now: Reference time, defaults to the current time

        Returns:
            Articles ordered by trending score, best first
        """
        now = _as_utc(now) if now is not None else pendulum.now("UTC")
        events = self.event_store.find_since(now - self.window)

        if not events:
            logger.debug("No events in the last %s, falling back to recent articles", self.window)
            return self.article_store.find_recent(limit)

        scores = self.score_events(events, lat, lon, now)
        scored_ids = [article_id for article_id, entry in scores.items() if entry.score > 0]
        articles = self.article_store.find_by_ids(scored_ids)

        ranked = [article for article in articles if article.id in scores]
        ranked.sort(key=lambda a: (-scores[a.id].score, a.id))

        logger.debug(
            "Scored %d events over %d articles for (%.4f, %.4f)",
            len(events),
            len(ranked),
            lat,
            lon,
        )
        return ranked[:limit]
