"""Location-aware trending computation and caching."""

from .cache import ReadWriteLock, TrendingCache
from .geo import cluster_key, haversine_distance_km
from .models import CacheEntry, TrendingScore
from .scorer import (
    EventScorer,
    GeoScorer,
    InteractionScorer,
    RecencyScorer,
    TrendingScorer,
)
from .service import TrendingService
from .simulator import EventSimulator

__all__ = [
    "CacheEntry",
    "EventScorer",
    "EventSimulator",
    "GeoScorer",
    "InteractionScorer",
    "ReadWriteLock",
    "RecencyScorer",
    "TrendingCache",
    "TrendingScore",
    "TrendingScorer",
    "TrendingService",
    "cluster_key",
    "haversine_distance_km",
]
