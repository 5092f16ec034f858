"""Trending service: cache-fronted trending computation plus simulation lifecycle."""

import logging
import random
import threading
from typing import Callable, List, Optional

from ..config import SimulationConfig, TrendingConfig
from ..models import Article
from .cache import TrendingCache
from .geo import cluster_key
from .scorer import TrendingScorer
from .simulator import EventSimulator

logger = logging.getLogger(__name__)


class TrendingService:
    """Serve trending articles for a location, reusing rankings across nearby queries."""

    def __init__(
        self,
        article_store,
        event_store,
        config: Optional[TrendingConfig] = None,
        simulation: Optional[SimulationConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize trending service.

        Args:
            article_store: Article store collaborator
            event_store: Event store collaborator
            config: Trending configuration
            simulation: Event simulation configuration
            clock: Monotonic seconds source for the cache
            rng: Random source for the simulator
        """
        self.config = config or TrendingConfig()
        self.simulation_config = simulation or SimulationConfig()

        # Fails fast on a non-positive cluster size
        cluster_key(0.0, 0.0, self.config.cluster_degrees)

        self.cache = TrendingCache(ttl_seconds=self.config.cache_ttl_seconds, clock=clock)
        self.scorer = TrendingScorer(article_store, event_store, self.config)
        self.simulator = EventSimulator(
            article_store,
            event_store,
            self.simulation_config,
            rng=rng,
        )

    def get_trending_articles(self, lat: float, lon: float, limit: int = 10) -> List[Article]:
        """
        Get trending articles near a location.

        Rankings are cached per cluster with `limit * limit_multiplier`
        articles so later requests for a different limit reuse them.

        Raises:
            ValueError: If limit is not positive
            StoreUnavailable: If the stores cannot be read; the cache is left untouched
        """
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        key = cluster_key(lat, lon, self.config.cluster_degrees)

        entry = self.cache.get(key)
        if entry is not None:
            logger.debug("Trending cache hit for cluster %s", key)
            return entry.articles[:limit]

        logger.debug("Trending cache miss for cluster %s", key)
        articles = self.scorer.compute_trending(lat, lon, limit * self.config.limit_multiplier)
        self.cache.set(key, articles)
        return articles[:limit]

    def clear_cache(self) -> None:
        """Discard all cached rankings."""
        self.cache.clear()
        logger.info("Trending cache cleared")

    def start_event_simulation(self, cancel: Optional[threading.Event] = None) -> threading.Event:
        """Start background event simulation; returns the event that stops it."""
        return self.simulator.start(cancel)

    def stop_event_simulation(self, timeout: Optional[float] = None) -> None:
        """Stop background event simulation."""
        self.simulator.stop(timeout)

    def start(self, cancel: Optional[threading.Event] = None) -> None:
        """Start cache housekeeping and, if enabled, event simulation."""
        self.cache.start_housekeeping()
        if self.simulation_config.enabled:
            self.start_event_simulation(cancel)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop all background threads."""
        self.stop_event_simulation(timeout)
        self.cache.stop_housekeeping(timeout)

    def __enter__(self) -> "TrendingService":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
