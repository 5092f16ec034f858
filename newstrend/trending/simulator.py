"""Background simulation of user interaction events."""

import logging
import random
import threading
from typing import List, Optional, Sequence

import pendulum

from ..config import SimulationConfig
from ..errors import StoreUnavailable
from ..models import Article, EventType, InteractionEvent

logger = logging.getLogger(__name__)


class EventSimulator:
    """Generate plausible views and clicks near article locations."""

    def __init__(
        self,
        article_store,
        event_store,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize event simulator.

        Args:
            article_store: Store providing find_all
            event_store: Store providing insert
            config: Simulation configuration
            rng: Random source, seeded in tests
        """
        self.article_store = article_store
        self.event_store = event_store
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random()

        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._cancel: Optional[threading.Event] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def generate_event(
        self,
        article: Article,
        click_probability: Optional[float] = None,
        max_offset_degrees: Optional[float] = None,
    ) -> InteractionEvent:
        """Build one event for `article` located near the article's coordinate."""
        if click_probability is None:
            click_probability = self.config.click_probability
        if max_offset_degrees is None:
            max_offset_degrees = self.config.max_offset_degrees

        event_type = EventType.CLICK if self.rng.random() < click_probability else EventType.VIEW
        lat = article.latitude + self.rng.uniform(-max_offset_degrees, max_offset_degrees)
        lon = article.longitude + self.rng.uniform(-max_offset_degrees, max_offset_degrees)

        return InteractionEvent(
            article_id=article.id,
            event_type=event_type,
            latitude=max(-90.0, min(90.0, lat)),
            longitude=lon,
            created_at=pendulum.now("UTC"),
        )

    def _write_events(self, events: Sequence[InteractionEvent]) -> int:
        written = 0
        for event in events:
            try:
                self.event_store.insert(event)
                written += 1
            except StoreUnavailable as e:
                logger.warning("Dropping simulated %s event for %s: %s", event.event_type.value, event.article_id, e)
        return written

    def tick(self) -> int:
        """
        Run one simulation step.

        Returns:
            Number of events written
        """
        try:
            sample = self.article_store.find_all(self.config.sample_size)
        except StoreUnavailable as e:
            logger.warning("Skipping simulation tick, could not sample articles: %s", e)
            return 0

        if not sample:
            logger.debug("Skipping simulation tick, no articles available")
            return 0

        count = self.rng.randint(self.config.min_events, self.config.max_events)
        events = [self.generate_event(self.rng.choice(sample)) for _ in range(count)]

        written = self._write_events(events)
        logger.debug("Simulation tick wrote %d/%d events", written, len(events))
        return written

    def simulate_burst(
        self,
        count: int,
        articles: Optional[List[Article]] = None,
        click_probability: Optional[float] = None,
        max_offset_degrees: Optional[float] = None,
    ) -> int:
        """
        Generate `count` events in one go.

        Args:
            count: Number of events to generate
            articles: Articles to draw from, defaults to every stored article
            click_probability: Override for the configured click probability
            max_offset_degrees: Override for the configured location offset

        Returns:
            Number of events written
        """
        if articles is None:
            articles = self.article_store.find_all(limit=None)
        if not articles:
            raise StoreUnavailable("No articles found to simulate events for")

        events = [
            self.generate_event(
                self.rng.choice(articles),
                click_probability=click_probability,
                max_offset_degrees=max_offset_degrees,
            )
            for _ in range(count)
        ]
        return self._write_events(events)

    def _run(self, cancel: threading.Event) -> None:
        logger.info("Event simulation started (every %.1fs)", self.config.interval_seconds)
        while not cancel.wait(self.config.interval_seconds):
            try:
                self.tick()
            except Exception:
                logger.exception("Simulation tick failed")
        logger.info("Event simulation stopped")

    def start(self, cancel: Optional[threading.Event] = None) -> threading.Event:
        """
        Start ticking in a background thread until `cancel` is set.

        Starting an already running simulator does nothing.

        Returns:
            The cancel event controlling the running thread
        """
        with self._lock:
            if self.running:
                return self._cancel

            self._cancel = cancel or threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._cancel,),
                name="event-simulator",
                daemon=True,
            )
            self._thread.start()
            return self._cancel

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the background thread to stop and wait for it."""
        with self._lock:
            thread, cancel = self._thread, self._cancel
            self._thread = None

        if cancel is not None:
            cancel.set()
        if thread is not None:
            thread.join(timeout)
