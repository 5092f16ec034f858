"""Interaction event storage."""

from datetime import datetime
from typing import Any, Dict, List, Sequence

import psycopg

from ..errors import StoreUnavailable
from ..models import InteractionEvent
from .connection import get_connection


class EventStore:
    """Append-only storage for interaction events."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        """Initialize event store."""
        self.db_config = db_config

    @staticmethod
    def _params(event: InteractionEvent) -> tuple:
        return (
            event.article_id,
            event.event_type.value,
            event.latitude,
            event.longitude,
            event.created_at,
        )

    def insert(self, event: InteractionEvent) -> InteractionEvent:
        """
        Insert a single event.

        Returns:
            The event with its database ID populated
        """
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO events (article_id, event_type, latitude, longitude, created_at)
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING id
                        """,
                        self._params(event),
                    )
                    event_id = cur.fetchone()["id"]
                conn.commit()
        except psycopg.Error as e:
            raise StoreUnavailable(f"Event store write failed: {e}") from e

        return event.model_copy(update={"id": event_id})

    def insert_batch(self, events: Sequence[InteractionEvent]) -> int:
        """
        Insert many events in one transaction.

        Returns:
            Number of events written
        """
        if not events:
            return 0

        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.executemany(
                        """
                        INSERT INTO events (article_id, event_type, latitude, longitude, created_at)
                        VALUES (%s, %s, %s, %s, %s)
                        """,
                        [self._params(event) for event in events],
                    )
                conn.commit()
        except psycopg.Error as e:
            raise StoreUnavailable(f"Event store batch write failed: {e}") from e

        return len(events)

    def find_since(self, since: datetime) -> List[InteractionEvent]:
        """Get all events created at or after `since`."""
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        SELECT id, article_id, event_type, latitude, longitude, created_at
                        FROM events
                        WHERE created_at >= %s
                        ORDER BY created_at
                        """,
                        (since,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise StoreUnavailable(f"Event store read failed: {e}") from e

        return [InteractionEvent(**row) for row in rows]
