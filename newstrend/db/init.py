"""Database initialization and schema management."""

import logging
from typing import Any, Dict

from psycopg.errors import DatabaseError

from .connection import get_connection

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
-- Articles table (populated by the import pipeline)
CREATE TABLE IF NOT EXISTS articles (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    url TEXT NOT NULL DEFAULT '',
    publication_date TIMESTAMPTZ NOT NULL,
    source_name TEXT NOT NULL DEFAULT '',
    category JSONB NOT NULL DEFAULT '[]'::jsonb,
    relevance_score REAL NOT NULL DEFAULT 0 CHECK (relevance_score >= 0 AND relevance_score <= 1),
    latitude DOUBLE PRECISION NOT NULL,
    longitude DOUBLE PRECISION NOT NULL,
    llm_summary TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Interaction events table
CREATE TABLE IF NOT EXISTS events (
    id BIGSERIAL PRIMARY KEY,
    article_id TEXT NOT NULL,
    event_type TEXT NOT NULL CHECK (event_type IN ('view', 'click')),
    latitude DOUBLE PRECISION NOT NULL,
    longitude DOUBLE PRECISION NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Create indexes
CREATE INDEX IF NOT EXISTS idx_articles_publication_date ON articles(publication_date);
CREATE INDEX IF NOT EXISTS idx_articles_source_name ON articles(source_name);
CREATE INDEX IF NOT EXISTS idx_articles_relevance_score ON articles(relevance_score);
CREATE INDEX IF NOT EXISTS idx_events_created_at ON events(created_at);
CREATE INDEX IF NOT EXISTS idx_events_article_id ON events(article_id);

-- Update trigger function
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = CURRENT_TIMESTAMP;
    RETURN NEW;
END;
$$ language 'plpgsql';

DROP TRIGGER IF EXISTS update_articles_updated_at ON articles;
CREATE TRIGGER update_articles_updated_at BEFORE UPDATE ON articles
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
"""


def validate_connection(config: Dict[str, Any]) -> bool:
    """Validate database connection."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False


def init_database(config: Dict[str, Any]) -> None:
    """Initialize database schema."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                conn.commit()
                logger.info("Database schema initialized successfully")
    except DatabaseError as e:
        logger.error("Failed to initialize database schema: %s", e)
        raise
