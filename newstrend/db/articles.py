"""Article lookups against the article table."""

from typing import Any, Dict, List, Optional, Sequence

import psycopg

from ..errors import StoreUnavailable
from ..models import Article
from .connection import get_connection

ARTICLE_COLUMNS = """
    id, title, description, url, publication_date, source_name,
    category, relevance_score, latitude, longitude, llm_summary,
    created_at, updated_at
"""


class ArticleStore:
    """Read-only access to stored articles."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        """Initialize article store."""
        self.db_config = db_config

    def _fetch(self, query: str, params: Sequence[Any]) -> List[Article]:
        """Run a query and map every row to an Article."""
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise StoreUnavailable(f"Article store read failed: {e}") from e

        return [Article(**row) for row in rows]

    def find_by_id(self, article_id: str) -> Optional[Article]:
        """Get a single article by ID."""
        articles = self._fetch(
            f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE id = %s",
            (article_id,),
        )
        return articles[0] if articles else None

    def find_all(self, limit: Optional[int] = 100) -> List[Article]:
        """Get up to `limit` articles in no particular order; None means all."""
        return self._fetch(
            f"SELECT {ARTICLE_COLUMNS} FROM articles LIMIT %s",
            (limit,),
        )

    def find_by_ids(self, article_ids: Sequence[str]) -> List[Article]:
        """Get all articles whose ID is in `article_ids`; unknown IDs are skipped."""
        if not article_ids:
            return []
        return self._fetch(
            f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE id = ANY(%s)",
            (list(article_ids),),
        )

    def find_recent(self, limit: int = 10) -> List[Article]:
        """Get the most recently published articles, newest first."""
        return self._fetch(
            f"""
            SELECT {ARTICLE_COLUMNS}
            FROM articles
            ORDER BY publication_date DESC, id
            LIMIT %s
            """,
            (limit,),
        )
