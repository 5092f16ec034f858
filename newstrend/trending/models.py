"""Trending models."""

from typing import List

from pydantic import BaseModel, Field

from ..models import Article


class TrendingScore(BaseModel):
    """Accumulated trending signal for one article."""

    article_id: str = Field(..., description="Article ID")
    score: float = Field(0.0, description="Sum of per-event scores", ge=0.0)
    event_count: int = Field(0, description="Number of events contributing", ge=0)


class CacheEntry(BaseModel):
    """Ranked articles computed for one cluster."""

    articles: List[Article] = Field(default_factory=list, description="Articles, best first")
    computed_at: float = Field(..., description="Cache clock reading when computed")

    class Config:
        """Pydantic config."""

        frozen = True
