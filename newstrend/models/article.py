"""Article model for stored news articles."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import DBModel


class Article(DBModel):
    """News article with a geographic anchor."""

    id: str = Field(..., description="Primary key")
    title: str = Field(..., description="Article title")
    description: str = Field("", description="Short article description")
    url: str = Field("", description="Article URL")
    publication_date: datetime = Field(..., description="Publication timestamp")
    source_name: str = Field("", description="Publishing source")
    category: List[str] = Field(default_factory=list, description="Article categories")
    relevance_score: float = Field(0.0, description="Static relevance score", ge=0.0, le=1.0)
    latitude: float = Field(..., description="Latitude the article is about", ge=-90.0, le=90.0)
    longitude: float = Field(..., description="Longitude the article is about", ge=-180.0, le=180.0)
    llm_summary: Optional[str] = Field(None, description="Generated summary")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
