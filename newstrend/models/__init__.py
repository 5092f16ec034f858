"""Data models for newstrend."""

from .article import Article
from .event import EventType, InteractionEvent

__all__ = ["Article", "EventType", "InteractionEvent"]
