"""Database access for newstrend."""

from .articles import ArticleStore
from .connection import close_connection_pool, get_connection, get_connection_pool
from .events import EventStore
from .init import init_database, validate_connection

__all__ = [
    "ArticleStore",
    "EventStore",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
