"""Location-aware trending news articles."""

__version__ = "0.1.0"
