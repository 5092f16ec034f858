"""Exception types shared across the package."""


class NewstrendError(Exception):
    """Base class for all newstrend errors."""


class InvalidConfiguration(NewstrendError, ValueError):
    """Raised when a configuration value can never produce a working service."""


class StoreUnavailable(NewstrendError):
    """Raised when the article or event store cannot be read or written."""
