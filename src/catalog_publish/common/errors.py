"""Base error definitions for catalog_publish packages."""

from typing import Any, Dict


class CatalogPublishError(Exception):
    """Base exception for all catalog_publish errors.

    Keyword arguments are kept as structured context so callers can log
    them alongside the message.
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(CatalogPublishError):
    """Configuration file or override could not be loaded or validated."""
    pass
