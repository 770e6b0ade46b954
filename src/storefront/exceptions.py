"""Domain errors raised by repositories and services.

Every error carries the HTTP status it maps to; the API layer converts
them into responses in one place (see ``storefront.api.error_handlers``).
"""

from typing import Any


class StorefrontError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(StorefrontError):
    """Required fields are missing or malformed."""

    status_code = 400


class NotFoundError(StorefrontError):
    """No row matched the requested id."""

    status_code = 404


class DatabaseConnectionError(StorefrontError):
    """The database could not be reached."""


class TransportError(StorefrontError):
    """A statement failed while executing against the database."""


class CacheUnavailableError(StorefrontError):
    """The cache backend could not be reached."""

    status_code = 503
