"""Error taxonomy for the video catalog.

Every error raised by the catalog layers derives from CatalogError so the
web layer can map each kind to an HTTP status in one place.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog errors."""


class ValidationError(CatalogError):
    """Malformed or missing input. Always the caller's fault."""

    def __init__(self, rule: str, field: Optional[str] = None):
        self.rule = rule
        self.field = field
        super().__init__(f"{field}: {rule}" if field else rule)


class NotFound(CatalogError):
    """Operation targeted an identifier that does not exist."""


class ConflictError(CatalogError):
    """Explicit creation collided with an existing unique row."""


class StorageError(CatalogError):
    """Underlying store failure. Never retried, never shown to callers."""
