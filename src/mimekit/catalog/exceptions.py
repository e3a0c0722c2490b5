"""Catalog loading errors."""


class CatalogError(Exception):
    """Raised when a type catalog cannot be read or contains invalid definitions."""
