"""
Custom exceptions for contenttypes operations.

Not-found is never an exception at the service layer: lookups return ``None`` or an
empty list. Persistence faults are SQLAlchemy's own exceptions and propagate as-is.
"""


class ContentTypesError(Exception):
    """Base exception for all contenttypes errors."""

    pass


class ValidationError(ContentTypesError):
    """Raised when validation fails."""

    pass
