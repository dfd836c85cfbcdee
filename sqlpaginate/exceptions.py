"""Exceptions raised by the paginator."""


class PaginationError(Exception):
    """Base class for pagination failures."""


class ValidationError(PaginationError, ValueError):
    """Raised when pagination options are malformed."""
