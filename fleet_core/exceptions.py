"""Domain-specific exceptions for the fleet manager core services."""

class ValidationError(ValueError):
    """Raised when a boat field or expense amount fails to parse or validate."""


class RecordNotFoundError(LookupError):
    """Raised when no boat matches the requested name."""


class PersistenceError(IOError):
    """Raised when an import file or snapshot cannot be read or written."""
