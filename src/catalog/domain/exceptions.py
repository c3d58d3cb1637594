"""Domain-level exceptions.

All rule violations are expressed as subclasses of DomainException so the
adapters (CLI, HTTP) can catch them uniformly and display friendly messages.

Note that a missing product is *not* an exception: the store returns None.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input could not be accepted or coerced."""


class PersistenceError(DomainException):
    """The catalog document could not be written to stable storage."""


class CatalogCorruptedError(PersistenceError):
    """The catalog document exists but could not be read or parsed."""
