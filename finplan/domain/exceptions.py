"""Domain-specific exceptions"""

from typing import Any


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidCentsError(DomainException):
    """A monetary value reaching bucket arithmetic is not an integer amount of cents"""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be finite integer cents, got: {value!r} ({type(value).__name__})")


class InvalidSettingsError(DomainException):
    """Forecast settings are malformed (horizon or start month)"""

    pass


class StorageError(DomainException):
    """Key-value store could not serialize or persist a value"""

    pass
