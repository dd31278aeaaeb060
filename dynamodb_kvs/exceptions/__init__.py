# Base exception class
from .base import KVSError

from .domain_exceptions import (
    ConfigurationError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RetryableError,
    SchemaModeError,
    SerializationError,
    TableCreationError,
    TableNotReadyError,
    ValidationError,
)

__all__ = [
    # Base exception
    "KVSError",

    # Domain exceptions (alphabetically ordered)
    "ConfigurationError",
    "ConflictError",
    "ConnectionError",
    "NotFoundError",
    "RetryableError",
    "SchemaModeError",
    "SerializationError",
    "TableCreationError",
    "TableNotReadyError",
    "ValidationError",
]
