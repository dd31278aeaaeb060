"""
Key-Value Store Exceptions

Every error raised by the package extends KVSError. Grouped by the layer
that raises them:

1. Configuration Errors
2. Key, Value and Mode Errors
3. Table Lifecycle Errors
4. Storage Call Errors (mapped from botocore ClientError)
"""

from typing import Any, Dict, Optional

from .base import KVSError


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(KVSError):
    """Raised when the connection configuration is unusable.

    There is no recovery path for this error: the client cannot operate
    without valid endpoint, credential and region settings.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


# =============================================================================
# Key, Value and Mode Errors
# =============================================================================

class ValidationError(KVSError):
    """Raised when a request cannot be built from the caller's input.

    Used for:
    - Keys outside the 64-bit signed integer range
    - Key conditions that cannot be built
    - ValidationException responses from DynamoDB
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class SerializationError(ValidationError):
    """Raised when a value cannot be encoded to, or decoded from, JSON bytes."""


class SchemaModeError(KVSError):
    """Raised when an operation is not available in the client's schema mode."""

    def __init__(self, message: str, mode: Optional[str] = None, operation: Optional[str] = None):
        self.mode = mode
        self.operation = operation
        context = {}
        if mode:
            context['mode'] = mode
        if operation:
            context['operation'] = operation
        super().__init__(message, None, context)


# =============================================================================
# Table Lifecycle Errors
# =============================================================================

class TableCreationError(KVSError):
    """Raised when CreateTable fails. The table is left absent."""

    def __init__(self, table_name: str, original_error: Optional[Exception] = None):
        self.table_name = table_name
        message = f"Couldn't create table '{table_name}'"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message, original_error, {'table_name': table_name})


class TableNotReadyError(KVSError):
    """Raised when a table does not become ACTIVE within the readiness ceiling.

    The create request is not rolled back; the table may still become
    active later and a repeated bootstrap will confirm it.
    """

    def __init__(self, table_name: str, timeout_seconds: float, original_error: Optional[Exception] = None):
        self.table_name = table_name
        self.timeout_seconds = timeout_seconds
        message = f"Table '{table_name}' did not become active within {timeout_seconds:g}s"
        context = {
            'table_name': table_name,
            'timeout_seconds': timeout_seconds
        }
        super().__init__(message, original_error, context)


# =============================================================================
# Storage Call Errors
# =============================================================================

class NotFoundError(KVSError):
    """Raised when a DynamoDB resource (table, index) is not found."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_name: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize not found error.

        Args:
            message: Human-readable error message
            resource_type: Type of resource not found (e.g., 'table', 'index')
            resource_name: Name of the resource not found
            original_error: The original exception that caused this error
        """
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = {}
        if resource_type:
            context['resource_type'] = resource_type
        if resource_name:
            context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


class ConflictError(KVSError):
    """Raised when DynamoDB rejects a request because a resource is in use.

    ResourceInUseException on CreateTable is the common case; the lifecycle
    manager treats it as "another caller created the table".
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class ConnectionError(KVSError):
    """Raised when a DynamoDB call fails for network or authorization reasons.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Invalid endpoint configurations
    - Unrecognized DynamoDB error codes
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(KVSError):
    """Raised when a call fails for a temporary reason.

    The client never retries on its own; the caller owns retry policy.
    """

    retryable = True

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)
