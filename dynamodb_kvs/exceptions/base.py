"""
Root of the key-value store exception hierarchy.

Every error the store raises on purpose is a KVSError. Storage failures keep
the botocore exception they were mapped from in original_error.
"""

from typing import Any, Dict, Optional


class KVSError(Exception):
    """Base exception for all key-value store errors.

    Attributes:
        message: Human-readable error message
        original_error: The original exception that caused this error (if any)
        context: Additional context information about the error
        retryable: Whether repeating the same call may succeed
    """

    retryable: bool = False

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Message, then context in key order, then the type of the underlying error."""
        error_str = self.message
        if self.context:
            context_str = ", ".join(f"{k}={self.context[k]}" for k in sorted(self.context))
            error_str += f" (Context: {context_str})"
        if self.original_error is not None:
            error_str += f" [caused by {type(self.original_error).__name__}]"
        return error_str

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )
