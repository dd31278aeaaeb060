"""Shared helpers for the key-value store tests."""

from botocore.exceptions import ClientError


def create_client_error(error_code: str, message: str = "Test error", operation: str = "TestOperation") -> ClientError:
    """Helper to create ClientError for testing."""
    return ClientError(
        error_response={
            'Error': {
                'Code': error_code,
                'Message': message
            }
        },
        operation_name=operation
    )


__all__ = ["create_client_error"]
