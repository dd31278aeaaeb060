"""
Tests for the exception hierarchy (exceptions/)
"""

import pytest

from dynamodb_kvs.exceptions import (
    ConfigurationError,
    ConflictError,
    ConnectionError,
    KVSError,
    NotFoundError,
    RetryableError,
    SchemaModeError,
    SerializationError,
    TableCreationError,
    TableNotReadyError,
    ValidationError,
)
from tests.helpers import create_client_error


class TestKVSError:
    """Test the base exception."""

    def test_plain_message(self):
        assert str(KVSError("boom")) == "boom"

    def test_context_in_key_order(self):
        error = KVSError("boom", context={'b': 2, 'a': 1})

        assert str(error) == "boom (Context: a=1, b=2)"

    def test_cause_type_in_message(self):
        cause = create_client_error('ThrottlingException')

        error = KVSError("boom", original_error=cause)

        assert str(error) == "boom [caused by ClientError]"
        assert error.original_error is cause

    def test_repr(self):
        error = KVSError("boom", context={'a': 1})

        assert repr(error) == "KVSError(message='boom', original_error=None, context={'a': 1})"


class TestRetryableFlag:
    """Only temporary failures are marked retryable."""

    def test_retryable_error(self):
        assert RetryableError("Throttling").retryable is True

    @pytest.mark.parametrize("error", [
        ConfigurationError("bad"),
        ValidationError("bad"),
        SerializationError("bad"),
        SchemaModeError("bad", "single_key", "get_by_secondary"),
        TableCreationError("t1"),
        TableNotReadyError("t1", 300.0),
        NotFoundError("missing", "table", "t1"),
        ConflictError("in use", "t1"),
        ConnectionError("denied"),
    ])
    def test_other_errors_are_not_retryable(self, error):
        assert isinstance(error, KVSError)
        assert error.retryable is False
