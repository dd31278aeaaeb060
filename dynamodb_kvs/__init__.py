"""
DynamoDB Key-Value Store

A small key-value client over DynamoDB using boto3 and Pydantic: provisions
its table on first use, stores JSON values under 64-bit integer keys, and
optionally looks values up by a secondary key through a global index.
"""

from .config import KVSConfig
from .client import KVSClient
from .exceptions import (
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
from .models import (
    ItemRecord,
    SchemaMode,
    decode_key,
    deserialize_value,
    encode_key,
    serialize_value,
)
from .core import (
    TableGateway,
    TableLifecycleManager,
    TableState,
    build_create_table_request,
    create_table_gateway,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration and client
    "KVSConfig",
    "KVSClient",
    "SchemaMode",

    # Exceptions
    "ConfigurationError",
    "ConflictError",
    "ConnectionError",
    "KVSError",
    "NotFoundError",
    "RetryableError",
    "SchemaModeError",
    "SerializationError",
    "TableCreationError",
    "TableNotReadyError",
    "ValidationError",

    # Item record and codecs
    "ItemRecord",
    "decode_key",
    "deserialize_value",
    "encode_key",
    "serialize_value",

    # Core infrastructure
    "TableGateway",
    "TableLifecycleManager",
    "TableState",
    "build_create_table_request",
    "create_table_gateway",
]
