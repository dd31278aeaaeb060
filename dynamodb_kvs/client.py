"""
Key-Value Store Client

A KVSClient is bound to exactly one table name and one SchemaMode for its
whole life. Typical use:

    config = KVSConfig(endpoint_url=..., aws_access_key_id=...,
                       aws_secret_access_key=..., region_name=...)
    client = config.new_client("t1")
    client.bootstrap()
    client.put(42, {"a": 1})
    client.get(42)          # b'{"a":1}'

The client holds no per-call state and may be shared between threads.
"""

from typing import Any, Dict, List

from .config import KVSConfig
from .core import TableLifecycleManager, create_table_gateway
from .models.schema import SchemaMode
from .repositories import PrimaryKeyRepository, SecondaryIndexRepository


class KVSClient:
    """Client handle for one key-value table."""

    def __init__(self, config: KVSConfig, table_name: str, mode: SchemaMode = SchemaMode.SINGLE_KEY):
        """Initialize the client.

        Prefer KVSConfig.new_client(), which returns None for an empty name.

        Args:
            config: Connection configuration
            table_name: DynamoDB table name
            mode: Table shape this client reads and writes
        """
        self._config = config
        self._table_name = table_name
        self._mode = SchemaMode(mode)
        self.gateway = create_table_gateway(config, table_name)
        self.lifecycle = TableLifecycleManager(self.gateway, self._mode)
        self.primary = PrimaryKeyRepository(self.gateway, self._mode)
        self.secondary = SecondaryIndexRepository(self.gateway, self._mode)

    @property
    def config(self) -> KVSConfig:
        return self._config

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def mode(self) -> SchemaMode:
        return self._mode

    def __repr__(self) -> str:
        return f"KVSClient(table_name={self._table_name!r}, mode={self._mode.value!r})"

    # Table lifecycle

    def bootstrap(self) -> None:
        """Create the table for this client's mode if missing and wait until ACTIVE."""
        self.lifecycle.bootstrap()

    def table_exists(self) -> bool:
        return self.lifecycle.table_exists()

    def describe_table(self) -> Dict[str, Any]:
        return self.lifecycle.describe()

    # Primary key access

    def put(self, primary_key: int, value: Any) -> None:
        self.primary.put(primary_key, value)

    def get(self, primary_key: int) -> bytes:
        """Serialized value under primary_key; b"" when the key was never written."""
        return self.primary.get(primary_key)

    def get_value(self, primary_key: int, default: Any = None) -> Any:
        return self.primary.get_value(primary_key, default)

    # Secondary key access

    def put_with_secondary(self, primary_key: int, secondary_key: int, value: Any) -> None:
        self.secondary.put_with_secondary(primary_key, secondary_key, value)

    def get_by_secondary(self, secondary_key: int) -> List[bytes]:
        return self.secondary.get_by_secondary(secondary_key)

    def get_values_by_secondary(self, secondary_key: int) -> List[Any]:
        return self.secondary.get_values_by_secondary(secondary_key)
