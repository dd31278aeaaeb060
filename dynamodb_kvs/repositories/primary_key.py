"""
Primary-Key Repository

Put and get values by their 64-bit integer primary key.

An absent key is not an error: get() returns b"" for it. Values written by
this package are never empty (canonical JSON is at least one byte), so b""
only means "no such key" for tables written through this package.
"""

import logging
from typing import Any

from boto3.dynamodb.conditions import Key

from ..constants import ATTR_PRIMARY_KEY
from ..core.table_gateway import TableGateway
from ..exceptions import SchemaModeError
from ..models.item import ItemRecord, deserialize_value, encode_key
from ..models.schema import SchemaMode

logger = logging.getLogger(__name__)


class PrimaryKeyRepository:
    """Reads and writes values keyed by primary key alone."""

    def __init__(self, gateway: TableGateway, mode: SchemaMode):
        self.gateway = gateway
        self.mode = mode

    def put(self, primary_key: int, value: Any) -> None:
        """
        Store value under primary_key, replacing any existing value.

        DynamoDB Operation: PutItem

        Args:
            primary_key: 64-bit signed integer key
            value: JSON-serializable value (or pydantic model)

        Raises:
            ValidationError: primary_key is not a 64-bit signed integer
            SerializationError: value cannot be serialized
            SchemaModeError: the table requires a secondary key
        """
        if self.mode is SchemaMode.SINGLE_KEY:
            record = ItemRecord.build(primary_key, value)
            self.gateway.put_item(record.to_item())
        elif self.mode is SchemaMode.SECONDARY_INDEX:
            raise SchemaModeError(
                "Tables with a secondary index need a secondary key; use put_with_secondary()",
                self.mode.value,
                "put"
            )
        else:
            raise ValueError(f"Unknown schema mode: {self.mode!r}")

    def get(self, primary_key: int) -> bytes:
        """
        Get the serialized value stored under primary_key.

        DynamoDB Operation:
            SINGLE_KEY: GetItem
            SECONDARY_INDEX: Query on the partition key, first record

        Returns:
            Stored bytes, or b"" when no record exists
        """
        key_text = encode_key(primary_key)

        if self.mode is SchemaMode.SINGLE_KEY:
            item = self.gateway.get_item({ATTR_PRIMARY_KEY: key_text})
        elif self.mode is SchemaMode.SECONDARY_INDEX:
            response = self.gateway.query(
                KeyConditionExpression=Key(ATTR_PRIMARY_KEY).eq(key_text),
                Limit=1
            )
            items = response.get('Items', [])
            item = items[0] if items else None
        else:
            raise ValueError(f"Unknown schema mode: {self.mode!r}")

        if item is None:
            logger.debug(f"No item for key {primary_key} in {self.gateway.table_name}")
            return b""

        return ItemRecord.from_item(item).value or b""

    def get_value(self, primary_key: int, default: Any = None) -> Any:
        """Get and deserialize the value under primary_key, or default when absent."""
        data = self.get(primary_key)
        if not data:
            return default
        return deserialize_value(data)
