"""
Secondary-Index Repository

Writes values tagged with a secondary key and reads back every value sharing
a secondary key through the 'secondary_index' global index.

The index projects keys only. Index records that arrive without a value are
resolved with a GetItem on the base table, so callers always receive values.
Results keep the index's native order; no sort is applied.
"""

import logging
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Key

from ..constants import ATTR_SECONDARY_KEY, SECONDARY_INDEX_NAME
from ..core.table_gateway import TableGateway
from ..exceptions import SchemaModeError
from ..models.item import ItemRecord, deserialize_value, encode_key
from ..models.schema import SchemaMode

logger = logging.getLogger(__name__)


class SecondaryIndexRepository:
    """Reads and writes values addressed by secondary key."""

    def __init__(self, gateway: TableGateway, mode: SchemaMode):
        self.gateway = gateway
        self.mode = mode

    def _require_index(self, operation: str) -> None:
        if self.mode is SchemaMode.SECONDARY_INDEX:
            return
        if self.mode is SchemaMode.SINGLE_KEY:
            raise SchemaModeError(
                f"{operation}() needs a table created with a secondary index",
                self.mode.value,
                operation
            )
        raise ValueError(f"Unknown schema mode: {self.mode!r}")

    def put_with_secondary(self, primary_key: int, secondary_key: int, value: Any) -> None:
        """
        Store value under primary_key, tagged with secondary_key.

        DynamoDB Operation: PutItem

        Raises:
            ValidationError: a key is not a 64-bit signed integer
            SerializationError: value cannot be serialized
            SchemaModeError: the client is not in SECONDARY_INDEX mode
        """
        self._require_index("put_with_secondary")
        record = ItemRecord.build(primary_key, value, secondary_key=secondary_key)
        self.gateway.put_item(record.to_item())

    def get_by_secondary(self, secondary_key: int) -> List[bytes]:
        """
        Get every serialized value whose record carries secondary_key.

        DynamoDB Operation: Query on 'secondary_index' with
        KeyConditionExpression secondary_key = :value, following
        LastEvaluatedKey until all pages are read.

        Returns:
            Values in index order; empty list if nothing matches
        """
        self._require_index("get_by_secondary")
        condition = Key(ATTR_SECONDARY_KEY).eq(encode_key(secondary_key))

        values: List[bytes] = []
        last_key: Optional[Dict[str, Any]] = None
        while True:
            query_kwargs: Dict[str, Any] = {
                'IndexName': SECONDARY_INDEX_NAME,
                'KeyConditionExpression': condition
            }
            if last_key:
                query_kwargs['ExclusiveStartKey'] = last_key

            response = self.gateway.query(**query_kwargs)
            for item in response.get('Items', []):
                value = self._resolve_value(ItemRecord.from_item(item))
                if value is not None:
                    values.append(value)

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break

        logger.debug(f"Found {len(values)} items for secondary key {secondary_key} in {self.gateway.table_name}")
        return values

    def get_values_by_secondary(self, secondary_key: int) -> List[Any]:
        """Deserialized variant of get_by_secondary()."""
        return [deserialize_value(data) for data in self.get_by_secondary(secondary_key)]

    def _resolve_value(self, record: ItemRecord) -> Optional[bytes]:
        """Value of an index record, reading the base table for key-only projections."""
        if record.value is not None:
            return record.value

        item = self.gateway.get_item(record.key())
        if item is None:
            # Index is eventually consistent; the base item is already gone
            logger.debug(f"Index entry {record.key()} has no base item in {self.gateway.table_name}")
            return None
        return ItemRecord.from_item(item).value
