"""
Table Lifecycle Manager

Makes sure the backing table exists before a client reads or writes:

    UNKNOWN -> NOT_EXISTS -> CREATING -> ACTIVE
    UNKNOWN -> EXISTS (-> ACTIVE when found still CREATING)

bootstrap() is idempotent. When two callers bootstrap the same table name
concurrently, the loser's CreateTable fails with ResourceInUseException; the
manager treats that as "someone else created it", re-checks existence and
waits for the table like the winner does.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from ..constants import (
    ATTR_PRIMARY_KEY,
    ATTR_SECONDARY_KEY,
    READ_CAPACITY_UNITS,
    SECONDARY_INDEX_NAME,
    WRITE_CAPACITY_UNITS,
)
from ..exceptions import ConflictError, KVSError, NotFoundError, TableCreationError
from ..models.schema import SchemaMode
from .table_gateway import TableGateway

logger = logging.getLogger(__name__)


class TableState(str, Enum):
    """Lifecycle state as last observed by the manager."""

    UNKNOWN = "UNKNOWN"
    NOT_EXISTS = "NOT_EXISTS"
    EXISTS = "EXISTS"
    CREATING = "CREATING"
    ACTIVE = "ACTIVE"


def _provisioned_throughput() -> Dict[str, int]:
    return {
        'ReadCapacityUnits': READ_CAPACITY_UNITS,
        'WriteCapacityUnits': WRITE_CAPACITY_UNITS
    }


def build_create_table_request(table_name: str, mode: SchemaMode) -> Dict[str, Any]:
    """Build the CreateTable request for a schema mode.

    SINGLE_KEY:
        primary_key (S, HASH)
    SECONDARY_INDEX:
        primary_key (S, HASH) + secondary_key (S, RANGE), and a global index
        'secondary_index' on secondary_key (HASH) projecting keys only

    Args:
        table_name: Table to create
        mode: Schema mode of the client

    Returns:
        Keyword arguments for DynamoDB.Client.create_table
    """
    if mode is SchemaMode.SINGLE_KEY:
        return {
            'TableName': table_name,
            'AttributeDefinitions': [
                {'AttributeName': ATTR_PRIMARY_KEY, 'AttributeType': 'S'}
            ],
            'KeySchema': [
                {'AttributeName': ATTR_PRIMARY_KEY, 'KeyType': 'HASH'}
            ],
            'ProvisionedThroughput': _provisioned_throughput()
        }

    if mode is SchemaMode.SECONDARY_INDEX:
        return {
            'TableName': table_name,
            'AttributeDefinitions': [
                {'AttributeName': ATTR_PRIMARY_KEY, 'AttributeType': 'S'},
                {'AttributeName': ATTR_SECONDARY_KEY, 'AttributeType': 'S'}
            ],
            'KeySchema': [
                {'AttributeName': ATTR_PRIMARY_KEY, 'KeyType': 'HASH'},
                {'AttributeName': ATTR_SECONDARY_KEY, 'KeyType': 'RANGE'}
            ],
            'GlobalSecondaryIndexes': [
                {
                    'IndexName': SECONDARY_INDEX_NAME,
                    'KeySchema': [
                        {'AttributeName': ATTR_SECONDARY_KEY, 'KeyType': 'HASH'}
                    ],
                    'Projection': {'ProjectionType': 'KEYS_ONLY'},
                    'ProvisionedThroughput': _provisioned_throughput()
                }
            ],
            'ProvisionedThroughput': _provisioned_throughput()
        }

    raise ValueError(f"Unknown schema mode: {mode!r}")


class TableLifecycleManager:
    """
    Existence check, creation and readiness wait for one table.

    The readiness ceiling comes from KVSConfig.table_ready_timeout_seconds
    (5 minutes by default).
    """

    def __init__(self, gateway: TableGateway, mode: SchemaMode):
        self.gateway = gateway
        self.mode = mode
        self.state = TableState.UNKNOWN

    @property
    def table_name(self) -> str:
        return self.gateway.table_name

    def table_exists(self) -> bool:
        """
        Check whether the table exists.

        Returns:
            True if DescribeTable succeeds, False if the table is not found

        Raises:
            KVSError: Any failure other than "not found"
        """
        return self._describe_if_exists() is not None

    def _describe_if_exists(self) -> Optional[Dict[str, Any]]:
        try:
            description = self.gateway.describe_table()
        except NotFoundError:
            logger.info(f"Table {self.table_name} does not exist")
            self.state = TableState.NOT_EXISTS
            return None
        except KVSError as e:
            logger.error(f"Couldn't determine existence of table {self.table_name}: {e}")
            raise
        self.state = TableState.EXISTS
        return description

    def describe(self) -> Dict[str, Any]:
        """Return the current table description (status, key schema, indexes)."""
        return self.gateway.describe_table()

    def bootstrap(self) -> None:
        """
        Create the table if it does not exist and wait until it is ACTIVE.

        No-op when the table already exists and is ACTIVE. A table that exists
        in another status (e.g. CREATING, started by another caller) is waited
        on like a table this manager created.

        Raises:
            TableCreationError: CreateTable failed; the table is left absent
            TableNotReadyError: The table did not become ACTIVE in time
            KVSError: The existence check failed
        """
        description = self._describe_if_exists()
        if description is not None:
            status = description.get('TableStatus')
            if status == 'ACTIVE':
                logger.info(f"Table {self.table_name} already exists")
                return
            logger.info(f"Table {self.table_name} exists with status {status}, waiting until ACTIVE")
            self._wait_until_active()
            return

        logger.info(f"Creating table {self.table_name} ({self.mode.value})")
        self.state = TableState.CREATING
        try:
            self.gateway.create_table(build_create_table_request(self.table_name, self.mode))
        except ConflictError as e:
            # Lost a race with another creator; fall through to the wait
            logger.info(f"Table {self.table_name} is being created by another caller")
            if not self.table_exists():
                raise TableCreationError(self.table_name, original_error=e) from e
            self.state = TableState.CREATING
        except KVSError as e:
            logger.error(f"Couldn't create table {self.table_name}: {e}")
            self.state = TableState.NOT_EXISTS
            raise TableCreationError(self.table_name, original_error=e) from e

        self._wait_until_active()
        logger.info(f"Created table {self.table_name}")

    def _wait_until_active(self) -> None:
        self.gateway.wait_until_active(
            timeout_seconds=self.gateway.config.table_ready_timeout_seconds,
            poll_seconds=self.gateway.config.table_ready_poll_seconds
        )
        self.state = TableState.ACTIVE
