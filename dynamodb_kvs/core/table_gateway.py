"""
Thin DynamoDB Table Gateway

This module provides a lightweight wrapper around the boto3 calls the
key-value store needs, and nothing more:

- Control plane: DescribeTable, CreateTable, wait until ACTIVE
- Data plane: PutItem, GetItem, Query

The gateway owns the boto3 session and resource for one table, builds the
botocore client configuration (timeouts, pool size, attempts), and maps every
botocore ClientError to a package exception. Transport failures (unreachable
endpoint, read timeout) surface as ConnectionError. It does not retry.
"""

import logging
import math
import threading
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from ..config import KVSConfig
from ..exceptions import (
    ConfigurationError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RetryableError,
    TableNotReadyError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to package exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Optional resource identifier for context

    Returns:
        Package exception carrying the original error
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))

    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ResourceNotFoundException':
        return NotFoundError(f"Resource not found - {full_message}", 'table', table_name, original_error=error)

    elif error_code == 'IndexNotFoundException':
        return NotFoundError(f"Index not found - {full_message}", 'index', resource_id, original_error=error)

    elif error_code in ['ResourceInUseException', 'TableAlreadyExistsException']:
        return ConflictError(f"Resource in use - {full_message}", resource_id or table_name, original_error=error)

    elif error_code == 'ValidationException':
        return ValidationError(f"Validation failed - {full_message}", original_error=error)

    elif error_code == 'LimitExceededException':
        return ValidationError(f"DynamoDB limit exceeded - {full_message}", original_error=error)

    elif error_code in [
        'ProvisionedThroughputExceededException', 'RequestLimitExceeded',
        'ThrottlingException', 'TooManyRequestsException'
    ]:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif error_code in [
        'InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException',
        'RequestTimeoutException'
    ]:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in [
        'UnrecognizedClientException', 'AccessDeniedException',
        'InvalidSignatureException', 'IncompleteSignatureException',
        'ExpiredTokenException', 'MissingAuthenticationToken'
    ]:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


def map_transport_error(error: BotoCoreError, operation: str, table_name: str) -> Exception:
    """Map a botocore transport failure (no service response) to ConnectionError."""
    return ConnectionError(f"Endpoint request failed - {operation} on {table_name}: {error}", original_error=error)


class TableGateway:
    """
    Thin gateway for one DynamoDB table.

    boto3 resources are not thread-safe, so each thread that calls into the
    gateway gets its own session, resource and Table, created on first use
    and reused by that thread afterwards.
    """

    def __init__(self, config: KVSConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: Connection configuration
            table_name: Name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._local = threading.local()

    @property
    def dynamodb(self):
        """DynamoDB resource for the calling thread, created on first use."""
        dynamodb = getattr(self._local, 'dynamodb', None)
        if dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.endpoint_url

                boto_config = Config(
                    retries={'max_attempts': self.config.max_attempts, 'mode': 'standard'},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConfigurationError(f"Failed to configure DynamoDB connection: {e}", e) from e
            self._local.dynamodb = dynamodb
        return dynamodb

    @property
    def client(self):
        """Low-level DynamoDB client sharing the resource's connection."""
        return self.dynamodb.meta.client

    @property
    def table(self):
        """boto3 Table resource of the calling thread for data-plane calls."""
        table = getattr(self._local, 'table', None)
        if table is None:
            try:
                table = self.dynamodb.Table(self.table_name)
            except ConfigurationError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConfigurationError(f"Failed to access table '{self.table_name}': {e}", e) from e
            self._local.table = table
        return table

    # ------------------------------------------------------------------
    # Control plane
    # ------------------------------------------------------------------

    def describe_table(self) -> Dict[str, Any]:
        """
        Execute DescribeTable.

        Returns:
            The 'Table' description

        Raises:
            NotFoundError: If the table does not exist
        """
        try:
            response = self.client.describe_table(TableName=self.table_name)
            return response['Table']
        except ClientError as e:
            raise map_dynamodb_error(e, "DescribeTable", self.table_name) from e
        except BotoCoreError as e:
            raise map_transport_error(e, "DescribeTable", self.table_name) from e

    def create_table(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute CreateTable with a fully built request.

        Args:
            request: CreateTable parameters (must name this gateway's table)

        Returns:
            The 'TableDescription' from the response

        Raises:
            ConflictError: If the table already exists or is being created
        """
        try:
            response = self.client.create_table(**request)
            logger.info(f"Requested creation of table {self.table_name}")
            return response['TableDescription']
        except ClientError as e:
            raise map_dynamodb_error(e, "CreateTable", self.table_name) from e
        except BotoCoreError as e:
            raise map_transport_error(e, "CreateTable", self.table_name) from e

    def wait_until_active(self, timeout_seconds: float, poll_seconds: float) -> None:
        """
        Block until DescribeTable reports the table ACTIVE.

        Args:
            timeout_seconds: Upper bound on the total wait
            poll_seconds: Delay between polls

        Raises:
            TableNotReadyError: If the table is not ACTIVE within the bound
        """
        delay = max(1, int(math.ceil(poll_seconds)))
        max_attempts = max(1, int(math.ceil(timeout_seconds / delay)))
        waiter = self.client.get_waiter('table_exists')
        try:
            waiter.wait(
                TableName=self.table_name,
                WaiterConfig={'Delay': delay, 'MaxAttempts': max_attempts}
            )
        except WaiterError as e:
            logger.error(f"Wait for table {self.table_name} to become active failed: {e}")
            raise TableNotReadyError(self.table_name, timeout_seconds, original_error=e) from e
        except BotoCoreError as e:
            raise map_transport_error(e, "DescribeTable", self.table_name) from e

    # ------------------------------------------------------------------
    # Data plane
    # ------------------------------------------------------------------

    def put_item(self, item: Dict[str, Any]) -> None:
        """
        Put item into the table, replacing any item with the same key.

        Args:
            item: Item to store
        """
        resource_id = item.get('primary_key')
        try:
            self.table.put_item(Item=item)
            logger.info(f"Put item in {self.table_name}: {resource_id}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, resource_id) from e
        except BotoCoreError as e:
            raise map_transport_error(e, "PutItem", self.table_name) from e

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Get item by its full key.

        Args:
            key: Key attributes of the item

        Returns:
            Item if found, None otherwise
        """
        try:
            response = self.table.get_item(Key=key)
            return response.get('Item')
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, key.get('primary_key')) from e
        except BotoCoreError as e:
            raise map_transport_error(e, "GetItem", self.table_name) from e

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB Query operation.

        Raw pass-through to boto3 with error handling.

        Args:
            **kwargs: All boto3 query parameters

        Returns:
            Raw DynamoDB response

        Example:
            response = gateway.query(
                IndexName='secondary_index',
                KeyConditionExpression=Key('secondary_key').eq('9')
            )
        """
        try:
            return self.table.query(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Query", self.table_name, kwargs.get('IndexName')) from e
        except BotoCoreError as e:
            raise map_transport_error(e, "Query", self.table_name) from e


def create_table_gateway(config: KVSConfig, table_name: str) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Connection configuration
        table_name: Table name

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(config, table_name)
