"""
Core infrastructure components for DynamoDB operations.

- TableGateway: Thin wrapper over the boto3 calls the store needs
- TableLifecycleManager: Existence check, creation and readiness wait
"""

from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error, map_transport_error
from .table_lifecycle import TableLifecycleManager, TableState, build_create_table_request

__all__ = [
    "TableGateway",
    "TableLifecycleManager",
    "TableState",
    "build_create_table_request",
    "create_table_gateway",
    "map_dynamodb_error",
    "map_transport_error",
]
