"""
Test configuration and fixtures for the DynamoDB key-value store.

Provides configuration objects, moto-backed DynamoDB, bootstrapped clients for
both schema modes, and LocalStack fixtures for the integration suite.
"""

import uuid
from typing import Generator

import boto3
import pytest
import requests
from botocore.exceptions import ClientError
from moto import mock_aws

from dynamodb_kvs import KVSConfig, SchemaMode

LOCALSTACK_ENDPOINT = "http://localhost:4566"


@pytest.fixture
def mock_config():
    """Configuration for mocked testing (default AWS endpoint for moto)."""
    return KVSConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,
        table_ready_poll_seconds=1.0
    )


@pytest.fixture
def mock_dynamodb_client():
    """In-memory DynamoDB for the duration of one test."""
    with mock_aws():
        yield boto3.client(
            'dynamodb',
            region_name='us-east-1',
            aws_access_key_id='test_key',
            aws_secret_access_key='test_secret'
        )


@pytest.fixture
def single_key_client(mock_config, mock_dynamodb_client):
    """Bootstrapped single-key client on table 't1'."""
    client = mock_config.new_client("t1")
    client.bootstrap()
    return client


@pytest.fixture
def secondary_index_client(mock_config, mock_dynamodb_client):
    """Bootstrapped secondary-index client on table 't2'."""
    client = mock_config.new_client("t2", SchemaMode.SECONDARY_INDEX)
    client.bootstrap()
    return client


# ===== LocalStack Integration Test Fixtures =====

def _localstack_dynamodb_available() -> bool:
    try:
        response = requests.get(f"{LOCALSTACK_ENDPOINT}/_localstack/health", timeout=2)
        if response.status_code != 200:
            return False
        return response.json().get("services", {}).get("dynamodb") in ("available", "running")
    except (requests.RequestException, ValueError):
        return False


@pytest.fixture(scope="session")
def localstack_available() -> Generator[None, None, None]:
    """Skip integration tests unless LocalStack DynamoDB is reachable."""
    if not _localstack_dynamodb_available():
        pytest.skip(f"LocalStack DynamoDB not available at {LOCALSTACK_ENDPOINT}")
    yield


@pytest.fixture
def localstack_config(localstack_available):
    """Configuration pointing at LocalStack."""
    return KVSConfig(
        aws_access_key_id="test",
        aws_secret_access_key="test",
        region_name="us-east-1",
        endpoint_url=LOCALSTACK_ENDPOINT,
        table_ready_timeout_seconds=60.0,
        table_ready_poll_seconds=1.0
    )


@pytest.fixture
def localstack_table_name() -> Generator[str, None, None]:
    """Unique table name, deleted after the test."""
    table_name = f"kvs-it-{uuid.uuid4().hex[:8]}"
    yield table_name

    client = boto3.client(
        'dynamodb',
        region_name='us-east-1',
        endpoint_url=LOCALSTACK_ENDPOINT,
        aws_access_key_id='test',
        aws_secret_access_key='test'
    )
    try:
        client.delete_table(TableName=table_name)
    except ClientError as e:
        if e.response['Error']['Code'] != 'ResourceNotFoundException':
            raise
