"""
Tests for KVSClient (client.py)

The client is a thin facade; these tests check that it is wired to one table
and one mode, and that each call reaches the right component.
"""

import pytest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

from dynamodb_kvs import KVSClient, KVSConfig, SchemaMode
from dynamodb_kvs.core import TableGateway, TableLifecycleManager
from dynamodb_kvs.repositories import PrimaryKeyRepository, SecondaryIndexRepository


@pytest.fixture
def client():
    return KVSClient(KVSConfig(), "t1")


class TestKVSClientWiring:
    """Test component construction."""

    def test_components_share_gateway(self, client):
        assert isinstance(client.gateway, TableGateway)
        assert isinstance(client.lifecycle, TableLifecycleManager)
        assert isinstance(client.primary, PrimaryKeyRepository)
        assert isinstance(client.secondary, SecondaryIndexRepository)
        assert client.lifecycle.gateway is client.gateway
        assert client.primary.gateway is client.gateway
        assert client.secondary.gateway is client.gateway

    def test_bound_to_table_and_mode(self, client):
        assert client.table_name == "t1"
        assert client.gateway.table_name == "t1"
        assert client.mode is SchemaMode.SINGLE_KEY
        assert client.primary.mode is SchemaMode.SINGLE_KEY
        assert client.secondary.mode is SchemaMode.SINGLE_KEY

    def test_mode_from_string(self):
        client = KVSClient(KVSConfig(), "t2", "secondary_index")

        assert client.mode is SchemaMode.SECONDARY_INDEX
        assert client.lifecycle.mode is SchemaMode.SECONDARY_INDEX

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError):
            KVSClient(KVSConfig(), "t1", "bogus")

    def test_no_connection_on_construction(self, client):
        assert getattr(client.gateway._local, 'dynamodb', None) is None

    def test_repr(self, client):
        assert repr(client) == "KVSClient(table_name='t1', mode='single_key')"

    def test_config_property(self):
        config = KVSConfig(region_name="eu-west-1")

        assert KVSClient(config, "t1").config is config


class TestKVSClientDelegation:
    """Test that client calls reach the right component."""

    @pytest.fixture
    def wired(self, client):
        client.lifecycle = Mock()
        client.primary = Mock()
        client.secondary = Mock()
        return client

    def test_lifecycle_calls(self, wired):
        wired.lifecycle.table_exists.return_value = True
        wired.lifecycle.describe.return_value = {'TableName': 't1'}

        wired.bootstrap()

        wired.lifecycle.bootstrap.assert_called_once_with()
        assert wired.table_exists() is True
        assert wired.describe_table() == {'TableName': 't1'}

    def test_primary_calls(self, wired):
        wired.primary.get.return_value = b'{"a":1}'
        wired.primary.get_value.return_value = {"a": 1}

        wired.put(42, {"a": 1})

        wired.primary.put.assert_called_once_with(42, {"a": 1})
        assert wired.get(42) == b'{"a":1}'
        assert wired.get_value(42, default=0) == {"a": 1}
        wired.primary.get_value.assert_called_once_with(42, 0)

    def test_secondary_calls(self, wired):
        wired.secondary.get_by_secondary.return_value = [b'{"x":true}']
        wired.secondary.get_values_by_secondary.return_value = [{"x": True}]

        wired.put_with_secondary(7, 9, {"x": True})

        wired.secondary.put_with_secondary.assert_called_once_with(7, 9, {"x": True})
        assert wired.get_by_secondary(9) == [b'{"x":true}']
        assert wired.get_values_by_secondary(9) == [{"x": True}]


class TestKVSClientSharedAcrossThreads:
    """One client handle used by many threads at once."""

    def test_concurrent_round_trips(self, single_key_client):
        def round_trip(key):
            single_key_client.put(key, {"k": key})
            return single_key_client.get_value(key)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(round_trip, range(40)))

        assert results == [{"k": key} for key in range(40)]
        assert single_key_client.get(39) == b'{"k":39}'
