#!/usr/bin/env python3
"""
Basic usage examples for the DynamoDB key-value store.

This example demonstrates:
1. Setting up configuration
2. Bootstrapping a single-key table and reading/writing by primary key
3. Bootstrapping a secondary-index table and querying by secondary key
"""

import logging

from dynamodb_kvs import KVSConfig, SchemaMode
from dynamodb_kvs.exceptions import KVSError, SchemaModeError


def main():
    """Demonstrate basic usage of the key-value store."""
    logging.basicConfig(level=logging.INFO)

    # 1. Configure DynamoDB connection
    print("1. Setting up DynamoDB configuration...")
    config = KVSConfig.from_env()  # Uses environment variables

    # For local development, you might use:
    # config = KVSConfig.for_local_development()

    # 2. Single-key table
    print("2. Bootstrapping single-key table 'kvs_example'...")
    client = config.new_client("kvs_example")
    client.bootstrap()

    client.put(42, {"a": 1})
    print(f"   get(42) -> {client.get(42)!r}")
    print(f"   get_value(42) -> {client.get_value(42)!r}")
    print(f"   get(43) -> {client.get(43)!r} (never written)")

    # 3. Secondary-index table
    print("3. Bootstrapping secondary-index table 'kvs_example_indexed'...")
    indexed = config.new_client("kvs_example_indexed", SchemaMode.SECONDARY_INDEX)
    indexed.bootstrap()

    indexed.put_with_secondary(1, 100, {"order": 1, "customer": 100})
    indexed.put_with_secondary(2, 100, {"order": 2, "customer": 100})
    indexed.put_with_secondary(3, 200, {"order": 3, "customer": 200})
    print(f"   get_values_by_secondary(100) -> {indexed.get_values_by_secondary(100)}")

    try:
        indexed.put(4, {"order": 4})
    except SchemaModeError as e:
        print(f"   put() on an indexed table: {e}")

    # An empty table name yields no client
    assert config.new_client("") is None

    print("Done.")


if __name__ == "__main__":
    try:
        main()
    except KVSError as e:
        print(f"Error: {e}")
        raise
