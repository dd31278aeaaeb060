"""
Persisted names and fixed settings shared by every client of a table.

Attribute and index names are part of the stored format: clients in any
language sharing a table must agree on them.
"""

# Item attribute names
ATTR_PRIMARY_KEY = "primary_key"
ATTR_SECONDARY_KEY = "secondary_key"
ATTR_VALUE = "value"

# Global secondary index over secondary_key
SECONDARY_INDEX_NAME = "secondary_index"

# Provisioned throughput for the table and, where present, the index
READ_CAPACITY_UNITS = 10
WRITE_CAPACITY_UNITS = 10

# Table readiness wait
DEFAULT_TABLE_READY_TIMEOUT_SECONDS = 300.0  # 5 minutes
DEFAULT_TABLE_READY_POLL_SECONDS = 20.0

# 64-bit signed integer key range
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
