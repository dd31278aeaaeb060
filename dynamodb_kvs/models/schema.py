from enum import Enum


class SchemaMode(str, Enum):
    """Table shape a client is bound to.

    SINGLE_KEY: primary_key is the only (hash) key.
    SECONDARY_INDEX: primary_key (hash) + secondary_key (range), plus a
    key-only global index partitioned by secondary_key.
    """

    SINGLE_KEY = "single_key"
    SECONDARY_INDEX = "secondary_index"

    @property
    def has_secondary_index(self) -> bool:
        if self is SchemaMode.SINGLE_KEY:
            return False
        if self is SchemaMode.SECONDARY_INDEX:
            return True
        raise ValueError(f"Unknown schema mode: {self!r}")
