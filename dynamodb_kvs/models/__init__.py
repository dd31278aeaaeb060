from .item import ItemRecord, decode_key, deserialize_value, encode_key, serialize_value
from .schema import SchemaMode

__all__ = [
    "ItemRecord",
    "SchemaMode",
    "decode_key",
    "deserialize_value",
    "encode_key",
    "serialize_value",
]
