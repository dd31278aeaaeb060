"""
Item Record and Codecs

The stored item has three attributes:

- primary_key: decimal text of a 64-bit signed integer (always present)
- secondary_key: decimal text of a 64-bit signed integer (secondary-index mode only)
- value: canonical JSON of the caller's value, stored as binary

Keys are stored as text so that every client sharing a table agrees on the
exact representation. Encoding is plain base-10 with an optional leading
minus sign; no locale formatting, no leading zeros, no "+".
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from boto3.dynamodb.types import Binary
from pydantic import BaseModel, ConfigDict, Field

from ..constants import ATTR_PRIMARY_KEY, ATTR_SECONDARY_KEY, ATTR_VALUE, INT64_MAX, INT64_MIN
from ..exceptions import SerializationError, ValidationError

logger = logging.getLogger(__name__)

_CANONICAL_INT = re.compile(r"-?(0|[1-9][0-9]*)")


# =============================================================================
# Key Codec
# =============================================================================

def encode_key(key: int) -> str:
    """Encode a 64-bit signed integer key as decimal text.

    Args:
        key: Integer key in [-2**63, 2**63 - 1]

    Returns:
        Decimal string, e.g. "42", "-1", "-9223372036854775808"

    Raises:
        ValidationError: If key is not an int (bool excluded) or is out of range
    """
    if isinstance(key, bool) or not isinstance(key, int):
        raise ValidationError(
            f"Key must be an int, got {type(key).__name__}",
            errors={'key': repr(key)}
        )
    if key < INT64_MIN or key > INT64_MAX:
        raise ValidationError(
            f"Key {key} is outside the 64-bit signed integer range",
            errors={'key': key}
        )
    return str(key)


def decode_key(text: str) -> int:
    """Decode decimal key text produced by encode_key.

    Raises:
        ValidationError: If text is not a canonical in-range decimal integer
    """
    if not isinstance(text, str) or not _CANONICAL_INT.fullmatch(text) or text == "-0":
        raise ValidationError(f"Not a canonical decimal key: {text!r}", errors={'key': repr(text)})
    key = int(text)
    if key < INT64_MIN or key > INT64_MAX:
        raise ValidationError(
            f"Key {text} is outside the 64-bit signed integer range",
            errors={'key': text}
        )
    return key


# =============================================================================
# Value Serialization
# =============================================================================

def serialize_value(value: Any) -> bytes:
    """Serialize a caller value to canonical JSON bytes.

    Object keys are sorted and separators are compact, so equal values always
    produce identical bytes: {"a": 1} is stored as b'{"a":1}'. Pydantic models
    are dumped in JSON mode first.

    Raises:
        SerializationError: If the value is not JSON-serializable
    """
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        text = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False
        )
        return text.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Value cannot be serialized: {e}", original_error=e) from e


def deserialize_value(data: bytes) -> Any:
    """Decode bytes written by serialize_value. Empty bytes decode to None.

    Raises:
        SerializationError: If data is not valid UTF-8 JSON
    """
    if not data:
        return None
    try:
        return json.loads(bytes(data).decode("utf-8"))
    except ValueError as e:
        raise SerializationError(f"Stored value is not valid JSON: {e}", original_error=e) from e


# =============================================================================
# Item Record
# =============================================================================

class ItemRecord(BaseModel):
    """Wire-level representation of one stored value."""

    primary_key: str = Field(..., min_length=1, description="Decimal text of the primary key")
    secondary_key: Optional[str] = Field(
        default=None,
        description="Decimal text of the secondary key (secondary-index mode only)"
    )
    value: Optional[bytes] = Field(
        default=None,
        description="Serialized value; None when read from a key-only index projection"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def build(cls, primary_key: int, value: Any, secondary_key: Optional[int] = None) -> "ItemRecord":
        """Encode keys and serialize value into a record ready to store."""
        return cls(
            primary_key=encode_key(primary_key),
            secondary_key=encode_key(secondary_key) if secondary_key is not None else None,
            value=serialize_value(value)
        )

    def to_item(self) -> Dict[str, Any]:
        """Convert to a DynamoDB item for PutItem."""
        if self.value is None:
            raise ValidationError("Cannot store a record without a value", errors={'primary_key': self.primary_key})
        item: Dict[str, Any] = {
            ATTR_PRIMARY_KEY: self.primary_key,
            ATTR_VALUE: self.value
        }
        if self.secondary_key is not None:
            item[ATTR_SECONDARY_KEY] = self.secondary_key
        return item

    def key(self) -> Dict[str, str]:
        """Primary key attributes of this record (both keys when present)."""
        key = {ATTR_PRIMARY_KEY: self.primary_key}
        if self.secondary_key is not None:
            key[ATTR_SECONDARY_KEY] = self.secondary_key
        return key

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ItemRecord":
        """Parse a DynamoDB item returned by GetItem or Query.

        Raises:
            ValidationError: If the item has no primary_key
        """
        try:
            value = item.get(ATTR_VALUE)
            if isinstance(value, Binary):
                value = value.value
            elif value is not None:
                value = bytes(value)
            return cls(
                primary_key=item[ATTR_PRIMARY_KEY],
                secondary_key=item.get(ATTR_SECONDARY_KEY),
                value=value
            )
        except Exception as e:
            logger.error(f"Failed to convert item to record: {e}")
            raise ValidationError(f"Failed to convert item to record: {e}", original_error=e) from e
