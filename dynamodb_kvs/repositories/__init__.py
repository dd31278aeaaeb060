from .primary_key import PrimaryKeyRepository
from .secondary_index import SecondaryIndexRepository

__all__ = [
    "PrimaryKeyRepository",
    "SecondaryIndexRepository",
]
