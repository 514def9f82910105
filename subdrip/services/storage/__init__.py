"""
Storage Services Package

Provides the abstract key-value interface, its implementations, and the
subscription codec used to fill the single storage slot.
"""

from subdrip.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
)
from subdrip.services.storage.memory import InMemoryKeyValueStorage
from subdrip.services.storage.json_file import JsonFileKeyValueStorage
from subdrip.services.storage.codec import (
    decode_subscriptions,
    encode_subscriptions,
)

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    # Codec
    "decode_subscriptions",
    "encode_subscriptions",
]
