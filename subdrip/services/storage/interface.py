"""
Abstract Storage Interface

DESIGN DECISION: Persistence is a host-provided key-value slot.
The store writes the whole subscription collection as one blob under one
key, and reads it back on startup. Keeping the interface this small lets
us:
1. Use in-memory storage for testing
2. Use a JSON file on disk for the standalone library
3. Plug in whatever the host application already has

We are not building a database layer. Just get/set/remove of bytes.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[bytes]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored bytes, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, value: bytes) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the value could not be stored
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written to storage."""
    pass
