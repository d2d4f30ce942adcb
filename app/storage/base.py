"""
Base storage service interface and exceptions.

Profile and financial documents are kept as small JSON blobs under string
keys. This module defines the backend contract every store implements.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class StorageError(Exception):
    """Base exception for storage-related errors."""


class StorageNotFoundError(StorageError):
    """Raised when a requested key is not present in storage."""


class StoragePermissionError(StorageError):
    """Raised when the backend refuses a read or write."""


class StorageService(ABC):
    """
    Abstract key/value store for serialized documents.

    Keys are slash-separated paths such as ``profiles/student_profile_v1.json``.
    """

    @abstractmethod
    def write(
        self, key: str, content: bytes, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Store content under a key, replacing any previous value.

        Args:
            key: Storage key
            content: Serialized document
            metadata: Optional metadata to keep alongside the document

        Returns:
            str: The key the content was stored under

        Raises:
            StorageError: If the content cannot be stored
        """

    @abstractmethod
    def read(self, key: str) -> bytes:
        """
        Read the content stored under a key.

        Raises:
            StorageNotFoundError: If the key is not present
            StorageError: If the content cannot be read
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete a key.

        Returns:
            bool: True if the key was deleted, False if it didn't exist
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a key is present."""

    @abstractmethod
    def get_metadata(self, key: str) -> Dict[str, Any]:
        """
        Get metadata for a key (size, timestamps, content type).

        Raises:
            StorageNotFoundError: If the key is not present
        """

    @abstractmethod
    def list_keys(self, prefix: str = "") -> List[str]:
        """List stored keys, optionally filtered by prefix, sorted."""
