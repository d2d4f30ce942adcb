"""
Storage module for persisting profile and financial documents.

This module provides a key/value storage interface, a local filesystem
backend, and schema-validated JSON documents built on top of it.
"""

from .base import (
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageService,
)
from .documents import JsonDocumentStore, export_documents
from .factory import create_storage_service, get_storage_service
from .local import LocalStorageService

__all__ = [
    "StorageService",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "LocalStorageService",
    "JsonDocumentStore",
    "export_documents",
    "create_storage_service",
    "get_storage_service",
]
