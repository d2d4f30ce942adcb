"""
Schema-validated JSON documents on top of a StorageService.

A JsonDocumentStore binds one storage key to one pydantic model. Reads that
find nothing, unparsable JSON, or data that no longer matches the schema fall
back to the model's default value instead of crashing the caller.
"""

import json
import logging
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .base import StorageNotFoundError, StorageService

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)

JSON_METADATA = {"content_type": "application/json"}


class JsonDocumentStore(Generic[DocumentT]):
    """A single pydantic document persisted as JSON under a fixed key."""

    def __init__(
        self,
        storage: StorageService,
        key: str,
        model: Type[DocumentT],
        default_factory: Callable[[], Optional[DocumentT]],
    ):
        """
        Initialize the document store.

        Args:
            storage: Backend holding the document
            key: Storage key of the document
            model: Pydantic model the document must match
            default_factory: Builds the value returned when nothing valid is stored
        """
        self.storage = storage
        self.key = key
        self.model = model
        self.default_factory = default_factory

    def load(self) -> Optional[DocumentT]:
        """Load the stored document, or the default if it is missing or invalid."""
        try:
            raw = self.storage.read(self.key)
        except StorageNotFoundError:
            return self.default_factory()

        try:
            return self.model.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Stored document {self.key} failed validation: {e}")
            return self.default_factory()

    def save(self, document: DocumentT) -> DocumentT:
        """Validate and store a document, returning it."""
        if not isinstance(document, self.model):
            document = self.model.model_validate(document)
        self.storage.write(
            self.key, document.model_dump_json().encode("utf-8"), JSON_METADATA
        )
        return document

    def clear(self) -> bool:
        """Delete the stored document."""
        return self.storage.delete(self.key)

    def exists(self) -> bool:
        """Check whether a document is stored (valid or not)."""
        return self.storage.exists(self.key)


def export_documents(storage: StorageService, prefix: str = "") -> Dict[str, Any]:
    """
    Export every stored document as a ``{key: parsed JSON}`` backup mapping.

    Documents that are not valid JSON are exported as raw text.
    """
    backup: Dict[str, Any] = {}
    for key in storage.list_keys(prefix):
        raw = storage.read(key).decode("utf-8", errors="replace")
        try:
            backup[key] = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Exporting {key} as text: not valid JSON")
            backup[key] = raw
    return backup
