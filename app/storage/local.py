"""
Local filesystem storage service implementation.

Each key maps to a file under a base directory, with an optional ``.meta``
JSON sidecar. Suitable for a single-user deployment and for tests.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import (
    StorageError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageService,
)


# In-progress writes; never reported as keys
TMP_SUFFIX = ".tmp"


class LocalStorageService(StorageService):
    """Filesystem-backed key/value store."""

    def __init__(self, base_path: str = "storage", create_dirs: bool = True):
        """
        Initialize the local storage service.

        Args:
            base_path: Base directory for stored documents
            create_dirs: Whether to create directories if they don't exist
        """
        self.base_path = Path(base_path)
        self.create_dirs = create_dirs

        if self.create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_path(self, key: str) -> Path:
        """Map a key to a path inside base_path, discarding traversal segments."""
        normalized = key.replace("\\", "/").lstrip("/")

        parts: List[str] = []
        for part in normalized.split("/"):
            if part == "..":
                # Never climb above base_path
                if parts:
                    parts.pop()
            elif part and part != ".":
                parts.append(part)

        return self.base_path.joinpath(*parts)

    def _get_metadata_path(self, key: str) -> Path:
        path = self._get_path(key)
        return path.with_suffix(path.suffix + ".meta")

    def _write_atomic(self, path: Path, content: bytes) -> None:
        """Write through a sibling temp file so readers never see a partial file."""
        tmp_path = path.with_name(f".{path.name}{TMP_SUFFIX}")
        try:
            with open(tmp_path, "wb") as f:
                f.write(content)
            os.replace(tmp_path, path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def write(
        self, key: str, content: bytes, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        try:
            path = self._get_path(key)

            if self.create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)

            self._write_atomic(path, content)

            if metadata is not None:
                metadata_data = {
                    "created_at": datetime.now(timezone.utc).isoformat(),
                    "size": len(content),
                    "content_type": metadata.get(
                        "content_type", "application/octet-stream"
                    ),
                    **metadata,
                }
                with open(self._get_metadata_path(key), "w") as f:
                    json.dump(metadata_data, f, indent=2)

            return key

        except PermissionError as e:
            raise StoragePermissionError(f"Permission denied writing {key}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}")

    def read(self, key: str) -> bytes:
        path = self._get_path(key)
        if not path.is_file():
            raise StorageNotFoundError(f"Key not found: {key}")

        try:
            with open(path, "rb") as f:
                return f.read()
        except PermissionError as e:
            raise StoragePermissionError(f"Permission denied reading {key}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}")

    def delete(self, key: str) -> bool:
        try:
            path = self._get_path(key)
            metadata_path = self._get_metadata_path(key)

            deleted = False
            if path.is_file():
                path.unlink()
                deleted = True

            if metadata_path.exists():
                metadata_path.unlink()

            return deleted

        except PermissionError as e:
            raise StoragePermissionError(f"Permission denied deleting {key}: {e}")
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}")

    def exists(self, key: str) -> bool:
        return self._get_path(key).is_file()

    def get_metadata(self, key: str) -> Dict[str, Any]:
        path = self._get_path(key)
        if not path.is_file():
            raise StorageNotFoundError(f"Key not found: {key}")

        stat = path.stat()
        metadata: Dict[str, Any] = {
            "size": stat.st_size,
            "modified_at": datetime.fromtimestamp(stat.st_mtime).isoformat(),
            "content_type": "application/octet-stream",
        }

        metadata_path = self._get_metadata_path(key)
        if metadata_path.exists():
            try:
                with open(metadata_path, "r") as f:
                    metadata.update(json.load(f))
            except (json.JSONDecodeError, OSError):
                # Corrupt sidecar; fall back to file stats
                pass

        return metadata

    def list_keys(self, prefix: str = "") -> List[str]:
        root_path = self._get_path(prefix) if prefix else self.base_path
        if not root_path.exists():
            return []

        try:
            keys = []
            for root, _dirs, filenames in os.walk(root_path):
                for filename in filenames:
                    if filename.endswith((".meta", TMP_SUFFIX)):
                        continue
                    relative = (Path(root) / filename).relative_to(self.base_path)
                    keys.append(relative.as_posix())
            return sorted(keys)

        except OSError as e:
            raise StorageError(f"Failed to list keys with prefix {prefix}: {e}")
