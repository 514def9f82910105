"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON document on disk holds every key.
This mirrors a preferences store: one document, many keys,
and keeps the file human-readable.

TRADEOFFS:
- The whole file is rewritten on every write (fine for a personal list)
- No locking; one process owns the file at a time

Writes go to a temporary file first and are moved into place with
os.replace, so a crash mid-write leaves the previous file intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from subdrip.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """
    Key-value storage backed by one JSON object on disk.

    Values are stored as UTF-8 text under their key.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load_document(self) -> dict[str, str]:
        """
        Read the whole JSON document.

        Raises:
            StorageError: If the file exists but is unreadable or malformed
        """
        if not self._path.exists():
            return {}

        try:
            with self._path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e

        if not isinstance(document, dict):
            raise StorageError(f"{self._path} does not contain a JSON object")
        return document

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _save_document(self, document: dict[str, str]) -> None:
        """Atomically replace the file with `document`."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def _document_for_update(self) -> dict[str, str]:
        # A corrupt file is replaced rather than blocking every write
        try:
            return self._load_document()
        except StorageError as e:
            logger.warning(
                "corrupt_storage_file_replaced",
                path=str(self._path),
                error=str(e),
            )
            return {}

    def read(self, key: str) -> Optional[bytes]:
        value = self._load_document().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"Value under {key!r} is not text")
        return value.encode("utf-8")

    def write(self, key: str, value: bytes) -> None:
        try:
            text = value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StorageWriteError(f"Value for {key!r} is not UTF-8") from e

        document = self._document_for_update()
        document[key] = text
        try:
            self._save_document(document)
        except OSError as e:
            raise StorageWriteError(f"Could not write {self._path}: {e}") from e

    def remove(self, key: str) -> None:
        document = self._document_for_update()
        if key not in document:
            return
        del document[key]
        try:
            self._save_document(document)
        except OSError as e:
            raise StorageWriteError(f"Could not write {self._path}: {e}") from e
