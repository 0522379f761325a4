"""Bracket document storage.

The engine never talks to a database; callers persist whole documents
through a :class:`BracketStore`. Every stored document carries a version
number, and writes name the version they were based on, so two writers
racing on the same tournament cannot silently overwrite each other.
"""

# Bracket Engine
# Copyright (C) 2025  Bracket Engine developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import json
import os
import re
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

from filelock import FileLock, Timeout

from bracketengine.constants import SAVE_FILE_EXTENSION
from bracketengine.exceptions import (
    DocumentNotFoundError,
    StaleDocumentError,
    StorageError,
)
from bracketengine.models.bracket import BracketDocument
from bracketengine.type_hints import DocumentDict
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass(frozen=True)
class StoredBracket:
    """A document together with the version it was stored under."""

    document: BracketDocument
    version: int


class BracketStore(ABC):
    """Get/put interface for bracket documents keyed by tournament id."""

    @abstractmethod
    def get(self, tournament_id: str) -> StoredBracket:
        """Return the stored document.

        Raises:
            DocumentNotFoundError: If nothing is stored under this id
        """

    @abstractmethod
    def put(
        self,
        tournament_id: str,
        document: BracketDocument,
        expected_version: Optional[int] = None,
    ) -> int:
        """Store a whole document and return its new version.

        Args:
            tournament_id: Key of the tournament
            document: Full document to store
            expected_version: Version the write is based on; ``None`` means
                the tournament must not have a document yet

        Raises:
            StaleDocumentError: If the stored version differs from
                ``expected_version``
        """

    @abstractmethod
    def delete(self, tournament_id: str) -> None:
        """Remove a stored document; missing ids are ignored."""

    def exists(self, tournament_id: str) -> bool:
        try:
            self.get(tournament_id)
        except DocumentNotFoundError:
            return False
        return True

    @staticmethod
    def _check_version(
        tournament_id: str, expected: Optional[int], actual: Optional[int]
    ) -> int:
        if expected != actual:
            raise StaleDocumentError(tournament_id, expected, actual)
        return (actual or 0) + 1


class InMemoryBracketStore(BracketStore):
    """Process-local store, mainly for tests and the interactive shell."""

    def __init__(self) -> None:
        self._documents: Dict[str, Tuple[DocumentDict, int]] = {}
        self._lock = threading.Lock()

    def get(self, tournament_id: str) -> StoredBracket:
        with self._lock:
            entry = self._documents.get(tournament_id)
        if entry is None:
            raise DocumentNotFoundError(f"No bracket stored for {tournament_id}")
        data, version = entry
        return StoredBracket(BracketDocument.from_dict(data), version)

    def put(
        self,
        tournament_id: str,
        document: BracketDocument,
        expected_version: Optional[int] = None,
    ) -> int:
        # Stored as plain data so later changes to ``document`` do not leak in
        data = document.to_dict()
        with self._lock:
            current = self._documents.get(tournament_id)
            version = self._check_version(
                tournament_id, expected_version, current[1] if current else None
            )
            self._documents[tournament_id] = (data, version)
        logger.debug(f"Stored {tournament_id} at version {version}")
        return version

    def delete(self, tournament_id: str) -> None:
        with self._lock:
            self._documents.pop(tournament_id, None)


class JsonFileBracketStore(BracketStore):
    """One ``<tournament_id>.json`` file per tournament in a directory.

    Files hold ``{"version": int, "document": {...}}``. The version check and
    the write happen under a ``<tournament_id>.json.lock`` file lock, so
    writers in other processes (or other store instances) are serialized
    too. Each write goes through its own temporary file and an atomic rename.
    """

    def __init__(self, directory: Union[str, Path], lock_timeout: float = 10) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.lock_timeout = lock_timeout

    def _path(self, tournament_id: str) -> Path:
        if not _SAFE_ID.match(tournament_id):
            raise StorageError(f"Invalid tournament id for file storage: {tournament_id!r}")
        return self.directory / f"{tournament_id}{SAVE_FILE_EXTENSION}"

    @contextmanager
    def _locked(self, path: Path) -> Iterator[None]:
        lock = FileLock(f"{path}.lock", timeout=self.lock_timeout)
        try:
            with lock:
                yield
        except Timeout as e:
            raise StorageError(f"Timed out waiting for the lock on {path}") from e

    @staticmethod
    def _read(path: Path) -> Optional[Dict]:
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {path}: {e}") from e
        if not isinstance(payload, dict) or "document" not in payload:
            raise StorageError(f"{path} is not a stored bracket")
        return payload

    def get(self, tournament_id: str) -> StoredBracket:
        path = self._path(tournament_id)
        with self._locked(path):
            payload = self._read(path)
        if payload is None:
            raise DocumentNotFoundError(f"No bracket stored for {tournament_id}")
        return StoredBracket(
            BracketDocument.from_dict(payload["document"]), int(payload.get("version", 1))
        )

    def put(
        self,
        tournament_id: str,
        document: BracketDocument,
        expected_version: Optional[int] = None,
    ) -> int:
        path = self._path(tournament_id)
        data = {"document": document.to_dict()}
        with self._locked(path):
            current = self._read(path)
            version = self._check_version(
                tournament_id,
                expected_version,
                int(current.get("version", 1)) if current else None,
            )
            data["version"] = version
            self._write(path, data)
        logger.info(f"Bracket {tournament_id} saved to {path} (version {version})")
        return version

    def _write(self, path: Path, data: Dict) -> None:
        temp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f"{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_name = f.name
                json.dump(data, f, indent=4)
            os.replace(temp_name, path)
        except OSError as e:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise StorageError(f"Could not save {path}: {e}") from e

    def delete(self, tournament_id: str) -> None:
        path = self._path(tournament_id)
        with self._locked(path):
            try:
                path.unlink()
            except FileNotFoundError:
                pass
