"""Shared file handling for the JSON-backed repositories.

Each file holds a JSON list of records.  Read-modify-write cycles run
under a lock shared by every store pointing at the same path, and writes
go to a temporary file that replaces the original in one rename, so a
crash never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from storefront.domain.exceptions import PersistenceError

_FILE_LOCKS: dict[Path, threading.RLock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _FILE_LOCKS_GUARD:
        lock = _FILE_LOCKS.get(path)
        if lock is None:
            lock = threading.RLock()
            _FILE_LOCKS[path] = lock
        return lock


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path).resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            with self._lock:
                records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Could not read {self._file_path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise PersistenceError(f"{self._file_path.name} does not hold a JSON list")
        return records

    def _persist_raw(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        try:
            with self._lock:
                fd, tmp_name = tempfile.mkstemp(
                    dir=self._file_path.parent, prefix=f".{self._file_path.name}."
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        fh.write(payload)
                    os.replace(tmp_name, self._file_path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
        except OSError as exc:
            raise PersistenceError(f"Could not write {self._file_path.name}: {exc}") from exc

    def _upsert(self, key: str, record: dict) -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw.get(key) == record[key]:
                    records[i] = record
                    break
            else:
                records.append(record)
            self._persist_raw(records)

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Could not create {self._file_path}: {exc}") from exc
