"""A JSON array on disk, used as a tiny document collection.

Every read-modify-write runs under an exclusive lock shared by all
handles on the same path: a re-entrant thread lock inside the process
and an ``fcntl.flock`` on a sidecar ``.<name>.lock`` file across
processes. Writes go through a temp file plus ``os.replace`` so a crash
never leaves a half-written collection behind.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from autohub.domain.exceptions import StoreError


class _PathLock:
    """Thread lock plus file lock for one collection path.

    The file lock is taken once by the outermost holder and released
    when it leaves, so nested use from the same thread does not block
    on its own ``flock``.
    """

    def __init__(self, lock_path: Path) -> None:
        self._lock_path = lock_path
        self._thread_lock = threading.RLock()
        self._depth = 0
        self._lock_file = None

    @contextmanager
    def hold(self) -> Iterator[None]:
        with self._thread_lock:
            if self._depth == 0:
                self._acquire_file_lock()
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
                if self._depth == 0:
                    self._release_file_lock()

    def _acquire_file_lock(self) -> None:
        try:
            self._lock_path.parent.mkdir(parents=True, exist_ok=True)
            lock_file = open(self._lock_path, "w")
        except OSError as exc:
            raise StoreError(f"Cannot open {self._lock_path.name}: {exc}") from exc
        try:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
        except OSError as exc:
            lock_file.close()
            raise StoreError(f"Cannot lock {self._lock_path.name}: {exc}") from exc
        self._lock_file = lock_file

    def _release_file_lock(self) -> None:
        lock_file, self._lock_file = self._lock_file, None
        try:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)
        finally:
            lock_file.close()


_registry_lock = threading.Lock()
_path_locks: dict[Path, _PathLock] = {}


def _lock_for(path: Path) -> _PathLock:
    with _registry_lock:
        lock = _path_locks.get(path)
        if lock is None:
            lock = _path_locks[path] = _PathLock(path.with_name(f".{path.name}.lock"))
        return lock


class JsonDocumentFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    def read(self) -> list[dict]:
        with self._lock.hold():
            return self._load()

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the documents for in-place edits; persist them on clean exit.

        Nothing is written if the block raises.
        """
        with self._lock.hold():
            records = self._load()
            yield records
            self._persist(records)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {self._file_path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise StoreError(f"{self._file_path.name} does not hold a JSON array")
        return records

    def _persist(self, records: list[dict]) -> None:
        try:
            fd, temp_path = tempfile.mkstemp(
                dir=self._file_path.parent,
                prefix=f".{self._file_path.stem}_",
                suffix=".tmp",
            )
        except OSError as exc:
            raise StoreError(f"Cannot write {self._file_path.name}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
                f.write("\n")
            os.replace(temp_path, self._file_path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StoreError(f"Cannot write {self._file_path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        # Checked under the file lock so a second process cannot blank a
        # collection another one has just written.
        with self._lock.hold():
            if self._file_path.exists():
                return
            try:
                self._file_path.write_text("[]\n", encoding="utf-8")
            except OSError as exc:
                raise StoreError(f"Cannot create {self._file_path.name}: {exc}") from exc
