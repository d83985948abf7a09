"""Persistent key/value sections holding pages and schedules."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

from panelctl.errors import InternalError, StorageError

log = logging.getLogger(__name__)

PAGE_STORAGE_SIZE = 0x3000
SCHEDULE_STORAGE_SIZE = 0x3000


class _Record(Protocol):
    id: str

    def to_dict(self) -> dict[str, Any]: ...


T = TypeVar("T", bound=_Record)


def _check_key(key: Any) -> None:
    if not isinstance(key, str) or len(key) != 1:
        raise ValueError(f"storage key must be a single character, got {key!r}")


class StorageSection(Generic[T]):
    """A bounded section of storage mapping one-character keys to records.

    The section lives in a single JSON file. Its encoded size may not exceed
    ``capacity`` bytes and at most ``max_items`` distinct records are read back.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        record_type: Any,
        max_items: int,
        capacity: int = PAGE_STORAGE_SIZE,
    ) -> None:
        self.path = Path(path)
        self.record_type = record_type
        self.max_items = max_items
        self.capacity = capacity

    def _load(self) -> dict[str, Any]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(
                f"Internal Storage error: I/O error ({exc.strerror or exc})"
            ) from exc
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise StorageError("Storage is corrupted") from exc
        if not isinstance(data, dict):
            raise StorageError("Storage is corrupted")
        return data

    def _save(self, data: dict[str, Any]) -> None:
        encoded = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        if len(encoded) > self.capacity:
            raise StorageError("Storage is full")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise StorageError(
                f"Internal Storage error: I/O error ({exc.strerror or exc})"
            ) from exc
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(encoded)
            os.replace(tmp, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp)
            raise StorageError(
                f"Internal Storage error: I/O error ({exc.strerror or exc})"
            ) from exc

    def _decode(self, raw: Any) -> T:
        try:
            return self.record_type.from_dict(raw)
        except (ValueError, TypeError) as exc:
            raise StorageError(f"Map value error: {exc}") from exc

    def read(self, key: str) -> T | None:
        """Return the record stored under ``key``, or None if there is none."""
        _check_key(key)
        log.info("Reading %r", key)
        raw = self._load().get(key)
        if raw is None:
            return None
        value = self._decode(raw)
        log.debug("read %r", value)
        return value

    def read_all(self) -> list[T]:
        """Return every stored record, one per record id, in storage order."""
        log.info("Reading all")
        values: dict[str, T] = {}
        for raw in self._load().values():
            value = self._decode(raw)
            if value.id not in values and len(values) >= self.max_items:
                raise InternalError("Failed set active value")
            values[value.id] = value
        return list(values.values())

    def write(self, key: str, value: T) -> None:
        """Store ``value`` under ``key``, replacing any earlier record."""
        _check_key(key)
        log.info("Writing %r", key)
        data = self._load()
        data[key] = value.to_dict()
        self._save(data)

    def delete(self, key: str) -> None:
        """Remove the record under ``key``; a missing key is not an error."""
        _check_key(key)
        log.info("Deleting %r", key)
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def delete_all(self) -> None:
        """Erase the whole section."""
        log.info("Deleting all")
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Internal Storage error: I/O error ({exc.strerror or exc})"
            ) from exc