"""Persistence utilities for the fleet manager core services."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from .exceptions import PersistenceError
from .logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_SNAPSHOT_NAME = "FleetData.json"

PathLike = Union[str, Path]


class SnapshotStorage:
    """Single-file JSON snapshot of the fleet with crash-safe writes."""

    def __init__(self, path: PathLike = DEFAULT_SNAPSHOT_NAME) -> None:
        self._path = Path(path)

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> List[Dict[str, Any]]:
        path = self._path
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise PersistenceError(f"Corrupted JSON data in {path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        if not isinstance(payload, list):
            raise PersistenceError(f"Expected list payload in {path}")
        return payload

    def save(self, records: Iterable[Dict[str, Any]]) -> None:
        path = self._path
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(list(records), handle, indent=2)
                handle.flush()
            # Path.replace is an atomic rename on POSIX.
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}: {_reason(exc)}") from exc
        LOGGER.info("Snapshot written to %s", path)

    @property
    def path(self) -> Path:
        return self._path


def read_lines(path: PathLike) -> List[bytes]:
    """Return every line of a file as raw bytes; the importer decodes them one at a time."""

    source = Path(path)
    try:
        with source.open("rb") as handle:
            lines = handle.readlines()
    except OSError as exc:
        raise PersistenceError(f"Unable to read from {source}: {_reason(exc)}") from exc
    return lines


def _reason(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)
