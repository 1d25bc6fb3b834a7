"""Canonical-set snapshot stored as one JSON array.

Writes go to a temporary file in the same directory followed by
``os.replace``, so readers only ever see the previous or the new snapshot,
never a half-written one.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from radio_venus.interfaces.record_store import ISnapshotStore
from radio_venus.models.artist import ArtistRecord
from radio_venus.providers.store.record_codec import decode_records, encode_records
from radio_venus.utils.errors import SnapshotError
from radio_venus.utils.logging import get_logger

logger = get_logger(__name__)


def read_json(path: Path, default: Any) -> Any:
    """Read a JSON file, returning *default* when it does not exist."""
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Cannot read {path}: {exc}") from exc


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write *payload* to *path* through a temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise SnapshotError(f"Cannot write {path}: {exc}") from exc


class JsonSnapshotStore(ISnapshotStore):
    """The source of truth for the canonical set."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> list[ArtistRecord]:
        data = await asyncio.to_thread(read_json, self._path, [])
        if not isinstance(data, list):
            raise SnapshotError(f"Snapshot {self._path} must hold a JSON array")
        records = decode_records(data, source=str(self._path))
        logger.info("snapshot_loaded", path=str(self._path), records=len(records))
        return records

    async def save(self, records: Sequence[ArtistRecord]) -> None:
        await asyncio.to_thread(write_json_atomic, self._path, encode_records(records))
        logger.info("snapshot_saved", path=str(self._path), records=len(records))
