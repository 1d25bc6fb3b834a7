"""Verification report persistence.

The verifier saves the in-progress report every few records; a later run
pointed at the same file resumes where the previous one stopped.
"""

from __future__ import annotations

import asyncio
import datetime
import json
from pathlib import Path

from pydantic import ValidationError

from radio_venus.models.report import VerificationReport
from radio_venus.providers.store.json_snapshot_store import read_json, write_json_atomic
from radio_venus.utils.errors import SnapshotError
from radio_venus.utils.logging import get_logger

logger = get_logger(__name__)


class JsonReportStore:
    def __init__(self, report_dir: str | Path) -> None:
        self._dir = Path(report_dir)

    def default_path(self, filter_genre: str | None = None) -> Path:
        stamp = datetime.date.today().isoformat()
        suffix = f"-{filter_genre}" if filter_genre else ""
        return self._dir / f"genre-verify-{stamp}{suffix}.json"

    async def load(self, path: str | Path) -> VerificationReport | None:
        """Return the report at *path*, or ``None`` if the file does not exist."""
        file_path = Path(path)
        data = await asyncio.to_thread(read_json, file_path, None)
        if data is None:
            return None
        try:
            return VerificationReport.model_validate(data)
        except ValidationError as exc:
            raise SnapshotError(f"Report {file_path} is malformed: {exc}") from exc

    async def save(self, report: VerificationReport, path: str | Path) -> Path:
        file_path = Path(path)
        payload = json.loads(report.to_json())
        await asyncio.to_thread(write_json_atomic, file_path, payload)
        logger.debug("report_checkpoint", path=str(file_path), **report.summary())
        return file_path
