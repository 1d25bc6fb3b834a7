"""Decoding and encoding of artist records for the JSON files.

Curated and cached files are edited by hand, so one malformed entry must
not make a whole file unreadable: invalid entries are logged and skipped.
Legacy field names are normalized by the model's validation aliases.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from radio_venus.models.artist import ArtistOverride, ArtistRecord
from radio_venus.utils.logging import get_logger

logger = get_logger(__name__)


def decode_records(items: Iterable[Any], source: str) -> list[ArtistRecord]:
    """Validate raw dicts into records, skipping (and logging) bad entries."""
    records: list[ArtistRecord] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("record_skipped", source=source, index=index, reason="not an object")
            continue
        try:
            records.append(ArtistRecord.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "record_skipped",
                source=source,
                index=index,
                name=item.get("name"),
                reason=exc.errors()[0].get("msg", "invalid"),
            )
    return records


def decode_overrides(data: Any, source: str) -> list[ArtistOverride]:
    """Accept a list of override objects or a ``{name: fields}`` mapping."""
    if isinstance(data, dict):
        data = [
            (
                {"name": name, "birth_date": fields}
                if isinstance(fields, str)
                else {"name": name, **fields}
            )
            for name, fields in data.items()
            if isinstance(fields, (str, dict))
        ]
    overrides: list[ArtistOverride] = []
    for index, item in enumerate(data or []):
        try:
            overrides.append(ArtistOverride.model_validate(item))
        except ValidationError as exc:
            logger.warning("override_skipped", source=source, index=index, error=str(exc)[:200])
    return overrides


def encode_records(records: Sequence[ArtistRecord]) -> list[dict[str, Any]]:
    """Serialize records sorted case-insensitively by name."""
    return [r.to_snapshot_dict() for r in sorted(records, key=lambda r: r.key)]
