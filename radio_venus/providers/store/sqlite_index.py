"""SQLite secondary index of the canonical set.

Persists one row per artist to ``data/musicians.db`` using ``aiosqlite``
so the downstream matcher can query by Venus sign without loading the
whole snapshot.  The index is rebuilt from the snapshot at will and is
never read back as a source of truth.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import aiosqlite
import structlog

from radio_venus.interfaces.record_store import IRecordIndex
from radio_venus.models.artist import ArtistRecord
from radio_venus.utils.text_normalizer import name_key

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/musicians.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS musicians (
    name_key      TEXT PRIMARY KEY,
    name          TEXT    NOT NULL,
    birth_date    TEXT,
    date_approx   INTEGER NOT NULL DEFAULT 0,
    venus_sign    TEXT,
    venus_degree  REAL,
    venus_decan   INTEGER,
    venus_element TEXT,
    media_id      TEXT,
    backup_ids    TEXT    NOT NULL DEFAULT '[]',
    genres        TEXT    NOT NULL DEFAULT '[]',
    subgenres     TEXT    NOT NULL DEFAULT '[]',
    stable_id     TEXT,
    is_seed       INTEGER NOT NULL DEFAULT 0
);
"""

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_venus_sign ON musicians(venus_sign);",
    "CREATE INDEX IF NOT EXISTS idx_media_id ON musicians(media_id);",
]

_UPSERT_SQL = """\
INSERT INTO musicians
    (name_key, name, birth_date, date_approx, venus_sign, venus_degree, venus_decan,
     venus_element, media_id, backup_ids, genres, subgenres, stable_id, is_seed)
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT(name_key) DO UPDATE SET
    name          = excluded.name,
    birth_date    = excluded.birth_date,
    date_approx   = excluded.date_approx,
    venus_sign    = excluded.venus_sign,
    venus_degree  = excluded.venus_degree,
    venus_decan   = excluded.venus_decan,
    venus_element = excluded.venus_element,
    media_id      = excluded.media_id,
    backup_ids    = excluded.backup_ids,
    genres        = excluded.genres,
    subgenres     = excluded.subgenres,
    stable_id     = excluded.stable_id,
    is_seed       = excluded.is_seed;
"""


def _row_values(record: ArtistRecord, is_seed: bool) -> tuple:
    venus = record.venus
    return (
        record.key,
        record.name,
        record.birth_date.isoformat() if record.birth_date else None,
        int(record.date_approx),
        venus.sign.value if venus else None,
        venus.degree if venus else None,
        venus.decan if venus else None,
        venus.element.value if venus else None,
        record.media_id,
        json.dumps(list(record.backup_media_ids)),
        json.dumps([g.value for g in record.genres]),
        json.dumps([s.value for s in record.subgenres]),
        record.stable_id,
        int(is_seed),
    )


class SqliteRecordIndex(IRecordIndex):
    """SQLite-backed record index."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the musicians table and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute("PRAGMA journal_mode = WAL;")
            await db.execute(_CREATE_TABLE_SQL)
            for idx_sql in _CREATE_INDICES_SQL:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("record_index_initialized", path=str(self._db_path))

    async def upsert_many(
        self, records: Sequence[ArtistRecord], seed_keys: set[str] | None = None
    ) -> int:
        seed_keys = seed_keys or set()
        rows = [_row_values(r, r.key in seed_keys) for r in records]
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.executemany(_UPSERT_SQL, rows)
            await db.commit()
        logger.info("record_index_upserted", rows=len(rows))
        return len(rows)

    async def get(self, name: str) -> ArtistRecord | None:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM musicians WHERE name_key = ?", (name_key(name),)
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        venus = None
        if row["venus_sign"]:
            venus = {
                "sign": row["venus_sign"],
                "degree": row["venus_degree"],
                "decan": row["venus_decan"],
                "element": row["venus_element"],
            }
        return ArtistRecord(
            name=row["name"],
            birth_date=row["birth_date"],
            date_approx=bool(row["date_approx"]),
            venus=venus,
            genres=json.loads(row["genres"]),
            subgenres=json.loads(row["subgenres"]),
            stable_id=row["stable_id"],
            media_id=row["media_id"],
            backup_media_ids=json.loads(row["backup_ids"]),
        )

    async def count_by_sign(self) -> dict[str, int]:
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute(
                "SELECT venus_sign, COUNT(*) FROM musicians "
                "WHERE venus_sign IS NOT NULL GROUP BY venus_sign"
            )
            rows = await cursor.fetchall()
        return {sign: count for sign, count in rows}

    async def count(self) -> int:
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM musicians")
            row = await cursor.fetchone()
        return int(row[0]) if row else 0
