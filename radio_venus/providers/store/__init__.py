"""Persistence: JSON snapshot (source of truth), curated inputs, reports, SQLite index."""

from radio_venus.providers.store.json_report_store import JsonReportStore
from radio_venus.providers.store.json_seed_store import JsonSeedStore
from radio_venus.providers.store.json_snapshot_store import JsonSnapshotStore
from radio_venus.providers.store.sqlite_index import SqliteRecordIndex

__all__ = ["JsonReportStore", "JsonSeedStore", "JsonSnapshotStore", "SqliteRecordIndex"]
