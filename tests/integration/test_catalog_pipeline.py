"""Integration tests for the catalog build.

Real JSON stores and a real SQLite index under a temporary directory; only
the network-facing providers (birth dates, media) are fakes.
"""

from __future__ import annotations

import datetime
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.interfaces.media_provider import IMediaProvider
from radio_venus.models.artist import ArtistRecord
from radio_venus.models.taxonomy import GenreCategory
from radio_venus.pipeline.catalog_pipeline import CatalogPipeline
from radio_venus.providers.store import JsonSeedStore, JsonSnapshotStore, SqliteRecordIndex
from radio_venus.services.birth_date_resolver import BirthDateResolver
from radio_venus.services.enrichment_service import EnrichmentService
from radio_venus.utils.errors import PipelineError


@pytest.fixture()
def snapshot_store(data_dir: Path) -> JsonSnapshotStore:
    return JsonSnapshotStore(data_dir / "musicians.json")


@pytest.fixture()
def seed_store(data_dir: Path) -> JsonSeedStore:
    return JsonSeedStore(
        seed_path=data_dir / "seed-musicians.json",
        overrides_path=data_dir / "overrides.json",
        exclusions_path=data_dir / "exclusions.json",
    )


@pytest.fixture()
def dates(date_provider_factory: Callable[..., Any]) -> Any:
    return date_provider_factory({"Bjork": "1965-11-21", "Nobody Known": None})


@pytest.fixture()
def media(media_provider_factory: Callable[..., Any]) -> Any:
    return media_provider_factory(primary={"Bjork": "yt-bjork", "Aphex Twin": "yt-other"})


def _pipeline(
    snapshot_store: JsonSnapshotStore,
    seed_store: JsonSeedStore,
    dates: IBirthDateProvider,
    media: IMediaProvider,
    index: SqliteRecordIndex | None = None,
) -> CatalogPipeline:
    enrichment = EnrichmentService(
        resolver=BirthDateResolver(tiers=[dates]), media_provider=media, batch_size=2
    )
    return CatalogPipeline(
        snapshot_store=snapshot_store,
        seed_store=seed_store,
        enrichment=enrichment,
        record_index=index,
    )


async def _prepare_inputs(
    snapshot_store: JsonSnapshotStore, seed_store: JsonSeedStore, aphex_twin: ArtistRecord
) -> None:
    await snapshot_store.save([aphex_twin])
    await seed_store.save_seed(
        [
            ArtistRecord(name="Aphex Twin", genres=["idm"]),
            ArtistRecord(name="Bjork", genres=["artpop"]),
            ArtistRecord(name="Nobody Known", genres=["ambient"]),
        ]
    )


class TestCatalogBuild:
    @pytest.mark.asyncio
    async def test_build_writes_snapshot_and_index(
        self,
        data_dir: Path,
        snapshot_store: JsonSnapshotStore,
        seed_store: JsonSeedStore,
        dates: Any,
        media: Any,
        aphex_twin: ArtistRecord,
    ) -> None:
        await _prepare_inputs(snapshot_store, seed_store, aphex_twin)
        index = SqliteRecordIndex(data_dir / "musicians.db")
        pipeline = _pipeline(snapshot_store, seed_store, dates, media, index)

        summary = await pipeline.build(run_id="it-1", fetch_fresh=False)

        assert summary.total == 2
        assert summary.seed == 3
        assert summary.cached == 1
        assert summary.indexed == 2
        assert [r.name for r in summary.rejected] == ["Nobody Known"]

        saved = {r.name: r for r in await snapshot_store.load()}
        assert set(saved) == {"Aphex Twin", "Bjork"}
        assert saved["Aphex Twin"].media_id == "yt-aphex"
        assert saved["Aphex Twin"].birth_date == datetime.date(1971, 8, 18)
        assert saved["Bjork"].birth_date == datetime.date(1965, 11, 21)
        assert saved["Bjork"].media_id == "yt-bjork"

        # Aphex Twin was already dated and had media in the snapshot.
        assert "Aphex Twin" not in dates.calls
        assert [name for name, _ in media.queries] == ["Bjork"]

        assert await index.count() == 2
        indexed = await index.get("bjork")
        assert indexed is not None
        assert indexed.media_id == "yt-bjork"

    @pytest.mark.asyncio
    async def test_rebuild_is_idempotent(
        self,
        snapshot_store: JsonSnapshotStore,
        seed_store: JsonSeedStore,
        dates: Any,
        media: Any,
        aphex_twin: ArtistRecord,
    ) -> None:
        await _prepare_inputs(snapshot_store, seed_store, aphex_twin)
        pipeline = _pipeline(snapshot_store, seed_store, dates, media)

        await pipeline.build(fetch_fresh=False)
        first = snapshot_store.path.read_text(encoding="utf-8")
        await pipeline.build(fetch_fresh=False)

        assert snapshot_store.path.read_text(encoding="utf-8") == first
        assert dates.calls.count("Bjork") == 1

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(
        self,
        data_dir: Path,
        snapshot_store: JsonSnapshotStore,
        seed_store: JsonSeedStore,
        dates: Any,
        media: Any,
        aphex_twin: ArtistRecord,
    ) -> None:
        await _prepare_inputs(snapshot_store, seed_store, aphex_twin)
        before = snapshot_store.path.read_text(encoding="utf-8")
        index = SqliteRecordIndex(data_dir / "musicians.db")
        pipeline = _pipeline(snapshot_store, seed_store, dates, media, index)

        summary = await pipeline.build(fetch_fresh=False, dry_run=True)

        assert summary.total == 2
        assert summary.indexed == 0
        assert snapshot_store.path.read_text(encoding="utf-8") == before
        assert not (data_dir / "musicians.db").exists()

    @pytest.mark.asyncio
    async def test_failed_load_leaves_snapshot_untouched(
        self,
        data_dir: Path,
        snapshot_store: JsonSnapshotStore,
        seed_store: JsonSeedStore,
        dates: Any,
        media: Any,
        aphex_twin: ArtistRecord,
    ) -> None:
        await snapshot_store.save([aphex_twin])
        before = snapshot_store.path.read_text(encoding="utf-8")
        (data_dir / "seed-musicians.json").write_text(
            json.dumps({"not": "an array"}), encoding="utf-8"
        )
        pipeline = _pipeline(snapshot_store, seed_store, dates, media)

        with pytest.raises(PipelineError):
            await pipeline.build(fetch_fresh=False)
        assert snapshot_store.path.read_text(encoding="utf-8") == before

    @pytest.mark.asyncio
    async def test_exclusions_and_overrides_apply(
        self,
        data_dir: Path,
        snapshot_store: JsonSnapshotStore,
        seed_store: JsonSeedStore,
        dates: Any,
        media: Any,
        aphex_twin: ArtistRecord,
    ) -> None:
        await _prepare_inputs(snapshot_store, seed_store, aphex_twin)
        (data_dir / "exclusions.json").write_text(json.dumps(["Bjork"]), encoding="utf-8")
        (data_dir / "overrides.json").write_text(
            json.dumps({"Aphex Twin": {"genres": ["ambient"]}}), encoding="utf-8"
        )
        pipeline = _pipeline(snapshot_store, seed_store, dates, media)

        summary = await pipeline.build(fetch_fresh=False)

        saved = {r.name: r for r in await snapshot_store.load()}
        assert set(saved) == {"Aphex Twin"}
        assert summary.excluded == ["Bjork"]
        assert saved["Aphex Twin"].genres == (GenreCategory.AMBIENT,)
        assert "Bjork" not in dates.calls
