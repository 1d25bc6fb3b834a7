"""Component wiring for Radio Venus.

Every provider and service is constructed here from :class:`Settings` and
the shared resources of a :class:`RunContext`.  The CLI calls these
factories; tests construct components directly with fakes instead.
"""

from __future__ import annotations

from pathlib import Path

from radio_venus.config.settings import Settings
from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.interfaces.llm_provider import ILLMProvider
from radio_venus.interfaces.tag_provider import ISimilarityProvider
from radio_venus.pipeline.catalog_pipeline import CatalogPipeline
from radio_venus.pipeline.context import RunContext
from radio_venus.pipeline.progress_tracker import ProgressTracker
from radio_venus.providers.birth_date import (
    CommunityDbBirthDateProvider,
    ManualOverrideProvider,
    MusicBrainzBirthDateProvider,
    WikidataBirthDateProvider,
    WikipediaBirthDateProvider,
)
from radio_venus.providers.catalog import WikidataCatalogProvider
from radio_venus.providers.llm import AnthropicLLMProvider, OpenAILLMProvider
from radio_venus.providers.media import YouTubeMediaProvider
from radio_venus.providers.playlist import SpotifyPlaylistProvider
from radio_venus.providers.store import (
    JsonReportStore,
    JsonSeedStore,
    JsonSnapshotStore,
    SqliteRecordIndex,
)
from radio_venus.providers.tags import (
    EverynoiseTagProvider,
    LastfmApiSimilarityProvider,
    LastfmSimilarityProvider,
    LastfmTagProvider,
)
from radio_venus.services.aesthetic_judge import AestheticJudge
from radio_venus.services.birth_date_resolver import BirthDateResolver
from radio_venus.services.discrepancy_verifier import DiscrepancyVerifier
from radio_venus.services.enrichment_service import EnrichmentService
from radio_venus.services.genre_classifier import GenreClassifier
from radio_venus.services.playlist_importer import PlaylistImporter
from radio_venus.services.similarity_discoverer import SimilarityDiscoverer
from radio_venus.services.tag_resolver import TagResolver

# ---------------------------------------------------------------------------
# LLM provider selection
# ---------------------------------------------------------------------------


def build_llm_provider(app_settings: Settings) -> ILLMProvider | None:
    """Select the first configured LLM provider.

    Priority order: Anthropic -> OpenAI.  ``None`` when neither has a key,
    which turns the aesthetic judge into a pass-through.
    """
    if app_settings.anthropic_api_key:
        return AnthropicLLMProvider(settings=app_settings)
    if app_settings.openai_api_key:
        return OpenAILLMProvider(settings=app_settings)
    return None


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


def build_seed_store(app_settings: Settings) -> JsonSeedStore:
    return JsonSeedStore(
        seed_path=app_settings.seed_path,
        overrides_path=app_settings.overrides_path,
        exclusions_path=app_settings.exclusions_path,
    )


def build_snapshot_store(app_settings: Settings) -> JsonSnapshotStore:
    return JsonSnapshotStore(app_settings.snapshot_path)


def build_report_store(app_settings: Settings) -> JsonReportStore:
    return JsonReportStore(app_settings.report_dir)


def build_record_index(app_settings: Settings) -> SqliteRecordIndex:
    return SqliteRecordIndex(app_settings.index_db_path)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def build_birth_date_tiers(ctx: RunContext) -> list[IBirthDateProvider]:
    """The five birth-date tiers in priority order."""
    app_settings = ctx.settings
    return [
        ManualOverrideProvider.from_file(Path(app_settings.overrides_path)),
        WikidataBirthDateProvider(http_client=ctx.http),
        MusicBrainzBirthDateProvider(settings=app_settings),
        WikipediaBirthDateProvider(http_client=ctx.http),
        CommunityDbBirthDateProvider(http_client=ctx.http),
    ]


def build_resolver(ctx: RunContext) -> BirthDateResolver:
    return BirthDateResolver(tiers=build_birth_date_tiers(ctx), cache=ctx.cache)


def build_tag_resolver(
    ctx: RunContext, classifier: GenreClassifier, overrides: dict | None = None
) -> TagResolver:
    """Authority tags from the browser, Last.fm tags as the secondary source."""
    return TagResolver(
        classifier=classifier,
        authority=EverynoiseTagProvider(browser=ctx.browser),
        secondary=LastfmTagProvider(http_client=ctx.http),
        overrides=overrides,
    )


def build_similarity_providers(ctx: RunContext) -> list[ISimilarityProvider]:
    providers: list[ISimilarityProvider] = [LastfmSimilarityProvider(http_client=ctx.http)]
    if ctx.settings.lastfm_api_key:
        providers.append(
            LastfmApiSimilarityProvider(http_client=ctx.http, api_key=ctx.settings.lastfm_api_key)
        )
    return providers


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def build_enrichment(
    ctx: RunContext, resolver: BirthDateResolver | None = None
) -> EnrichmentService:
    app_settings = ctx.settings
    media = YouTubeMediaProvider(http_client=ctx.http, api_key=app_settings.youtube_api_key)
    return EnrichmentService(
        resolver=resolver or build_resolver(ctx),
        media_provider=media,
        batch_size=app_settings.enrichment_batch_size,
        backup_count=app_settings.backup_media_count,
    )


def build_catalog_pipeline(
    ctx: RunContext, progress_tracker: ProgressTracker | None = None
) -> CatalogPipeline:
    """Wire the full build: stores, enrichment, Wikidata candidates and index."""
    app_settings = ctx.settings
    classifier = GenreClassifier()
    return CatalogPipeline(
        snapshot_store=build_snapshot_store(app_settings),
        seed_store=build_seed_store(app_settings),
        enrichment=build_enrichment(ctx),
        classifier=classifier,
        catalog_provider=WikidataCatalogProvider(http_client=ctx.http, classifier=classifier),
        record_index=build_record_index(app_settings),
        progress_tracker=progress_tracker,
        fresh_limit=app_settings.fresh_candidate_limit,
    )


def build_verifier(ctx: RunContext) -> DiscrepancyVerifier:
    app_settings = ctx.settings
    return DiscrepancyVerifier(
        authority=EverynoiseTagProvider(browser=ctx.browser),
        classifier=GenreClassifier(),
        report_store=build_report_store(app_settings),
        checkpoint_interval=app_settings.checkpoint_interval,
        delay_found=app_settings.verify_delay_found,
        delay_not_found=app_settings.verify_delay_not_found,
    )


async def build_discoverer(ctx: RunContext, use_judge: bool = True) -> SimilarityDiscoverer:
    """Discovery wired with curated overrides and, if configured, the judge."""
    app_settings = ctx.settings
    seed_store = build_seed_store(app_settings)
    overrides = {o.name: o for o in await seed_store.load_overrides()}
    judge = None
    if use_judge:
        judge = AestheticJudge(
            llm_provider=build_llm_provider(app_settings),
            aesthetic_description=app_settings.aesthetic_description,
            batch_size=app_settings.judge_batch_size,
        )
    return SimilarityDiscoverer(
        similarity_providers=build_similarity_providers(ctx),
        resolver=build_resolver(ctx),
        tag_resolver=build_tag_resolver(ctx, GenreClassifier(), overrides),
        judge=judge,
        seed_store=seed_store,
        min_year=app_settings.discovery_min_year,
        similarity_delay=app_settings.similarity_delay,
        candidate_delay=app_settings.candidate_delay,
    )


async def build_playlist_importer(ctx: RunContext) -> PlaylistImporter:
    """Playlist import wired like discovery, with the track-level media search."""
    app_settings = ctx.settings
    overrides = {o.name: o for o in await build_seed_store(app_settings).load_overrides()}
    return PlaylistImporter(
        playlist_provider=SpotifyPlaylistProvider(
            http_client=ctx.http,
            client_id=app_settings.spotify_client_id,
            client_secret=app_settings.spotify_client_secret,
            access_token=app_settings.spotify_access_token,
            page_delay=app_settings.playlist_page_delay,
        ),
        resolver=build_resolver(ctx),
        tag_resolver=build_tag_resolver(ctx, GenreClassifier(), overrides),
        media_provider=YouTubeMediaProvider(
            http_client=ctx.http, api_key=app_settings.youtube_api_key
        ),
        min_year=app_settings.import_min_year,
        candidate_delay=app_settings.candidate_delay,
        search_delay=app_settings.media_search_delay,
    )
