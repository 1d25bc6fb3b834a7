"""Application settings loaded from environment variables via pydantic-settings.

Values are read, highest priority first, from:

  1. Environment variables, e.g. ``ANTHROPIC_API_KEY=...``
  2. A ``.env`` file in the working directory
  3. The defaults below

Field ``youtube_api_key`` maps to env var ``YOUTUBE_API_KEY`` and so on.
An empty key means "not configured": the step that needs it becomes a
no-op instead of failing the run.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Radio Venus curation settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Aesthetic judge (optional) ===
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_text_model: str = ""

    # === Media lookup (optional) ===
    youtube_api_key: str = ""

    # === Playlist import (optional) ===
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_access_token: str = ""

    # === Similarity (optional second source) ===
    lastfm_api_key: str = ""

    # === MusicBrainz user agent ===
    musicbrainz_app_name: str = "radio-venus"
    musicbrainz_app_version: str = "0.1.0"
    musicbrainz_contact: str = ""

    # === HTTP ===
    http_user_agent: str = "RadioVenus/1.0 (musician curation pipeline)"
    http_timeout: float = 20.0

    # === Data files ===
    snapshot_path: str = "data/musicians.json"
    seed_path: str = "data/seed-musicians.json"
    overrides_path: str = "data/overrides.json"
    exclusions_path: str = "data/exclusions.json"
    index_db_path: str = "data/musicians.db"
    report_dir: str = "data/reports"

    # === Enrichment ===
    enrichment_batch_size: int = 5
    backup_media_count: int = 2
    fetch_fresh_candidates: bool = True
    fresh_candidate_limit: int = 100

    # === Verification ===
    checkpoint_interval: int = 10
    browser_restart_interval: int = 50
    verify_delay_found: float = 1.0
    verify_delay_not_found: float = 0.5

    # === Discovery ===
    discovery_depth: int = 1
    discovery_min_year: int = 1940
    similarity_delay: float = 0.5
    candidate_delay: float = 0.3
    judge_batch_size: int = 10
    aesthetic_description: str = (
        "Radio Venus plays atmospheric, experimental and emotionally rich music: "
        "ambient, electronica, IDM, techno, darkwave, trip-hop, art pop, neofolk "
        "and spiritual jazz. It avoids mainstream chart pop, novelty acts, "
        "comedy, children's music and stadium rock."
    )

    # === Playlist import ===
    import_min_year: int = 1901
    playlist_page_delay: float = 0.15
    media_search_delay: float = 0.3

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_llm_providers(self) -> list[str]:
        """Return LLM provider names that have an API key configured."""
        providers: list[str] = []
        if self.anthropic_api_key:
            providers.append("anthropic")
        if self.openai_api_key:
            providers.append("openai")
        return providers
