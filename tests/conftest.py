"""Shared pytest fixtures for the Radio Venus test suite."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest
import structlog

from radio_venus.config.settings import Settings
from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.interfaces.llm_provider import ILLMProvider
from radio_venus.interfaces.media_provider import IMediaProvider
from radio_venus.interfaces.tag_provider import ISimilarityProvider, ITagProvider
from radio_venus.models.artist import ArtistRecord
from radio_venus.models.resolution import BirthDateCandidate, ProviderResult
from radio_venus.utils.text_normalizer import name_key

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging() -> None:
    """Warnings only, and no logger caching so output follows the active capture."""
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# ---------------------------------------------------------------------------
# Fake providers
# ---------------------------------------------------------------------------


def _lookup(responses: Mapping[str, Any], name: str) -> Any:
    if name in responses:
        return responses[name]
    keyed = {name_key(k): v for k, v in responses.items()}
    return keyed.get(name_key(name))


class FakeTagProvider(ITagProvider):
    """Tag source answering from a ``{name: tags}`` map.

    A value may also be a ready :class:`ProviderResult` or an exception to
    raise from ``query``.
    """

    def __init__(
        self, responses: Mapping[str, Any], name: str = "fake_tags", available: bool = True
    ) -> None:
        self._responses = dict(responses)
        self._name = name
        self._available = available
        self.calls: list[str] = []

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        self.calls.append(name)
        value = _lookup(self._responses, name)
        if isinstance(value, Exception):
            raise value
        if isinstance(value, ProviderResult):
            return value
        if not value:
            return ProviderResult.no_result(self._name)
        return ProviderResult.found(list(value), self._name)

    def get_provider_name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return self._available


class FakeSimilarityProvider(ISimilarityProvider):
    def __init__(self, graph: Mapping[str, list[str]], name: str = "fake_similar") -> None:
        self._graph = dict(graph)
        self._name = name
        self.calls: list[str] = []

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        self.calls.append(name)
        similar = _lookup(self._graph, name)
        if not similar:
            return ProviderResult.no_result(self._name)
        return ProviderResult.found(list(similar), self._name)

    def get_provider_name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return True


class FakeBirthDateProvider(IBirthDateProvider):
    """Birth-date tier answering from a ``{name: raw date}`` map.

    Values may be a raw date string, a :class:`BirthDateCandidate`, a
    :class:`ProviderResult` or an exception to raise.
    """

    def __init__(
        self, responses: Mapping[str, Any], name: str = "fake_dates", available: bool = True
    ) -> None:
        self._responses = dict(responses)
        self._name = name
        self._available = available
        self.calls: list[str] = []

    async def query(
        self, name: str, hint: str | None = None
    ) -> ProviderResult[BirthDateCandidate]:
        self.calls.append(name)
        value = _lookup(self._responses, name)
        if isinstance(value, Exception):
            raise value
        if isinstance(value, ProviderResult):
            return value
        if value is None:
            return ProviderResult.no_result(self._name)
        if isinstance(value, str):
            value = BirthDateCandidate(raw=value)
        return ProviderResult.found(value, self._name)

    def get_provider_name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return self._available


class FakeMediaProvider(IMediaProvider):
    """Media lookup returning ``primary[name]`` from query and ``pool`` from search."""

    def __init__(
        self,
        primary: Mapping[str, str] | None = None,
        pool: list[str] | None = None,
        available: bool = True,
    ) -> None:
        self._primary = dict(primary or {})
        self._pool = list(pool or [])
        self._available = available
        self.queries: list[tuple[str, str | None]] = []
        self.searches: list[str] = []

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        self.queries.append((name, hint))
        media_id = _lookup(self._primary, name)
        if media_id is None:
            return ProviderResult.no_result("fake_media")
        return ProviderResult.found([media_id], "fake_media")

    async def search(
        self,
        search_query: str,
        duration_range: tuple[int, int] = (60, 600),
        exclude: set[str] | None = None,
    ) -> list[str]:
        self.searches.append(search_query)
        excluded = exclude or set()
        return [m for m in self._pool if m not in excluded]

    def get_provider_name(self) -> str:
        return "fake_media"

    def is_available(self) -> bool:
        return self._available


class FakeLLMProvider(ILLMProvider):
    def __init__(self, response: str | Exception = '{"reject": []}') -> None:
        self._response = response
        self.prompts: list[str] = []

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> str:
        self.prompts.append(user_prompt)
        if isinstance(self._response, Exception):
            raise self._response
        return self._response

    def get_provider_name(self) -> str:
        return "fake_llm"

    def is_available(self) -> bool:
        return True

    async def validate_credentials(self) -> bool:
        return True


# ---------------------------------------------------------------------------
# Record fixtures
# ---------------------------------------------------------------------------


def make_record(name: str, **fields: Any) -> ArtistRecord:
    return ArtistRecord(name=name, **fields)


@pytest.fixture()
def record_factory() -> Callable[..., ArtistRecord]:
    return make_record


@pytest.fixture()
def aphex_twin() -> ArtistRecord:
    return ArtistRecord(
        name="Aphex Twin",
        birth_date=datetime.date(1971, 8, 18),
        genres=["idm", "ambient"],
        stable_id="f22942a1-6f70-4f48-866e-238cb2308fbd",
        media_id="yt-aphex",
    )


@pytest.fixture()
def seed_records() -> list[ArtistRecord]:
    return [
        ArtistRecord(name="Bjork", birth_date=datetime.date(1965, 11, 21), genres=["artpop"]),
        ArtistRecord(name="Frank Ocean", birth_date=datetime.date(1987, 10, 28), genres=["hiphop"]),
        ArtistRecord(name="Thom Yorke", genres=["altrock", "electronica"]),
    ]


# ---------------------------------------------------------------------------
# Provider factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def tag_provider_factory() -> Callable[..., FakeTagProvider]:
    return FakeTagProvider


@pytest.fixture()
def similarity_provider_factory() -> Callable[..., FakeSimilarityProvider]:
    return FakeSimilarityProvider


@pytest.fixture()
def date_provider_factory() -> Callable[..., FakeBirthDateProvider]:
    return FakeBirthDateProvider


@pytest.fixture()
def media_provider_factory() -> Callable[..., FakeMediaProvider]:
    return FakeMediaProvider


@pytest.fixture()
def llm_provider_factory() -> Callable[..., FakeLLMProvider]:
    return FakeLLMProvider


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture()
def test_settings(data_dir: Path) -> Settings:
    """Settings with every file path under a temporary directory and no API keys."""
    return Settings(
        _env_file=None,
        anthropic_api_key="",
        openai_api_key="",
        youtube_api_key="",
        lastfm_api_key="",
        snapshot_path=str(data_dir / "musicians.json"),
        seed_path=str(data_dir / "seed-musicians.json"),
        overrides_path=str(data_dir / "overrides.json"),
        exclusions_path=str(data_dir / "exclusions.json"),
        index_db_path=str(data_dir / "musicians.db"),
        report_dir=str(data_dir / "reports"),
        verify_delay_found=0.0,
        verify_delay_not_found=0.0,
        similarity_delay=0.0,
        candidate_delay=0.0,
    )
