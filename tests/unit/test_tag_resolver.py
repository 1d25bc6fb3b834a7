"""Unit tests for the tag resolution chain."""

from __future__ import annotations

import pytest

from radio_venus.models.artist import ArtistOverride
from radio_venus.models.taxonomy import GenreCategory, Subgenre
from radio_venus.services.genre_classifier import GenreClassifier
from radio_venus.services.tag_resolver import TagResolver


@pytest.fixture()
def classifier() -> GenreClassifier:
    return GenreClassifier()


class TestTagResolver:
    @pytest.mark.asyncio
    async def test_override_short_circuits_providers(
        self, classifier: GenreClassifier, tag_provider_factory
    ) -> None:
        authority = tag_provider_factory({"Grouper": ["dream pop"]}, name="everynoise")
        override = ArtistOverride(name="Grouper", genres=["ambient", "folk"], subgenres=["drone"])
        resolver = TagResolver(classifier, authority=authority, overrides={"grouper": override})

        result = await resolver.resolve("Grouper")

        assert result.ok
        assert result.provider == "manual_override"
        assert result.value.categories == (GenreCategory.AMBIENT, GenreCategory.FOLK)
        assert result.value.subgenres == (Subgenre.DRONE,)
        assert authority.calls == []

    @pytest.mark.asyncio
    async def test_authority_classified(
        self, classifier: GenreClassifier, tag_provider_factory
    ) -> None:
        authority = tag_provider_factory(
            {"Basic Channel": ["dub techno", "minimal techno"]}, name="everynoise"
        )
        resolver = TagResolver(classifier, authority=authority)

        result = await resolver.resolve("Basic Channel")

        assert result.value.categories == (GenreCategory.AMBIENT, GenreCategory.TECHNO)
        assert result.value.raw_tags == ("dub techno", "minimal techno")
        assert result.value.source == "everynoise"
        assert Subgenre.DUB_TECHNO in result.value.subgenres

    @pytest.mark.asyncio
    async def test_secondary_used_when_authority_empty_or_failing(
        self, classifier: GenreClassifier, tag_provider_factory
    ) -> None:
        authority = tag_provider_factory({"A": RuntimeError("browser crashed")}, name="everynoise")
        secondary = tag_provider_factory({"A": ["trip-hop"]}, name="lastfm")
        resolver = TagResolver(classifier, authority=authority, secondary=secondary)

        result = await resolver.resolve("A")

        assert result.value.source == "lastfm"
        assert result.value.categories == (GenreCategory.TRIPHOP,)

    @pytest.mark.asyncio
    async def test_unclassifiable_tags_fall_through(
        self, classifier: GenreClassifier, tag_provider_factory
    ) -> None:
        authority = tag_provider_factory({"A": ["vilnius"]}, name="everynoise")
        secondary = tag_provider_factory({"A": ["seattle"]}, name="lastfm")
        resolver = TagResolver(classifier, authority=authority, secondary=secondary)

        result = await resolver.resolve("A")

        assert not result.ok
        assert result.reason == "no classifiable genres"

    @pytest.mark.asyncio
    async def test_no_providers(self, classifier: GenreClassifier) -> None:
        result = await TagResolver(classifier).resolve("A")
        assert not result.ok
