"""Genre resolution for artists that are not yet in the canonical set.

Order of sources:

1. A curated override with genres set (no network).
2. The authority tag provider.
3. The secondary tag provider, when the authority has nothing usable.

Raw tags are classified with :class:`GenreClassifier`; the raw tags are
kept on the result so they can be stored as evidence.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from radio_venus.interfaces.tag_provider import ITagProvider
from radio_venus.models.artist import ArtistOverride
from radio_venus.models.resolution import ProviderResult
from radio_venus.models.taxonomy import GenreCategory, Subgenre
from radio_venus.services.genre_classifier import GenreClassifier, sort_categories, sort_subgenres
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key

_PROVIDER = "tag_chain"


@dataclass(frozen=True)
class GenreResolution:
    categories: tuple[GenreCategory, ...]
    subgenres: tuple[Subgenre, ...]
    raw_tags: tuple[str, ...] = field(default=())
    source: str = ""


class TagResolver:
    def __init__(
        self,
        classifier: GenreClassifier,
        authority: ITagProvider | None = None,
        secondary: ITagProvider | None = None,
        overrides: Mapping[str, ArtistOverride] | None = None,
    ) -> None:
        self._classifier = classifier
        self._authority = authority
        self._secondary = secondary
        self._overrides = {name_key(k): v for k, v in (overrides or {}).items()}
        self._logger = get_logger(__name__)

    async def resolve(self, name: str) -> ProviderResult[GenreResolution]:
        """Return classified genres for *name*, or NO_RESULT if nothing classifies."""
        override = self._overrides.get(name_key(name))
        if override is not None and override.genres:
            return ProviderResult.found(
                GenreResolution(
                    categories=override.genres,
                    subgenres=override.subgenres,
                    source="manual_override",
                ),
                "manual_override",
            )

        for provider in (self._authority, self._secondary):
            if provider is None or not provider.is_available():
                continue
            try:
                result = await provider.query(name)
            except Exception as exc:  # noqa: BLE001
                result = ProviderResult.transport_failure(provider.get_provider_name(), str(exc))
            if not result.ok or not result.value:
                self._logger.debug(
                    "tag_provider_empty",
                    artist=name,
                    provider=provider.get_provider_name(),
                    status=result.status.value,
                )
                continue

            categories, subgenres = self._classifier.classify(result.value)
            if categories:
                return ProviderResult.found(
                    GenreResolution(
                        categories=sort_categories(categories),
                        subgenres=sort_subgenres(subgenres),
                        raw_tags=tuple(result.value),
                        source=provider.get_provider_name(),
                    ),
                    provider.get_provider_name(),
                )
            self._logger.debug(
                "tags_unclassified",
                artist=name,
                provider=provider.get_provider_name(),
                tags=result.value[:5],
            )

        return ProviderResult.no_result(_PROVIDER, "no classifiable genres")
