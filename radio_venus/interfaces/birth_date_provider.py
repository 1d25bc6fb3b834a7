"""Abstract base class for the birth-date resolution tiers."""

from __future__ import annotations

from abc import abstractmethod

from radio_venus.interfaces.provider import IProvider
from radio_venus.models.resolution import BirthDateCandidate, ProviderResult


# Concrete implementations: ManualOverrideProvider, WikidataBirthDateProvider,
# MusicBrainzBirthDateProvider, WikipediaBirthDateProvider,
# CommunityDbBirthDateProvider
# Located in: radio_venus/providers/birth_date/
class IBirthDateProvider(IProvider[BirthDateCandidate]):
    """A source of raw, not yet normalized, birth or formation dates.

    The returned :class:`BirthDateCandidate` carries the date text as the
    source wrote it (``"1971"``, ``"1971-08"``, ``"+1971-08-18T00:00:00Z"``);
    normalization and sanity bounds are applied by the resolver.

    A tier marked ``authoritative`` is curated data: whatever it answers
    ends the chain, and the resolver's year floor does not apply to it.
    """

    authoritative: bool = False

    @abstractmethod
    async def query(
        self, name: str, hint: str | None = None
    ) -> ProviderResult[BirthDateCandidate]:
        """Return the birth date the source holds for *name*."""
