"""Abstract base class for playable-media lookups."""

from __future__ import annotations

from abc import abstractmethod

from radio_venus.interfaces.provider import IProvider
from radio_venus.models.resolution import ProviderResult


class IMediaProvider(IProvider[list[str]]):
    """A source of opaque media identifiers for an artist.

    The pipeline never interprets the identifiers; it only stores them so
    they survive later runs.
    """

    @abstractmethod
    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        """Return candidate media ids for *name*, best first.

        Parameters
        ----------
        name:
            Artist name.
        hint:
            A genre label appended to the search query to steer results
            away from same-named artists.
        """

    @abstractmethod
    async def search(
        self,
        search_query: str,
        duration_range: tuple[int, int] = (60, 600),
        exclude: set[str] | None = None,
    ) -> list[str]:
        """Return media ids for a free-text query, filtered by duration in seconds.

        Unlike :meth:`query` this may raise
        :class:`~radio_venus.utils.errors.RadioVenusError`; it is used by
        callers that run several searches and handle failures themselves.
        """
