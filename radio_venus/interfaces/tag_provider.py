"""Abstract base classes for genre-tag and similarity sources."""

from __future__ import annotations

from abc import abstractmethod

from radio_venus.interfaces.provider import IProvider
from radio_venus.models.resolution import ProviderResult


class ITagProvider(IProvider[list[str]]):
    """A source of free-text genre tags for an artist.

    Tags are returned raw, in the order the source ranks them.  Mapping them
    onto canonical categories is the classifier's job.
    """

    @abstractmethod
    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        """Return the raw tags the source lists for *name*."""


class ISimilarityProvider(IProvider[list[str]]):
    """A source of "similar artist" names, used as graph edges by discovery."""

    @abstractmethod
    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        """Return names the source considers similar to *name*."""
