"""Uniform contract shared by every external data source.

Each birth-date tier, tag source, similarity source and media lookup is a
variant of :class:`IProvider`.  Orchestration code (resolver, verifier,
discoverer) depends only on this interface and inspects
:attr:`ProviderResult.status`; it never needs to know which source it is
talking to or why a source came back empty.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from radio_venus.models.resolution import ProviderResult

T = TypeVar("T")


class IProvider(ABC, Generic[T]):
    """Contract for a single external source returning values of type ``T``."""

    @abstractmethod
    async def query(self, name: str, hint: str | None = None) -> ProviderResult[T]:
        """Look up *name* and return a closed result.

        Parameters
        ----------
        name:
            The artist name exactly as it appears in the canonical set.
        hint:
            Optional extra signal, usually a stable identifier from an
            earlier tier.  Providers that cannot use it ignore it.

        Returns
        -------
        ProviderResult[T]
            ``FOUND`` with a value, or ``NO_RESULT`` / ``WRONG_MATCH`` /
            ``TRANSPORT_FAILURE`` with a reason.  "Not found" is never an
            exception; callers treat any exception that does escape as a
            transport failure.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"wikidata"`` or ``"everynoise"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured (credentials present)."""
