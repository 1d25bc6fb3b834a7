"""Abstract base class for playlist sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from radio_venus.models.playlist import PlaylistTrack


class IPlaylistProvider(ABC):
    """A streaming service that can list the tracks of a playlist.

    Unlike the per-artist providers this one is used once per command, so
    failures are raised rather than wrapped in a ``ProviderResult``.
    """

    @abstractmethod
    async def tracks(self, playlist_ref: str) -> list[PlaylistTrack]:
        """Return every track of the playlist in playlist order.

        Parameters
        ----------
        playlist_ref:
            A playlist URL, URI or bare id.

        Raises
        ------
        radio_venus.utils.errors.ConfigurationError
            Missing credentials or an unrecognized playlist reference.
        radio_venus.utils.errors.RadioVenusError
            Transport failures and API errors.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"spotify"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are configured."""
