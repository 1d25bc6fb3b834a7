"""Spotify Web API playlist reader.

Tracks come from ``GET /v1/playlists/{id}/tracks`` in pages of 100,
following the ``next`` link until it is empty.  Only the first credited
artist of each track is kept; local files and removed tracks (no
``track`` or no artists) are skipped.

Authentication takes, in order:

1. ``SPOTIFY_ACCESS_TOKEN`` as a ready bearer token.  Reading private or
   collaborative playlists needs a user token, which has to be obtained
   outside this tool.
2. The client-credentials grant with ``SPOTIFY_CLIENT_ID`` and
   ``SPOTIFY_CLIENT_SECRET``.
"""

from __future__ import annotations

import re

import httpx

from radio_venus.interfaces.playlist_provider import IPlaylistProvider
from radio_venus.models.playlist import PlaylistTrack
from radio_venus.providers.http_support import get_json, post_form_json
from radio_venus.utils.concurrency import polite_pause
from radio_venus.utils.errors import ConfigurationError, ProviderError
from radio_venus.utils.logging import get_logger

_API_URL = "https://api.spotify.com/v1"
_TOKEN_URL = "https://accounts.spotify.com/api/token"
_PAGE_SIZE = 100

_PLAYLIST_REF_RE = re.compile(r"playlist[/:]([A-Za-z0-9]+)")
_BARE_ID_RE = re.compile(r"^[A-Za-z0-9]{10,}$")


def parse_playlist_id(ref: str) -> str | None:
    """Extract the playlist id from a URL, a ``spotify:playlist:`` URI or a bare id."""
    ref = (ref or "").strip()
    match = _PLAYLIST_REF_RE.search(ref)
    if match:
        return match.group(1)
    return ref if _BARE_ID_RE.match(ref) else None


class SpotifyPlaylistProvider(IPlaylistProvider):
    """Playlist tracks from the Spotify Web API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
        page_delay: float = 0.15,
        api_url: str = _API_URL,
        token_url: str = _TOKEN_URL,
    ) -> None:
        self._http = http_client
        self._client_id = client_id
        self._client_secret = client_secret
        self._access_token = access_token
        self._page_delay = page_delay
        self._api_url = api_url.rstrip("/")
        self._token_url = token_url
        self._logger = get_logger(__name__)

    async def _token(self) -> str:
        if self._access_token:
            return self._access_token
        provider = self.get_provider_name()
        if not (self._client_id and self._client_secret):
            raise ConfigurationError(
                message="Set SPOTIFY_ACCESS_TOKEN or SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET",
                provider_name=provider,
            )
        data = await post_form_json(
            self._http,
            self._token_url,
            provider,
            data={"grant_type": "client_credentials"},
            auth=(self._client_id, self._client_secret),
        )
        token = (data or {}).get("access_token")
        if not token:
            raise ProviderError("Token endpoint returned no access_token", provider_name=provider)
        self._access_token = token
        return token

    async def tracks(self, playlist_ref: str) -> list[PlaylistTrack]:
        provider = self.get_provider_name()
        playlist_id = parse_playlist_id(playlist_ref)
        if playlist_id is None:
            raise ConfigurationError(
                message=f"Not a Spotify playlist URL or id: {playlist_ref!r}",
                provider_name=provider,
            )

        headers = {"Authorization": f"Bearer {await self._token()}"}
        url: str | None = f"{self._api_url}/playlists/{playlist_id}/tracks"
        params: dict | None = {"limit": _PAGE_SIZE}
        tracks: list[PlaylistTrack] = []
        while url:
            data = await get_json(self._http, url, provider, params=params, headers=headers)
            if data is None:
                raise ProviderError(f"Playlist {playlist_id} not found", provider_name=provider)
            for item in data.get("items") or []:
                track = (item or {}).get("track") or {}
                artists = track.get("artists") or []
                if not artists or not artists[0].get("name"):
                    continue
                tracks.append(
                    PlaylistTrack(
                        artist_name=artists[0]["name"],
                        artist_id=artists[0].get("id"),
                        track_name=track.get("name") or "",
                    )
                )
            # The next link already carries offset and limit.
            url, params = data.get("next"), None
            if url:
                await polite_pause(self._page_delay)

        self._logger.info("playlist_tracks_fetched", playlist=playlist_id, tracks=len(tracks))
        return tracks

    def get_provider_name(self) -> str:
        return "spotify"

    def is_available(self) -> bool:
        return bool(self._access_token or (self._client_id and self._client_secret))
