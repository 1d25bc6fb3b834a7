"""Playlist sources for the handpicked-artist import."""

from radio_venus.providers.playlist.spotify_provider import SpotifyPlaylistProvider

__all__ = ["SpotifyPlaylistProvider"]
